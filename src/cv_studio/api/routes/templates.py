"""Template catalogue, preview and validation routes."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi import Path as PathParam

from cv_studio.api.dependencies import (
    get_preview_surface,
    get_registry,
    get_template_session,
    select_template,
)
from cv_studio.api.schemas.templates import (
    CategoryCount,
    PreviewResponse,
    TemplateDetail,
    TemplateSummary,
    ValidateRequest,
    ValidationResponse,
)
from cv_studio.export.preview import PreviewSurface
from cv_studio.models.content import CVData
from cv_studio.templates.registry import TemplateRegistry, TemplateSession
from cv_studio.templates.validation import group_findings_by_section

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=list[TemplateSummary])
def list_templates(
    registry: Annotated[TemplateRegistry, Depends(get_registry)],
    category: Annotated[str | None, Query(description="Only templates tagged with this")] = None,
) -> list[TemplateSummary]:
    """List templates in registration order, optionally filtered by category."""
    templates = registry.get_by_category(category) if category else registry.all()
    return [TemplateSummary.from_template(t) for t in templates]


# --- fixed paths MUST come before /{template_id} ---


@router.get("/categories", response_model=list[CategoryCount])
def list_categories(
    registry: Annotated[TemplateRegistry, Depends(get_registry)],
) -> list[CategoryCount]:
    """Return each category with its template count, most common first."""
    return [CategoryCount(category=c, count=n) for c, n in registry.categories().items()]


@router.post("/validate", response_model=ValidationResponse)
def validate_cv(
    data: ValidateRequest,
    session: Annotated[TemplateSession, Depends(get_template_session)],
) -> ValidationResponse:
    """Check a CV against a template's rules; findings never block rendering."""
    select_template(session, data.template_id)
    warnings = session.validate(data.cv_data)
    return ValidationResponse(
        template_id=data.template_id,
        warnings=warnings,
        by_section=group_findings_by_section(warnings),
    )


@router.get("/{template_id}", response_model=TemplateDetail)
def get_template(
    template_id: Annotated[str, PathParam(description="Template id")],
    registry: Annotated[TemplateRegistry, Depends(get_registry)],
) -> TemplateDetail:
    template = registry.get(template_id)
    if template is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Template '{template_id}' not found",
        )
    return TemplateDetail.from_template(template)


@router.post("/{template_id}/preview", response_model=PreviewResponse)
def preview_template(
    template_id: Annotated[str, PathParam(description="Template id")],
    cv: CVData,
    session: Annotated[TemplateSession, Depends(get_template_session)],
    preview: Annotated[PreviewSurface, Depends(get_preview_surface)],
) -> PreviewResponse:
    """Render *cv* with a template and publish it as the live preview."""
    select_template(session, template_id)
    html = session.render(cv)
    css = session.get_css()
    published = True
    try:
        preview.publish(cv, template_id, html, css, title=cv.personal.full_name or "CV")
    except OSError:
        logger.exception("Could not publish preview for %s", template_id)
        published = False
    return PreviewResponse(template_id=template_id, html=html, css=css, published=published)

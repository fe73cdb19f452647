"""Health check routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from cv_studio.api.dependencies import get_registry
from cv_studio.api.schemas.health import TemplateHealthResponse
from cv_studio.templates.health import TemplateHealthChecker
from cv_studio.templates.registry import TemplateRegistry

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict[str, str]:
    """Return the current status of the API."""
    return {"status": "healthy"}


@router.get("/health/templates", response_model=TemplateHealthResponse)
def template_health(
    registry: Annotated[TemplateRegistry, Depends(get_registry)],
) -> TemplateHealthResponse:
    """Render and validate every registered template against sample content."""
    report = TemplateHealthChecker(registry).check_all()
    return TemplateHealthResponse.from_report(report)

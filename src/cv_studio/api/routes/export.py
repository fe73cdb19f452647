"""Export routes: document construction and multi-format jobs."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from cv_studio.api.dependencies import get_device_class, get_orchestrator
from cv_studio.api.schemas.export import DocxExportRequest, ExportJobRequest, ExportJobResponse
from cv_studio.exceptions import ContentValidationError, MissingContentError
from cv_studio.export.capture import DeviceClass
from cv_studio.export.docx_builder import DEFAULT_DOCX_STYLE, build_docx
from cv_studio.export.formats import ExportFormat
from cv_studio.export.orchestrator import ExportOrchestrator
from cv_studio.models.content import CVData, require_exportable
from cv_studio.utils.formatting import export_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["export"])


def _require_cv(cv_data: CVData | None) -> CVData:
    """Return *cv_data* or raise 400 if it is missing or lacks a name or email."""
    try:
        return require_exportable(cv_data)
    except (MissingContentError, ContentValidationError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post(
    "/docx",
    responses={200: {"content": {ExportFormat.DOCX.media_type: {}}}},
)
def export_docx(data: DocxExportRequest) -> Response:
    """Build a Word document from ``{cvData, templateId}``."""
    cv = _require_cv(data.cv_data)
    style_id = data.template_id or DEFAULT_DOCX_STYLE
    try:
        payload = build_docx(cv, style_id)
    except Exception as exc:
        logger.exception("DOCX generation failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate DOCX",
        ) from exc
    filename = export_filename(cv.personal.full_name, ExportFormat.DOCX.extension)
    return Response(
        content=payload,
        media_type=ExportFormat.DOCX.media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("", response_model=ExportJobResponse)
async def run_export(
    data: ExportJobRequest,
    orchestrator: Annotated[ExportOrchestrator, Depends(get_orchestrator)],
    device: Annotated[DeviceClass, Depends(get_device_class)],
) -> ExportJobResponse:
    """Generate every requested format and report each one's final state."""
    cv = _require_cv(data.cv_data)
    try:
        result = await orchestrator.run(
            cv, data.formats, template_id=data.template_id, device=device
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    files = {
        fmt.value: str(location) if location is not None else None
        for fmt, location in result.saved.items()
    }
    return ExportJobResponse(**result.to_dict(), files=files)

"""Pydantic schemas for export API endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cv_studio.models.content import CVData


class _CamelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocxExportRequest(_CamelRequest):
    """Body accepted by the document-construction endpoint: ``{cvData, templateId}``."""

    cv_data: CVData | None = Field(None, description="CV content")
    template_id: str | None = Field(None, description="Document style id")


class ExportJobRequest(_CamelRequest):
    """Request schema for running an export job."""

    cv_data: CVData | None = Field(None, description="CV content")
    formats: list[str] = Field(..., description="Formats to produce: pdf, docx, txt")
    template_id: str | None = Field(None, description="Template the exports are based on")


class FormatStateResponse(BaseModel):
    format: str
    progress: int
    status: str
    error: str | None = None


class ExportJobResponse(BaseModel):
    outcome: str
    succeeded: int
    failed: int
    message: str
    formats: list[FormatStateResponse]
    files: dict[str, str | None] = Field(
        default_factory=dict, description="Saved location per completed format"
    )

"""Pydantic schemas for template API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cv_studio.models.content import CVData

if TYPE_CHECKING:
    from cv_studio.templates.base import CVTemplate


class TemplateSummary(BaseModel):
    """Catalogue entry for one template."""

    id: str
    name: str
    description: str
    categories: list[str]
    popularity: int
    is_premium: bool
    layout: str

    @classmethod
    def from_template(cls, template: CVTemplate) -> TemplateSummary:
        return cls(
            id=template.id,
            name=template.name,
            description=template.description,
            categories=list(template.categories),
            popularity=template.popularity,
            is_premium=template.is_premium,
            layout=template.structure.layout.value,
        )


class TemplateDetail(TemplateSummary):
    """Template metadata plus the section order and generated stylesheet."""

    sections: list[str]
    css: str

    @classmethod
    def from_template(cls, template: CVTemplate) -> TemplateDetail:
        summary = TemplateSummary.from_template(template)
        return cls(
            **summary.model_dump(),
            sections=list(template.structure.sections),
            css=template.get_css(),
        )


class CategoryCount(BaseModel):
    category: str
    count: int


class _CamelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValidateRequest(_CamelRequest):
    """Request schema for validating a CV against a template."""

    template_id: str = Field(..., description="Template to validate against")
    cv_data: CVData = Field(..., description="CV content")


class ValidationResponse(BaseModel):
    template_id: str
    warnings: list[str] = Field(default_factory=list)
    by_section: dict[str, list[str]] = Field(default_factory=dict)


class PreviewResponse(BaseModel):
    template_id: str
    html: str
    css: str
    published: bool = Field(description="Whether the preview was published for capture")

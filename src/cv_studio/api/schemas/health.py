"""Pydantic schemas for health endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from cv_studio.templates.health import TemplateHealthReport


class TemplateCheckResponse(BaseModel):
    template_id: str
    passed: bool
    errors: list[str]
    warnings: list[str]


class TemplateHealthResponse(BaseModel):
    status: str
    timestamp: str
    total: int
    passed: int
    failed: int
    results: list[TemplateCheckResponse]

    @classmethod
    def from_report(cls, report: TemplateHealthReport) -> TemplateHealthResponse:
        return cls(
            status=report.status.value,
            timestamp=report.timestamp,
            total=report.total,
            passed=report.passed,
            failed=report.failed,
            results=[
                TemplateCheckResponse(
                    template_id=r.template_id,
                    passed=r.passed,
                    errors=list(r.errors),
                    warnings=list(r.warnings),
                )
                for r in report.results
            ],
        )

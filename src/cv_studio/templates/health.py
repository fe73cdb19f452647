"""Smoke-test every registered template against sample content.

Each template is selected in a private session, rendered and asked for its
stylesheet. Render failures or near-empty output count as errors; a thin
stylesheet is only a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from cv_studio.models.content import (
    Certification,
    CVData,
    Education,
    Experience,
    Language,
    PersonalInfo,
    Project,
    Skill,
)

if TYPE_CHECKING:
    from cv_studio.templates.registry import TemplateRegistry

__all__ = [
    "HealthCheckResult",
    "HealthStatus",
    "TemplateHealthChecker",
    "TemplateHealthReport",
    "sample_content",
]

logger = logging.getLogger(__name__)

MIN_RENDER_LENGTH = 100
MIN_CSS_LENGTH = 50


class HealthStatus(StrEnum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    FAILING = "failing"


@dataclass(slots=True)
class HealthCheckResult:
    template_id: str
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors


@dataclass(slots=True)
class TemplateHealthReport:
    results: list[HealthCheckResult]
    timestamp: str

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def status(self) -> HealthStatus:
        if self.failed == 0:
            return HealthStatus.HEALTHY
        if self.failed < self.total / 2:
            return HealthStatus.DEGRADED
        return HealthStatus.FAILING

    def to_text(self) -> str:
        """Return a human-readable multi-line report."""
        lines = [
            "Template Health Report",
            f"Generated: {self.timestamp}",
            f"Overall Health: {self.status.value.upper()}",
            f"Total Templates: {self.total}",
            f"Passed: {self.passed}",
            f"Failed: {self.failed}",
            "",
            "Detailed Results:",
        ]
        for result in self.results:
            lines.append("")
            lines.append(f"Template: {result.template_id}")
            lines.append(f"Status: {'PASSED' if result.passed else 'FAILED'}")
            if result.errors:
                lines.append("Errors:")
                lines.extend(f"  - {e}" for e in result.errors)
            if result.warnings:
                lines.append("Warnings:")
                lines.extend(f"  - {w}" for w in result.warnings)
        return "\n".join(lines)


class TemplateHealthChecker:
    def __init__(self, registry: TemplateRegistry, sample: CVData | None = None) -> None:
        self._registry = registry
        self._sample = sample or sample_content()

    def check_template(self, template_id: str) -> HealthCheckResult:
        result = HealthCheckResult(template_id=template_id)
        session = self._registry.session()
        if not session.select(template_id):
            result.errors.append(f"Template {template_id} not found")
            return result

        try:
            html = session.render(self._sample)
        except Exception as exc:
            logger.exception("Template %s failed to render", template_id)
            result.errors.append(f"Render error: {exc}")
        else:
            if len(html) < MIN_RENDER_LENGTH:
                result.errors.append("Template renders empty or minimal content")

        try:
            css = session.get_css()
        except Exception as exc:
            logger.exception("Template %s failed to produce CSS", template_id)
            result.errors.append(f"CSS error: {exc}")
        else:
            if len(css) < MIN_CSS_LENGTH:
                result.warnings.append("Template CSS is missing or minimal")

        return result

    def check_all(self) -> TemplateHealthReport:
        results = [self.check_template(template_id) for template_id in self._registry.ids()]
        report = TemplateHealthReport(
            results=results, timestamp=datetime.now(UTC).isoformat()
        )
        logger.info(
            "Template health: %s (%d/%d passed)", report.status, report.passed, report.total
        )
        return report


def sample_content() -> CVData:
    """Return a fully populated CV used for smoke tests and previews."""
    return CVData(
        id="sample-cv",
        personal=PersonalInfo(
            full_name="John Doe",
            email="john.doe@example.com",
            phone="+353 1 234 5678",
            address="Dublin, Ireland",
            linkedin="linkedin.com/in/johndoe",
            github="github.com/johndoe",
            portfolio="johndoe.com",
            title="Senior Software Engineer",
            summary="Experienced software engineer with expertise in web development.",
        ),
        experience=[
            Experience(
                id="1",
                position="Senior Developer",
                company="Tech Corp",
                location="Dublin",
                start_date="2020-01-01",
                end_date="2023-12-31",
                description="Led development team",
                achievements=["Improved performance by 50%", "Mentored 5 junior developers"],
            )
        ],
        education=[
            Education(
                id="1",
                institution="Trinity College Dublin",
                degree="BSc",
                field="Computer Science",
                location="Dublin",
                start_date="2014-09-01",
                end_date="2018-06-01",
                grade="First Class Honours",
            )
        ],
        skills=[
            Skill(id="1", name="JavaScript", level="Expert", category="Technical"),
            Skill(id="2", name="Python", level="Advanced", category="Technical"),
            Skill(id="3", name="React", level="Advanced", category="Software"),
            Skill(id="4", name="Docker", level="Intermediate", category="Software"),
            Skill(id="5", name="Leadership", level="Advanced", category="Soft"),
        ],
        projects=[
            Project(
                id="1",
                name="Open Source Dashboard",
                description="Real-time metrics dashboard",
                technologies=["TypeScript", "Python"],
                start_date="2022-01",
            )
        ],
        certifications=[
            Certification(
                id="1", name="AWS Solutions Architect", issuer="Amazon", issue_date="2021-05"
            )
        ],
        languages=[Language(id="1", name="English", level="Native")],
    )

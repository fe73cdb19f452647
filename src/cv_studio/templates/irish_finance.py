"""Irish Finance template.

Conservative serif layout for IFSC roles in banking, fintech and
insurance. Skills render as a competency grid and the footer carries the
candidate's work-authorisation status when one is given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cv_studio.models.content import SectionType
from cv_studio.templates.base import (
    ColorScheme,
    CVTemplate,
    FontPairing,
    LayoutKind,
    Spacing,
    TemplateStructure,
)
from cv_studio.templates.validation import metrics_finding

if TYPE_CHECKING:
    from cv_studio.models.content import CVData

__all__ = ["IrishFinanceTemplate"]


class IrishFinanceTemplate(CVTemplate):
    id = "irish-finance"
    name = "Irish Finance Expert"
    description = "Tailored for IFSC roles, ideal for banking, fintech and insurance"
    categories = ("finance", "professional", "dublin")
    popularity = 95
    structure = TemplateStructure(
        sections=("header", "profile", "experience", "education", "qualifications", "skills"),
        layout=LayoutKind.SINGLE_COLUMN,
        colors=ColorScheme(primary="#166534", secondary="#f0fdf4", accent="#16a34a"),
        fonts=FontPairing(heading="Georgia, serif", body="Georgia, serif"),
        spacing=Spacing(section="2rem", item="1.2rem", line="1.6"),
    )
    default_title = "Finance Professional"
    headings = {
        SectionType.SUMMARY: "Professional Profile",
        SectionType.SKILLS: "Core Competencies",
        SectionType.EXPERIENCE: "Professional Experience",
        SectionType.CERTIFICATIONS: "Professional Certifications",
    }
    extra_css = """
.cv-container.irish-finance .cv-header { text-align: center; border-bottom: 3px solid #166534; }
.cv-container.irish-finance h2 { text-transform: uppercase; letter-spacing: 0.05em;
  border-bottom: none; }
.cv-container.irish-finance .competencies-grid { display: grid;
  grid-template-columns: repeat(3, 1fr); gap: 0.5rem; }
.cv-container.irish-finance .competency { padding: 0.3rem 0.6rem; background: #f0fdf4;
  border: 1px solid #bbf7d0; border-radius: 0.25rem; text-align: center; }
.cv-container.irish-finance .company { font-style: italic; }
.cv-container.irish-finance .cv-footer { border-top: 1px solid #e5e7eb; text-align: center;
  font-size: 0.9rem; color: #6b7280; }
"""

    def render_skills(self, cv: CVData, heading: str) -> str:
        if not cv.skills:
            return ""
        cells = "".join(
            f'<span class="competency">{self.escape_html(skill.name)}</span>' for skill in cv.skills
        )
        grid = f'<div class="competencies-grid">{cells}</div>'
        return self._section("core-competencies", heading, grid)

    def render_footer(self, cv: CVData) -> str:
        status = cv.personal.stamp or cv.personal.nationality
        if not status:
            return ""
        return (
            '<footer class="cv-footer">'
            f"<p>Work Authorisation: {self.escape_html(status)}</p>"
            "</footer>"
        )

    def validate(self, cv: CVData) -> list[str]:
        errors: list[str] = []
        if not cv.certifications:
            errors.append(
                "Finance roles typically require professional certifications (e.g., ACA, ACCA, CFA)"
            )
        errors.extend(
            metrics_finding(
                cv, "Finance CVs should include quantifiable achievements (percentages, amounts)"
            )
        )
        return errors

"""Classic CV template.

Traditional ATS-friendly single-column layout: centred uppercase name,
black section rules, skills grouped by category. Accepted across every
industry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cv_studio.templates.base import (
    ColorScheme,
    CVTemplate,
    FontPairing,
    LayoutKind,
    Spacing,
    TemplateStructure,
)
from cv_studio.templates.validation import TECHNICAL_OR_SOFTWARE, has_skill_in, metrics_finding

if TYPE_CHECKING:
    from cv_studio.models.content import CVData

__all__ = ["ClassicTemplate"]

MIN_SKILLS = 3


class ClassicTemplate(CVTemplate):
    id = "classic"
    name = "Classic Professional"
    description = "Traditional ATS-friendly format, widely accepted across all Irish industries"
    categories = ("classic", "ats-friendly", "traditional")
    popularity = 99
    structure = TemplateStructure(
        sections=("header", "summary", "skills", "experience", "education"),
        layout=LayoutKind.SINGLE_COLUMN,
        colors=ColorScheme(
            primary="#000000", secondary="#ffffff", accent="#333333", text="#000000"
        ),
        fonts=FontPairing(heading="Arial, sans-serif", body="Arial, sans-serif"),
        spacing=Spacing(section="1.5rem", item="1rem", line="1.4"),
    )
    extra_css = """
.cv-container.classic .cv-header { text-align: center; border-bottom: 2px solid #000; }
.cv-container.classic .name { text-transform: uppercase; letter-spacing: 1px; }
.cv-container.classic .title { font-style: italic; color: #333; }
.cv-container.classic .contact-info span { margin: 0 15px; }
.cv-container.classic h2 { text-transform: uppercase; font-size: 16px; }
.cv-container.classic .languages-grid { display: grid; grid-template-columns: repeat(2, 1fr); }
.cv-container.classic .reference-item { background: #f5f5f5; border: 1px solid #ccc;
  padding: 10px; }
@media print { .cv-container.classic h2 { page-break-after: avoid; } }
"""

    def validate(self, cv: CVData) -> list[str]:
        errors: list[str] = []
        if len(cv.skills) < MIN_SKILLS:
            errors.append(f"Classic CVs require at least {MIN_SKILLS} skills")
        if cv.skills and not has_skill_in(cv, TECHNICAL_OR_SOFTWARE):
            errors.append("Please include technical or software skills for classic CVs")
        errors.extend(
            metrics_finding(
                cv, "Classic CVs should include quantifiable achievements (percentages, amounts)"
            )
        )
        return errors

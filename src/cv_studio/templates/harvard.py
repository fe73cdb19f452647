"""Harvard-style CV template: serif, centred header, education-forward."""

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
from cv_studio.templates.validation import metrics_finding

if TYPE_CHECKING:
    from cv_studio.models.content import CVData

__all__ = ["HarvardTemplate"]


class HarvardTemplate(CVTemplate):
    id = "harvard"
    name = "Harvard Classic"
    description = "Academic serif layout favoured by graduate programmes and consulting firms"
    categories = ("academic", "classic", "ats-friendly")
    popularity = 92
    structure = TemplateStructure(
        sections=("header", "education", "experience", "skills", "certifications"),
        layout=LayoutKind.SINGLE_COLUMN,
        colors=ColorScheme(
            primary="#7f1d1d", secondary="#fafaf9", accent="#44403c", text="#1c1917"
        ),
        fonts=FontPairing(
            heading="Garamond, 'Times New Roman', serif", body="'Times New Roman', serif"
        ),
        spacing=Spacing(section="1.25rem", item="0.8rem", line="1.35"),
    )
    extra_css = """
.cv-container.harvard .cv-header { text-align: center; }
.cv-container.harvard .contact-info span + span::before { content: " | "; }
.cv-container.harvard h2 { font-variant: small-caps; color: #1c1917;
  border-bottom: 1px solid #1c1917; }
.cv-container.harvard .exp-header h3, .cv-container.harvard .edu-header h3 { font-size: 1rem; }
"""

    def validate(self, cv: CVData) -> list[str]:
        errors: list[str] = []
        if not cv.education:
            errors.append("Harvard-style CVs should list at least one education entry")
        undated = [exp.position or exp.company for exp in cv.experience if not exp.start_date]
        if undated:
            errors.append(f"Add start dates to experience entries: {', '.join(undated)}")
        errors.extend(
            metrics_finding(cv, "Quantify your achievements with percentages or amounts")
        )
        return errors

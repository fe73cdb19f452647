"""Modern CV template.

Sans-serif, accent-coloured headings without heavy rules and a compact
body. Projects render as technology tags.
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
from cv_studio.templates.validation import has_link

if TYPE_CHECKING:
    from cv_studio.models.content import CVData

__all__ = ["ModernTemplate"]


class ModernTemplate(CVTemplate):
    id = "modern"
    name = "Modern Minimal"
    description = "Clean, dense single-page layout for startups and creative roles"
    categories = ("modern", "tech", "creative")
    popularity = 90
    structure = TemplateStructure(
        sections=("header", "summary", "experience", "projects", "skills", "education"),
        layout=LayoutKind.SINGLE_COLUMN,
        colors=ColorScheme(primary="#0f766e", secondary="#f0fdfa", accent="#14b8a6"),
        fonts=FontPairing(
            heading="Helvetica, Arial, sans-serif", body="Helvetica, Arial, sans-serif"
        ),
        spacing=Spacing(section="1.25rem", item="0.75rem", line="1.45"),
    )
    headings = {SectionType.SUMMARY: "Profile"}
    extra_css = """
.cv-container.modern .cv-header { border-left: 4px solid #0f766e; padding-left: 1rem; }
.cv-container.modern h2 { border-bottom: none; letter-spacing: 0.08em; font-size: 0.95rem; }
.cv-container.modern .tech-tag { display: inline-block; background: #f0fdfa; color: #0f766e;
  padding: 0.1rem 0.5rem; border-radius: 0.25rem; margin: 0 0.4rem 0.4rem 0; font-size: 0.8rem; }
"""

    def render_projects(self, cv: CVData, heading: str) -> str:
        if not cv.projects:
            return ""
        items = []
        for project in cv.projects:
            tags = "".join(
                f'<span class="tech-tag">{self.escape_html(tech)}</span>'
                for tech in project.technologies
            )
            items.append(
                '<div class="project-item">'
                f"<h3>{self.escape_html(project.name)}</h3>"
                f"<p>{self.escape_html(project.description)}</p>"
                f'<div class="tech-stack">{tags}</div>'
                "</div>"
            )
        return self._section("projects", heading, "".join(items))

    def validate(self, cv: CVData) -> list[str]:
        errors: list[str] = []
        if not cv.personal.summary:
            errors.append("Modern CVs work best with a short professional summary")
        if not has_link(cv, "linkedin", "website", "portfolio"):
            errors.append("Add a LinkedIn profile or personal website to your contact details")
        return errors

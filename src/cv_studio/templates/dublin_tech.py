"""Dublin Tech template.

Two-column layout tuned for Dublin's tech employers: a coloured sidebar
holding name, contact details, skills with proficiency bars and languages,
with experience, projects and education in the main column.
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
from cv_studio.templates.validation import TECHNICAL, has_link, has_skill_in

if TYPE_CHECKING:
    from cv_studio.models.content import CVData

__all__ = ["DublinTechTemplate"]

MIN_SKILLS = 5


class DublinTechTemplate(CVTemplate):
    id = "dublin-tech"
    name = "Dublin Tech Professional"
    description = "Optimised for Dublin's tech scene, suited to Google, Meta and LinkedIn"
    categories = ("tech", "modern", "dublin")
    popularity = 98
    structure = TemplateStructure(
        sections=("header", "summary", "experience", "skills", "education", "projects"),
        layout=LayoutKind.TWO_COLUMN,
        colors=ColorScheme(primary="#2563eb", secondary="#f3f4f6", accent="#3b82f6"),
        fonts=FontPairing(heading="Inter, sans-serif", body="Inter, sans-serif"),
        spacing=Spacing(section="1.5rem", item="1rem", line="1.5"),
    )
    default_title = "Software Developer"
    sidebar_sections = frozenset({SectionType.SKILLS, SectionType.LANGUAGES})
    headings = {SectionType.SKILLS: "Technical Skills", SectionType.EXPERIENCE: "Experience"}
    extra_css = """
.cv-container.dublin-tech .skill-item { margin-bottom: 0.8rem; }
.cv-container.dublin-tech .skill-name { display: block; font-size: 0.9rem; margin-bottom: 0.3rem; }
.cv-container.dublin-tech .skill-bar { height: 4px; background: rgba(255,255,255,0.3);
  border-radius: 2px; overflow: hidden; }
.cv-container.dublin-tech .skill-progress { height: 100%; background: #ffffff; border-radius: 2px; }
.cv-container.dublin-tech .language-item { display: flex; justify-content: space-between; }
.cv-container.dublin-tech .cv-sidebar .contact-info span { display: block; margin: 0.5rem 0; }
"""

    def render_skills(self, cv: CVData, heading: str) -> str:
        if not cv.skills:
            return ""
        items = "".join(
            '<div class="skill-item">'
            f'<span class="skill-name">{self.escape_html(skill.name)}</span>'
            '<div class="skill-bar">'
            f'<div class="skill-progress" style="width: {self.skill_width(skill.level)}"></div>'
            "</div></div>"
            for skill in cv.skills
        )
        return self._section("skills sidebar-section", heading, items)

    def render_languages(self, cv: CVData, heading: str) -> str:
        if not cv.languages:
            return ""
        items = "".join(
            '<div class="language-item">'
            f'<span class="lang-name">{self.escape_html(lang.name)}</span>'
            f'<span class="lang-level">{self.escape_html(lang.level)}</span>'
            "</div>"
            for lang in cv.languages
        )
        return self._section("languages sidebar-section", heading, items)

    def validate(self, cv: CVData) -> list[str]:
        errors: list[str] = []
        if len(cv.skills) < MIN_SKILLS:
            errors.append(f"Tech roles require at least {MIN_SKILLS} technical skills")
        if cv.skills and not has_skill_in(cv, TECHNICAL):
            errors.append("Please include technical skills for tech roles")
        if not has_link(cv, "github", "portfolio"):
            errors.append("Tech CVs should include GitHub or portfolio links")
        return errors

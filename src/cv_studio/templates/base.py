"""Abstract base class for pluggable HTML CV templates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import StrEnum
from html import escape
from typing import TYPE_CHECKING, ClassVar, assert_never

from cv_studio.models.content import ReferencesDisplay, SectionType, SkillLevel
from cv_studio.models.sections import (
    DEFAULT_SECTION_TITLES,
    REFERENCES_ON_REQUEST,
    references_block_visible,
    resolve_sections,
)
from cv_studio.utils.dates import format_date_range, format_short_date

if TYPE_CHECKING:
    from cv_studio.models.content import CVData, Section, Skill

__all__ = [
    "CVTemplate",
    "ColorScheme",
    "FontPairing",
    "LayoutKind",
    "Spacing",
    "TemplateStructure",
]

_SKILL_WIDTHS: dict[SkillLevel, str] = {
    SkillLevel.BEGINNER: "25%",
    SkillLevel.INTERMEDIATE: "50%",
    SkillLevel.ADVANCED: "75%",
    SkillLevel.EXPERT: "100%",
}

_SKILL_GROUP_LABELS: dict[str, str] = {
    "Technical": "Programming Languages",
    "Software": "Frameworks/Tools",
    "Soft": "Soft Skills",
    "Other": "Other Skills",
}


# ---------------------------------------------------------------------------
# Structure metadata
# ---------------------------------------------------------------------------


class LayoutKind(StrEnum):
    SINGLE_COLUMN = "single-column"
    TWO_COLUMN = "two-column"
    MIXED = "mixed"


@dataclass(frozen=True, slots=True)
class ColorScheme:
    primary: str
    secondary: str
    accent: str
    text: str = "#111827"
    background: str = "#ffffff"


@dataclass(frozen=True, slots=True)
class FontPairing:
    heading: str
    body: str


@dataclass(frozen=True, slots=True)
class Spacing:
    section: str = "1.5rem"
    item: str = "1rem"
    line: str = "1.5"


@dataclass(frozen=True, slots=True)
class TemplateStructure:
    """Descriptive layout metadata; drives the generated stylesheet."""

    sections: tuple[str, ...]
    layout: LayoutKind
    colors: ColorScheme
    fonts: FontPairing
    spacing: Spacing = field(default_factory=Spacing)


# ---------------------------------------------------------------------------
# Template base class
# ---------------------------------------------------------------------------


class CVTemplate(ABC):
    """Interface that every CV template must implement.

    Subclasses declare their identity and :class:`TemplateStructure` as class
    attributes and implement :meth:`validate`. Rendering is shared: the
    visible sections are resolved once, each one is dispatched to its
    ``render_<type>`` method, and the non-empty fragments are placed in the
    layout shell. Subclasses override individual section renderers to
    change markup without touching ordering or visibility.
    """

    id: ClassVar[str]
    name: ClassVar[str]
    description: ClassVar[str]
    categories: ClassVar[tuple[str, ...]]
    popularity: ClassVar[int]
    is_premium: ClassVar[bool] = False
    structure: ClassVar[TemplateStructure]

    default_title: ClassVar[str] = "Professional"
    sidebar_sections: ClassVar[frozenset[SectionType]] = frozenset()
    # Template-specific names for the canonical headings.
    headings: ClassVar[dict[SectionType, str]] = {}
    extra_css: ClassVar[str] = ""

    @abstractmethod
    def validate(self, cv: CVData) -> list[str]:
        """Return human-readable warnings for *cv*; never raises."""

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def css_class(self) -> str:
        return self.id

    def render(self, cv: CVData) -> str:
        """Render *cv* into an HTML fragment rooted at ``.cv-container``."""
        main: list[str] = []
        sidebar: list[str] = []
        two_column = self.structure.layout is LayoutKind.TWO_COLUMN

        for section in resolve_sections(cv):
            html = self.render_section(section, cv).strip()
            if not html:
                continue
            if two_column and section.type in self.sidebar_sections:
                sidebar.append(html)
            else:
                main.append(html)

        header = self.render_header(cv)
        footer = self.render_footer(cv)
        if two_column:
            return self.render_two_column(header, main, sidebar, footer)
        return self.render_single_column(header, main, footer)

    def render_single_column(self, header: str, main: list[str], footer: str) -> str:
        parts = [f'<div class="cv-container {self.css_class}">', header, *main]
        if footer:
            parts.append(footer)
        parts.append("</div>")
        return "\n".join(parts)

    def render_two_column(
        self, header: str, main: list[str], sidebar: list[str], footer: str
    ) -> str:
        parts = [
            f'<div class="cv-container {self.css_class}">',
            '<aside class="cv-sidebar">',
            header,
            *sidebar,
            "</aside>",
            '<main class="cv-main">',
            *main,
        ]
        if footer:
            parts.append(footer)
        parts.extend(["</main>", "</div>"])
        return "\n".join(parts)

    def render_header(self, cv: CVData) -> str:
        p = cv.personal
        contact = [
            f"<span>{self.escape_html(value)}</span>"
            for value in (p.email, p.phone, p.address, p.website, p.linkedin, p.github, p.portfolio)
            if value
        ]
        return "\n".join(
            [
                '<header class="cv-header">',
                f'<h1 class="name">{self.escape_html(p.full_name)}</h1>',
                f'<p class="title">{self.escape_html(p.title or self.default_title)}</p>',
                f'<div class="contact-info">{"".join(contact)}</div>',
                "</header>",
            ]
        )

    def render_footer(self, cv: CVData) -> str:
        return ""

    def render_section(self, section: Section, cv: CVData) -> str:
        """Dispatch *section* to its renderer; returns ``""`` when empty."""
        heading = self.heading_for(section)
        match section.type:
            case SectionType.SUMMARY:
                return self.render_summary(cv, heading)
            case SectionType.EXPERIENCE:
                return self.render_experience(cv, heading)
            case SectionType.EDUCATION:
                return self.render_education(cv, heading)
            case SectionType.SKILLS:
                return self.render_skills(cv, heading)
            case SectionType.PROJECTS:
                return self.render_projects(cv, heading)
            case SectionType.CERTIFICATIONS:
                return self.render_certifications(cv, heading)
            case SectionType.LANGUAGES:
                return self.render_languages(cv, heading)
            case SectionType.INTERESTS:
                return self.render_interests(cv, heading)
            case SectionType.REFERENCES:
                return self.render_references(cv, heading)
            case _:
                assert_never(section.type)

    def heading_for(self, section: Section) -> str:
        """User-customised titles win; canonical titles may be renamed."""
        canonical = DEFAULT_SECTION_TITLES[section.type]
        if section.title and section.title != canonical:
            return section.title
        return self.headings.get(section.type, canonical)

    # ------------------------------------------------------------------
    # Section renderers
    # ------------------------------------------------------------------

    def render_summary(self, cv: CVData, heading: str) -> str:
        if not cv.personal.summary:
            return ""
        return self._section(
            "summary", heading, f"<p>{self.escape_html(cv.personal.summary)}</p>"
        )

    def render_skills(self, cv: CVData, heading: str) -> str:
        if not cv.skills:
            return ""
        groups = "".join(
            '<div class="skill-category">'
            f"<strong>{self.escape_html(label)}:</strong> "
            f"<span>{' &bull; '.join(self.escape_html(name) for name in names)}</span>"
            "</div>"
            for label, names in self.group_skills(cv.skills).items()
        )
        return self._section("skills", heading, f'<div class="skills-categories">{groups}</div>')

    def render_experience(self, cv: CVData, heading: str) -> str:
        if not cv.experience:
            return ""
        items = []
        for exp in cv.experience:
            dates = format_date_range(
                exp.start_date, exp.end_date, exp.current, locale=cv.locale
            )
            body = [
                '<div class="experience-item">',
                '<div class="exp-header">',
                f"<h3>{self.escape_html(exp.position)}</h3>",
                f'<span class="date">{self.escape_html(dates)}</span>',
                "</div>",
                f'<p class="company">{self.escape_html(self._join(exp.company, exp.location))}</p>',
            ]
            if exp.description:
                body.append(f'<p class="exp-description">{self.escape_html(exp.description)}</p>')
            body.append(self._bullets(exp.achievements, "achievements"))
            body.append("</div>")
            items.append("".join(body))
        return self._section("experience", heading, "".join(items))

    def render_education(self, cv: CVData, heading: str) -> str:
        if not cv.education:
            return ""
        items = []
        for edu in cv.education:
            degree = f"{edu.degree} in {edu.field}" if edu.field else edu.degree
            dates = format_date_range(
                edu.start_date, edu.end_date, edu.current, locale=cv.locale
            )
            body = [
                '<div class="education-item">',
                '<div class="edu-header">',
                f"<h3>{self.escape_html(degree)}</h3>",
                f'<span class="date">{self.escape_html(dates)}</span>',
                "</div>",
                f'<p class="institution">'
                f"{self.escape_html(self._join(edu.institution, edu.location))}</p>",
            ]
            if edu.grade:
                body.append(f'<p class="grade">Grade: {self.escape_html(edu.grade)}</p>')
            body.append("</div>")
            items.append("".join(body))
        return self._section("education", heading, "".join(items))

    def render_projects(self, cv: CVData, heading: str) -> str:
        if not cv.projects:
            return ""
        items = []
        for project in cv.projects:
            body = [
                '<div class="project-item">',
                f"<h3>{self.escape_html(project.name)}</h3>",
            ]
            if project.description:
                body.append(
                    f'<p class="project-description">{self.escape_html(project.description)}</p>'
                )
            if project.technologies:
                techs = ", ".join(self.escape_html(t) for t in project.technologies)
                body.append(f'<p class="project-tech"><strong>Technologies:</strong> {techs}</p>')
            if project.url:
                url = self.escape_html(project.url)
                body.append(f'<p class="project-link"><a href="{url}">{url}</a></p>')
            body.append("</div>")
            items.append("".join(body))
        return self._section("projects", heading, "".join(items))

    def render_certifications(self, cv: CVData, heading: str) -> str:
        if not cv.certifications:
            return ""
        items = []
        for cert in cv.certifications:
            body = [
                '<div class="certification-item">',
                '<div class="cert-header">',
                f"<h3>{self.escape_html(cert.name)}</h3>",
                f'<span class="cert-date">{format_short_date(cert.issue_date, cv.locale)}</span>',
                "</div>",
                f'<p class="cert-issuer">{self.escape_html(cert.issuer)}</p>',
            ]
            if cert.credential_id:
                body.append(
                    f'<p class="cert-id">Credential ID: {self.escape_html(cert.credential_id)}</p>'
                )
            body.append("</div>")
            items.append("".join(body))
        return self._section("certifications", heading, "".join(items))

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
        return self._section("languages", heading, f'<div class="languages-grid">{items}</div>')

    def render_interests(self, cv: CVData, heading: str) -> str:
        if not cv.interests:
            return ""
        names = " &bull; ".join(self.escape_html(i.name) for i in cv.interests)
        return self._section("interests", heading, f"<p>{names}</p>")

    def render_references(self, cv: CVData, heading: str) -> str:
        if not references_block_visible(cv):
            return ""
        if cv.references_display is ReferencesDisplay.ON_REQUEST:
            return self._section(
                "references", heading, f'<p class="references-note">{REFERENCES_ON_REQUEST}</p>'
            )
        items = []
        for ref in cv.references:
            position = " at ".join(part for part in (ref.position, ref.company) if part)
            contact = " &bull; ".join(
                self.escape_html(part) for part in (ref.email, ref.phone) if part
            )
            items.append(
                '<div class="reference-item">'
                f"<h3>{self.escape_html(ref.name)}</h3>"
                f'<p class="ref-position">{self.escape_html(position)}</p>'
                f'<p class="ref-contact">{contact}</p>'
                "</div>"
            )
        return self._section("references", heading, "".join(items))

    # ------------------------------------------------------------------
    # Stylesheet
    # ------------------------------------------------------------------

    def get_css(self) -> str:
        """Return the stylesheet for this template.

        The base rules are generated from :attr:`structure`; subclasses add
        template-specific rules through :attr:`extra_css`.
        """
        s = self.structure
        root = f".cv-container.{self.css_class}"
        rules = [
            f"{root} {{ font-family: {s.fonts.body}; color: {s.colors.text}; "
            f"background: {s.colors.background}; line-height: {s.spacing.line}; "
            "max-width: 210mm; min-height: 297mm; margin: 0 auto; box-sizing: border-box; }",
            f"{root} h1, {root} h2, {root} h3 {{ font-family: {s.fonts.heading}; }}",
            f"{root} h2 {{ color: {s.colors.primary}; "
            f"border-bottom: 1px solid {s.colors.accent}; padding-bottom: 0.25rem; }}",
            f"{root} section {{ margin-bottom: {s.spacing.section}; }}",
            f"{root} .experience-item, {root} .education-item, {root} .project-item, "
            f"{root} .certification-item, {root} .reference-item "
            f"{{ margin-bottom: {s.spacing.item}; }}",
            f"{root} .exp-header, {root} .edu-header, {root} .cert-header "
            "{ display: flex; justify-content: space-between; align-items: baseline; }",
            f"{root} .date, {root} .cert-date {{ color: {s.colors.accent}; font-size: 0.9rem; }}",
        ]
        if s.layout is LayoutKind.TWO_COLUMN:
            rules.extend(
                [
                    f"{root} {{ display: flex; }}",
                    f"{root} .cv-sidebar {{ width: 35%; padding: 2rem; "
                    f"background: {s.colors.primary}; color: {s.colors.background}; }}",
                    f"{root} .cv-sidebar h1, {root} .cv-sidebar h2 "
                    f"{{ color: {s.colors.background}; }}",
                    f"{root} .cv-main {{ flex: 1; padding: 2rem; }}",
                ]
            )
        else:
            rules.append(f"{root} {{ padding: 20mm; }}")
        rules.append(f"@media print {{ {root} {{ box-shadow: none; }} }}")
        if self.extra_css:
            rules.append(self.extra_css.strip())
        return "\n".join(rules)

    # ------------------------------------------------------------------
    # Shared helpers available to all templates
    # ------------------------------------------------------------------

    @staticmethod
    def escape_html(text: str | None) -> str:
        return escape(text or "", quote=True)

    @staticmethod
    def skill_width(level: SkillLevel | str) -> str:
        """Return the CSS width of a proficiency bar for *level*."""
        try:
            return _SKILL_WIDTHS[SkillLevel(level)]
        except ValueError:
            return "50%"

    @staticmethod
    def group_skills(skills: list[Skill]) -> dict[str, list[str]]:
        """Group skill names under display labels, keeping first-seen order."""
        grouped: dict[str, list[str]] = {}
        for skill in skills:
            label = _SKILL_GROUP_LABELS.get(str(skill.category), str(skill.category))
            grouped.setdefault(label, []).append(skill.name)
        return grouped

    def _section(self, css_class: str, heading: str, body: str) -> str:
        return (
            f'<section class="{css_class}">'
            f"<h2>{self.escape_html(heading)}</h2>{body}</section>"
        )

    def _bullets(self, items: list[str], css_class: str) -> str:
        if not items:
            return ""
        lis = "".join(f"<li>{self.escape_html(item)}</li>" for item in items if item)
        return f'<ul class="{css_class}">{lis}</ul>'

    @staticmethod
    def _join(*parts: str, separator: str = " | ") -> str:
        return separator.join(part for part in parts if part)

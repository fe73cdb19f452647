"""Base class for declarative document looks.

A look turns a CV into a :class:`~cv_studio.looks.document.LookDocument`
without touching any renderer. Layout constants live in class attributes;
instances hold no state, so one instance can serve concurrent builds.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, ClassVar, assert_never

from cv_studio.looks.document import (
    A4,
    Block,
    Bullets,
    LookDocument,
    Margins,
    Row,
    Rule,
    Spacer,
    Stack,
    Text,
    TextStyle,
)
from cv_studio.models.content import (
    HeaderSpacing,
    ReferencesDisplay,
    SectionSpacing,
    SectionType,
)
from cv_studio.models.sections import (
    REFERENCES_ON_REQUEST,
    references_block_visible,
    resolve_sections,
    section_title,
)
from cv_studio.utils.dates import format_date_range, format_numeric_date, format_short_date
from cv_studio.utils.formatting import format_irish_phone, strip_protocol

if TYPE_CHECKING:
    from cv_studio.looks.document import RGB
    from cv_studio.models.content import CVData, DesignSettings, Section

__all__ = [
    "HEADER_SPACING",
    "POINTS_PER_INCH",
    "SECTION_SPACING",
    "SEPARATOR",
    "Look",
    "LookMetrics",
    "core_font_for",
]

POINTS_PER_INCH = 72.0
SEPARATOR = " · "

SECTION_SPACING: dict[SectionSpacing, float] = {
    SectionSpacing.TIGHT: 8.0,
    SectionSpacing.NORMAL: 14.0,
    SectionSpacing.RELAXED: 20.0,
    SectionSpacing.SPACIOUS: 28.0,
}

HEADER_SPACING: dict[HeaderSpacing, float] = {
    HeaderSpacing.COMPACT: 8.0,
    HeaderSpacing.NORMAL: 14.0,
    HeaderSpacing.GENEROUS: 22.0,
}

_MONO_HINTS = ("mono", "courier", "consolas")
_SERIF_HINTS = ("times", "georgia", "garamond", "merriweather", "cambria", "book", "serif")


def core_font_for(family: str | None, default: str = "Helvetica") -> str:
    """Map an arbitrary font family onto one of the PDF core fonts."""
    if not family:
        return default
    lowered = family.lower()
    if any(hint in lowered for hint in _MONO_HINTS):
        return "Courier"
    if "sans" not in lowered and any(hint in lowered for hint in _SERIF_HINTS):
        return "Times"
    return "Helvetica"


@dataclass(frozen=True, slots=True)
class LookMetrics:
    """Effective layout values after applying design settings."""

    margins: Margins
    font_family: str
    font_size: float
    line_height: float
    section_gap: float
    header_gap: float
    locale: str = "en"


class Look:
    """Shared building blocks for every look.

    Subclasses override class constants and, where the layout differs,
    individual ``section_*`` builders or :meth:`build_body`.
    """

    id: ClassVar[str]
    name: ClassVar[str]

    default_font: ClassVar[str] = "Helvetica"
    default_font_size: ClassVar[float] = 10.0
    default_line_height: ClassVar[float] = 1.3
    default_margin: ClassVar[float] = 48.0

    name_size: ClassVar[float] = 20.0
    title_size: ClassVar[float] = 12.0
    heading_size: ClassVar[float] = 12.0
    small_size: ClassVar[float] = 9.0

    text_color: ClassVar[RGB] = (0, 0, 0)
    accent: ClassVar[RGB] = (0, 0, 0)
    muted: ClassVar[RGB] = (110, 110, 110)

    header_align: ClassVar[str] = "L"
    uppercase_headings: ClassVar[bool] = True
    heading_rule: ClassVar[bool] = True
    numeric_dates: ClassVar[bool] = True

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def build(self, cv: CVData, design: DesignSettings | None = None) -> LookDocument:
        """Return the page description for *cv*.

        *design* defaults to ``cv.design_settings``; without either the
        look's own constants apply.
        """
        metrics = self.metrics(design or cv.design_settings)
        return LookDocument(
            look_id=self.id,
            geometry=A4,
            margins=metrics.margins,
            font_family=metrics.font_family,
            font_size=metrics.font_size,
            line_height=metrics.line_height,
            header=tuple(self.build_header(cv, metrics)),
            body=tuple(self.build_body(cv, metrics)),
            footer=tuple(self.build_footer(cv, metrics)),
            title=f"{cv.personal.full_name} CV".strip(),
        )

    def metrics(self, design: DesignSettings | None) -> LookMetrics:
        if design is None:
            return LookMetrics(
                margins=Margins.uniform(self.default_margin),
                font_family=self.default_font,
                font_size=self.default_font_size,
                line_height=self.default_line_height,
                section_gap=SECTION_SPACING[SectionSpacing.NORMAL],
                header_gap=HEADER_SPACING[HeaderSpacing.NORMAL],
            )
        return LookMetrics(
            margins=Margins.uniform(design.margins * POINTS_PER_INCH),
            font_family=core_font_for(design.font_family, self.default_font),
            font_size=design.font_size,
            line_height=design.line_height,
            section_gap=SECTION_SPACING[design.section_spacing],
            header_gap=HEADER_SPACING[design.header_spacing],
            locale=design.locale,
        )

    # ------------------------------------------------------------------
    # Page regions
    # ------------------------------------------------------------------

    def build_header(self, cv: CVData, m: LookMetrics) -> list[Block]:
        p = cv.personal
        align = self.header_align
        small = self.style(m, size=self.small_size, align=align)
        blocks: list[Block] = [
            Text(
                p.full_name,
                self.style(m, size=self.name_size, bold=True, color=self.accent, align=align),
                space_after=4,
            )
        ]
        if p.title:
            title_style = self.style(m, size=self.title_size, color=self.muted, align=align)
            blocks.append(Text(p.title, title_style, space_after=4))
        contact = self.contact_line(cv)
        if contact:
            blocks.append(Text(contact, small, space_after=2))
        links = self.links_line(cv)
        if links:
            blocks.append(Text(links, small))
        blocks.append(Rule(color=self.accent, space_before=6, space_after=0))
        blocks.append(Spacer(m.header_gap))
        return blocks

    def build_body(self, cv: CVData, m: LookMetrics) -> list[Block]:
        stacks = (self.section_stack(section, cv, m) for section in resolve_sections(cv))
        return [stack for stack in stacks if stack is not None]

    def build_footer(self, cv: CVData, m: LookMetrics) -> list[Block]:
        """Emit the on-request sentence when no references block was built."""
        if references_block_visible(cv):
            return []
        return [
            Spacer(m.section_gap),
            Text(REFERENCES_ON_REQUEST, self.style(m, size=8, color=self.muted, align="C")),
        ]

    def section_stack(self, section: Section, cv: CVData, m: LookMetrics) -> Stack | None:
        content = self.build_section(section, cv, m)
        if not content:
            return None
        return Stack(
            children=(*self.heading(section_title(section), m), *content, Spacer(m.section_gap)),
            name=section.type.value,
        )

    def build_section(self, section: Section, cv: CVData, m: LookMetrics) -> list[Block]:
        match section.type:
            case SectionType.SUMMARY:
                return self.section_summary(cv, m)
            case SectionType.EXPERIENCE:
                return self.section_experience(cv, m)
            case SectionType.EDUCATION:
                return self.section_education(cv, m)
            case SectionType.SKILLS:
                return self.section_skills(cv, m)
            case SectionType.PROJECTS:
                return self.section_projects(cv, m)
            case SectionType.CERTIFICATIONS:
                return self.section_certifications(cv, m)
            case SectionType.LANGUAGES:
                return self.section_languages(cv, m)
            case SectionType.INTERESTS:
                return self.section_interests(cv, m)
            case SectionType.REFERENCES:
                return self.section_references(cv, m)
            case _:
                assert_never(section.type)

    def heading(self, title: str, m: LookMetrics) -> list[Block]:
        text = title.upper() if self.uppercase_headings else title
        blocks: list[Block] = [
            Text(text, self.style(m, size=self.heading_size, bold=True, color=self.accent))
        ]
        if self.heading_rule:
            blocks.append(Rule(color=self.accent))
        else:
            blocks.append(Spacer(4))
        return blocks

    # ------------------------------------------------------------------
    # Section builders
    # ------------------------------------------------------------------

    def section_summary(self, cv: CVData, m: LookMetrics) -> list[Block]:
        if not cv.personal.summary:
            return []
        return [Text(cv.personal.summary, self.style(m, align="J"))]

    def section_skills(self, cv: CVData, m: LookMetrics) -> list[Block]:
        grouped: dict[str, list[str]] = {}
        for skill in cv.skills:
            grouped.setdefault(str(skill.category), []).append(skill.name)
        return [
            Text(f"{category}: {', '.join(names)}", self.style(m), space_after=2)
            for category, names in grouped.items()
        ]

    def section_experience(self, cv: CVData, m: LookMetrics) -> list[Block]:
        blocks: list[Block] = []
        for exp in cv.experience:
            dates = self.date_range(exp.start_date, exp.end_date, exp.current, m.locale)
            blocks.append(Row(exp.position, dates, self.style(m, bold=True), self.meta_style(m)))
            org = self.joined(exp.company, exp.location)
            if org:
                org_style = self.style(m, italic=True, color=self.muted)
                blocks.append(Text(org, org_style, space_after=2))
            if exp.description:
                blocks.append(Text(exp.description, self.style(m), space_after=2))
            if exp.achievements:
                blocks.append(Bullets(tuple(exp.achievements), self.style(m)))
            blocks.append(Spacer(6))
        return blocks

    def section_education(self, cv: CVData, m: LookMetrics) -> list[Block]:
        blocks: list[Block] = []
        for edu in cv.education:
            degree = f"{edu.degree} in {edu.field}" if edu.field else edu.degree
            dates = self.date_range(edu.start_date, edu.end_date, edu.current, m.locale)
            blocks.append(Row(degree, dates, self.style(m, bold=True), self.meta_style(m)))
            org = self.joined(edu.institution, edu.location)
            if org:
                blocks.append(Text(org, self.style(m, italic=True, color=self.muted)))
            if edu.grade:
                blocks.append(Text(f"Grade: {edu.grade}", self.style(m)))
            blocks.append(Spacer(6))
        return blocks

    def section_projects(self, cv: CVData, m: LookMetrics) -> list[Block]:
        blocks: list[Block] = []
        for project in cv.projects:
            dates = self.date_range(
                project.start_date, project.end_date, project.current, m.locale
            )
            blocks.append(Row(project.name, dates, self.style(m, bold=True), self.meta_style(m)))
            if project.description:
                blocks.append(Text(project.description, self.style(m), space_after=2))
            if project.technologies:
                technologies = f"Technologies: {', '.join(project.technologies)}"
                blocks.append(Text(technologies, self.meta_style(m)))
            if project.achievements:
                blocks.append(Bullets(tuple(project.achievements), self.style(m)))
            blocks.append(Spacer(6))
        return blocks

    def section_certifications(self, cv: CVData, m: LookMetrics) -> list[Block]:
        blocks: list[Block] = []
        for cert in cv.certifications:
            issued = self.format_date(cert.issue_date, m.locale)
            blocks.append(Row(cert.name, issued, self.style(m, bold=True), self.meta_style(m)))
            credential = f"Credential ID: {cert.credential_id}" if cert.credential_id else ""
            detail = self.joined(cert.issuer, credential)
            if detail:
                blocks.append(Text(detail, self.style(m, color=self.muted), space_after=4))
        return blocks

    def section_languages(self, cv: CVData, m: LookMetrics) -> list[Block]:
        level_style = self.style(m, bold=True, color=self.muted)
        return [
            Row(lang.name, str(lang.level), self.style(m), level_style, space_after=2)
            for lang in cv.languages
        ]

    def section_interests(self, cv: CVData, m: LookMetrics) -> list[Block]:
        if not cv.interests:
            return []
        return [Text(SEPARATOR.join(i.name for i in cv.interests), self.style(m))]

    def section_references(self, cv: CVData, m: LookMetrics) -> list[Block]:
        if not references_block_visible(cv):
            return []
        if cv.references_display is ReferencesDisplay.ON_REQUEST:
            return [Text(REFERENCES_ON_REQUEST, self.style(m))]
        blocks: list[Block] = []
        for ref in cv.references:
            heading = " - ".join(part for part in (ref.name, ref.position) if part)
            contact = self.joined(ref.company, ref.email, format_irish_phone(ref.phone))
            blocks.append(Text(heading, self.style(m, bold=True)))
            blocks.append(Text(contact, self.meta_style(m), space_after=6))
        return blocks

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def style(self, m: LookMetrics, **overrides: object) -> TextStyle:
        values: dict[str, object] = {"size": m.font_size, "color": self.text_color}
        values.update(overrides)
        return TextStyle(**values)  # type: ignore[arg-type]

    def meta_style(self, m: LookMetrics) -> TextStyle:
        return self.style(m, size=self.small_size, color=self.muted)

    def format_date(self, value: str | None, locale: str = "en") -> str:
        if self.numeric_dates:
            return format_numeric_date(value)
        return format_short_date(value, locale)

    def date_range(
        self, start: str | None, end: str | None, current: bool = False, locale: str = "en"
    ) -> str:
        formatter = partial(self.format_date, locale=locale)
        return format_date_range(start, end, current, locale=locale, formatter=formatter)

    def contact_line(self, cv: CVData) -> str:
        p = cv.personal
        return self.joined(p.email, format_irish_phone(p.phone), p.address)

    def links_line(self, cv: CVData) -> str:
        p = cv.personal
        return self.joined(
            *(strip_protocol(url) for url in (p.linkedin, p.github, p.website, p.portfolio) if url)
        )

    @staticmethod
    def joined(*parts: str | None) -> str:
        return SEPARATOR.join(part for part in parts if part)

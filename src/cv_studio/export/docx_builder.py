"""Build a Word document for a CV with python-docx."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Mm, Pt, RGBColor

from cv_studio.models.content import ReferencesDisplay, SectionType
from cv_studio.models.sections import (
    REFERENCES_ON_REQUEST,
    references_block_visible,
    resolve_sections,
    section_title,
)
from cv_studio.utils.dates import format_date_range, format_numeric_date
from cv_studio.utils.formatting import format_irish_phone

if TYPE_CHECKING:
    from docx.document import Document as DocxDocument

    from cv_studio.models.content import CVData

__all__ = ["DEFAULT_DOCX_STYLE", "build_docx", "docx_font_for"]

logger = logging.getLogger(__name__)

DEFAULT_DOCX_STYLE = "harvard"
DEFAULT_FONT = "Times New Roman"
DEFAULT_FONT_SIZE = 10.0

_SUPPORTED_FONTS = frozenset(
    {
        "Times New Roman",
        "Arial",
        "Calibri",
        "Georgia",
        "Roboto",
        "Inter",
        "Open Sans",
        "Lato",
        "Merriweather",
        "Rubik",
    }
)
_LEFT_ALIGNED_STYLES = frozenset({"modern", "creative", "dublin-tech", "stockholm", "london"})
_MUTED = RGBColor(0x66, 0x66, 0x66)


def docx_font_for(family: str | None) -> str:
    """Return *family* if Word ships it everywhere, else Times New Roman."""
    return family if family in _SUPPORTED_FONTS else DEFAULT_FONT


class _DocxWriter:
    def __init__(self, cv: CVData, style_id: str) -> None:
        self.cv = cv
        design = cv.design_settings
        self.font = docx_font_for(design.font_family if design else None)
        self.size = design.font_size if design else DEFAULT_FONT_SIZE
        left_aligned = style_id in _LEFT_ALIGNED_STYLES
        self.header_alignment = (
            WD_ALIGN_PARAGRAPH.LEFT if left_aligned else WD_ALIGN_PARAGRAPH.CENTER
        )
        self.doc: DocxDocument = Document()
        self._setup_page()

    def _setup_page(self) -> None:
        section = self.doc.sections[0]
        section.page_width = Mm(210)
        section.page_height = Mm(297)
        for side in ("top_margin", "right_margin", "bottom_margin", "left_margin"):
            setattr(section, side, Inches(1))
        normal = self.doc.styles["Normal"]
        normal.font.name = self.font
        normal.font.size = Pt(self.size)

    # ------------------------------------------------------------------
    # Paragraph helpers
    # ------------------------------------------------------------------

    def para(
        self,
        text: str = "",
        *,
        bold: bool = False,
        italic: bool = False,
        size: float | None = None,
        color: RGBColor | None = None,
        align: WD_ALIGN_PARAGRAPH | None = None,
        space_after: float = 2,
        all_caps: bool = False,
        style: str | None = None,
    ):
        paragraph = self.doc.add_paragraph(style=style)
        if text:
            run = paragraph.add_run(text)
            run.bold = bold
            run.italic = italic
            run.font.name = self.font
            run.font.size = Pt(size or self.size)
            run.font.all_caps = all_caps
            if color is not None:
                run.font.color.rgb = color
        if align is not None:
            paragraph.alignment = align
        paragraph.paragraph_format.space_after = Pt(space_after)
        return paragraph

    def heading(self, title: str) -> None:
        paragraph = self.para(title, bold=True, size=self.size + 2, all_caps=True, space_after=4)
        paragraph.paragraph_format.space_before = Pt(10)

    def bullets(self, items: list[str]) -> None:
        for item in items:
            if item:
                paragraph = self.para(item, style="List Bullet")
                paragraph.paragraph_format.left_indent = Inches(0.25)

    # ------------------------------------------------------------------
    # Document parts
    # ------------------------------------------------------------------

    def header(self) -> None:
        p = self.cv.personal
        self.para(p.full_name, bold=True, size=24, all_caps=True, align=self.header_alignment)
        if p.title:
            self.para(p.title, italic=True, size=self.size + 2, align=self.header_alignment)
        contact = " | ".join(
            part for part in (p.email, format_irish_phone(p.phone), p.address) if part
        )
        if contact:
            self.para(contact, align=self.header_alignment)
        links = " | ".join(part for part in (p.linkedin, p.github, p.website, p.portfolio) if part)
        if links:
            self.para(links, color=_MUTED, align=self.header_alignment, space_after=8)

    def section(self, section_type: SectionType, title: str) -> None:
        cv = self.cv
        match section_type:
            case SectionType.SUMMARY:
                if cv.personal.summary:
                    self.heading(title)
                    self.para(cv.personal.summary, space_after=6)
            case SectionType.EXPERIENCE:
                if cv.experience:
                    self.heading(title)
                    for exp in cv.experience:
                        self.entry(
                            exp.position,
                            self.dates(exp.start_date, exp.end_date, exp.current),
                            " | ".join(part for part in (exp.company, exp.location) if part),
                        )
                        if exp.description:
                            self.para(exp.description)
                        self.bullets(exp.achievements)
            case SectionType.EDUCATION:
                if cv.education:
                    self.heading(title)
                    for edu in cv.education:
                        degree = f"{edu.degree} in {edu.field}" if edu.field else edu.degree
                        self.entry(
                            degree,
                            self.dates(edu.start_date, edu.end_date, edu.current),
                            " | ".join(part for part in (edu.institution, edu.grade) if part),
                        )
            case SectionType.SKILLS:
                if cv.skills:
                    self.heading(title)
                    grouped: dict[str, list[str]] = {}
                    for skill in cv.skills:
                        grouped.setdefault(str(skill.category), []).append(skill.name)
                    for category, names in grouped.items():
                        paragraph = self.para(f"{category}: ", bold=True)
                        run = paragraph.add_run(", ".join(names))
                        run.font.name = self.font
                        run.font.size = Pt(self.size)
            case SectionType.PROJECTS:
                if cv.projects:
                    self.heading(title)
                    for project in cv.projects:
                        self.entry(
                            project.name,
                            self.dates(project.start_date, project.end_date, project.current),
                            ", ".join(project.technologies),
                        )
                        if project.description:
                            self.para(project.description)
                        self.bullets(project.achievements)
            case SectionType.CERTIFICATIONS:
                if cv.certifications:
                    self.heading(title)
                    for cert in cv.certifications:
                        self.entry(cert.name, format_numeric_date(cert.issue_date), cert.issuer)
            case SectionType.LANGUAGES:
                if cv.languages:
                    self.heading(title)
                    for lang in cv.languages:
                        self.para(f"{lang.name}: {lang.level}")
            case SectionType.INTERESTS:
                if cv.interests:
                    self.heading(title)
                    self.para(", ".join(i.name for i in cv.interests))
            case SectionType.REFERENCES:
                if references_block_visible(cv):
                    self.heading(title)
                    self.references()

    def references(self) -> None:
        if self.cv.references_display is ReferencesDisplay.ON_REQUEST:
            self.para(REFERENCES_ON_REQUEST, align=WD_ALIGN_PARAGRAPH.CENTER, space_after=10)
            return
        for ref in self.cv.references:
            parts = [
                ref.name,
                ref.position,
                f"at {ref.company}" if ref.company else "",
                ref.email,
                ref.phone,
                f"({ref.relationship})" if ref.relationship else "",
            ]
            self.para(" • ".join(part for part in parts if part), space_after=5)

    def entry(self, title: str, dates: str, subtitle: str) -> None:
        paragraph = self.para(title, bold=True, space_after=0)
        if dates:
            run = paragraph.add_run(f"\t{dates}")
            run.font.name = self.font
            run.font.size = Pt(self.size)
            run.font.color.rgb = _MUTED
        if subtitle:
            self.para(subtitle, italic=True, color=_MUTED)

    def dates(self, start: str | None, end: str | None, current: bool) -> str:
        return format_date_range(
            start, end, current, locale=self.cv.locale, formatter=format_numeric_date
        )

    def build(self) -> bytes:
        self.header()
        for section in resolve_sections(self.cv):
            self.section(section.type, section_title(section))
        if not references_block_visible(self.cv):
            paragraph = self.para(
                REFERENCES_ON_REQUEST,
                size=8,
                color=_MUTED,
                align=WD_ALIGN_PARAGRAPH.CENTER,
                space_after=10,
            )
            paragraph.paragraph_format.space_before = Pt(30)

        buffer = io.BytesIO()
        self.doc.save(buffer)
        return buffer.getvalue()


def build_docx(cv: CVData, style_id: str | None = None) -> bytes:
    """Return a DOCX file for *cv* as bytes.

    A4 pages with one-inch margins; the font family and size come from the
    CV's design settings when present.
    """
    style = style_id or DEFAULT_DOCX_STYLE
    data = _DocxWriter(cv, style).build()
    logger.debug("Built %s DOCX for %r (%d bytes)", style, cv.personal.full_name, len(data))
    return data

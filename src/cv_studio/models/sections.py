"""Section ordering and visibility rules shared by every renderer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cv_studio.models.content import ReferencesDisplay, Section, SectionType

if TYPE_CHECKING:
    from cv_studio.models.content import CVData

__all__ = [
    "DEFAULT_SECTION_TITLES",
    "REFERENCES_ON_REQUEST",
    "default_sections",
    "references_block_visible",
    "resolve_sections",
    "section_title",
]

REFERENCES_ON_REQUEST = "References available upon request"

# Canonical order used whenever a CV carries no explicit section list.
DEFAULT_SECTION_TITLES: dict[SectionType, str] = {
    SectionType.SUMMARY: "Professional Summary",
    SectionType.SKILLS: "Skills",
    SectionType.EXPERIENCE: "Work Experience",
    SectionType.EDUCATION: "Education",
    SectionType.PROJECTS: "Projects",
    SectionType.CERTIFICATIONS: "Certifications",
    SectionType.LANGUAGES: "Languages",
    SectionType.INTERESTS: "Interests",
    SectionType.REFERENCES: "References",
}


def default_sections() -> list[Section]:
    """Return a fresh list of the canonical sections, all visible, ordered 1..9."""
    return [
        Section(id=section_type.value, type=section_type, title=title, visible=True, order=index)
        for index, (section_type, title) in enumerate(DEFAULT_SECTION_TITLES.items(), start=1)
    ]


def resolve_sections(cv: CVData) -> list[Section]:
    """Return the visible sections of *cv* in render order.

    Falls back to :func:`default_sections` when the CV has no explicit list.
    ``sorted`` is stable, so sections sharing an ``order`` keep input order.
    """
    sections = cv.sections or default_sections()
    return sorted((s for s in sections if s.visible), key=lambda s: s.order)


def section_title(section: Section) -> str:
    """Return the heading for *section*, defaulting to the canonical title."""
    return section.title or DEFAULT_SECTION_TITLES[section.type]


def references_block_visible(cv: CVData) -> bool:
    """Return whether a references block (records or the on-request note) shows.

    True iff the references section is visible and either detailed records
    exist or the display mode is "available on request".
    """
    sections = cv.sections or default_sections()
    visible = any(s.type is SectionType.REFERENCES and s.visible for s in sections)
    if not visible:
        return False
    if cv.references_display is ReferencesDisplay.ON_REQUEST:
        return True
    return bool(cv.references)

"""Plain-text rendition of a CV.

The layout is deterministic: full name, ``email | phone``, address, a
blank line, then every visible non-empty section in render order under an
uppercase heading.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cv_studio.models.content import ReferencesDisplay, SectionType
from cv_studio.models.sections import (
    REFERENCES_ON_REQUEST,
    references_block_visible,
    resolve_sections,
    section_title,
)
from cv_studio.utils.dates import format_date_range, format_short_date

if TYPE_CHECKING:
    from cv_studio.models.content import CVData

__all__ = ["render_plain_text"]

BULLET = "•"


def _summary(cv: CVData) -> list[str]:
    return [cv.personal.summary] if cv.personal.summary else []


def _experience(cv: CVData) -> list[str]:
    lines: list[str] = []
    for exp in cv.experience:
        lines.append(" - ".join(part for part in (exp.position, exp.company) if part))
        dates = format_date_range(exp.start_date, exp.end_date, exp.current, locale=cv.locale)
        meta = " | ".join(part for part in (dates, exp.location) if part)
        if meta:
            lines.append(meta)
        if exp.description:
            lines.append(exp.description)
        lines.extend(f"{BULLET} {a}" for a in exp.achievements if a)
        lines.append("")
    return lines


def _education(cv: CVData) -> list[str]:
    lines: list[str] = []
    for edu in cv.education:
        degree = f"{edu.degree} in {edu.field}" if edu.field else edu.degree
        lines.append(" - ".join(part for part in (degree, edu.institution) if part))
        dates = format_date_range(edu.start_date, edu.end_date, edu.current, locale=cv.locale)
        meta = " | ".join(part for part in (dates, edu.grade) if part)
        if meta:
            lines.append(meta)
        if edu.description:
            lines.append(edu.description)
        lines.append("")
    return lines


def _skills(cv: CVData) -> list[str]:
    return [f"{skill.name} ({skill.level})" for skill in cv.skills]


def _projects(cv: CVData) -> list[str]:
    lines: list[str] = []
    for project in cv.projects:
        lines.append(project.name)
        if project.description:
            lines.append(project.description)
        if project.technologies:
            lines.append(f"Technologies: {', '.join(project.technologies)}")
        if project.url:
            lines.append(project.url)
        lines.append("")
    return lines


def _certifications(cv: CVData) -> list[str]:
    lines = []
    for cert in cv.certifications:
        issued = format_short_date(cert.issue_date, cv.locale)
        lines.append(" - ".join(part for part in (cert.name, cert.issuer, issued) if part))
    return lines


def _languages(cv: CVData) -> list[str]:
    return [f"{lang.name}: {lang.level}" for lang in cv.languages]


def _interests(cv: CVData) -> list[str]:
    return [", ".join(i.name for i in cv.interests)] if cv.interests else []


def _references(cv: CVData) -> list[str]:
    if not references_block_visible(cv):
        return []
    if cv.references_display is ReferencesDisplay.ON_REQUEST:
        return [REFERENCES_ON_REQUEST]
    lines: list[str] = []
    for ref in cv.references:
        position = " at ".join(part for part in (ref.position, ref.company) if part)
        lines.append(" - ".join(part for part in (ref.name, position) if part))
        contact = " | ".join(part for part in (ref.email, ref.phone) if part)
        if contact:
            lines.append(contact)
        lines.append("")
    return lines


_SECTION_WRITERS = {
    SectionType.SUMMARY: _summary,
    SectionType.EXPERIENCE: _experience,
    SectionType.EDUCATION: _education,
    SectionType.SKILLS: _skills,
    SectionType.PROJECTS: _projects,
    SectionType.CERTIFICATIONS: _certifications,
    SectionType.LANGUAGES: _languages,
    SectionType.INTERESTS: _interests,
    SectionType.REFERENCES: _references,
}


def render_plain_text(cv: CVData) -> str:
    """Return *cv* as plain text, one visible section after another."""
    p = cv.personal
    lines = [p.full_name, " | ".join(part for part in (p.email, p.phone) if part)]
    if p.address:
        lines.append(p.address)
    lines.append("")

    for section in resolve_sections(cv):
        body = _SECTION_WRITERS[section.type](cv)
        if not body:
            continue
        lines.append(section_title(section).upper())
        lines.extend(body)
        if body[-1] != "":
            lines.append("")

    if not references_block_visible(cv):
        lines.append(REFERENCES_ON_REQUEST)

    return "\n".join(lines).rstrip("\n") + "\n"

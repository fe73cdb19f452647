"""Reusable validation checks shared by the built-in templates.

Every check inspects the content model without mutating it and reports
findings as plain strings; nothing here raises.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from cv_studio.models.content import SkillCategory

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cv_studio.models.content import CVData

__all__ = [
    "METRIC_PATTERN",
    "TECHNICAL",
    "TECHNICAL_OR_SOFTWARE",
    "group_findings_by_section",
    "has_link",
    "has_quantified_achievements",
    "has_skill_in",
    "metrics_finding",
]

# Percentages or currency amounts count as a quantifiable result.
METRIC_PATTERN = re.compile(r"\d+%|\$|€|£")

TECHNICAL = (SkillCategory.TECHNICAL,)
TECHNICAL_OR_SOFTWARE = (SkillCategory.TECHNICAL, SkillCategory.SOFTWARE)

_SECTION_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("skills", ("skill",)),
    ("personal", ("github", "portfolio", "linkedin", "summary")),
    ("certifications", ("certification",)),
    ("experience", ("experience", "achievement")),
    ("education", ("education",)),
)


def has_skill_in(cv: CVData, categories: Iterable[SkillCategory]) -> bool:
    wanted = set(categories)
    return any(skill.category in wanted for skill in cv.skills)


def has_link(cv: CVData, *fields: str) -> bool:
    """Return whether any of the named personal-info fields is filled in."""
    return any(getattr(cv.personal, name, None) for name in fields)


def has_quantified_achievements(cv: CVData) -> bool:
    return any(
        METRIC_PATTERN.search(achievement)
        for exp in cv.experience
        for achievement in exp.achievements
    )


def metrics_finding(cv: CVData, message: str) -> list[str]:
    """Return ``[message]`` when experience exists but shows no metrics.

    A CV without experience entries yields no finding.
    """
    if cv.experience and not has_quantified_achievements(cv):
        return [message]
    return []


def group_findings_by_section(findings: Iterable[str]) -> dict[str, list[str]]:
    """Bucket findings by the section their wording refers to.

    Unmatched findings go to ``"general"``.
    """
    grouped: dict[str, list[str]] = {}
    for finding in findings:
        lowered = finding.lower()
        section = next(
            (
                name
                for name, keywords in _SECTION_KEYWORDS
                if any(keyword in lowered for keyword in keywords)
            ),
            "general",
        )
        grouped.setdefault(section, []).append(finding)
    return grouped

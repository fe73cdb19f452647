"""Content model and section rules."""

from __future__ import annotations

from cv_studio.models.content import (
    Certification,
    CVData,
    DesignSettings,
    Education,
    Experience,
    HeaderSpacing,
    Interest,
    Language,
    LanguageLevel,
    PersonalInfo,
    Project,
    Reference,
    ReferencesDisplay,
    Section,
    SectionSpacing,
    SectionType,
    Skill,
    SkillCategory,
    SkillLevel,
    require_exportable,
)
from cv_studio.models.sections import (
    REFERENCES_ON_REQUEST,
    default_sections,
    references_block_visible,
    resolve_sections,
    section_title,
)

__all__ = [
    "CVData",
    "Certification",
    "DesignSettings",
    "Education",
    "Experience",
    "HeaderSpacing",
    "Interest",
    "Language",
    "LanguageLevel",
    "PersonalInfo",
    "Project",
    "REFERENCES_ON_REQUEST",
    "Reference",
    "ReferencesDisplay",
    "Section",
    "SectionSpacing",
    "SectionType",
    "Skill",
    "SkillCategory",
    "SkillLevel",
    "default_sections",
    "references_block_visible",
    "require_exportable",
    "resolve_sections",
    "section_title",
]

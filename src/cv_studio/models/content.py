"""Content model: the normalized CV data every template and exporter reads.

The models accept the camelCase keys produced by the editor front-end
(``fullName``, ``referencesDisplay`` ...) as well as snake_case names, and
serialize back to camelCase with ``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cv_studio.exceptions import ContentValidationError, MissingContentError

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
    "Reference",
    "ReferencesDisplay",
    "Section",
    "SectionSpacing",
    "SectionType",
    "Skill",
    "SkillCategory",
    "SkillLevel",
    "require_exportable",
]


class _CVModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class SectionType(StrEnum):
    """Every orderable block a CV can contain."""

    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    LANGUAGES = "languages"
    INTERESTS = "interests"
    REFERENCES = "references"


class ReferencesDisplay(StrEnum):
    DETAILED = "detailed"
    ON_REQUEST = "available-on-request"


class SkillLevel(StrEnum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class SkillCategory(StrEnum):
    TECHNICAL = "Technical"
    SOFTWARE = "Software"
    SOFT = "Soft"
    OTHER = "Other"


class LanguageLevel(StrEnum):
    NATIVE = "Native"
    FLUENT = "Fluent"
    PROFESSIONAL = "Professional"
    CONVERSATIONAL = "Conversational"
    BASIC = "Basic"


class SectionSpacing(StrEnum):
    TIGHT = "tight"
    NORMAL = "normal"
    RELAXED = "relaxed"
    SPACIOUS = "spacious"


class HeaderSpacing(StrEnum):
    COMPACT = "compact"
    NORMAL = "normal"
    GENEROUS = "generous"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class PersonalInfo(_CVModel):
    """Name, contact details and free-text summary shown in the header."""

    full_name: str = ""
    title: str | None = None
    email: str = ""
    phone: str = ""
    address: str = ""
    linkedin: str | None = None
    website: str | None = None
    github: str | None = None
    portfolio: str | None = None
    summary: str | None = None
    nationality: str | None = None
    stamp: str | None = None  # work authorisation, e.g. "Stamp 4"


class Experience(_CVModel):
    id: str = ""
    company: str = ""
    position: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""
    achievements: list[str] = Field(default_factory=list)


class Education(_CVModel):
    id: str = ""
    institution: str = ""
    degree: str = ""
    field: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    grade: str | None = None
    description: str | None = None


class Skill(_CVModel):
    id: str = ""
    name: str
    level: SkillLevel = SkillLevel.INTERMEDIATE
    category: SkillCategory = SkillCategory.TECHNICAL


class Language(_CVModel):
    id: str = ""
    name: str
    level: LanguageLevel = LanguageLevel.PROFESSIONAL
    certification: str | None = None


class Project(_CVModel):
    id: str = ""
    name: str
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    start_date: str = ""
    end_date: str | None = None
    current: bool = False
    url: str | None = None
    github: str | None = None
    achievements: list[str] = Field(default_factory=list)


class Certification(_CVModel):
    id: str = ""
    name: str
    issuer: str = ""
    issue_date: str = ""
    expiry_date: str | None = None
    credential_id: str | None = None
    url: str | None = None
    description: str | None = None


class Interest(_CVModel):
    id: str = ""
    name: str
    category: str | None = None
    description: str | None = None


class Reference(_CVModel):
    id: str = ""
    name: str
    position: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    relationship: str = ""


class Section(_CVModel):
    """One orderable, independently visible block of the CV."""

    id: str = ""
    type: SectionType
    title: str = ""
    visible: bool = True
    order: int = 0


class DesignSettings(_CVModel):
    """Page design knobs for the paginated-document looks, plus the date locale."""

    margins: float = Field(0.5, ge=0.0, le=3.0, description="Page margins in inches")
    section_spacing: SectionSpacing = SectionSpacing.NORMAL
    header_spacing: HeaderSpacing = HeaderSpacing.NORMAL
    font_family: str = "Times New Roman"
    font_size: float = Field(10.0, gt=0, le=24, description="Body font size in pt")
    line_height: float = Field(1.2, gt=0, le=3.0)
    locale: str = Field("en", description="Language of month names, e.g. 'de' or 'fr-FR'")


class CVData(_CVModel):
    """Top-level bundle passed to every template, look and exporter."""

    id: str = ""
    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    sections: list[Section] = Field(default_factory=list)
    experience: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)
    interests: list[Interest] = Field(default_factory=list)
    references: list[Reference] = Field(default_factory=list)
    references_display: ReferencesDisplay = ReferencesDisplay.DETAILED
    design_settings: DesignSettings | None = None
    template: str = "classic"

    @property
    def locale(self) -> str:
        return self.design_settings.locale if self.design_settings else "en"


def require_exportable(cv: CVData | None) -> CVData:
    """Return *cv* if it carries the fields every export needs.

    Raises:
        MissingContentError: If *cv* is ``None``.
        ContentValidationError: If the full name or email is blank.
    """
    if cv is None:
        raise MissingContentError()

    problems: list[str] = []
    if not cv.personal.full_name.strip():
        problems.append("Full name is required")
    if not cv.personal.email.strip():
        problems.append("Email is required")
    if problems:
        raise ContentValidationError(problems)
    return cv

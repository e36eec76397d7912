"""Structured résumé document model.

All models are frozen: once a document is returned, callers build new ones
(``model_copy(update=...)``) instead of mutating it. Python attributes are
snake_case; the JSON form uses camelCase (``personalInfo``, ``startDate``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from resume_engine.constants import (
    DEFAULT_CONTRACT_TYPE,
    DEFAULT_DEGREE_LEVEL,
    DEFAULT_LANGUAGE_LEVEL,
    ContractType,
    DegreeLevel,
    LanguageLevel,
)
from resume_engine.services.field_normalizer import (
    clean_string,
    normalize_contract_type,
    normalize_date,
    normalize_degree,
    normalize_language_level,
    normalize_responsibilities,
    normalize_string_list,
)
from resume_engine.utils.matching import dedup_key, ordered_union

ExperienceKey = tuple[str, str, str, str]
EducationKey = tuple[str, str]


class DocumentModel(BaseModel):
    """Base configuration shared by every document model."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PersonalInfo(DocumentModel):
    """Identity and contact details from the document header."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    portfolio: str = ""
    headline: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _clean(cls, value: Any) -> str:
        return clean_string(value)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Experience(DocumentModel):
    """One job. ``current`` implies an empty ``end_date``."""

    title: str = ""
    company: str = ""
    start_date: str = ""
    current: bool = False
    end_date: str = ""
    industry: str = ""
    contract_type: ContractType = DEFAULT_CONTRACT_TYPE
    location: str = ""
    responsibilities: tuple[str, ...] = ()

    @field_validator("title", "company", "industry", "location", mode="before")
    @classmethod
    def _clean(cls, value: Any) -> str:
        return clean_string(value)

    @field_validator("start_date", mode="before")
    @classmethod
    def _normalize_start(cls, value: Any) -> str:
        return normalize_date(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def _normalize_end(cls, value: Any) -> str:
        return normalize_date(value)

    @field_validator("end_date")
    @classmethod
    def _clear_end_when_current(cls, value: str, info: ValidationInfo) -> str:
        return "" if info.data.get("current") else value

    @field_validator("contract_type", mode="before")
    @classmethod
    def _normalize_contract(cls, value: Any) -> ContractType:
        return normalize_contract_type(value)

    @field_validator("responsibilities", mode="before")
    @classmethod
    def _normalize_responsibilities(cls, value: Any) -> tuple[str, ...]:
        return normalize_responsibilities(value)

    @property
    def identity_key(self) -> ExperienceKey:
        return (self.title.lower(), self.company.lower(), self.start_date, self.end_date)


class Education(DocumentModel):
    """One degree or training. ``current`` implies an empty ``end_date``."""

    degree: DegreeLevel = DEFAULT_DEGREE_LEVEL
    field: str = ""
    institution: str = ""
    start_date: str = ""
    current: bool = False
    end_date: str = ""
    description: str = ""

    @field_validator("field", "institution", "description", mode="before")
    @classmethod
    def _clean(cls, value: Any) -> str:
        return clean_string(value)

    @field_validator("degree", mode="before")
    @classmethod
    def _normalize_degree(cls, value: Any) -> DegreeLevel:
        return normalize_degree(value)

    @field_validator("start_date", mode="before")
    @classmethod
    def _normalize_start(cls, value: Any) -> str:
        return normalize_date(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def _normalize_end(cls, value: Any) -> str:
        return normalize_date(value)

    @field_validator("end_date")
    @classmethod
    def _clear_end_when_current(cls, value: str, info: ValidationInfo) -> str:
        return "" if info.data.get("current") else value

    @property
    def identity_key(self) -> EducationKey:
        return (self.degree.lower(), self.institution.lower())


class Language(DocumentModel):
    """A spoken language and how well it is spoken."""

    name: str = ""
    level: LanguageLevel = DEFAULT_LANGUAGE_LEVEL

    @field_validator("name", mode="before")
    @classmethod
    def _clean(cls, value: Any) -> str:
        return clean_string(value)

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> LanguageLevel:
        return normalize_language_level(value)


class Certification(DocumentModel):
    """A certificate, keyed by its name."""

    name: str = ""
    issuer: str = ""
    date: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _clean(cls, value: Any) -> str:
        return clean_string(value)


class StructuredDocument(DocumentModel):
    """Canonical representation of a résumé.

    List fields behave as ordered sets: duplicates (compared on a
    case-insensitive key) are dropped and the first occurrence keeps its
    casing and position.
    """

    personal_info: PersonalInfo = PersonalInfo()
    summary: str = ""
    experiences: tuple[Experience, ...] = ()
    educations: tuple[Education, ...] = ()
    skills: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()
    languages: tuple[Language, ...] = ()
    certifications: tuple[Certification, ...] = ()
    hobbies: tuple[str, ...] = ()

    @field_validator("summary", mode="before")
    @classmethod
    def _clean_summary(cls, value: Any) -> str:
        return clean_string(value)

    @field_validator("skills", "tools", "hobbies", mode="before")
    @classmethod
    def _string_set(cls, value: Any) -> tuple[str, ...]:
        return tuple(ordered_union(normalize_string_list(value), key=dedup_key))

    @field_validator("languages")
    @classmethod
    def _language_set(cls, value: tuple[Language, ...]) -> tuple[Language, ...]:
        return tuple(ordered_union(value, key=lambda language: dedup_key(language.name)))

    @field_validator("certifications")
    @classmethod
    def _certification_set(cls, value: tuple[Certification, ...]) -> tuple[Certification, ...]:
        return tuple(ordered_union(value, key=lambda cert: dedup_key(cert.name)))

    def is_empty(self) -> bool:
        """Return True if the document carries no content at all."""
        return self == StructuredDocument()


def experience_key(experience: Experience) -> ExperienceKey:
    """Identity key of an experience: lowercased title and company plus dates."""
    return experience.identity_key


def education_key(education: Education) -> EducationKey:
    """Identity key of an education: lowercased degree and institution."""
    return education.identity_key

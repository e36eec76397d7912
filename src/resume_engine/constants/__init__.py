from __future__ import annotations

from resume_engine.constants.field_constants import (
    CONTRACT_TYPE_SYNONYMS,
    CURRENT_MARKERS,
    DEFAULT_CONTRACT_TYPE,
    DEFAULT_DEGREE_LEVEL,
    DEFAULT_LANGUAGE_LEVEL,
    DEGREE_SYNONYMS,
    LANGUAGE_LEVEL_SYNONYMS,
    MONTHS,
    ContractType,
    DegreeLevel,
    LanguageLevel,
)
from resume_engine.constants.section_constants import (
    ENTITY_SECTIONS,
    KNOWN_SECTION_TITLES,
    LIST_SECTIONS,
    SECTION_KEYWORDS,
    SectionKind,
)

__all__ = [
    "ContractType",
    "DegreeLevel",
    "LanguageLevel",
    "SectionKind",
    "DEFAULT_CONTRACT_TYPE",
    "DEFAULT_DEGREE_LEVEL",
    "DEFAULT_LANGUAGE_LEVEL",
    "CONTRACT_TYPE_SYNONYMS",
    "DEGREE_SYNONYMS",
    "LANGUAGE_LEVEL_SYNONYMS",
    "CURRENT_MARKERS",
    "MONTHS",
    "SECTION_KEYWORDS",
    "KNOWN_SECTION_TITLES",
    "LIST_SECTIONS",
    "ENTITY_SECTIONS",
]

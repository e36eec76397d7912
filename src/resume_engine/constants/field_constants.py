"""Canonical field enums and the synonym tables used to normalize them.

Each enum documents its default: the value a loosely formatted input falls
back to when none of the synonyms match. The tables are ordered; the first
canonical value whose synonym list matches wins.
"""

from __future__ import annotations

from enum import StrEnum


class ContractType(StrEnum):
    """Employment contract of an experience. Defaults to ``FULL_TIME``."""

    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    FREELANCE = "freelance"
    INTERNSHIP = "internship"


class DegreeLevel(StrEnum):
    """Highest level reached by an education entry. Defaults to ``OTHER``."""

    HIGH_SCHOOL = "high-school"
    ASSOCIATE = "associate"
    BACHELOR = "bachelor"
    MASTER = "master"
    PHD = "phd"
    BOOTCAMP = "bootcamp"
    OTHER = "other"


class LanguageLevel(StrEnum):
    """Spoken-language proficiency. Defaults to ``INTERMEDIATE``."""

    NATIVE = "native"
    FLUENT = "fluent"
    INTERMEDIATE = "intermediate"
    BEGINNER = "beginner"


DEFAULT_CONTRACT_TYPE = ContractType.FULL_TIME
DEFAULT_DEGREE_LEVEL = DegreeLevel.OTHER
DEFAULT_LANGUAGE_LEVEL = LanguageLevel.INTERMEDIATE

# English and French month names, full and abbreviated, with and without accents.
MONTHS: dict[str, str] = {
    "jan": "01",
    "january": "01",
    "janvier": "01",
    "janv": "01",
    "feb": "02",
    "february": "02",
    "février": "02",
    "fevrier": "02",
    "fév": "02",
    "fev": "02",
    "févr": "02",
    "mar": "03",
    "march": "03",
    "mars": "03",
    "apr": "04",
    "april": "04",
    "avril": "04",
    "avr": "04",
    "may": "05",
    "mai": "05",
    "jun": "06",
    "june": "06",
    "juin": "06",
    "jul": "07",
    "july": "07",
    "juillet": "07",
    "juil": "07",
    "aug": "08",
    "august": "08",
    "août": "08",
    "aout": "08",
    "sep": "09",
    "sept": "09",
    "september": "09",
    "septembre": "09",
    "oct": "10",
    "october": "10",
    "octobre": "10",
    "nov": "11",
    "november": "11",
    "novembre": "11",
    "dec": "12",
    "december": "12",
    "décembre": "12",
    "decembre": "12",
    "déc": "12",
}

# Words meaning "still ongoing" in a date range.
CURRENT_MARKERS = (
    "present",
    "présent",
    "current",
    "currently",
    "actuel",
    "actuellement",
    "aujourd'hui",
    "aujourd’hui",
    "now",
    "ongoing",
    "en cours",
)

# Synonyms of three characters or fewer only match as whole words
# (see ``resume_engine.utils.matching.contains_keyword``).
CONTRACT_TYPE_SYNONYMS: tuple[tuple[ContractType, tuple[str, ...]], ...] = (
    (ContractType.FULL_TIME, ("full", "cdi", "permanent", "temps plein")),
    (ContractType.PART_TIME, ("part", "temps partiel", "mi-temps")),
    (ContractType.CONTRACT, ("contract", "cdd", "temporary", "intérim", "interim")),
    (ContractType.FREELANCE, ("freelance", "consultant", "indépendant", "independant")),
    (ContractType.INTERNSHIP, ("intern", "stage", "apprenti", "alternance", "trainee")),
)

DEGREE_SYNONYMS: tuple[tuple[DegreeLevel, tuple[str, ...]], ...] = (
    (DegreeLevel.PHD, ("phd", "ph.d", "doctor", "doctorat", "doctorate")),
    (DegreeLevel.MASTER, ("master", "mba", "msc", "m.sc", "bac+5", "bac +5", "mastère", "ingénieur")),
    (DegreeLevel.BACHELOR, ("bachelor", "licence", "bsc", "b.sc", "ba", "bs", "bac+3", "bac +3")),
    (DegreeLevel.ASSOCIATE, ("associate", "bac+2", "bac +2", "bts", "dut", "deug")),
    (DegreeLevel.HIGH_SCHOOL, ("high school", "high-school", "bac", "baccalauréat", "lycée")),
    (DegreeLevel.BOOTCAMP, ("bootcamp", "certificate", "certification")),
)

LANGUAGE_LEVEL_SYNONYMS: tuple[tuple[LanguageLevel, tuple[str, ...]], ...] = (
    (
        LanguageLevel.NATIVE,
        ("native", "maternel", "maternelle", "bilingual", "bilingue", "mother tongue", "natif"),
    ),
    (
        LanguageLevel.FLUENT,
        ("fluent", "courant", "professional", "professionnel", "advanced", "avancé", "c1", "c2"),
    ),
    (
        LanguageLevel.INTERMEDIATE,
        ("intermediate", "intermédiaire", "conversational", "b1", "b2"),
    ),
    (
        LanguageLevel.BEGINNER,
        ("beginner", "débutant", "basic", "elementary", "notions", "a1", "a2"),
    ),
)

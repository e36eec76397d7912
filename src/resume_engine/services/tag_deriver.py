"""Derivation of bounded, deduplicated profile tags from a document.

Tags are emitted in a fixed category order (seniority, technology,
industry, role, domain, education, language, work style), each category
capped on its own, then deduplicated and cut to ``MAX_TAGS`` overall.
"""

from __future__ import annotations

import math
import re
import unicodedata
from collections import Counter
from collections.abc import Iterable
from datetime import date

from resume_engine.constants.tag_constants import (
    DEFAULT_TECHNOLOGY_PRIORITY,
    DEGREE_PRIORITY,
    DEGREE_TAGS,
    DOMAIN_HIT_THRESHOLD,
    DOMAIN_KEYWORDS,
    ENVIRONMENT_TAGS,
    INDUSTRY_TAGS,
    LANGUAGE_LEVEL_PRIORITY,
    LEADERSHIP_TITLE_PATTERN,
    MAX_DOMAIN_TAGS,
    MAX_EDUCATION_TAGS,
    MAX_INDUSTRY_TAGS,
    MAX_LANGUAGE_TAGS,
    MAX_ROLE_TAGS,
    MAX_SENIORITY_TAGS,
    MAX_TAGS,
    MAX_TECHNOLOGY_TAGS,
    MAX_WORK_STYLE_TAGS,
    PEOPLE_MANAGEMENT_TEAM_SIZE,
    ROLE_PATTERNS,
    SECONDARY_DOMAINS,
    TAGGED_LANGUAGE_LEVELS,
    TECHNOLOGY_PRIORITY,
    WORK_PREFERENCE_TAGS,
)
from resume_engine.models import Experience, StructuredDocument, TagPreferences
from resume_engine.services.field_normalizer import clean_string, normalize_degree
from resume_engine.utils.matching import contains_keyword, dedup_key

TAG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_LETTER_PLUS_RE = re.compile(r"(?<=[a-z+])\+")
_LETTER_SHARP_RE = re.compile(r"(?<=[a-z])#")
_LEADERSHIP_RE = re.compile(LEADERSHIP_TITLE_PATTERN, re.IGNORECASE)
_ROLE_RES = tuple((re.compile(pattern, re.IGNORECASE), tag) for pattern, tag in ROLE_PATTERNS)


def normalize_tag(raw: str) -> str:
    """Lowercase ``raw`` and join its alphanumeric runs with single hyphens.

    Accents are folded (``français`` -> ``francais``) and ``+``/``#`` after a
    letter are spelled out so ``c++`` and ``c#`` stay distinct.
    """
    text = unicodedata.normalize("NFKD", clean_string(raw).lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = _LETTER_PLUS_RE.sub("plus", text)
    text = _LETTER_SHARP_RE.sub("sharp", text)
    return _NON_ALNUM_RE.sub("-", text).strip("-")


def _parse_year_month(value: str) -> tuple[int, int] | None:
    year, _, month = value.partition("-")
    if not (year.isdigit() and month.isdigit()):
        return None
    return int(year), int(month)


def _experience_months(experience: Experience, today: date) -> int | None:
    start = _parse_year_month(experience.start_date)
    if start is None:
        return None
    end = None if experience.current else _parse_year_month(experience.end_date)
    end_year, end_month = end or (today.year, today.month)
    return max(0, (end_year - start[0]) * 12 + (end_month - start[1]))


def total_experience_years(document: StructuredDocument, today: date | None = None) -> int | None:
    """Years of experience summed over dated jobs, rounded half up.

    Returns:
        ``None`` when no experience has a usable start date.
    """
    today = today or date.today()
    durations = [
        months
        for experience in document.experiences
        if (months := _experience_months(experience, today)) is not None
    ]
    if not durations:
        return None
    return math.floor(sum(durations) / 12 + 0.5)


def _seniority_tags(document: StructuredDocument, preferences: TagPreferences, today: date) -> list[str]:
    years = total_experience_years(document, today)
    if years is None and preferences.years_of_experience is not None:
        years = math.floor(max(0.0, preferences.years_of_experience) + 0.5)
    if years is None:
        years = 0

    leadership = any(_LEADERSHIP_RE.search(exp.title) for exp in document.experiences)
    if years >= 12 or (leadership and years >= 8):
        tags = ["principal", "executive"] if leadership else ["principal"]
    elif years >= 8:
        tags = ["lead", "staff"]
    elif years >= 5:
        tags = ["senior"]
    elif years >= 2:
        tags = ["mid-level"]
    else:
        tags = ["junior", "entry-level"] if years < 1 else ["junior"]
    if years >= 10:
        tags.append(f"{years}+-years-experience")
    return tags[:MAX_SENIORITY_TAGS]


def _technology_tags(document: StructuredDocument) -> list[str]:
    candidates = list(dict.fromkeys(dedup_key(tool) for tool in document.tools))
    ranked = sorted(
        candidates,
        key=lambda item: TECHNOLOGY_PRIORITY.get(item, DEFAULT_TECHNOLOGY_PRIORITY),
        reverse=True,
    )
    return ranked[:MAX_TECHNOLOGY_TAGS]


def _industry_tag(industry: str) -> str | None:
    """Canonical tag for an industry; unknown industries keep their own name."""
    key = dedup_key(industry)
    if not key:
        return None
    if key in INDUSTRY_TAGS:
        return INDUSTRY_TAGS[key]
    for synonym, tag in INDUSTRY_TAGS.items():
        if contains_keyword(key, synonym):
            return tag
    return normalize_tag(key) or None


def _industry_tags(document: StructuredDocument) -> list[str]:
    counts = Counter(
        tag for experience in document.experiences if (tag := _industry_tag(experience.industry))
    )
    ranked = sorted(counts, key=lambda tag: counts[tag], reverse=True)
    return ranked[:MAX_INDUSTRY_TAGS]


def latest_experience(experiences: Iterable[Experience]) -> Experience | None:
    """The ongoing job if any, else the one that ended (or started) last."""
    best: Experience | None = None
    best_key = ""
    for experience in experiences:
        key = "9999-99" if experience.current else experience.end_date or experience.start_date
        if best is None or key > best_key:
            best, best_key = experience, key
    return best


def _role_tags_for(title: str) -> list[str]:
    tags: list[str] = []
    for pattern, tag in _ROLE_RES:
        if tag not in tags and pattern.search(title):
            tags.append(tag)
    return tags


def _role_tags(document: StructuredDocument, preferences: TagPreferences) -> list[str]:
    latest = latest_experience(document.experiences)
    tags = _role_tags_for(latest.title) if latest is not None and latest.title else []
    if not tags and preferences.target_position:
        tags = _role_tags_for(preferences.target_position)
    return tags[:MAX_ROLE_TAGS]


def _domain_tags(document: StructuredDocument) -> list[str]:
    # Plain substring hits: "sql" counts for PostgreSQL, "api" for REST APIs.
    items = [item.lower() for item in (*document.tools, *document.skills)]
    hits = {
        domain: sum(1 for item in items if any(keyword in item for keyword in keywords))
        for domain, keywords in DOMAIN_KEYWORDS.items()
    }

    tags: list[str] = []
    frontend = hits["frontend"] >= DOMAIN_HIT_THRESHOLD
    backend = hits["backend"] >= DOMAIN_HIT_THRESHOLD
    if frontend and backend:
        tags.append("full-stack")
    elif frontend:
        tags.append("frontend")
    elif backend:
        tags.append("backend")
    tags.extend(domain for domain in SECONDARY_DOMAINS if hits[domain] >= DOMAIN_HIT_THRESHOLD)
    return tags[:MAX_DOMAIN_TAGS]


def _education_tags(document: StructuredDocument, preferences: TagPreferences) -> list[str]:
    levels = [str(education.degree) for education in document.educations]
    if not levels and preferences.education_level:
        level = preferences.education_level.lower()
        levels = [level if level in DEGREE_TAGS else str(normalize_degree(level))]
    if not levels:
        return []
    best = max(levels, key=lambda level: DEGREE_PRIORITY.get(level, 0))
    tag = DEGREE_TAGS.get(best)
    return [tag][:MAX_EDUCATION_TAGS] if tag else []


def _language_tags(document: StructuredDocument) -> list[str]:
    ranked = sorted(
        document.languages,
        key=lambda language: LANGUAGE_LEVEL_PRIORITY.get(language.level, 0),
        reverse=True,
    )
    tags = [
        f"{language.name}-{language.level}"
        for language in ranked
        if language.level in TAGGED_LANGUAGE_LEVELS
    ]
    return tags[:MAX_LANGUAGE_TAGS]


def _work_style_tags(preferences: TagPreferences) -> list[str]:
    tags: list[str] = []
    work = preferences.work_preference.lower()
    # One work mode only, the first listed in WORK_PREFERENCE_TAGS.
    mode = next((tag for keyword, tag in WORK_PREFERENCE_TAGS.items() if keyword in work), None)
    if mode:
        tags.append(mode)

    management = preferences.management_experience
    if management.has_experience:
        tags.append("leadership")
        if (management.team_size or 0) >= PEOPLE_MANAGEMENT_TEAM_SIZE:
            tags.append("people-management")

    environments = [environment.lower() for environment in preferences.preferred_environment]
    for keyword, tag in ENVIRONMENT_TAGS.items():
        if tag not in tags and any(keyword in environment for environment in environments):
            tags.append(tag)
    return tags[:MAX_WORK_STYLE_TAGS]


def derive_tags(
    document: StructuredDocument,
    preferences: TagPreferences | None = None,
    *,
    today: date | None = None,
) -> list[str]:
    """Classify a document into at most ``MAX_TAGS`` profile tags.

    Args:
        document: Document to classify.
        preferences: Optional job-search preferences.
        today: Reference date for ongoing jobs; defaults to today.

    Returns:
        Unique tags matching ``TAG_PATTERN``, highest-priority category first.
    """
    preferences = preferences or TagPreferences()
    today = today or date.today()

    raw_tags = [
        *_seniority_tags(document, preferences, today),
        *_technology_tags(document),
        *_industry_tags(document),
        *_role_tags(document, preferences),
        *_domain_tags(document),
        *_education_tags(document, preferences),
        *_language_tags(document),
        *_work_style_tags(preferences),
    ]
    tags = dict.fromkeys(tag for tag in map(normalize_tag, raw_tags) if tag)
    return list(tags)[:MAX_TAGS]

"""Coercion of loosely formatted résumé field values into canonical form.

Every function here is total: malformed input maps to a documented default
instead of raising, so upstream generators can hand us anything.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from resume_engine.constants import (
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
from resume_engine.utils.matching import match_table

_YEAR_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")
_YEAR_ONLY_RE = re.compile(r"^\d{4}$")
_MONTH_YEAR_RE = re.compile(r"([^\W\d_]+)\.?\s*(\d{4})")
_YEAR_MONTH_WORD_RE = re.compile(r"(\d{4})\s*([^\W\d_]+)")
_ANY_YEAR_RE = re.compile(r"\d{4}")
_RESPONSIBILITY_SPLIT_RE = re.compile(r"[\n•●▪]")
_LEADING_BULLET_RE = re.compile(r"^[-*–]\s*")
_LIST_SPLIT_RE = re.compile(r"[,;]")

# Fragments this short are separator noise, not real bullets.
_MIN_RESPONSIBILITY_LENGTH = 10


def clean_string(raw: Any) -> str:
    """Trim and collapse internal whitespace. ``None`` becomes ``""``."""
    if raw is None:
        return ""
    text = raw if isinstance(raw, str) else str(raw)
    return " ".join(text.split())


def _month_number(word: str) -> str:
    return MONTHS.get(word.rstrip("."), "01")


def normalize_date(raw: Any) -> str:
    """Normalize a free-form date to ``YYYY-MM``.

    Patterns are tried in order and the first match wins:

    1. ``YYYY-MM`` is returned unchanged.
    2. ``YYYY`` becomes ``YYYY-01``.
    3. ``<Month> <YYYY>`` (English or French month names).
    4. ``<YYYY> <Month>``.
    5. Any other text containing a four-digit year becomes ``<year>-01``.

    An unrecognised month word next to a year resolves to ``01``.

    Args:
        raw: Date value in any format.

    Returns:
        The normalized date, or ``""`` when no year can be found.
    """
    text = clean_string(raw).lower()
    if not text:
        return ""
    if _YEAR_MONTH_RE.match(text):
        return text
    if _YEAR_ONLY_RE.match(text):
        return f"{text}-01"

    match = _MONTH_YEAR_RE.search(text)
    if match:
        return f"{match.group(2)}-{_month_number(match.group(1))}"

    match = _YEAR_MONTH_WORD_RE.search(text)
    if match:
        return f"{match.group(1)}-{_month_number(match.group(2))}"

    match = _ANY_YEAR_RE.search(text)
    if match:
        return f"{match.group(0)}-01"
    return ""


def normalize_contract_type(raw: Any) -> ContractType:
    """Map contract wording (``"CDD"``, ``"Permanent"``, ...) to a ContractType."""
    text = clean_string(raw)
    if not text:
        return DEFAULT_CONTRACT_TYPE
    return match_table(text, CONTRACT_TYPE_SYNONYMS, DEFAULT_CONTRACT_TYPE)


def normalize_degree(raw: Any) -> DegreeLevel:
    """Map a degree title (``"MSc Computer Science"``, ``"Bac+5"``) to a DegreeLevel."""
    text = clean_string(raw)
    if not text:
        return DEFAULT_DEGREE_LEVEL
    return match_table(text, DEGREE_SYNONYMS, DEFAULT_DEGREE_LEVEL)


def normalize_language_level(raw: Any) -> LanguageLevel:
    """Map a proficiency description (``"Courant"``, ``"C1"``) to a LanguageLevel."""
    text = clean_string(raw)
    if not text:
        return DEFAULT_LANGUAGE_LEVEL
    return match_table(text, LANGUAGE_LEVEL_SYNONYMS, DEFAULT_LANGUAGE_LEVEL)


def is_current_marker(raw: Any) -> bool:
    """Return True if ``raw`` says a period is still ongoing (``"Present"``, ``"Actuel"``)."""
    return clean_string(raw).lower().rstrip(".") in CURRENT_MARKERS


def normalize_responsibilities(raw: Any) -> tuple[str, ...]:
    """Coerce a bullet list or a block of text into cleaned bullet strings.

    Lists are cleaned item by item. A string is split on newlines and bullet
    glyphs; fragments longer than ten characters are kept, and if none is,
    the whole text becomes a single bullet.
    """
    if isinstance(raw, (list, tuple)):
        bullets = (_LEADING_BULLET_RE.sub("", clean_string(item)) for item in raw)
        return tuple(bullet for bullet in bullets if bullet)
    if not isinstance(raw, str):
        return ()

    fragments = [
        _LEADING_BULLET_RE.sub("", clean_string(fragment))
        for fragment in _RESPONSIBILITY_SPLIT_RE.split(raw)
    ]
    kept = tuple(f for f in fragments if len(f) > _MIN_RESPONSIBILITY_LENGTH)
    if kept:
        return kept
    whole = _LEADING_BULLET_RE.sub("", clean_string(raw))
    return (whole,) if whole else ()


def normalize_string_list(raw: Any) -> tuple[str, ...]:
    """Coerce skills-like input into cleaned, non-empty strings.

    Accepts a list of strings, a list of ``{"name": ...}`` objects, or a
    single comma or semicolon separated string.
    """
    if isinstance(raw, str):
        items: list[Any] = _LIST_SPLIT_RE.split(raw)
    elif isinstance(raw, (list, tuple)):
        items = list(raw)
    else:
        return ()

    result: list[str] = []
    for item in items:
        if isinstance(item, Mapping):
            item = item.get("name") or item.get("skill") or item.get("label")
        text = clean_string(item)
        if text:
            result.append(text)
    return tuple(result)

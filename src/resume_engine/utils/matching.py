"""Keyword matching and ordered-union helpers shared by the services."""

from __future__ import annotations

import re
from collections.abc import Callable, Hashable, Iterable
from functools import lru_cache
from typing import TypeVar

T = TypeVar("T")

# Keywords this short ("ba", "ml", "cdi") only count as whole words.
SHORT_KEYWORD_LENGTH = 3


@lru_cache(maxsize=1024)
def _keyword_pattern(keyword: str, whole_word: bool) -> re.Pattern[str]:
    escaped = re.escape(keyword)
    if whole_word:
        return re.compile(rf"(?<![^\W\d_]){escaped}(?![^\W\d_])")
    return re.compile(rf"(?<![^\W\d_]){escaped}")


def contains_keyword(text: str, keyword: str) -> bool:
    """Return True if ``keyword`` occurs in ``text`` (both compared lowercased).

    Keywords of up to three characters must not touch a letter on either
    side, so ``"ba"`` matches ``"BA in History"`` but not ``"Database"``.
    Longer keywords are plain substring matches.
    """
    if not keyword:
        return False
    haystack = text.lower()
    needle = keyword.lower()
    if len(needle) <= SHORT_KEYWORD_LENGTH:
        return _keyword_pattern(needle, True).search(haystack) is not None
    return needle in haystack


def starts_word(text: str, keyword: str) -> bool:
    """Return True if ``keyword`` occurs in ``text`` at the start of a word.

    Used for section titles: ``"skill"`` matches ``"Skills"`` but ``"work"``
    does not match ``"Networking"``.
    """
    if not keyword:
        return False
    return _keyword_pattern(keyword.lower(), False).search(text.lower()) is not None


def match_table(text: str, table: Iterable[tuple[T, Iterable[str]]], default: T) -> T:
    """Return the first canonical value whose synonyms occur in ``text``.

    Args:
        text: Raw value to classify.
        table: Ordered ``(canonical, synonyms)`` pairs.
        default: Value returned when nothing matches.
    """
    for canonical, synonyms in table:
        if any(contains_keyword(text, synonym) for synonym in synonyms):
            return canonical
    return default


def dedup_key(value: str) -> str:
    """Case- and whitespace-insensitive key used to compare list items."""
    return " ".join(value.split()).casefold()


def ordered_union(*groups: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    """Concatenate ``groups`` keeping only the first item seen for each key.

    Items whose key is empty are dropped.
    """
    seen: set[Hashable] = set()
    result: list[T] = []
    for group in groups:
        for item in group:
            item_key = key(item)
            if not item_key or item_key in seen:
                continue
            seen.add(item_key)
            result.append(item)
    return result

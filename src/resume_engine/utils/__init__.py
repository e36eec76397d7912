"""Utility functions and helpers"""

from resume_engine.utils.matching import (
    contains_keyword,
    dedup_key,
    match_table,
    ordered_union,
    starts_word,
)

__all__ = [
    "contains_keyword",
    "dedup_key",
    "match_table",
    "ordered_union",
    "starts_word",
]

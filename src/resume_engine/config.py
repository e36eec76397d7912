"""Runtime configuration read from the environment.

A ``.env`` file in the working directory is honoured through python-dotenv,
the same way the LLM provider settings are loaded.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MIN_BULLETS = 3
DEFAULT_MAX_BULLETS = 5
DEFAULT_MAX_BULLET_WORDS = 20
DEFAULT_MAX_DESCRIPTION_CHARS = 300

DEFAULT_LLM_PROVIDER = "gemini"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class MergeBudget:
    """Per-entity content budget keeping a rendered résumé to one page.

    Attributes:
        min_bullets: Bullets an experience should keep when it has them.
        max_bullets: Hard cap on bullets per experience.
        max_words: Hard cap on words per bullet.
        max_description_chars: Cap on an education description.
    """

    min_bullets: int = DEFAULT_MIN_BULLETS
    max_bullets: int = DEFAULT_MAX_BULLETS
    max_words: int = DEFAULT_MAX_BULLET_WORDS
    max_description_chars: int = DEFAULT_MAX_DESCRIPTION_CHARS

    def __post_init__(self) -> None:
        if self.min_bullets < 0:
            raise ValueError("min_bullets must be >= 0")
        if self.max_bullets < self.min_bullets:
            raise ValueError("max_bullets must be >= min_bullets")
        if self.max_words < 1:
            raise ValueError("max_words must be >= 1")
        if self.max_description_chars < 0:
            raise ValueError("max_description_chars must be >= 0")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default


def get_merge_budget() -> MergeBudget:
    """Build the merge budget from ``RESUME_*`` environment variables.

    Unparseable or inconsistent values are logged and replaced by the
    defaults.
    """
    try:
        return MergeBudget(
            min_bullets=_env_int("RESUME_MIN_BULLETS", DEFAULT_MIN_BULLETS),
            max_bullets=_env_int("RESUME_MAX_BULLETS", DEFAULT_MAX_BULLETS),
            max_words=_env_int("RESUME_MAX_BULLET_WORDS", DEFAULT_MAX_BULLET_WORDS),
            max_description_chars=_env_int(
                "RESUME_MAX_DESCRIPTION_CHARS", DEFAULT_MAX_DESCRIPTION_CHARS
            ),
        )
    except ValueError as exc:
        logger.warning("Invalid merge budget in environment (%s); using defaults", exc)
        return MergeBudget()


def get_log_level() -> str:
    """Log level name for the command line entry points."""
    level = os.getenv("RESUME_ENGINE_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if level not in logging.getLevelNamesMapping():
        return DEFAULT_LOG_LEVEL
    return level

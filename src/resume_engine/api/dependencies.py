"""Shared dependencies for API routes."""

from __future__ import annotations

import logging

from resume_engine.config import MergeBudget, get_merge_budget
from resume_engine.services.llm_providers import LLMError
from resume_engine.services.llm_service import LLMService

logger = logging.getLogger(__name__)


def get_budget() -> MergeBudget:
    """Merge budget for the current request, read from the environment."""
    return get_merge_budget()


def get_llm_service() -> LLMService | None:
    """LLM service configured in the environment, or None if it is unusable.

    A missing configuration is not an error for the API: the rewrite
    endpoint falls back to the original document.

    Returns:
        LLMService | None: Ready service, or None when not configured.
    """
    try:
        return LLMService()
    except LLMError as exc:
        logger.warning("LLM service unavailable: %s", exc)
        return None

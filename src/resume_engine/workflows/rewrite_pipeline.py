"""
Résumé rewrite workflow with AI/original fallback.

The flow for one rewrite request:
1. Ask the LLM for a version of the original tailored to a job
2. Parse the answer (JSON object or heading/bullet text) into a candidate
3. Merge the candidate back into the original so nothing is lost
4. Serialize the merged document and derive its tags

If the LLM is unavailable or fails, the budget-trimmed original is used
instead and the result is marked as coming from the original.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Literal

from resume_engine.config import MergeBudget, get_merge_budget
from resume_engine.models import StructuredDocument, TagPreferences
from resume_engine.services.candidate_payload import parse_candidate
from resume_engine.services.completeness_merge import MergeReport, merge_with_report
from resume_engine.services.document_serializer import serialize_document
from resume_engine.services.llm_providers import LLMError
from resume_engine.services.llm_service import LLMService
from resume_engine.services.resume_rewriter import generate_candidate_text
from resume_engine.services.tag_deriver import derive_tags

logger = logging.getLogger(__name__)

RewriteSource = Literal["AI", "Original"]


@dataclass(frozen=True)
class RewriteResult:
    """Outcome of a rewrite request.

    Attributes:
        document: The merged (or trimmed original) document.
        text: ``document`` rendered as canonical markdown.
        tags: Profile tags derived from ``document``.
        report: What the merge restored from the original.
        source: ``"AI"`` if an LLM candidate was merged, ``"Original"`` otherwise.
    """

    document: StructuredDocument
    text: str
    tags: list[str]
    report: MergeReport
    source: RewriteSource


def rewrite_document(
    original: StructuredDocument,
    *,
    job_title: str,
    company: str = "",
    job_description: str = "",
    keywords: Sequence[str] | None = None,
    llm_service: LLMService | None = None,
    use_ai: bool = True,
    budget: MergeBudget | None = None,
    preferences: TagPreferences | None = None,
    today: date | None = None,
) -> RewriteResult:
    """Rewrite ``original`` for a job without losing any of its content.

    Args:
        original: The user's document.
        job_title: Position the résumé is tailored to.
        company: Hiring company, if known.
        job_description: Job posting text, if available.
        keywords: Keywords the rewrite should integrate.
        llm_service: Service to use; defaults to the one configured in the
            environment.
        use_ai: Whether to call the LLM at all.
        budget: Content budget; defaults to ``get_merge_budget()``.
        preferences: Preferences used for tag derivation.
        today: Reference date for tag derivation.

    Returns:
        RewriteResult with the merged document, its text, tags and report.
    """
    budget = budget or get_merge_budget()

    candidate = StructuredDocument()
    source: RewriteSource = "Original"
    if use_ai:
        candidate = _try_ai_candidate(
            original,
            job_title=job_title,
            company=company,
            job_description=job_description,
            keywords=keywords,
            budget=budget,
            llm_service=llm_service,
        )
        if not candidate.is_empty():
            source = "AI"

    document, report = merge_with_report(original, candidate, budget)
    logger.info(
        "Rewrite for %r finished (source=%s, restored %d experience(s), %d education(s))",
        job_title,
        source,
        len(report.backfilled_experiences),
        len(report.backfilled_educations),
    )
    return RewriteResult(
        document=document,
        text=serialize_document(document),
        tags=derive_tags(document, preferences, today=today),
        report=report,
        source=source,
    )


def _try_ai_candidate(
    original: StructuredDocument,
    *,
    job_title: str,
    company: str,
    job_description: str,
    keywords: Sequence[str] | None,
    budget: MergeBudget,
    llm_service: LLMService | None,
) -> StructuredDocument:
    """Get a rewritten candidate from the LLM.

    Returns:
        The parsed candidate, or an empty document if the LLM failed or
        its answer was unusable.
    """
    try:
        candidate_text = generate_candidate_text(
            original,
            job_title=job_title,
            company=company,
            job_description=job_description,
            keywords=keywords,
            budget=budget,
            llm_service=llm_service,
        )
    except LLMError as exc:
        logger.warning("Rewrite unavailable, keeping the original document: %s", exc)
        return StructuredDocument()

    candidate = parse_candidate(candidate_text)
    if candidate.is_empty():
        logger.warning("LLM answer could not be parsed into a document; keeping the original")
    return candidate

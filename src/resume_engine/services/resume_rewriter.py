"""Résumé rewriting through the LLM provider layer."""

from __future__ import annotations

from collections.abc import Sequence

from resume_engine.config import MergeBudget
from resume_engine.models import StructuredDocument
from resume_engine.services.document_serializer import serialize_document
from resume_engine.services.llm_providers import LLMError
from resume_engine.services.llm_service import LLMService

# Keywords beyond this count only dilute the prompt.
MAX_PROMPT_KEYWORDS = 30

CANDIDATE_JSON_SHAPE = """{
  "personalInfo": {"firstName": "", "lastName": "", "email": "", "phone": "",
                   "location": "", "linkedin": "", "portfolio": "", "headline": ""},
  "summary": "",
  "experiences": [{"title": "", "company": "", "startDate": "YYYY-MM", "endDate": "YYYY-MM",
                   "current": false, "industry": "", "contractType": "full-time",
                   "location": "", "responsibilities": [""]}],
  "educations": [{"degree": "", "field": "", "institution": "", "startDate": "YYYY-MM",
                  "endDate": "YYYY-MM", "current": false, "description": ""}],
  "skills": [""],
  "tools": [""],
  "languages": [{"name": "", "level": "native|fluent|intermediate|beginner"}],
  "certifications": [{"name": "", "issuer": "", "date": ""}],
  "hobbies": [""]
}"""


def build_rewrite_prompt(
    original: StructuredDocument,
    *,
    job_title: str,
    company: str = "",
    job_description: str = "",
    keywords: Sequence[str] | None = None,
    budget: MergeBudget | None = None,
) -> tuple[str, str]:
    """Build the system rules and user content for a rewrite request.

    Returns:
        ``(system_rules, user_content)`` ready for
        ``LLMService.generate_llm_response``.
    """
    budget = budget or MergeBudget()
    target = f"{job_title} at {company}" if company else job_title
    experience_count = len(original.experiences)
    education_count = len(original.educations)

    system_rules = (
        "You are an expert resume writer tailoring a resume to a specific job. Rewrite for "
        "impact and relevance while keeping every fact truthful. Never invent jobs, dates, "
        "companies, metrics, degrees, or achievements. Preserve ALL experiences "
        f"({experience_count}) and ALL educations ({education_count}) from the original; the "
        "counts in your answer must match. Keep the professional summary to 2-3 sentences. Use "
        f"{budget.min_bullets}-{budget.max_bullets} bullets per experience, at most "
        f"{budget.max_words} words per bullet, each starting with a strong action verb. "
        "Put technical tools in 'tools' and soft skills or methodologies in 'skills'. Answer "
        "with a single JSON object of this shape and nothing else:\n"
        f"{CANDIDATE_JSON_SHAPE}"
    )

    parts = [f"Target position: {target}"]
    if keywords:
        parts.append("Keywords to integrate naturally: " + ", ".join(keywords[:MAX_PROMPT_KEYWORDS]))
    if job_description:
        parts.append(f"Job description:\n{job_description.strip()}")
    parts.append(f"Original resume:\n{serialize_document(original)}")
    return system_rules, "\n\n".join(parts)


def generate_candidate_text(
    original: StructuredDocument,
    *,
    job_title: str,
    company: str = "",
    job_description: str = "",
    keywords: Sequence[str] | None = None,
    budget: MergeBudget | None = None,
    llm_service: LLMService | None = None,
) -> str:
    """Ask the LLM for a rewritten version of ``original``.

    The answer is returned as-is (normally a JSON object); callers parse it
    with ``parse_candidate`` and merge it back into the original.

    Raises:
        LLMError: If the service cannot be created or the call fails.
    """
    if llm_service is None:
        try:
            llm_service = LLMService()
        except Exception as e:
            raise LLMError(f"Failed to initialize LLM service: {e}") from e

    system_rules, user_content = build_rewrite_prompt(
        original,
        job_title=job_title,
        company=company,
        job_description=job_description,
        keywords=keywords,
        budget=budget,
    )

    try:
        return llm_service.generate_llm_response(
            system_instructions=system_rules,
            user_content=user_content,
            temperature=0.4,
            max_tokens=None,
            seed=None,
            json_output=True,
        )
    except Exception as e:
        raise LLMError(f"LLM API call failed: {e}") from e

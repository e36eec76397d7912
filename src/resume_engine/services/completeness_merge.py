"""Completeness-preserving merge of a rewritten résumé into the original.

The rewritten candidate usually reads better but may have dropped jobs or
degrees. The merge keeps the candidate's wording and order, then appends
every original entity the candidate lost, so the result is never missing
anything the original had. Finally the bullet budget is applied to keep
the document to one page.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass
from typing import TypeVar

from resume_engine.config import MergeBudget
from resume_engine.models import (
    Education,
    EducationKey,
    Experience,
    ExperienceKey,
    PersonalInfo,
    StructuredDocument,
)
from resume_engine.utils.matching import dedup_key, ordered_union

logger = logging.getLogger(__name__)

DEFAULT_BUDGET = MergeBudget()

EntityT = TypeVar("EntityT", Experience, Education)


@dataclass(frozen=True)
class MergeReport:
    """What a merge kept, and what it had to restore from the original."""

    original_experiences: int
    candidate_experiences: int
    merged_experiences: int
    original_educations: int
    candidate_educations: int
    merged_educations: int
    backfilled_experiences: tuple[ExperienceKey, ...] = ()
    backfilled_educations: tuple[EducationKey, ...] = ()

    @property
    def complete(self) -> bool:
        """True if the candidate already contained every original entity."""
        return not self.backfilled_experiences and not self.backfilled_educations


def _union_entities(
    candidate: Iterable[EntityT], original: Iterable[EntityT]
) -> tuple[list[EntityT], list[EntityT]]:
    """Candidate entities followed by the original ones the candidate lacks.

    Keys are counted, so an original holding the same entity twice keeps
    both copies unless the candidate has both too.

    Returns:
        ``(merged, backfilled)`` where ``backfilled`` are the appended
        originals.
    """
    merged = list(candidate)
    available: Counter[Hashable] = Counter(entity.identity_key for entity in merged)
    backfilled = []
    for entity in original:
        key = entity.identity_key
        if available[key] > 0:
            available[key] -= 1
            continue
        merged.append(entity)
        backfilled.append(entity)
    return merged, backfilled


def _cap_words(text: str, max_words: int) -> str:
    return " ".join(text.split()[:max_words])


def _pad_experience(
    experience: Experience,
    budget: MergeBudget,
    reference: Mapping[ExperienceKey, Experience],
) -> Experience:
    """Top up a candidate experience to ``min_bullets`` from its original."""
    source = reference.get(experience.identity_key)
    if source is None or len(experience.responsibilities) >= budget.min_bullets:
        return experience

    bullets = list(experience.responsibilities)
    present = {dedup_key(bullet) for bullet in bullets}
    for bullet in source.responsibilities:
        if len(bullets) >= budget.min_bullets:
            break
        if dedup_key(bullet) not in present:
            bullets.append(bullet)
            present.add(dedup_key(bullet))
    return experience.model_copy(update={"responsibilities": tuple(bullets)})


def _trim_experience(experience: Experience, budget: MergeBudget) -> Experience:
    bullets = [bullet for bullet in experience.responsibilities if bullet.strip()]
    trimmed = tuple(
        capped
        for bullet in bullets[: budget.max_bullets]
        if (capped := _cap_words(bullet, budget.max_words))
    )
    if trimmed == experience.responsibilities:
        return experience
    return experience.model_copy(update={"responsibilities": trimmed})


def _trim_education(education: Education, budget: MergeBudget) -> Education:
    if len(education.description) <= budget.max_description_chars:
        return education
    description = education.description[: budget.max_description_chars].rstrip()
    return education.model_copy(update={"description": description})


def trim_bullets(document: StructuredDocument, budget: MergeBudget | None = None) -> StructuredDocument:
    """Apply the content budget to a document on its own.

    Each experience keeps at most ``max_bullets`` bullets of at most
    ``max_words`` words; education descriptions are cut to
    ``max_description_chars``.
    """
    budget = budget or DEFAULT_BUDGET
    return document.model_copy(
        update={
            "experiences": tuple(
                _trim_experience(experience, budget) for experience in document.experiences
            ),
            "educations": tuple(
                _trim_education(education, budget) for education in document.educations
            ),
        }
    )


def _merge_personal_info(candidate: PersonalInfo, original: PersonalInfo) -> PersonalInfo:
    values = {
        name: getattr(candidate, name) or getattr(original, name)
        for name in PersonalInfo.model_fields
    }
    return PersonalInfo(**values)


def merge_with_report(
    original: StructuredDocument,
    candidate: StructuredDocument,
    budget: MergeBudget | None = None,
) -> tuple[StructuredDocument, MergeReport]:
    """Merge ``candidate`` into ``original`` and report what was restored.

    Args:
        original: The document as the user wrote it.
        candidate: A rewritten version, possibly incomplete.
        budget: Content budget; defaults to ``MergeBudget()``.

    Returns:
        The merged document and a MergeReport describing the merge.
    """
    budget = budget or DEFAULT_BUDGET

    reference: dict[ExperienceKey, Experience] = {}
    for experience in original.experiences:
        reference.setdefault(experience.identity_key, experience)
    padded = [_pad_experience(experience, budget, reference) for experience in candidate.experiences]

    experiences, restored_experiences = _union_entities(padded, original.experiences)
    _, restored_educations = _union_entities(candidate.educations, original.educations)
    # Candidate educations are kept as written; only restored ones are cut.
    educations = [
        *candidate.educations,
        *(_trim_education(education, budget) for education in restored_educations),
    ]

    merged = StructuredDocument(
        personal_info=_merge_personal_info(candidate.personal_info, original.personal_info),
        summary=candidate.summary or original.summary,
        experiences=tuple(_trim_experience(experience, budget) for experience in experiences),
        educations=tuple(educations),
        skills=tuple(ordered_union(candidate.skills, original.skills, key=dedup_key)),
        tools=tuple(ordered_union(candidate.tools, original.tools, key=dedup_key)),
        languages=tuple(
            ordered_union(
                candidate.languages, original.languages, key=lambda language: dedup_key(language.name)
            )
        ),
        certifications=tuple(
            ordered_union(
                candidate.certifications,
                original.certifications,
                key=lambda certification: dedup_key(certification.name),
            )
        ),
        hobbies=tuple(ordered_union(candidate.hobbies, original.hobbies, key=dedup_key)),
    )

    report = MergeReport(
        original_experiences=len(original.experiences),
        candidate_experiences=len(candidate.experiences),
        merged_experiences=len(merged.experiences),
        original_educations=len(original.educations),
        candidate_educations=len(candidate.educations),
        merged_educations=len(merged.educations),
        backfilled_experiences=tuple(exp.identity_key for exp in restored_experiences),
        backfilled_educations=tuple(edu.identity_key for edu in restored_educations),
    )
    if not report.complete:
        logger.warning(
            "Candidate dropped %d experience(s) and %d education(s); restored from original",
            len(report.backfilled_experiences),
            len(report.backfilled_educations),
        )
    return merged, report


def merge_documents(
    original: StructuredDocument,
    candidate: StructuredDocument,
    budget: MergeBudget | None = None,
) -> StructuredDocument:
    """Merge ``candidate`` into ``original`` without losing any original entity.

    Experiences and educations keep the candidate's order, followed by the
    original entities the candidate lacks. List fields are an ordered union
    (candidate first). Scalars come from the candidate when it has them.
    Every experience then gets the bullet budget; education descriptions are
    cut only on the entries restored from the original.
    """
    merged, _ = merge_with_report(original, candidate, budget)
    return merged

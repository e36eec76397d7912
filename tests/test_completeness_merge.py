from __future__ import annotations

import logging

import pytest

from resume_engine.config import MergeBudget
from resume_engine.models import Education, Experience, PersonalInfo, StructuredDocument
from resume_engine.services.completeness_merge import (
    merge_documents,
    merge_with_report,
    trim_bullets,
)


class TestMergeCompleteness:
    """The merge never loses an original experience or education."""

    def test_dropped_experience_is_restored(
        self, original_document: StructuredDocument, candidate_document: StructuredDocument
    ) -> None:
        merged = merge_documents(original_document, candidate_document)

        assert [exp.company for exp in merged.experiences] == ["Acme Corp", "Globex", "Initech"]
        for experience in merged.experiences:
            assert 3 <= len(experience.responsibilities) <= 5

    def test_every_original_key_is_present(
        self, original_document: StructuredDocument, candidate_document: StructuredDocument
    ) -> None:
        merged = merge_documents(original_document, candidate_document)

        merged_experiences = {exp.identity_key for exp in merged.experiences}
        merged_educations = {edu.identity_key for edu in merged.educations}
        assert {exp.identity_key for exp in original_document.experiences} <= merged_experiences
        assert {edu.identity_key for edu in original_document.educations} <= merged_educations

    def test_candidate_wording_wins(
        self, original_document: StructuredDocument, candidate_document: StructuredDocument
    ) -> None:
        merged = merge_documents(original_document, candidate_document)

        acme = merged.experiences[0]
        assert acme.responsibilities[:2] == (
            "Architected streaming pipelines handling 2M daily events",
            "Mentored four engineers",
        )
        # Topped up from the original job to reach the minimum.
        assert acme.responsibilities[2] == original_document.experiences[0].responsibilities[0]
        assert merged.educations[0].description == "Thesis."

    def test_empty_candidate_gives_trimmed_original(self, original_document: StructuredDocument) -> None:
        merged = merge_documents(original_document, StructuredDocument())

        assert merged == trim_bullets(original_document)

    def test_duplicate_original_entities_are_counted(self) -> None:
        job = Experience(title="Waiter", company="Cafe", responsibilities=["Served tables"])
        original = StructuredDocument(experiences=[job, job])
        candidate = StructuredDocument(experiences=[job])

        merged = merge_documents(original, candidate)

        assert len(merged.experiences) == 2

    def test_candidate_only_entities_are_kept(self, original_document: StructuredDocument) -> None:
        extra = Experience(title="Volunteer", company="Red Cross", responsibilities=["Helped"])
        candidate = StructuredDocument(experiences=[extra])

        merged = merge_documents(original_document, candidate)

        assert merged.experiences[0] == extra
        assert len(merged.experiences) == 4


class TestMergeFields:
    """Scalars and list fields follow candidate-first rules."""

    def test_scalars_fall_back_to_original(
        self, original_document: StructuredDocument, candidate_document: StructuredDocument
    ) -> None:
        merged = merge_documents(original_document, candidate_document)

        assert merged.personal_info.headline == "Lead Data Engineer"
        assert merged.personal_info.first_name == "Jane"
        assert merged.personal_info.email == "jane@example.com"
        assert merged.summary == original_document.summary

    def test_lists_are_ordered_unions(
        self, original_document: StructuredDocument, candidate_document: StructuredDocument
    ) -> None:
        merged = merge_documents(original_document, candidate_document)

        assert merged.skills == ("Stakeholder management", "leadership", "Communication")
        assert merged.tools == ("Airflow", "python", "SQL", "Spark")
        assert [lang.name for lang in merged.languages] == ["French", "English"]
        assert merged.hobbies == ("Climbing",)

    def test_personal_info_union(self) -> None:
        original = StructuredDocument(personal_info=PersonalInfo(first_name="Jane", phone="123"))
        candidate = StructuredDocument(personal_info=PersonalInfo(first_name="J.", linkedin="in/jane"))

        info = merge_documents(original, candidate).personal_info

        assert (info.first_name, info.phone, info.linkedin) == ("J.", "123", "in/jane")


class TestBudget:
    """Bullet, word and description caps."""

    def test_bullets_are_capped(self, original_document: StructuredDocument) -> None:
        trimmed = trim_bullets(original_document)

        assert len(trimmed.experiences[0].responsibilities) == 5
        assert trimmed.experiences[1] == original_document.experiences[1]

    def test_words_are_capped(self) -> None:
        long_bullet = " ".join(f"word{index}" for index in range(30))
        original = StructuredDocument(
            experiences=[Experience(title="Writer", responsibilities=[long_bullet])]
        )

        (experience,) = merge_documents(original, StructuredDocument()).experiences

        assert len(experience.responsibilities[0].split()) == 20
        assert experience.responsibilities[0].startswith("word0 word1")

    def test_description_is_truncated(self, original_document: StructuredDocument) -> None:
        trimmed = trim_bullets(original_document)

        description = trimmed.educations[0].description
        assert len(description) <= 300
        assert original_document.educations[0].description.startswith(description)

    def test_candidate_description_is_kept(self) -> None:
        description = "word " * 100
        candidate = StructuredDocument(
            educations=[Education(degree="master", institution="MIT", description=description)]
        )

        (education,) = merge_documents(StructuredDocument(), candidate).educations

        assert education.description == candidate.educations[0].description
        assert len(education.description) > 300

    def test_restored_description_is_truncated(
        self, original_document: StructuredDocument
    ) -> None:
        merged = merge_documents(original_document, StructuredDocument())

        assert len(merged.educations[0].description) <= 300

    def test_custom_budget(self, original_document: StructuredDocument) -> None:
        budget = MergeBudget(min_bullets=1, max_bullets=2, max_words=3, max_description_chars=10)

        trimmed = trim_bullets(original_document, budget)

        for experience in trimmed.experiences:
            assert len(experience.responsibilities) <= 2
            assert all(len(bullet.split()) <= 3 for bullet in experience.responsibilities)
        assert all(len(edu.description) <= 10 for edu in trimmed.educations)

    def test_trim_does_not_invent_bullets(self) -> None:
        document = StructuredDocument(experiences=[Experience(title="Solo", responsibilities=["One"])])

        assert trim_bullets(document) == document

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_bullets": 6, "max_bullets": 5},
            {"min_bullets": -1},
            {"max_words": 0},
            {"max_description_chars": -5},
        ],
    )
    def test_inconsistent_budget_is_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            MergeBudget(**kwargs)


class TestMergeReport:
    """The report says what had to be restored."""

    def test_report_counts(
        self, original_document: StructuredDocument, candidate_document: StructuredDocument
    ) -> None:
        _, report = merge_with_report(original_document, candidate_document)

        assert (report.original_experiences, report.candidate_experiences, report.merged_experiences) == (3, 2, 3)
        assert (report.original_educations, report.candidate_educations, report.merged_educations) == (2, 1, 2)
        assert report.backfilled_experiences == (("intern", "initech", "2016-06", "2016-09"),)
        assert report.backfilled_educations == (("bachelor", "sorbonne"),)
        assert report.complete is False

    def test_complete_candidate(self, original_document: StructuredDocument) -> None:
        _, report = merge_with_report(original_document, original_document)

        assert report.complete is True

    def test_restoration_is_logged(
        self,
        original_document: StructuredDocument,
        candidate_document: StructuredDocument,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="resume_engine.services.completeness_merge"):
            merge_with_report(original_document, candidate_document)

        assert "restored from original" in caplog.text

    def test_education_only_loss(self) -> None:
        original = StructuredDocument(
            educations=[Education(degree="phd", institution="MIT"), Education(degree="bachelor")]
        )

        merged, report = merge_with_report(original, StructuredDocument(educations=original.educations[:1]))

        assert len(merged.educations) == 2
        assert report.backfilled_educations == (("bachelor", ""),)

from __future__ import annotations

import pytest

from resume_engine.constants import ContractType, DegreeLevel, LanguageLevel, SectionKind
from resume_engine.models import StructuredDocument
from resume_engine.services.document_extractor import extract_document, section_kind


class TestSectionKind:
    """Tests for heading classification."""

    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("Experience", SectionKind.EXPERIENCE),
            ("Work History", SectionKind.EXPERIENCE),
            ("EXPÉRIENCE PROFESSIONNELLE", SectionKind.EXPERIENCE),
            ("Formation", SectionKind.EDUCATION),
            ("Technical Skills", SectionKind.TOOLS),
            ("**Skills:**", SectionKind.SKILLS),
            ("Compétences", SectionKind.SKILLS),
            ("Langues", SectionKind.LANGUAGES),
            ("Certifications", SectionKind.CERTIFICATES),
            ("Centres d'intérêt", SectionKind.HOBBIES),
            ("Professional Summary", SectionKind.SUMMARY),
            ("Contact", SectionKind.PERSONAL),
        ],
    )
    def test_known_titles(self, title: str, expected: SectionKind) -> None:
        assert section_kind(title) is expected

    @pytest.mark.parametrize("title", ["Networking Events", "Jane Doe", ""])
    def test_unknown_titles(self, title: str) -> None:
        assert section_kind(title) is None


class TestMarkdownExtraction:
    """Tests for the canonical heading/bullet layout."""

    @pytest.fixture
    def document(self, sample_text: str) -> StructuredDocument:
        return extract_document(sample_text)

    def test_personal_info(self, document: StructuredDocument) -> None:
        info = document.personal_info
        assert info.first_name == "Jane"
        assert info.last_name == "Doe"
        assert info.email == "jane@example.com"
        assert info.phone == "+33 6 12 34 56 78"
        assert info.location == "Paris, France"
        assert info.headline == "Senior Data Engineer"

    def test_summary(self, document: StructuredDocument) -> None:
        assert document.summary.startswith("Data engineer with eight years")

    def test_experiences(self, document: StructuredDocument) -> None:
        acme, globex = document.experiences

        assert acme.title == "Senior Data Engineer"
        assert acme.company == "Acme Corp"
        assert acme.start_date == "2020-01"
        assert acme.current is True
        assert acme.end_date == ""
        assert acme.location == "Paris"
        assert acme.industry == "Fintech"
        assert len(acme.responsibilities) == 4

        assert globex.title == "Data Analyst"
        assert globex.company == "Globex"
        assert (globex.start_date, globex.end_date) == ("2017-01", "2019-01")
        assert globex.responsibilities == (
            "Designed dashboards for sales teams",
            "Automated weekly reporting",
        )

    def test_education(self, document: StructuredDocument) -> None:
        (education,) = document.educations

        assert education.degree is DegreeLevel.MASTER
        assert education.field == "Computer Science"
        assert education.institution == "Université Paris-Saclay"
        assert (education.start_date, education.end_date) == ("2015-01", "2017-01")

    def test_lists(self, document: StructuredDocument) -> None:
        assert document.tools == ("Python", "SQL", "Spark", "Docker")
        assert document.skills == ("Leadership", "Communication")
        assert document.hobbies == ("Climbing", "Chess")

    def test_languages(self, document: StructuredDocument) -> None:
        assert [(lang.name, lang.level) for lang in document.languages] == [
            ("French", LanguageLevel.NATIVE),
            ("English", LanguageLevel.FLUENT),
        ]

    def test_certifications(self, document: StructuredDocument) -> None:
        (certification,) = document.certifications

        assert certification.name == "AWS Solutions Architect"
        assert certification.issuer == "Amazon"
        assert certification.date == "2021"


class TestLooseLayouts:
    """Tests for French, bare-heading and plain-text résumés."""

    def test_french_sections(self, french_text: str) -> None:
        document = extract_document(french_text)

        (experience,) = document.experiences
        assert experience.title == "Ingénieure logiciel"
        assert experience.company == "Thales"
        assert experience.start_date == "2019-03"
        assert experience.current is True

        (education,) = document.educations
        assert education.degree is DegreeLevel.MASTER
        assert education.field == "Informatique"
        assert education.institution == "Sorbonne Université"

        assert document.languages[0].name == "Anglais"
        assert document.languages[0].level is LanguageLevel.FLUENT
        assert document.skills == ("Gestion de projet",)

    def test_bare_headings_and_plain_job_blocks(self, plain_text: str) -> None:
        document = extract_document(plain_text)

        assert document.personal_info.first_name == "JOHN"
        assert document.personal_info.email == "john@smith.io"
        assert document.personal_info.phone == "+1 555 123 4567"

        initech, initrode = document.experiences
        assert (initech.title, initech.company) == ("Software Engineer", "Initech")
        assert (initech.start_date, initech.end_date) == ("2019-01", "2021-01")
        assert initech.responsibilities == ("Maintained TPS report generator",)
        assert (initrode.title, initrode.company) == ("Junior Developer", "Initrode")
        assert initrode.start_date == "2018-01"
        assert initrode.responsibilities == ("Fixed bugs",)

        (education,) = document.educations
        assert education.degree is DegreeLevel.BACHELOR
        assert education.field == "Physics"
        assert education.institution == "MIT"

    def test_dates_inside_heading(self) -> None:
        document = extract_document("# Experience\n## Engineer - Acme (2019 - 2021)\n- Shipped it")

        (experience,) = document.experiences
        assert (experience.title, experience.company) == ("Engineer", "Acme")
        assert (experience.start_date, experience.end_date) == ("2019-01", "2021-01")

    def test_location_next_to_dates(self) -> None:
        text = "# Experience\n## Engineer - Acme\nParis, France | Jan 2020 - Dec 2021\n- Shipped it"

        (experience,) = extract_document(text).experiences

        assert experience.location == "Paris, France"
        assert (experience.start_date, experience.end_date) == ("2020-01", "2021-12")

    def test_contract_meta_line(self) -> None:
        text = "# Experience\n## Consultant - Big4\n2018 - 2019\nContract: Freelance | Location: Lyon"

        (experience,) = extract_document(text).experiences

        assert experience.contract_type is ContractType.FREELANCE
        assert experience.location == "Lyon"

    def test_untitled_entity_keeps_dates_and_bullets(self) -> None:
        (experience,) = extract_document("# Experience\n##\n2020 - 2021\n- Did things").experiences

        assert (experience.title, experience.company) == ("", "")
        assert experience.start_date == "2020-01"
        assert experience.responsibilities == ("Did things",)

    def test_skill_labels_and_levels_are_stripped(self) -> None:
        text = "# Skills\n- Languages: Python (Advanced), Go\n- Leadership - Expert"

        assert extract_document(text).skills == ("Python", "Go", "Leadership")

    def test_skills_listed_as_tools_are_dropped(self) -> None:
        document = extract_document("# Tools\n- Python\n# Skills\n- python\n- Teamwork")

        assert document.tools == ("Python",)
        assert document.skills == ("Teamwork",)

    def test_unmodelled_section_is_skipped(self) -> None:
        document = extract_document("# Jane Doe\n# Projects\n- Side project\n# Skills\n- Python")

        assert document.skills == ("Python",)
        assert document.experiences == ()
        assert document.personal_info.headline == ""


class TestDegenerateInput:
    """Extraction never raises and degrades to an empty document."""

    @pytest.mark.parametrize("text", ["", None, "   \n\n  "])
    def test_empty(self, text: str | None) -> None:
        assert extract_document(text) == StructuredDocument()

    def test_bullets_before_any_heading_are_dropped(self) -> None:
        document = extract_document("- orphan bullet\n# Skills\n- Python")

        assert document.skills == ("Python",)
        assert document.personal_info.first_name == ""

    def test_garbage_does_not_raise(self) -> None:
        document = extract_document("#####\n-\n|||\n## - \n: : :\n1. \n(((")

        assert isinstance(document, StructuredDocument)

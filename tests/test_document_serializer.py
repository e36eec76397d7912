from __future__ import annotations

import pytest

from resume_engine.models import Education, Experience, StructuredDocument
from resume_engine.services.document_extractor import extract_document
from resume_engine.services.document_serializer import format_date_line, serialize_document


class TestFormatDateLine:
    """Tests for period formatting."""

    @pytest.mark.parametrize(
        ("start", "end", "current", "expected"),
        [
            ("2020-01", "2021-06", False, "2020-01 - 2021-06"),
            ("2020-01", "", True, "2020-01 - Present"),
            ("2020-01", "", False, "2020-01"),
            ("", "", True, "Present"),
            ("", "2021-06", False, "Until 2021-06"),
            ("", "", False, ""),
        ],
    )
    def test_formats(self, start: str, end: str, current: bool, expected: str) -> None:
        assert format_date_line(start, end, current) == expected


class TestSerializeDocument:
    """Tests for markdown rendering."""

    def test_sections_and_headings(self, sample_text: str) -> None:
        text = serialize_document(extract_document(sample_text))

        assert text.startswith("# Jane Doe\n")
        assert "Current Title: Senior Data Engineer" in text
        assert "## Senior Data Engineer - Acme Corp\n2020-01 - Present\n" in text
        assert "Location: Paris | Industry: Fintech" in text
        assert "## Master in Computer Science - Université Paris-Saclay" in text
        assert "- French - Native" in text
        assert "- AWS Solutions Architect - Amazon (2021)" in text
        assert text.endswith("- Chess\n")

    def test_empty_document(self) -> None:
        assert serialize_document(StructuredDocument()) == ""

    def test_default_contract_is_omitted(self) -> None:
        document = StructuredDocument(
            experiences=[
                Experience(title="Dev", company="A"),
                Experience(title="Intern", company="B", contract_type="internship"),
            ]
        )

        text = serialize_document(document)

        assert "Contract: full-time" not in text
        assert "Contract: internship" in text

    def test_company_without_title(self) -> None:
        document = StructuredDocument(experiences=[Experience(company="Acme")])

        assert "## - Acme" in serialize_document(document)

    def test_education_description_is_a_bullet(self) -> None:
        document = StructuredDocument(
            educations=[Education(degree="phd", institution="MIT", description="Thesis on graphs")]
        )

        assert "## PhD - MIT\n- Thesis on graphs" in serialize_document(document)


class TestRoundTrip:
    """Serializing then extracting reproduces extracted documents."""

    @pytest.mark.parametrize("fixture_name", ["sample_text", "french_text", "plain_text"])
    def test_extract_serialize_extract(self, fixture_name: str, request: pytest.FixtureRequest) -> None:
        document = extract_document(request.getfixturevalue(fixture_name))

        assert extract_document(serialize_document(document)) == document

    def test_structured_entities_survive(self) -> None:
        document = StructuredDocument(
            experiences=[
                Experience(
                    title="Consultant",
                    company="Big4",
                    start_date="2018-04",
                    end_date="2019-09",
                    contract_type="freelance",
                    location="Lyon",
                    responsibilities=["Audited supply chains", "Wrote reports"],
                ),
                Experience(company="Acme", responsibilities=["Shipped features"]),
            ],
            educations=[
                Education(degree="bachelor", field="Physics", institution="MIT", end_date="2015-06"),
                Education(degree="other", description="Self-taught"),
            ],
        )

        assert extract_document(serialize_document(document)) == document

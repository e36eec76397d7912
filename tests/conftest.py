from __future__ import annotations

from collections.abc import Iterator

import pytest

from resume_engine.models import (
    Certification,
    Education,
    Experience,
    Language,
    PersonalInfo,
    StructuredDocument,
)

SAMPLE_RESUME = """# Jane Doe
Email: jane@example.com | Phone: +33 6 12 34 56 78 | Location: Paris, France
Senior Data Engineer

# Professional Summary
Data engineer with eight years of experience building reliable pipelines.

# Experience
## Senior Data Engineer - Acme Corp
Jan 2020 - Present
Location: Paris | Industry: Fintech
- Built streaming pipelines processing 2M events per day
- Led a team of four engineers
- Cut warehouse costs by 30 percent
- Introduced data quality checks

## Data Analyst at Globex
2017 - 2019
- Designed dashboards for sales teams
- Automated weekly reporting

# Education
## Master in Computer Science - Université Paris-Saclay
2015 - 2017

# Technical Skills
- Python, SQL, Spark
- Docker

# Skills
- Leadership
- Communication

# Languages
- French - Native
- English (Fluent)

# Certifications
- AWS Solutions Architect - Amazon (2021)

# Hobbies
- Climbing, Chess
"""

FRENCH_RESUME = """# Marie Curie
# EXPÉRIENCE PROFESSIONNELLE
## Ingénieure logiciel chez Thales
Mars 2019 - Actuel
- Développement d'un système de contrôle embarqué
# FORMATION
## Master en Informatique - Sorbonne Université
2016 - 2018
# LANGUES
- Anglais : Courant
# COMPÉTENCES
- Gestion de projet
"""

PLAIN_TEXT_RESUME = """JOHN SMITH
john@smith.io | +1 555 123 4567
EXPERIENCE
Software Engineer at Initech
2019 - 2021
- Maintained TPS report generator
Junior Developer - Initrode
2018
- Fixed bugs
EDUCATION
Bachelor of Science, Physics - MIT
"""


def bullets(prefix: str, count: int) -> tuple[str, ...]:
    """Distinct, realistic-length bullets for budget tests."""
    return tuple(f"{prefix} achievement number {index} delivered on time" for index in range(1, count + 1))


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def french_text() -> str:
    return FRENCH_RESUME


@pytest.fixture
def plain_text() -> str:
    return PLAIN_TEXT_RESUME


@pytest.fixture
def original_document() -> StructuredDocument:
    """Three experiences, two educations and populated list fields."""
    return StructuredDocument(
        personal_info=PersonalInfo(
            first_name="Jane",
            last_name="Doe",
            email="jane@example.com",
            headline="Data Engineer",
        ),
        summary="Data engineer with eight years of experience.",
        experiences=(
            Experience(
                title="Senior Data Engineer",
                company="Acme Corp",
                start_date="2020-01",
                current=True,
                industry="Fintech",
                responsibilities=bullets("Acme", 6),
            ),
            Experience(
                title="Data Analyst",
                company="Globex",
                start_date="2017-01",
                end_date="2019-12",
                responsibilities=bullets("Globex", 4),
            ),
            Experience(
                title="Intern",
                company="Initech",
                start_date="2016-06",
                end_date="2016-09",
                contract_type="internship",
                responsibilities=bullets("Initech", 4),
            ),
        ),
        educations=(
            Education(
                degree="master",
                field="Computer Science",
                institution="Université Paris-Saclay",
                start_date="2015-09",
                end_date="2017-06",
                description="Thesis on distributed stream processing. " * 12,
            ),
            Education(degree="bachelor", field="Mathematics", institution="Sorbonne"),
        ),
        skills=("Leadership", "Communication"),
        tools=("Python", "SQL", "Spark"),
        languages=(Language(name="French", level="native"), Language(name="English", level="fluent")),
        certifications=(Certification(name="AWS Solutions Architect", issuer="Amazon", date="2021"),),
        hobbies=("Climbing",),
    )


@pytest.fixture
def candidate_document(original_document: StructuredDocument) -> StructuredDocument:
    """A rewrite that dropped the internship and one education."""
    acme, globex, _ = original_document.experiences
    return StructuredDocument(
        personal_info=PersonalInfo(headline="Lead Data Engineer"),
        experiences=(
            acme.model_copy(
                update={
                    "responsibilities": (
                        "Architected streaming pipelines handling 2M daily events",
                        "Mentored four engineers",
                    )
                }
            ),
            globex.model_copy(update={"responsibilities": bullets("Rewritten Globex", 7)}),
        ),
        educations=(original_document.educations[0].model_copy(update={"description": "Thesis."}),),
        skills=("Stakeholder management", "leadership"),
        tools=("Airflow", "python"),
    )


@pytest.fixture
def clean_llm_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove LLM settings so tests never reach a real provider."""
    for name in ("GEMINI_API_KEY", "LLM_MODEL", "LLM_PROVIDER"):
        monkeypatch.delenv(name, raising=False)
    yield

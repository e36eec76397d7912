"""Section vocabulary recognised by the document extractor."""

from __future__ import annotations

from enum import StrEnum


class SectionKind(StrEnum):
    """Parser state: which part of the document the current line belongs to.

    ``OTHER`` is a heading we do not model (projects, references); its lines
    are skipped.
    """

    NONE = "none"
    OTHER = "other"
    PERSONAL = "personal"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    TOOLS = "tools"
    LANGUAGES = "languages"
    CERTIFICATES = "certificates"
    HOBBIES = "hobbies"


# Checked in order: "technical skills" must resolve to tools before the
# generic "skill" keyword claims it.
SECTION_KEYWORDS: tuple[tuple[SectionKind, tuple[str, ...]], ...] = (
    (
        SectionKind.EXPERIENCE,
        (
            "experience",
            "expérience",
            "experiences",
            "expériences",
            "work history",
            "employment",
            "parcours professionnel",
            "work",
        ),
    ),
    (SectionKind.EDUCATION, ("education", "formation", "éducation", "diplôme", "diplomes", "études")),
    (
        SectionKind.TOOLS,
        (
            "technical",
            "technique",
            "techniques",
            "tools",
            "outils",
            "technologies",
            "tech stack",
            "programming",
        ),
    ),
    (SectionKind.SKILLS, ("skill", "compétence", "competence", "soft skills", "savoir-être")),
    (SectionKind.LANGUAGES, ("language", "langue")),
    (SectionKind.CERTIFICATES, ("certificat", "certificate", "certification")),
    (SectionKind.HOBBIES, ("hobby", "hobbies", "interest", "loisir", "centres d'intérêt")),
    (
        SectionKind.SUMMARY,
        ("summary", "résumé", "resume", "profile", "profil", "about", "objective", "professional"),
    ),
    (SectionKind.PERSONAL, ("personal", "contact", "header", "coordonnées", "informations")),
)

# Plain lines exactly equal to one of these (case-insensitive, trailing colon
# ignored) are section headings even without markdown or capitals.
KNOWN_SECTION_TITLES = frozenset(
    {
        "experience",
        "experiences",
        "work experience",
        "professional experience",
        "employment history",
        "work history",
        "expérience",
        "expériences",
        "expérience professionnelle",
        "expériences professionnelles",
        "parcours professionnel",
        "education",
        "formation",
        "formations",
        "skills",
        "soft skills",
        "technical skills",
        "compétences",
        "compétences techniques",
        "tools",
        "technologies",
        "outils",
        "languages",
        "langues",
        "certifications",
        "certificates",
        "certificats",
        "hobbies",
        "interests",
        "loisirs",
        "centres d'intérêt",
        "summary",
        "professional summary",
        "profile",
        "profil",
        "about me",
        "objective",
        "résumé",
        "contact",
        "personal information",
        "informations personnelles",
    }
)

# Headings longer than this are content, not section titles.
MAX_SECTION_TITLE_WORDS = 6

# Sections whose lines are flat string items rather than entities.
LIST_SECTIONS = frozenset(
    {
        SectionKind.SKILLS,
        SectionKind.TOOLS,
        SectionKind.LANGUAGES,
        SectionKind.CERTIFICATES,
        SectionKind.HOBBIES,
    }
)

ENTITY_SECTIONS = frozenset({SectionKind.EXPERIENCE, SectionKind.EDUCATION})

# Labels accepted in the header contact lines, mapped to PersonalInfo fields.
HEADER_FIELD_LABELS: dict[str, str] = {
    "email": "email",
    "e-mail": "email",
    "mail": "email",
    "courriel": "email",
    "phone": "phone",
    "telephone": "phone",
    "téléphone": "phone",
    "tel": "phone",
    "tél": "phone",
    "mobile": "phone",
    "location": "location",
    "address": "location",
    "adresse": "location",
    "city": "location",
    "ville": "location",
    "localisation": "location",
    "linkedin": "linkedin",
    "portfolio": "portfolio",
    "website": "portfolio",
    "site": "portfolio",
    "github": "portfolio",
    "current title": "headline",
    "title": "headline",
    "headline": "headline",
    "titre": "headline",
    "poste": "headline",
}

# Labelled metadata lines inside an experience block.
EXPERIENCE_META_LABELS: dict[str, str] = {
    "location": "location",
    "lieu": "location",
    "localisation": "location",
    "industry": "industry",
    "industrie": "industry",
    "secteur": "industry",
    "sector": "industry",
    "contract": "contract_type",
    "contrat": "contract_type",
    "type": "contract_type",
    "contract type": "contract_type",
}

# Trailing self-assessed levels stripped from skill items ("Python - Expert").
SKILL_LEVEL_WORDS = (
    "beginner",
    "débutant",
    "intermediate",
    "intermédiaire",
    "advanced",
    "avancé",
    "expert",
    "proficient",
    "confirmé",
)

# Separators between a title and its organisation in entity headings.
EXPERIENCE_CONNECTORS = (" at ", " chez ", " @ ")
EDUCATION_CONNECTORS = (" at ", " à ", " chez ", " @ ")

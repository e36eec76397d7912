"""Rendering a StructuredDocument as canonical markdown text.

The output is exactly what ``extract_document`` reads back, so
``extract_document(serialize_document(doc))`` reproduces any document that
came out of the extractor.
"""

from __future__ import annotations

from resume_engine.constants import DEFAULT_CONTRACT_TYPE, DegreeLevel
from resume_engine.models import Education, Experience, StructuredDocument

DEGREE_LABELS: dict[DegreeLevel, str] = {
    DegreeLevel.HIGH_SCHOOL: "High School",
    DegreeLevel.ASSOCIATE: "Associate",
    DegreeLevel.BACHELOR: "Bachelor",
    DegreeLevel.MASTER: "Master",
    DegreeLevel.PHD: "PhD",
    DegreeLevel.BOOTCAMP: "Bootcamp",
    DegreeLevel.OTHER: "Other",
}

CONTACT_LABELS = (
    ("email", "Email"),
    ("phone", "Phone"),
    ("location", "Location"),
    ("linkedin", "LinkedIn"),
    ("portfolio", "Portfolio"),
    ("headline", "Current Title"),
)


def format_date_line(start: str, end: str, current: bool) -> str:
    """Format a period as ``start - end``, using ``Present`` for ongoing ones.

    Args:
        start: Start date (``YYYY-MM``) or ``""``.
        end: End date (``YYYY-MM``) or ``""``.
        current: Whether the period is ongoing.

    Returns:
        The date line, or ``""`` when there is nothing to show.
    """
    end_text = "Present" if current else end
    if start and end_text:
        return f"{start} - {end_text}"
    if start:
        return start
    if current:
        return "Present"
    if end:
        return f"Until {end}"
    return ""


def _experience_block(experience: Experience) -> list[str]:
    heading = experience.title
    if experience.company:
        heading = f"{heading} - {experience.company}" if heading else f"- {experience.company}"
    lines = [f"## {heading}".rstrip()]

    date_line = format_date_line(experience.start_date, experience.end_date, experience.current)
    if date_line:
        lines.append(date_line)

    meta = []
    if experience.location:
        meta.append(f"Location: {experience.location}")
    if experience.industry:
        meta.append(f"Industry: {experience.industry}")
    if experience.contract_type != DEFAULT_CONTRACT_TYPE:
        meta.append(f"Contract: {experience.contract_type}")
    if meta:
        lines.append(" | ".join(meta))

    lines.extend(f"- {bullet}" for bullet in experience.responsibilities)
    return lines


def _education_block(education: Education) -> list[str]:
    heading = DEGREE_LABELS[education.degree]
    if education.field:
        heading = f"{heading} in {education.field}"
    if education.institution:
        heading = f"{heading} - {education.institution}"
    lines = [f"## {heading}"]

    date_line = format_date_line(education.start_date, education.end_date, education.current)
    if date_line:
        lines.append(date_line)
    if education.description:
        lines.append(f"- {education.description}")
    return lines


def _list_block(title: str, items: list[str]) -> list[str]:
    return [f"# {title}", *(f"- {item}" for item in items)]


def serialize_document(document: StructuredDocument) -> str:
    """Render ``document`` as heading/bullet markdown.

    Empty sections are omitted and blocks are separated by a blank line.
    """
    blocks: list[list[str]] = []
    info = document.personal_info

    header: list[str] = []
    if info.full_name:
        header.append(f"# {info.full_name}")
    contact = [f"{label}: {getattr(info, key)}" for key, label in CONTACT_LABELS if getattr(info, key)]
    if contact:
        header.append(" | ".join(contact))
    if header:
        blocks.append(header)

    if document.summary:
        blocks.append(["# Professional Summary", document.summary])

    if document.experiences:
        blocks.append(["# Experience"])
        blocks.extend(_experience_block(experience) for experience in document.experiences)

    if document.educations:
        blocks.append(["# Education"])
        blocks.extend(_education_block(education) for education in document.educations)

    if document.skills:
        blocks.append(_list_block("Skills", list(document.skills)))
    if document.tools:
        blocks.append(_list_block("Tools", list(document.tools)))
    if document.languages:
        blocks.append(
            _list_block(
                "Languages",
                [f"{language.name} - {language.level.capitalize()}" for language in document.languages],
            )
        )
    if document.certifications:
        certifications = []
        for certification in document.certifications:
            line = certification.name
            if certification.issuer:
                line = f"{line} - {certification.issuer}"
            if certification.date:
                line = f"{line} ({certification.date})"
            certifications.append(line)
        blocks.append(_list_block("Certifications", certifications))
    if document.hobbies:
        blocks.append(_list_block("Hobbies", list(document.hobbies)))

    return "\n\n".join("\n".join(block) for block in blocks) + ("\n" if blocks else "")

"""Building documents from JSON candidate payloads.

A rewritten résumé comes back either as heading/bullet text or as a JSON
object. The JSON shape is loose: generators mix snake_case and camelCase,
singular and plural keys, and strings or objects in lists. Everything here
is tolerant and never raises.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from resume_engine.models import (
    Certification,
    Education,
    Experience,
    Language,
    PersonalInfo,
    StructuredDocument,
)
from resume_engine.services.document_extractor import extract_document
from resume_engine.services.field_normalizer import (
    clean_string,
    is_current_marker,
    normalize_responsibilities,
    normalize_string_list,
)
from resume_engine.utils.matching import dedup_key

logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"^```(?:json|markdown|md)?\s*\n?(.*?)\n?```\s*$", re.DOTALL | re.IGNORECASE)

# Wrapper keys under which generators nest the actual document.
_WRAPPER_KEYS = ("structured_data", "structuredData", "cv", "resume", "document")


def _first(mapping: Mapping[str, Any], *keys: str) -> Any:
    """Return the first non-empty value among ``keys``."""
    for key in keys:
        value = mapping.get(key)
        if value not in (None, "", [], {}):
            return value
    return None


def _text(mapping: Mapping[str, Any], *keys: str) -> str:
    return clean_string(_first(mapping, *keys))


def _as_mapping_list(raw: Any) -> list[Mapping[str, Any]]:
    if isinstance(raw, Mapping):
        return [raw]
    if isinstance(raw, (list, tuple)):
        return [item for item in raw if isinstance(item, Mapping)]
    return []


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1", "oui"} or is_current_marker(value)
    return bool(value)


def _personal_info(payload: Mapping[str, Any]) -> PersonalInfo:
    raw = _first(payload, "personalInfo", "personal_info", "personal", "contact")
    info: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    location = _text(info, "location", "address")
    if not location:
        location = ", ".join(part for part in (_text(info, "city"), _text(info, "country")) if part)

    first_name = _text(info, "firstName", "first_name", "firstname")
    last_name = _text(info, "lastName", "last_name", "lastname")
    if not first_name and not last_name:
        first_name, _, last_name = _text(info, "name", "fullName", "full_name").partition(" ")

    return PersonalInfo(
        first_name=first_name,
        last_name=last_name,
        email=_text(info, "email", "mail"),
        phone=_text(info, "phone", "telephone", "phoneNumber", "phone_number"),
        location=location,
        linkedin=_text(info, "linkedin", "linkedIn", "linkedinUrl", "linkedin_url"),
        portfolio=_text(info, "portfolio", "website", "github"),
        headline=_text(info, "headline", "title", "jobTitle", "job_title", "currentTitle", "current_title"),
    )


def _experience(raw: Mapping[str, Any]) -> Experience | None:
    title = _text(raw, "title", "position", "jobTitle", "job_title", "role")
    company = _text(raw, "company", "employer", "organization", "organisation")
    if not title and not company:
        return None

    end = _first(raw, "endDate", "end_date", "end")
    current = _truthy(_first(raw, "current", "isCurrent", "is_current")) or is_current_marker(end)
    return Experience(
        title=title,
        company=company,
        start_date=_first(raw, "startDate", "start_date", "start"),
        end_date=None if is_current_marker(end) else end,
        current=current,
        industry=_text(raw, "industry", "sector"),
        contract_type=_first(raw, "contractType", "contract_type", "contract", "employmentType"),
        location=_text(raw, "location", "city"),
        responsibilities=normalize_responsibilities(
            _first(raw, "responsibilities", "bullets", "achievements", "description", "tasks")
        ),
    )


def _education(raw: Mapping[str, Any]) -> Education | None:
    degree = _text(raw, "degree", "diploma", "level")
    institution = _text(raw, "institution", "school", "university", "college")
    if not degree and not institution:
        return None

    end = _first(raw, "endDate", "end_date", "graduationYear", "graduation_year", "end")
    current = _truthy(_first(raw, "current", "isCurrent", "is_current")) or is_current_marker(end)
    description = _first(raw, "description", "details", "achievements")
    if isinstance(description, (list, tuple)):
        description = " ".join(normalize_responsibilities(description))
    return Education(
        degree=degree,
        field=_text(raw, "field", "fieldOfStudy", "field_of_study", "major"),
        institution=institution,
        start_date=_first(raw, "startDate", "start_date", "start"),
        end_date=None if is_current_marker(end) else end,
        current=current,
        description=description,
    )


def _language(raw: Any) -> Language | None:
    if isinstance(raw, Mapping):
        name = _text(raw, "name", "language")
        level = _first(raw, "level", "proficiency")
    else:
        name, level = clean_string(raw), None
    return Language(name=name, level=level) if name else None


def _certification(raw: Any) -> Certification | None:
    if isinstance(raw, Mapping):
        name = _text(raw, "name", "title")
        issuer = _text(raw, "issuer", "organization", "authority")
        date = _text(raw, "date", "year", "issueDate", "issue_date")
    else:
        name, issuer, date = clean_string(raw), "", ""
    return Certification(name=name, issuer=issuer, date=date) if name else None


def _list(payload: Mapping[str, Any], *keys: str) -> list[Any]:
    raw = _first(payload, *keys)
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return [raw]


def document_from_payload(payload: Mapping[str, Any]) -> StructuredDocument:
    """Build a StructuredDocument from a loosely shaped JSON object.

    Experiences lacking both title and company, and educations lacking both
    degree and institution, are dropped. Skills that also appear as tools
    are kept only as tools.

    Args:
        payload: Decoded JSON object.

    Returns:
        The corresponding document; an empty one for unusable input.
    """
    if not isinstance(payload, Mapping):
        return StructuredDocument()
    for key in _WRAPPER_KEYS:
        nested = payload.get(key)
        if isinstance(nested, Mapping):
            payload = nested
            break

    experiences = [
        exp
        for raw in _as_mapping_list(_first(payload, "experiences", "experience", "workExperience"))
        if (exp := _experience(raw)) is not None
    ]
    educations = [
        edu
        for raw in _as_mapping_list(_first(payload, "educations", "education"))
        if (edu := _education(raw)) is not None
    ]
    languages = [lang for raw in _list(payload, "languages") if (lang := _language(raw)) is not None]
    certifications = [
        cert
        for raw in _list(payload, "certifications", "certificates", "certificats")
        if (cert := _certification(raw)) is not None
    ]

    tools = normalize_string_list(_first(payload, "tools", "technicalSkills", "technical_skills"))
    tool_keys = {dedup_key(tool) for tool in tools}
    skills = [
        skill
        for skill in normalize_string_list(_first(payload, "skills", "softSkills", "soft_skills"))
        if dedup_key(skill) not in tool_keys
    ]

    return StructuredDocument(
        personal_info=_personal_info(payload),
        summary=_text(payload, "summary", "profile", "about"),
        experiences=tuple(experiences),
        educations=tuple(educations),
        skills=tuple(skills),
        tools=tools,
        languages=tuple(languages),
        certifications=tuple(certifications),
        hobbies=normalize_string_list(_first(payload, "hobbies", "interests")),
    )


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE_RE.match(text.strip())
    return match.group(1) if match else text


def parse_candidate(payload: str | Mapping[str, Any] | StructuredDocument | None) -> StructuredDocument:
    """Turn any candidate representation into a StructuredDocument.

    Strings holding a JSON object (optionally inside a markdown code fence)
    go through ``document_from_payload``; any other string is treated as
    heading/bullet text.
    """
    if isinstance(payload, StructuredDocument):
        return payload
    if isinstance(payload, Mapping):
        return document_from_payload(payload)
    if not isinstance(payload, str):
        return StructuredDocument()

    text = _strip_code_fence(payload).strip()
    if text.startswith("{"):
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError:
            logger.debug("Candidate looks like JSON but does not decode; parsing as text")
        else:
            if isinstance(decoded, Mapping):
                return document_from_payload(decoded)
    return extract_document(text)

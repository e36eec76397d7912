"""Extraction of a StructuredDocument from heading/bullet free text.

The text usually comes from an upstream generator that was asked for
markdown but may answer with bare capitalised headings, French section
names, or plain-text job blocks. Parsing is a single pass over the lines
with an explicit ``_ParserState``; the only way an entity reaches the
document is through ``_ParserState.close_pending``.

Extraction never raises: unrecognised lines are skipped and the worst case
is an empty document.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from resume_engine.constants import (
    CURRENT_MARKERS,
    DEFAULT_DEGREE_LEVEL,
    ENTITY_SECTIONS,
    KNOWN_SECTION_TITLES,
    LIST_SECTIONS,
    SECTION_KEYWORDS,
    SectionKind,
)
from resume_engine.constants.section_constants import (
    EDUCATION_CONNECTORS,
    EXPERIENCE_CONNECTORS,
    EXPERIENCE_META_LABELS,
    HEADER_FIELD_LABELS,
    MAX_SECTION_TITLE_WORDS,
    SKILL_LEVEL_WORDS,
)
from resume_engine.models import (
    Certification,
    Education,
    Experience,
    Language,
    PersonalInfo,
    StructuredDocument,
)
from resume_engine.services.field_normalizer import (
    clean_string,
    is_current_marker,
    normalize_date,
    normalize_degree,
)
from resume_engine.utils.matching import dedup_key, starts_word

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^(#{1,6})\s*(.*?)\s*#*$")
_BULLET_RE = re.compile(r"^(?:[-*•●▪–]|\d{1,2}[.)])\s+(.*)$")
_EMPHASIS_RE = re.compile(r"\*\*|__")
_DASH_SPLIT_RE = re.compile(r"^(.*?)(?:^|\s+)[-–—|]\s+(.+)$")
_EMPTY_PARENS_RE = re.compile(r"\(\s*\)|\[\s*\]")
_DEGREE_FIELD_SPLIT_RE = re.compile(r"\s+(?:in|en)\s+|,\s*", re.IGNORECASE)

_CURRENT_ALTERNATION = "|".join(re.escape(marker) for marker in CURRENT_MARKERS)
_DATE_TOKEN = r"(?:[^\W\d_]+\.?\s+\d{4}|\d{4}-\d{2}|\d{4})"
_DATE_RANGE_RE = re.compile(
    rf"({_DATE_TOKEN})\s*(?:[-–—]|\bto\b|\bau\b|\bà\b)\s*({_DATE_TOKEN}|{_CURRENT_ALTERNATION})",
    re.IGNORECASE,
)
_SINGLE_DATE_RE = re.compile(rf"^(?:since|depuis|from|de)?\s*({_DATE_TOKEN})$", re.IGNORECASE)
_UNTIL_DATE_RE = re.compile(rf"^(?:until|jusqu'en|jusqu'à|to)\s+({_DATE_TOKEN})$", re.IGNORECASE)
_DATE_RESIDUE_STRIP = " \t|,;·()[]-–—:"
# A line carrying a date range plus more than this many words is a sentence.
_MAX_DATE_LINE_EXTRA_WORDS = 5

_EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
_URL_RE = re.compile(r"^(?:https?://|www\.)\S+$|^\S+\.(?:com|io|dev|net|org|fr|me)(?:/\S*)?$", re.IGNORECASE)
_PHONE_RE = re.compile(r"^\+?[\d\s().-]+$")
_MIN_PHONE_DIGITS = 8
_HEADER_SPLIT_RE = re.compile(r"\s+[|•·]\s+|\s*\|\s*")

_LIST_SPLIT_RE = re.compile(r"\s*[,;]\s*")
_LEADING_LABEL_RE = re.compile(r"^([^:]{1,40}):\s*(.+)$")
_SKILL_LEVEL_RE = re.compile(
    r"\s*(?:[-–—:]\s*|\(\s*)(?:" + "|".join(SKILL_LEVEL_WORDS) + r")\s*\)?$",
    re.IGNORECASE,
)
_LANGUAGE_ITEM_RE = re.compile(r"^(.+?)(?:(?:\s+[-–—]\s+|\s*[|:]\s*)(.+?)|\s*\((.+?)\))$")
_CERTIFICATE_RE = re.compile(r"^(.+?)(?:\s+[-–—]\s+(.+?))?(?:\s*\((.+?)\))?$")

# Entity headings longer than this are sentences, not "Title - Company".
_MAX_ENTITY_PART_WORDS = 10


@dataclass
class _PendingEntity:
    """Experience or education being accumulated line by line."""

    kind: SectionKind
    title: str = ""
    organisation: str = ""
    field_of_study: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    location: str = ""
    industry: str = ""
    contract_type: str = ""
    bullets: list[str] = field(default_factory=list)

    @property
    def has_dates(self) -> bool:
        return bool(self.start_date or self.end_date or self.current)


@dataclass
class _ParserState:
    """Everything the line scanner knows at a given point."""

    section: SectionKind = SectionKind.NONE
    section_level: int = 0
    pending: _PendingEntity | None = None
    name: str = ""
    personal: dict[str, str] = field(default_factory=dict)
    summary: list[str] = field(default_factory=list)
    experiences: list[Experience] = field(default_factory=list)
    educations: list[Education] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)
    languages: list[Language] = field(default_factory=list)
    certifications: list[Certification] = field(default_factory=list)
    hobbies: list[str] = field(default_factory=list)

    def enter_section(self, kind: SectionKind, level: int) -> None:
        self.close_pending()
        self.section = kind
        self.section_level = level

    def open_entity(self, heading: str = "") -> _PendingEntity:
        self.close_pending()
        self.pending = _entity_from_heading(self.section, heading)
        return self.pending

    def close_pending(self) -> None:
        """Normalize the in-progress entity and append it to the document."""
        pending, self.pending = self.pending, None
        if pending is None:
            return
        if pending.kind is SectionKind.EXPERIENCE:
            self.experiences.append(
                Experience(
                    title=pending.title,
                    company=pending.organisation,
                    start_date=pending.start_date,
                    end_date=pending.end_date,
                    current=pending.current,
                    industry=pending.industry,
                    contract_type=pending.contract_type,
                    location=pending.location,
                    responsibilities=tuple(pending.bullets),
                )
            )
        else:
            self.educations.append(
                Education(
                    degree=pending.title,
                    field=pending.field_of_study,
                    institution=pending.organisation,
                    start_date=pending.start_date,
                    end_date=pending.end_date,
                    current=pending.current,
                    description=" ".join(pending.bullets),
                )
            )

    def set_personal(self, key: str, value: str) -> None:
        value = clean_string(value)
        if value and not self.personal.get(key):
            self.personal[key] = value


def section_kind(title: str) -> SectionKind | None:
    """Classify a heading against the English and French section vocabulary."""
    text = _plain_title(title)
    if not text or len(text.split()) > MAX_SECTION_TITLE_WORDS:
        return None
    for kind, keywords in SECTION_KEYWORDS:
        if any(starts_word(text, keyword) for keyword in keywords):
            return kind
    return None


def _plain_title(title: str) -> str:
    return clean_string(_EMPHASIS_RE.sub("", title)).rstrip(":").strip()


def _is_section_title(line: str) -> bool:
    """Strict test for a heading written as a plain line."""
    text = _plain_title(line)
    if not text or section_kind(text) is None:
        return False
    if text.lower() in KNOWN_SECTION_TITLES:
        return True
    word_count = len(text.split())
    has_letters = any(ch.isalpha() for ch in text)
    if has_letters and text.isupper() and word_count <= 4:
        return True
    return line.rstrip().endswith(":") and word_count <= 4


def _split_entity_heading(text: str, connectors: tuple[str, ...]) -> tuple[str, str] | None:
    """Split ``Title - Organisation`` (or ``Title at Organisation``)."""
    match = _DASH_SPLIT_RE.match(text)
    if match:
        return match.group(1).strip(), match.group(2).strip()
    lowered = text.lower()
    for connector in connectors:
        index = lowered.find(connector)
        if index > 0:
            return text[:index].strip(), text[index + len(connector) :].strip()
    return None


def _connectors(kind: SectionKind) -> tuple[str, ...]:
    return EXPERIENCE_CONNECTORS if kind is SectionKind.EXPERIENCE else EDUCATION_CONNECTORS


def _entity_from_heading(kind: SectionKind, heading: str) -> _PendingEntity:
    entity = _PendingEntity(kind=kind)
    text = _plain_title(heading)
    dates = _DATE_RANGE_RE.search(text)
    if dates:
        _apply_date_line(entity, dates.group(0))
        text = _EMPTY_PARENS_RE.sub("", text[: dates.start()] + text[dates.end() :])
        text = clean_string(text).strip(_DATE_RESIDUE_STRIP)
    if not text:
        return entity

    parts = _split_entity_heading(text, _connectors(kind))
    head, organisation = parts if parts else (text, "")
    entity.organisation = organisation
    if kind is SectionKind.EXPERIENCE:
        entity.title = head
        return entity

    degree_parts = _DEGREE_FIELD_SPLIT_RE.split(head, maxsplit=1)
    entity.title = degree_parts[0]
    if len(degree_parts) == 2:
        entity.field_of_study = degree_parts[1]
    elif normalize_degree(head) is DEFAULT_DEGREE_LEVEL and head.lower() != DEFAULT_DEGREE_LEVEL:
        # Unrecognised degree wording is kept as the field of study.
        entity.field_of_study = head
    return entity


def _looks_like_entity_line(text: str, kind: SectionKind) -> bool:
    if text.endswith("."):
        return False
    parts = _split_entity_heading(text, _connectors(kind))
    if parts is None:
        return False
    return all(0 < len(part.split()) <= _MAX_ENTITY_PART_WORDS for part in parts)


# ---------------------------------------------------------------------------
# Entity body lines
# ---------------------------------------------------------------------------


def _apply_date_line(entity: _PendingEntity, text: str) -> bool:
    """Backfill dates from a date line. Returns True if the line was consumed."""
    if entity.has_dates:
        return False

    match = _DATE_RANGE_RE.search(text)
    if match:
        residue = (text[: match.start()] + " " + text[match.end() :]).strip(_DATE_RESIDUE_STRIP)
        residue = clean_string(residue)
        if len(residue.split()) > _MAX_DATE_LINE_EXTRA_WORDS:
            return False
        entity.start_date = normalize_date(match.group(1))
        if is_current_marker(match.group(2)):
            entity.current = True
        else:
            entity.end_date = normalize_date(match.group(2))
        if residue and entity.kind is SectionKind.EXPERIENCE and not entity.location:
            entity.location = residue
        return True

    if is_current_marker(text):
        entity.current = True
        return True
    match = _SINGLE_DATE_RE.match(text)
    if match:
        entity.start_date = normalize_date(match.group(1))
        return True
    match = _UNTIL_DATE_RE.match(text)
    if match:
        entity.end_date = normalize_date(match.group(1))
        return True
    return False


def _apply_meta_line(entity: _PendingEntity, text: str) -> bool:
    """Read ``Location: ... | Industry: ... | Contract: ...`` into an experience."""
    if entity.kind is not SectionKind.EXPERIENCE:
        return False
    values: dict[str, str] = {}
    for part in text.split("|"):
        label, sep, value = part.partition(":")
        target = EXPERIENCE_META_LABELS.get(label.strip().lower())
        if not sep or target is None:
            return False
        values[target] = clean_string(value)
    for target, value in values.items():
        if value and not getattr(entity, target):
            setattr(entity, target, value)
    return bool(values)


def _handle_entity_line(state: _ParserState, text: str, is_bullet: bool) -> None:
    entity = state.pending
    if entity is None:
        entity = state.open_entity()
        if not is_bullet:
            # A plain line opening an entity block is its heading.
            if not _apply_date_line(entity, text):
                state.pending = _entity_from_heading(state.section, text)
            return

    if is_bullet:
        entity.bullets.append(text)
        return
    if _apply_date_line(entity, text) or _apply_meta_line(entity, text):
        return
    if (entity.has_dates or entity.bullets) and entity.organisation and _looks_like_entity_line(
        text, entity.kind
    ):
        state.open_entity(text)
        return
    if not entity.organisation and not entity.bullets:
        entity.organisation = text
        return
    entity.bullets.append(text)


# ---------------------------------------------------------------------------
# Header, summary and list lines
# ---------------------------------------------------------------------------


def _handle_header_line(state: _ParserState, text: str) -> None:
    for part in _HEADER_SPLIT_RE.split(text):
        part = part.strip()
        if not part:
            continue
        label, sep, value = part.partition(":")
        target = HEADER_FIELD_LABELS.get(label.strip().lower()) if sep else None
        if target is not None:
            state.set_personal(target, value)
            continue
        _handle_unlabelled_header_part(state, part)


def _handle_unlabelled_header_part(state: _ParserState, part: str) -> None:
    email = _EMAIL_RE.search(part)
    if email and email.group(0) == part:
        state.set_personal("email", part)
    elif "linkedin." in part.lower():
        state.set_personal("linkedin", part)
    elif _URL_RE.match(part):
        state.set_personal("portfolio", part)
    elif _PHONE_RE.match(part) and sum(ch.isdigit() for ch in part) >= _MIN_PHONE_DIGITS:
        state.set_personal("phone", part)
    elif not state.name:
        state.name = clean_string(part)
    elif not state.personal.get("headline"):
        state.set_personal("headline", part)
    else:
        state.set_personal("location", part)


def _list_items(text: str) -> list[str]:
    text = _SKILL_LEVEL_RE.sub("", text)
    label = _LEADING_LABEL_RE.match(text)
    if label and not label.group(2).startswith("//"):
        text = label.group(2)
    pieces = _LIST_SPLIT_RE.split(text)
    items = []
    for piece in pieces:
        piece = clean_string(_SKILL_LEVEL_RE.sub("", piece))
        if piece:
            items.append(piece)
    return items


def _parse_language(item: str) -> Language:
    match = _LANGUAGE_ITEM_RE.match(item)
    if match:
        return Language(name=match.group(1), level=match.group(2) or match.group(3))
    return Language(name=item)


def _parse_certification(item: str) -> Certification:
    match = _CERTIFICATE_RE.match(item)
    if not match:
        return Certification(name=item)
    return Certification(name=match.group(1), issuer=match.group(2), date=match.group(3))


def _handle_list_line(state: _ParserState, text: str) -> None:
    section = state.section
    if section is SectionKind.LANGUAGES:
        state.languages.extend(_parse_language(item) for item in _LIST_SPLIT_RE.split(text) if item)
    elif section is SectionKind.CERTIFICATES:
        state.certifications.append(_parse_certification(clean_string(text)))
    elif section is SectionKind.TOOLS:
        state.tools.extend(_list_items(text))
    elif section is SectionKind.HOBBIES:
        state.hobbies.extend(_list_items(text))
    else:
        state.skills.extend(_list_items(text))


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _handle_heading(state: _ParserState, level: int, title: str) -> None:
    title = _plain_title(title)
    kind = section_kind(title)
    in_entity_section = state.section in ENTITY_SECTIONS

    if in_entity_section and (
        level > state.section_level
        or (level == state.section_level > 1 and (kind is None or _looks_like_entity_line(title, state.section)))
    ):
        state.open_entity(title)
    elif (
        level == 1
        and not state.name
        and state.section is SectionKind.NONE
        and title
        and not _is_section_title(title)
    ):
        state.name = title
        state.enter_section(SectionKind.PERSONAL, level)
    elif kind is not None:
        state.enter_section(kind, level)
    elif state.section in LIST_SECTIONS and level > state.section_level:
        _handle_list_line(state, title)
    elif state.section in (SectionKind.NONE, SectionKind.PERSONAL) and not state.name and title:
        state.name = title
        state.enter_section(SectionKind.PERSONAL, level)
    else:
        state.enter_section(SectionKind.OTHER, level)


def _handle_line(state: _ParserState, line: str) -> None:
    heading = _HEADING_RE.match(line)
    if heading:
        _handle_heading(state, len(heading.group(1)), heading.group(2))
        return

    bullet = _BULLET_RE.match(line)
    is_bullet = bullet is not None
    text = clean_string(bullet.group(1) if bullet else line)
    if not text:
        return

    if not is_bullet and _is_section_title(text):
        state.enter_section(section_kind(text) or SectionKind.OTHER, 1)
        return

    section = state.section
    if section is SectionKind.NONE:
        # Bullets before any heading have no home.
        if not is_bullet:
            _handle_header_line(state, text)
    elif section is SectionKind.PERSONAL:
        _handle_header_line(state, text)
    elif section is SectionKind.SUMMARY:
        state.summary.append(text)
    elif section in ENTITY_SECTIONS:
        _handle_entity_line(state, text, is_bullet)
    elif section in LIST_SECTIONS:
        _handle_list_line(state, text)


def _personal_info(state: _ParserState) -> PersonalInfo:
    first_name, _, last_name = clean_string(state.name).partition(" ")
    return PersonalInfo(first_name=first_name, last_name=last_name, **state.personal)


def extract_document(text: str | None) -> StructuredDocument:
    """Parse heading/bullet free text into a StructuredDocument.

    Args:
        text: Markdown-ish résumé text. ``None`` and empty text give an
            empty document.

    Returns:
        The extracted document. Skills that also appear under tools are
        kept only as tools.
    """
    state = _ParserState()
    for line in (text or "").splitlines():
        if line.strip():
            _handle_line(state, line.strip())
    state.close_pending()

    tool_keys = {dedup_key(tool) for tool in state.tools}
    skills = [skill for skill in state.skills if dedup_key(skill) not in tool_keys]

    document = StructuredDocument(
        personal_info=_personal_info(state),
        summary=" ".join(state.summary),
        experiences=tuple(state.experiences),
        educations=tuple(state.educations),
        skills=tuple(skills),
        tools=tuple(state.tools),
        languages=tuple(state.languages),
        certifications=tuple(state.certifications),
        hobbies=tuple(state.hobbies),
    )
    logger.debug(
        "Extracted document: %d experiences, %d educations, %d skills, %d tools",
        len(document.experiences),
        len(document.educations),
        len(document.skills),
        len(document.tools),
    )
    return document

"""Job-search preferences that feed profile tag derivation."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from resume_engine.services.field_normalizer import clean_string, normalize_string_list

_LEADING_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)?")


def _leading_number(value: Any) -> float | None:
    """Numeric prefix of ``value``: ``"10+"`` -> 10, ``"10-20"`` -> 10, junk -> None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        return float(value)
    match = _LEADING_NUMBER_RE.match(clean_string(value))
    if match is None:
        return None
    return float(match.group().replace(",", "."))


class PreferenceModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ManagementExperience(PreferenceModel):
    """Whether the person has managed people, and how many.

    ``team_size`` accepts free text such as ``"10+"`` or ``"10-20"`` and keeps
    its leading integer.
    """

    has_experience: bool = False
    team_size: int | None = None
    team_type: str = ""

    @field_validator("team_size", mode="before")
    @classmethod
    def _team_size(cls, value: Any) -> int | None:
        number = _leading_number(value)
        return None if number is None else int(number)


class TagPreferences(PreferenceModel):
    """Optional user preferences; every field may be left out."""

    work_preference: str = ""
    management_experience: ManagementExperience = ManagementExperience()
    preferred_environment: tuple[str, ...] = ()
    target_position: str = ""
    years_of_experience: float | None = None
    education_level: str = ""

    @field_validator("work_preference", "target_position", "education_level", mode="before")
    @classmethod
    def _clean(cls, value: Any) -> str:
        return clean_string(value)

    @field_validator("preferred_environment", mode="before")
    @classmethod
    def _environment_list(cls, value: Any) -> tuple[str, ...]:
        return normalize_string_list(value)

    @field_validator("management_experience", mode="before")
    @classmethod
    def _management(cls, value: Any) -> Any:
        return ManagementExperience() if value is None else value

    @field_validator("years_of_experience", mode="before")
    @classmethod
    def _years(cls, value: Any) -> float | None:
        return _leading_number(value)

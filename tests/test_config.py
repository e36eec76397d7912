"""Tests for environment configuration."""

from __future__ import annotations

import logging

import pytest

from resume_engine.config import (
    DEFAULT_LOG_LEVEL,
    MergeBudget,
    get_log_level,
    get_merge_budget,
)

BUDGET_VARIABLES = (
    "RESUME_MIN_BULLETS",
    "RESUME_MAX_BULLETS",
    "RESUME_MAX_BULLET_WORDS",
    "RESUME_MAX_DESCRIPTION_CHARS",
)


@pytest.fixture(autouse=True)
def clean_budget_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in BUDGET_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("RESUME_ENGINE_LOG_LEVEL", raising=False)


class TestMergeBudget:
    """Tests for the merge budget."""

    def test_defaults(self) -> None:
        budget = MergeBudget()

        assert (budget.min_bullets, budget.max_bullets) == (3, 5)
        assert budget.max_words == 20
        assert budget.max_description_chars == 300

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_bullets": -1},
            {"min_bullets": 4, "max_bullets": 3},
            {"max_words": 0},
            {"max_description_chars": -5},
        ],
    )
    def test_invalid_budget(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            MergeBudget(**kwargs)


class TestGetMergeBudget:
    """Tests for reading the budget from the environment."""

    def test_unset_environment(self) -> None:
        assert get_merge_budget() == MergeBudget()

    def test_values_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESUME_MIN_BULLETS", "2")
        monkeypatch.setenv("RESUME_MAX_BULLETS", "4")
        monkeypatch.setenv("RESUME_MAX_BULLET_WORDS", " 15 ")
        monkeypatch.setenv("RESUME_MAX_DESCRIPTION_CHARS", "120")

        assert get_merge_budget() == MergeBudget(
            min_bullets=2, max_bullets=4, max_words=15, max_description_chars=120
        )

    def test_non_integer_falls_back(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("RESUME_MAX_BULLETS", "many")

        with caplog.at_level(logging.WARNING, logger="resume_engine.config"):
            budget = get_merge_budget()

        assert budget.max_bullets == 5
        assert "RESUME_MAX_BULLETS" in caplog.text

    def test_inconsistent_values_use_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESUME_MIN_BULLETS", "6")
        monkeypatch.setenv("RESUME_MAX_BULLETS", "2")

        assert get_merge_budget() == MergeBudget()


class TestGetLogLevel:
    """Tests for the log level setting."""

    def test_default(self) -> None:
        assert get_log_level() == DEFAULT_LOG_LEVEL

    def test_case_insensitive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESUME_ENGINE_LOG_LEVEL", " debug ")
        assert get_log_level() == "DEBUG"

    def test_unknown_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESUME_ENGINE_LOG_LEVEL", "chatty")
        assert get_log_level() == DEFAULT_LOG_LEVEL

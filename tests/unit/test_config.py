"""Tests for Settings validation and taxonomy construction."""

import pytest
from pydantic import ValidationError

from docindex.core.config import Settings
from docindex.domain.taxonomy import DEFAULT_CATEGORIZATION, ValidationPolicy


def test_defaults() -> None:
    settings = Settings()
    assert settings.categorization_max_content_chars == 4000
    assert settings.categorization_max_attempts == 3
    assert settings.categorization_validation_policy is ValidationPolicy.PERMISSIVE
    assert settings.build_taxonomy().default_result() == DEFAULT_CATEGORIZATION


def test_taxonomy_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TAXONOMY_TEAMS", '["Red", "Blue"]')
    monkeypatch.setenv("TAXONOMY_TEAM_FALLBACK", "Blue")
    taxonomy = Settings().build_taxonomy()
    assert taxonomy.teams == ("Red", "Blue")
    assert taxonomy.team_fallback == "Blue"


def test_validation_policy_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATEGORIZATION_VALIDATION_POLICY", "strict")
    assert Settings().categorization_validation_policy is ValidationPolicy.STRICT


@pytest.mark.parametrize(
    "kwargs",
    [
        {"storage_backend": "ftp"},
        {"storage_backend": "s3"},
        {"categorization_max_attempts": 0},
        {"categorization_backoff_base_seconds": -1},
        {"categorization_max_content_chars": 0},
        {"taxonomy_topic_fallback": "Not In List"},
    ],
    ids=["unknown-backend", "s3-no-bucket", "zero-attempts", "negative-backoff", "zero-chars", "bad-fallback"],
)
def test_invalid_settings_rejected(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(**kwargs)


def test_sql_configured() -> None:
    assert Settings(database_url="").sql_configured is False
    assert Settings(database_url="postgresql+asyncpg://u:p@db/x").sql_configured is True


def test_cors_origins_are_split_and_trimmed() -> None:
    settings = Settings(allowed_origins=" https://a.test ,, https://b.test")
    assert settings.cors_origins == ["https://a.test", "https://b.test"]

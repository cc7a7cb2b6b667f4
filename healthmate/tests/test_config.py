from __future__ import annotations

import pytest

from healthmate.shared.config import AppConfig

_ENV_KEYS = (
    "APP_ENV",
    "MONGODB_URI",
    "MONGODB_DB_NAME",
    "JWT_SECRET",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "ALLOWED_ORIGINS",
    "TOKEN_TTL_SECONDS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = AppConfig()

    assert config.app_env == "development"
    assert config.database.name == "healthmate"
    assert config.auth.token_ttl_seconds == 604800
    assert config.auth.cookie_name == "auth_token"
    assert config.security.allowed_origins == ["*"]
    assert config.missing_settings() == ["MONGODB_URI", "JWT_SECRET"]


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGODB_URI", "mongodb://db:27017")
    monkeypatch.setenv("MONGODB_DB_NAME", "portal")
    monkeypatch.setenv("JWT_SECRET", "s3cret-value")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.0-flash")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")

    config = AppConfig()

    assert config.database.uri == "mongodb://db:27017"
    assert config.database.name == "portal"
    assert config.auth.jwt_secret == "s3cret-value"
    assert config.chat.model == "gemini-2.0-flash"
    assert config.security.allowed_origins == ["https://a.example", "https://b.example"]
    assert config.missing_settings() == []


def test_blank_secret_counts_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "   ")

    assert AppConfig().auth.jwt_secret is None


def test_production_refuses_to_start_without_secrets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")

    with pytest.raises(SystemExit):
        AppConfig()


def test_production_with_secrets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("MONGODB_URI", "mongodb://db:27017")
    monkeypatch.setenv("JWT_SECRET", "s3cret-value")

    assert AppConfig().is_production()

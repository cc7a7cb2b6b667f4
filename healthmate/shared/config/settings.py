# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

TOKEN_TTL_SECONDS = 60 * 60 * 24 * 7

_NESTED_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    validate_by_name=True,
    extra="ignore",
)


class DatabaseConfig(BaseSettings):
    uri: str | None = Field(None, alias="MONGODB_URI")
    name: str = Field("healthmate", alias="MONGODB_DB_NAME")
    server_selection_timeout_ms: int = Field(
        5000, ge=100, alias="MONGODB_SERVER_SELECTION_TIMEOUT_MS"
    )

    model_config = _NESTED_CONFIG

    @field_validator("uri", mode="before")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AuthConfig(BaseSettings):
    jwt_secret: str | None = Field(None, alias="JWT_SECRET")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    token_ttl_seconds: int = Field(TOKEN_TTL_SECONDS, ge=1, alias="TOKEN_TTL_SECONDS")
    cookie_name: str = Field("auth_token", alias="AUTH_COOKIE_NAME")
    min_password_length: int = Field(6, ge=1, alias="MIN_PASSWORD_LENGTH")

    model_config = _NESTED_CONFIG

    @field_validator("jwt_secret", mode="before")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ChatConfig(BaseSettings):
    api_key: str | None = Field(None, alias="GEMINI_API_KEY")
    model: str | None = Field(None, alias="GEMINI_MODEL")
    api_base: str = Field(
        "https://generativelanguage.googleapis.com/v1beta", alias="GEMINI_API_BASE"
    )
    timeout: float = Field(30.0, ge=0.1, alias="GEMINI_TIMEOUT")

    model_config = _NESTED_CONFIG


class UploadConfig(BaseSettings):
    max_upload_mb: int = Field(20, ge=1, alias="MAX_UPLOAD_MB")
    fetch_timeout: float = Field(30.0, ge=0.1, alias="PDF_FETCH_TIMEOUT")

    model_config = _NESTED_CONFIG


class SecurityConfig(BaseSettings):
    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _NESTED_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _chat_config_factory() -> ChatConfig:
    return ChatConfig()  # type: ignore[call-arg]


def _upload_config_factory() -> UploadConfig:
    return UploadConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    chat: ChatConfig = Field(default_factory=_chat_config_factory)
    upload: UploadConfig = Field(default_factory=_upload_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        validate_by_name=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        missing = self.missing_settings()
        if missing:
            print(
                "\n❌ CRITICAL CONFIGURATION ERROR: required settings are missing in production!\n"
                f"   Missing: {', '.join(missing)}\n"
                "   Generate a JWT secret with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if "*" in self.security.allowed_origins:
            print(
                "\n⚠️  PRODUCTION SECURITY WARNING: CORS allows wildcard (*) origins\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def missing_settings(self) -> list[str]:
        missing = []
        if not self.database.uri:
            missing.append("MONGODB_URI")
        if not self.auth.jwt_secret:
            missing.append("JWT_SECRET")
        return missing


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "TOKEN_TTL_SECONDS", "load_config"]

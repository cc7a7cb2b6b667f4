from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationInfo, field_validator, model_validator
from pydantic_core import PydanticCustomError

DEFAULT_MIN_PASSWORD_LENGTH = 6


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise PydanticCustomError("string_type", "Fields must be plain values", {})
    return str(value)


class AuthActionDTO(BaseModel):
    action: str = ""

    @field_validator("action", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> str:
        return _as_text(value)


class SignupRequestDTO(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""

    @field_validator("name", "email", "password", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("name")
    @classmethod
    def _trim_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @model_validator(mode="after")
    def _check_required(self, info: ValidationInfo) -> SignupRequestDTO:
        if not self.name or not self.email or not self.password:
            raise PydanticCustomError(
                "missing", "Name, email and password are required", {}
            )

        context = info.context or {}
        min_length = int(context.get("min_password_length", DEFAULT_MIN_PASSWORD_LENGTH))
        if len(self.password) < min_length:
            raise PydanticCustomError(
                "password_too_short",
                "Password must be at least {min_length} characters",
                {"min_length": min_length},
            )
        return self


class SigninRequestDTO(BaseModel):
    email: str = ""
    password: str = ""

    @field_validator("email", "password", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @model_validator(mode="after")
    def _check_required(self) -> SigninRequestDTO:
        if not self.email or not self.password:
            raise PydanticCustomError("missing", "Email and password are required", {})
        return self


class UserResponseDTO(BaseModel):
    id: str
    name: str
    email: str


class AuthUserDTO(BaseModel):
    user: UserResponseDTO | None = None


class AuthSuccessDTO(BaseModel):
    ok: bool = True

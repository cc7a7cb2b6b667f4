from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


class ChatRequestDTO(BaseModel):
    question: str = Field("", validate_default=True)
    language: str | None = None

    @field_validator("question", mode="before")
    @classmethod
    def _require_question(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("missing", "Question is required", {})
        return value

    @field_validator("language", mode="before")
    @classmethod
    def _language_or_none(cls, value: Any) -> str | None:
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip().lower()

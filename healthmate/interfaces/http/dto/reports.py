from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError


class ParsePdfJsonDTO(BaseModel):
    url: str = ""
    base64: str = ""

    @field_validator("url", "base64", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()


class SummaryRequestDTO(BaseModel):
    text: str = ""
    create_token: bool = Field(False, alias="createToken")
    token_payload: dict[str, Any] | list[Any] = Field(default_factory=dict, alias="tokenPayload")

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("create_token", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("token_payload", mode="before")
    @classmethod
    def _object_or_empty(cls, value: Any) -> dict[str, Any] | list[Any]:
        # arrays are kept so signing rejects them
        return value if isinstance(value, (dict, list)) else {}

    @model_validator(mode="after")
    def _check_text(self) -> SummaryRequestDTO:
        if not self.text:
            raise PydanticCustomError("missing", "No text provided", {})
        return self

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from healthmate.shared.errors.base import InfrastructureError


class ModelCallError(Exception):
    """One attempt against one model failed."""

    def __init__(self, model: str, reason: str, *, status_code: int | None = None) -> None:
        super().__init__(f"model={model} err={reason}")
        self.model = model
        self.reason = reason
        self.status_code = status_code


class ChatServiceError(InfrastructureError):
    def __init__(self, failures: list[ModelCallError]) -> None:
        details = " | ".join(str(f) for f in failures) or "no model attempted"
        all_not_found = bool(failures) and all(f.status_code == 404 for f in failures)
        super().__init__(
            "ai_service_failed",
            status=HTTPStatus.BAD_GATEWAY if all_not_found else HTTPStatus.INTERNAL_SERVER_ERROR,
            message="AI service failed",
            context={"details": f"All model attempts failed: {details}"},
        )
        self.failures = failures

    def to_dict(self) -> dict[str, Any]:
        # clients read `details` next to `error`
        return {"error": self.message or self.code, "details": self.context["details"]}

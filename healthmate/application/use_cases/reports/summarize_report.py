# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from healthmate.domain.reports.summary import Insight, extract_insights, generate_summary
from healthmate.shared.errors.base import ConfigError
from healthmate.shared.logging import logger

SUMMARY_TOKEN_TTL_SECONDS = 60 * 60


class PayloadSigner(Protocol):
    def sign_payload(self, payload: Mapping[str, Any], ttl_seconds: int) -> str: ...


@dataclass(slots=True)
class SummaryResult:
    summary: str
    insights: list[Insight]
    token: str | None = None
    token_error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "summary": self.summary,
            "insights": [i.to_dict() for i in self.insights],
        }
        if self.token is not None:
            payload["token"] = self.token
        if self.token_error is not None:
            payload["tokenError"] = self.token_error
        return payload


class SummarizeReportUseCase:
    def __init__(self, *, signer: PayloadSigner, max_sentences: int = 3) -> None:
        self._signer = signer
        self._max_sentences = max_sentences

    def execute(
        self,
        text: str,
        *,
        create_token: bool = False,
        token_payload: Mapping[str, Any] | Sequence[Any] | None = None,
    ) -> SummaryResult:
        result = SummaryResult(
            summary=generate_summary(text, self._max_sentences),
            insights=extract_insights(text),
        )
        if create_token:
            self._attach_token(result, {} if token_payload is None else token_payload)
        return result

    def _attach_token(
        self, result: SummaryResult, payload: Mapping[str, Any] | Sequence[Any]
    ) -> None:
        # token problems never fail the summary itself
        try:
            result.token = self._signer.sign_payload(payload, SUMMARY_TOKEN_TTL_SECONDS)
        except ConfigError:
            result.token_error = "JWT_SECRET not configured on server"
        except Exception:
            logger.exception("summary: token signing failed")
            result.token_error = "Failed to create token"

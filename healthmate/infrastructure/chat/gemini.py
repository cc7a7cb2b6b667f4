# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from healthmate.application.interfaces import ChatModelPort, ModelInfo
from healthmate.domain.chat.exceptions import ModelCallError
from healthmate.shared.config.settings import ChatConfig
from healthmate.shared.errors.base import ConfigError
from healthmate.shared.logging import logger


def _response_text(payload: dict[str, Any]) -> str:
    parts: list[str] = []
    for candidate in payload.get("candidates") or []:
        content = candidate.get("content") or {}
        for part in content.get("parts") or []:
            text = part.get("text")
            if isinstance(text, str):
                parts.append(text)
        if parts:
            break
    return "".join(parts)


def _error_reason(response: httpx.Response) -> str:
    try:
        message = (response.json().get("error") or {}).get("message")
    except ValueError:
        message = None
    return message or response.text[:200] or f"HTTP {response.status_code}"


class GeminiChatAdapter(ChatModelPort):
    """Talks to the Generative Language REST API with an API key."""

    def __init__(
        self,
        api_key: str | None,
        *,
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: ChatConfig) -> GeminiChatAdapter:
        return cls(config.api_key, api_base=config.api_base, timeout=config.timeout)

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _client(self) -> httpx.AsyncClient:
        if not self._api_key:
            raise ConfigError(
                "GEMINI_API_KEY",
                "Server missing GEMINI_API_KEY. Add it to the environment and restart.",
            )
        return httpx.AsyncClient(
            base_url=self._api_base,
            timeout=self._timeout,
            headers={"x-goog-api-key": self._api_key},
            transport=self._transport,
        )

    async def generate(self, model: str, prompt: str) -> str:
        body = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        async with self._client() as http:
            try:
                response = await http.post(f"/models/{model}:generateContent", json=body)
            except httpx.HTTPError as exc:
                raise ModelCallError(model, f"{type(exc).__name__}: {exc}") from exc

        if response.is_error:
            raise ModelCallError(
                model, _error_reason(response), status_code=response.status_code
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise ModelCallError(model, "Malformed response body") from exc
        return _response_text(payload)

    async def list_models(self) -> Sequence[ModelInfo]:
        async with self._client() as http:
            try:
                response = await http.get("/models")
            except httpx.HTTPError as exc:
                raise ModelCallError("listModels", f"{type(exc).__name__}: {exc}") from exc

        if response.is_error:
            raise ModelCallError(
                "listModels",
                f"listModels failed: {response.status_code}",
                status_code=response.status_code,
            )
        try:
            models = response.json().get("models") or []
        except ValueError as exc:
            raise ModelCallError("listModels", "Malformed response body") from exc

        logger.debug(f"chatbot: discovered {len(models)} models")
        return [
            ModelInfo(
                name=str(m.get("name") or ""),
                supported_methods=tuple(m.get("supportedGenerationMethods") or ()),
            )
            for m in models
            if isinstance(m, dict)
        ]

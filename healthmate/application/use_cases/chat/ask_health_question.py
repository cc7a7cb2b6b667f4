# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from healthmate.application.interfaces import ChatModelPort
from healthmate.domain.chat.exceptions import ChatServiceError, ModelCallError
from healthmate.domain.chat.language import Language, resolve_language
from healthmate.domain.chat.prompts import build_prompt
from healthmate.shared.logging import logger

DEFAULT_MODEL_CANDIDATES: tuple[str, ...] = (
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-1.5-flash-latest",
    "gemini-1.5-flash",
    "gemini-1.5-flash-8b",
    "gemini-1.5-pro-latest",
    "gemini-1.5-pro",
)


@dataclass(slots=True, frozen=True)
class ChatAnswer:
    response: str
    language: Language
    model: str | None = None

    def to_dict(self) -> dict[str, str]:
        return {"response": self.response, "detectedLanguage": self.language}


def model_candidates(preferred: str | None, defaults: Sequence[str]) -> list[str]:
    ordered = [(preferred or "").strip(), *defaults]
    return list(dict.fromkeys(name for name in ordered if name))


def _model_id(name: str) -> str:
    return name.split("/")[-1] if name.startswith("models/") else name


class AskHealthQuestionUseCase:
    def __init__(
        self,
        *,
        models: ChatModelPort,
        preferred_model: str | None = None,
        candidates: Sequence[str] = DEFAULT_MODEL_CANDIDATES,
    ) -> None:
        self._models = models
        self._candidates = model_candidates(preferred_model, candidates)

    async def execute(self, question: str, language: str | None = None) -> ChatAnswer:
        resolved = resolve_language(language, question)
        prompt = build_prompt(question, resolved).render()

        failures: list[ModelCallError] = []
        for model in self._candidates:
            text = await self._try_model(model, prompt, failures)
            if text:
                return ChatAnswer(response=text, language=resolved, model=model)

        text, model = await self._try_discovered(prompt, failures)
        if text:
            return ChatAnswer(response=text, language=resolved, model=model)

        logger.error(f"chatbot: all {len(failures)} model attempts failed")
        raise ChatServiceError(failures)

    async def _try_model(self, model: str, prompt: str, failures: list[ModelCallError]) -> str:
        try:
            text = await self._models.generate(model, prompt)
        except ModelCallError as exc:
            logger.warning(f"chatbot: {exc}")
            failures.append(exc)
            return ""
        if not text.strip():
            failures.append(ModelCallError(model, "Empty response text"))
            return ""
        logger.info(f"chatbot: answered by model={model}")
        return text

    async def _try_discovered(
        self, prompt: str, failures: list[ModelCallError]
    ) -> tuple[str, str | None]:
        try:
            available = await self._models.list_models()
        except ModelCallError as exc:
            logger.warning(f"chatbot: {exc}")
            failures.append(exc)
            return "", None

        for info in available:
            if not info.name or not info.supports_generation():
                continue
            model = _model_id(info.name)
            if model in self._candidates:
                continue
            text = await self._try_model(model, prompt, failures)
            if text:
                return text, model
        return "", None

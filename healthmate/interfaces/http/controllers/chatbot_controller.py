# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from healthmate.application.use_cases.chat.ask_health_question import AskHealthQuestionUseCase
from healthmate.interfaces.http.dto.chat import ChatRequestDTO
from healthmate.shared.errors import ConfigError
from healthmate.shared.errors import ValidationError as RequestValidationError
from healthmate.shared.errors.validation import raise_validation_error
from healthmate.shared.utils.asyncio_utils import run_async


class ChatbotController:
    def __init__(self, *, ask_use_case: AskHealthQuestionUseCase, configured: bool) -> None:
        self._ask_use_case = ask_use_case
        self._configured = configured

    def ask(self) -> tuple[Response, int]:
        if not self._configured:
            raise ConfigError(
                "GEMINI_API_KEY",
                "Server missing GEMINI_API_KEY. Add it to the environment and restart.",
            )

        body = request.get_json(force=True, silent=True)
        if not isinstance(body, dict):
            raise RequestValidationError("Invalid JSON body", code="invalid_json")
        try:
            dto = ChatRequestDTO.model_validate(body)
        except ValidationError as exc:
            raise_validation_error(exc)

        answer = run_async(self._ask_use_case.execute(dto.question, dto.language))
        return jsonify(answer.to_dict()), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("chatbot", __name__, url_prefix="/api")
        bp.add_url_rule("/chatbot", view_func=self.ask, methods=["POST"], endpoint="ask")
        return bp

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from healthmate.application.use_cases.users.current_user import CurrentUserUseCase
from healthmate.application.use_cases.users.login_user import LoginUserUseCase
from healthmate.application.use_cases.users.register_user import RegisterUserUseCase
from healthmate.infrastructure.auth.session_cookie import SessionCookieManager
from healthmate.interfaces.http.dto.auth import (
    DEFAULT_MIN_PASSWORD_LENGTH,
    AuthActionDTO,
    AuthSuccessDTO,
    AuthUserDTO,
    SigninRequestDTO,
    SignupRequestDTO,
)
from healthmate.shared.errors import ValidationError as RequestValidationError
from healthmate.shared.errors.validation import raise_validation_error
from healthmate.shared.logging import logger


def _json_body() -> dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise RequestValidationError("Invalid JSON", code="invalid_json")
    return body


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        current_user_use_case: CurrentUserUseCase,
        cookies: SessionCookieManager,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._current_user_use_case = current_user_use_case
        self._cookies = cookies
        self._min_password_length = min_password_length

    def me(self) -> tuple[Response, int]:
        user = self._current_user_use_case.execute(self._cookies.read(request))
        if user is None:
            return jsonify(AuthUserDTO().model_dump()), HTTPStatus.UNAUTHORIZED
        return jsonify({"user": user.to_dict()}), HTTPStatus.OK

    def dispatch(self) -> tuple[Response, int]:
        body = _json_body()
        try:
            action = AuthActionDTO.model_validate(body).action
        except ValidationError as exc:
            raise_validation_error(exc)
        if not action:
            raise RequestValidationError("Missing action", code="missing_action")

        if action == "signup":
            return self.signup(body)
        if action == "signin":
            return self.signin(body)
        if action == "signout":
            return self.signout()
        raise RequestValidationError(
            "Unsupported action", code="unsupported_action", context={"action": action}
        )

    def signup(self, body: dict[str, Any]) -> tuple[Response, int]:
        try:
            dto = SignupRequestDTO.model_validate(
                body, context={"min_password_length": self._min_password_length}
            )
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._register_use_case.execute(dto.name, dto.email, dto.password)

        response = jsonify({"user": user.public_view().to_dict()})
        self._cookies.attach(response, token)
        return response, HTTPStatus.CREATED

    def signin(self, body: dict[str, Any]) -> tuple[Response, int]:
        try:
            dto = SigninRequestDTO.model_validate(body)
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._login_use_case.execute(dto.email, dto.password)

        response = jsonify({"user": user.public_view().to_dict()})
        self._cookies.attach(response, token)
        return response, HTTPStatus.OK

    def signout(self) -> tuple[Response, int]:
        response = jsonify(AuthSuccessDTO().model_dump())
        self._cookies.clear(response)
        logger.info("auth.signout: ok")
        return response, HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/auth", view_func=self.me, methods=["GET"], endpoint="me")
        bp.add_url_rule("/auth", view_func=self.dispatch, methods=["POST"], endpoint="dispatch")
        return bp

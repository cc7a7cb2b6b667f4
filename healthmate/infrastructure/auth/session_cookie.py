# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Request, Response

from healthmate.shared.config import TOKEN_TTL_SECONDS


class SessionCookieManager:
    """The session cookie's attributes are fixed when the manager is built."""

    def __init__(
        self,
        *,
        name: str = "auth_token",
        max_age: int = TOKEN_TTL_SECONDS,
        secure: bool = False,
    ) -> None:
        self.name = name
        self.max_age = max_age
        self.secure = secure

    def read(self, request: Request) -> str | None:
        return request.cookies.get(self.name) or None

    def attach(self, response: Response, token: str) -> Response:
        response.set_cookie(
            self.name,
            token,
            max_age=self.max_age,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="Lax",
        )
        return response

    def clear(self, response: Response) -> Response:
        response.set_cookie(
            self.name,
            "",
            max_age=0,
            expires=0,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="Lax",
        )
        return response

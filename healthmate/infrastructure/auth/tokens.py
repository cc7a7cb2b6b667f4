# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from healthmate.domain.users.entities import SessionClaims, User
from healthmate.domain.users.exceptions import InvalidTokenError
from healthmate.domain.users.repositories import TokenService
from healthmate.shared.config import TOKEN_TTL_SECONDS
from healthmate.shared.config.settings import AuthConfig
from healthmate.shared.errors.base import ConfigError

_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class JwtTokenService(TokenService):
    """Stateless HS256 session tokens; nothing is stored server-side."""

    def __init__(
        self,
        secret: str | None,
        *,
        algorithm: str = "HS256",
        ttl_seconds: int = TOKEN_TTL_SECONDS,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    @classmethod
    def from_config(cls, config: AuthConfig) -> JwtTokenService:
        return cls(
            config.jwt_secret,
            algorithm=config.jwt_algorithm,
            ttl_seconds=config.token_ttl_seconds,
        )

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def _require_secret(self) -> str:
        if not self._secret:
            raise ConfigError("JWT_SECRET")
        return self._secret

    def sign(self, user: User) -> str:
        return self.sign_payload(
            {"sub": user.id, "email": user.email, "name": user.name},
            self.ttl_seconds,
        )

    def sign_payload(self, payload: Mapping[str, Any], ttl_seconds: int) -> str:
        secret = self._require_secret()
        if not isinstance(payload, Mapping):
            raise TypeError(f"token payload must be an object, got {type(payload).__name__}")
        issued_at = self._clock()
        claims = {
            **payload,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=ttl_seconds),
        }
        return jwt.encode(claims, secret, algorithm=self._algorithm)

    def verify(self, token: str) -> SessionClaims:
        secret = self._require_secret()
        try:
            decoded = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError(context={"reason": type(exc).__name__}) from exc

        return SessionClaims(
            subject=str(decoded["sub"]),
            email=str(decoded.get("email") or ""),
            name=str(decoded.get("name") or ""),
            issued_at=datetime.fromtimestamp(decoded["iat"], UTC),
            expires_at=datetime.fromtimestamp(decoded["exp"], UTC),
        )

"""Use-case resolving the user behind a session token."""

from __future__ import annotations

from healthmate.domain.users.entities import PublicUser
from healthmate.domain.users.repositories import TokenService, UserRepository
from healthmate.shared.errors.base import AppError
from healthmate.shared.logging import logger


class CurrentUserUseCase:
    """Identity checks fail open to anonymous: any failure yields ``None``."""

    def __init__(self, *, users: UserRepository, tokens: TokenService) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, token: str | None) -> PublicUser | None:
        if not token:
            return None
        try:
            claims = self._tokens.verify(token)
            user = self._users.find_by_id(claims.subject)
        except AppError as exc:
            logger.info(f"auth.me: anonymous ({exc.code})")
            return None

        if user is None:
            logger.info(f"auth.me: anonymous (user_id={claims.subject} not found)")
            return None
        return user.public_view()

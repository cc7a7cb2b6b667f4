# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from healthmate.domain.users.entities import User, normalize_email
from healthmate.domain.users.exceptions import InvalidCredentialsError
from healthmate.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from healthmate.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> tuple[User, str]:
        email = normalize_email(email)
        user = self._users.find_by_email(email)
        password_valid = user is not None and self._password_hasher.verify(
            password, user.password_hash or ""
        )

        if not password_valid:
            logger.warning(f"auth.signin: invalid credentials email={email}")
            raise InvalidCredentialsError()

        token = self._tokens.sign(user)
        logger.info(f"auth.signin: ok user_id={user.id}")
        return user, token

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from healthmate.domain.users.entities import User, normalize_email
from healthmate.domain.users.exceptions import DuplicateEmailError
from healthmate.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from healthmate.shared.logging import logger


class RegisterUserUseCase:
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

    def execute(self, name: str, email: str, password: str) -> tuple[User, str]:
        email = normalize_email(email)
        if self._users.find_by_email(email):
            logger.info(f"auth.signup: email taken email={email}")
            raise DuplicateEmailError()

        hashed = self._password_hasher.hash(password)
        # a concurrent signup can still win the race; the unique index reports it
        user = self._users.add(name.strip(), email, hashed)
        token = self._tokens.sign(user)
        logger.info(f"auth.signup: ok user_id={user.id}")
        return user, token

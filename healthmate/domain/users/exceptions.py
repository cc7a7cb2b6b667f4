# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from healthmate.shared.errors.base import DomainError


class DuplicateEmailError(DomainError):
    code = "email_already_registered"
    status = HTTPStatus.CONFLICT
    message = "Email already registered"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid credentials"


class InvalidTokenError(DomainError):
    code = "invalid_token"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid or expired session"

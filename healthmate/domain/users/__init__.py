# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import PublicUser, SessionClaims, User, normalize_email
from .exceptions import DuplicateEmailError, InvalidCredentialsError, InvalidTokenError

__all__ = [
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PublicUser",
    "SessionClaims",
    "User",
    "normalize_email",
]

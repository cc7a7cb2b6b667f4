# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: str
    name: str
    email: str
    password_hash: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def public_view(self) -> PublicUser:
        return PublicUser(id=self.id, name=self.name, email=self.email)


@dataclass(slots=True, frozen=True)
class PublicUser:
    """What a client may see about a user: never the password hash."""

    id: str
    name: str
    email: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "email": self.email}


@dataclass(slots=True, frozen=True)
class SessionClaims:

    subject: str
    email: str
    name: str
    issued_at: datetime
    expires_at: datetime


def normalize_email(value: str) -> str:
    return value.strip().lower()

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from healthmate.domain.users.entities import User as DomainUser
from healthmate.domain.users.exceptions import DuplicateEmailError
from healthmate.domain.users.repositories import UserRepository
from healthmate.infrastructure.db import MongoDatabase
from healthmate.shared.errors.base import DatabaseError
from healthmate.shared.logging import logger

USERS_COLLECTION = "users"

_WITHOUT_HASH = {"passwordHash": 0}


def _to_domain(doc: Mapping[str, Any]) -> DomainUser:
    return DomainUser(
        id=str(doc["_id"]),
        name=str(doc.get("name") or ""),
        email=str(doc.get("email") or ""),
        password_hash=doc.get("passwordHash"),
        created_at=doc.get("createdAt"),
        updated_at=doc.get("updatedAt"),
    )


class MongoUserRepository(UserRepository):
    def __init__(
        self,
        database: MongoDatabase,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._database = database
        self._clock = clock
        self._indexes_ready = False
        self._lock = threading.Lock()

    def _collection(self) -> Collection[dict[str, Any]]:
        collection = self._database.collection(USERS_COLLECTION)
        if not self._indexes_ready:
            with self._lock:
                if not self._indexes_ready:
                    collection.create_index([("email", ASCENDING)], unique=True)
                    self._indexes_ready = True
                    logger.info("db.users: unique email index ensured")
        return collection

    def find_by_email(self, email: str) -> DomainUser | None:
        try:
            doc = self._collection().find_one({"email": email})
        except PyMongoError as exc:
            logger.exception("db.users: find_by_email failed")
            raise DatabaseError() from exc
        return _to_domain(doc) if doc else None

    def find_by_id(self, user_id: str) -> DomainUser | None:
        try:
            oid = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None
        try:
            doc = self._collection().find_one({"_id": oid}, projection=_WITHOUT_HASH)
        except PyMongoError as exc:
            logger.exception("db.users: find_by_id failed")
            raise DatabaseError() from exc
        return _to_domain(doc) if doc else None

    def add(self, name: str, email: str, password_hash: str) -> DomainUser:
        now = self._clock()
        doc = {
            "name": name,
            "email": email,
            "passwordHash": password_hash,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = self._collection().insert_one(doc)
        except DuplicateKeyError as exc:
            logger.info("db.users: duplicate email rejected by unique index")
            raise DuplicateEmailError() from exc
        except PyMongoError as exc:
            logger.exception("db.users: insert failed")
            raise DatabaseError() from exc
        return DomainUser(
            id=str(result.inserted_id),
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

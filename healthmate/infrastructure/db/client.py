# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from healthmate.shared.config.settings import DatabaseConfig
from healthmate.shared.errors.base import ConfigError, DatabaseError
from healthmate.shared.logging import logger

ClientFactory = Callable[..., MongoClient]


class MongoDatabase:
    """Owns the process-wide Mongo client; connects on first use."""

    def __init__(
        self,
        uri: str | None,
        name: str,
        *,
        server_selection_timeout_ms: int = 5000,
        client_factory: ClientFactory = MongoClient,
    ) -> None:
        self._uri = uri
        self._name = name
        self._timeout_ms = server_selection_timeout_ms
        self._client_factory = client_factory
        self._client: MongoClient | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> MongoDatabase:
        return cls(
            config.uri,
            config.name,
            server_selection_timeout_ms=config.server_selection_timeout_ms,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def database(self) -> Database:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = self._connect()
        return self._client[self._name]

    def _connect(self) -> MongoClient:
        if not self._uri:
            raise ConfigError("MONGODB_URI")
        client = self._client_factory(
            self._uri,
            serverSelectionTimeoutMS=self._timeout_ms,
            tz_aware=True,
        )
        logger.info(f"db.mongo: client created for database={self._name}")
        return client

    def collection(self, name: str) -> Collection[dict[str, Any]]:
        return self.database[name]

    def ping(self) -> bool:
        try:
            self.database.command("ping")
        except PyMongoError as exc:
            raise DatabaseError(f"Database unreachable: {exc}") from exc
        return True

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
                logger.info("db.mongo: client closed")

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify

from healthmate.infrastructure.db import MongoDatabase
from healthmate.shared.errors import AppError


class MiscController:
    def __init__(self, *, database: MongoDatabase) -> None:
        self._database = database

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            self._database.ping()
            status["database"] = "ok"
        except AppError as exc:
            status["ok"] = False
            status["database"] = f"error: {exc.message or exc.code}"
        return jsonify(status)

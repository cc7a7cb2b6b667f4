from __future__ import annotations

import os

import pytest

from healthmate.infrastructure.auth.tokens import JwtTokenService
from healthmate.tests.fakes import TEST_SECRET, InMemoryUserRepository


@pytest.fixture(autouse=True)
def _log_file(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("LOG_FILE", os.path.join(str(tmp_path), "test.log"))


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def token_service() -> JwtTokenService:
    return JwtTokenService(TEST_SECRET)

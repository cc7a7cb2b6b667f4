from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from healthmate.domain.users.entities import User
from healthmate.domain.users.exceptions import InvalidTokenError
from healthmate.infrastructure.auth.tokens import JwtTokenService
from healthmate.shared.config.settings import AuthConfig
from healthmate.shared.errors import ConfigError
from healthmate.tests.fakes import TEST_SECRET

USER = User(id="65f0c0ffee0000000000abcd", name="Asha", email="asha@example.com", password_hash="x")


def test_sign_and_verify_carries_identity() -> None:
    service = JwtTokenService(TEST_SECRET)

    claims = service.verify(service.sign(USER))

    assert claims.subject == USER.id
    assert claims.email == USER.email
    assert claims.name == USER.name
    assert claims.expires_at - claims.issued_at == timedelta(days=7)


def test_token_is_hs256_and_omits_password_hash() -> None:
    token = JwtTokenService(TEST_SECRET).sign(USER)

    assert jwt.get_unverified_header(token)["alg"] == "HS256"
    decoded = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
    assert "password_hash" not in decoded and "passwordHash" not in decoded


def test_expired_token_is_rejected() -> None:
    issued = datetime.now(UTC) - timedelta(days=8)
    stale = JwtTokenService(TEST_SECRET, clock=lambda: issued).sign(USER)

    with pytest.raises(InvalidTokenError) as exc_info:
        JwtTokenService(TEST_SECRET).verify(stale)

    assert exc_info.value.context == {"reason": "ExpiredSignatureError"}


def test_token_signed_with_other_secret_is_rejected() -> None:
    forged = JwtTokenService("another-secret-entirely").sign(USER)

    with pytest.raises(InvalidTokenError):
        JwtTokenService(TEST_SECRET).verify(forged)


def test_token_without_expiry_is_rejected() -> None:
    token = jwt.encode({"sub": USER.id, "iat": datetime.now(UTC)}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        JwtTokenService(TEST_SECRET).verify(token)


def test_missing_secret_raises_config_error() -> None:
    service = JwtTokenService(None)

    with pytest.raises(ConfigError) as exc_info:
        service.sign(USER)

    assert exc_info.value.setting == "JWT_SECRET"
    assert exc_info.value.to_dict() == {"error": "JWT_SECRET missing"}


def test_sign_payload_uses_given_ttl() -> None:
    service = JwtTokenService(TEST_SECRET)

    token = service.sign_payload({"reportId": "r-1"}, 3600)

    decoded = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
    assert decoded["reportId"] == "r-1"
    assert decoded["exp"] - decoded["iat"] == 3600


def test_from_config_reads_auth_settings() -> None:
    config = AuthConfig(JWT_SECRET=TEST_SECRET, TOKEN_TTL_SECONDS=120)

    service = JwtTokenService.from_config(config)

    assert service.ttl_seconds == 120
    assert service.verify(service.sign(USER)).subject == USER.id

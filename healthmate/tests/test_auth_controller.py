from __future__ import annotations

import pytest
from flask import Flask

from healthmate.application.use_cases.users.current_user import CurrentUserUseCase
from healthmate.application.use_cases.users.login_user import LoginUserUseCase
from healthmate.application.use_cases.users.register_user import RegisterUserUseCase
from healthmate.infrastructure.auth.session_cookie import SessionCookieManager
from healthmate.infrastructure.auth.tokens import JwtTokenService
from healthmate.interfaces.http.controllers.auth_controller import AuthController
from healthmate.shared.middleware.error_handler import configure_error_handling
from healthmate.tests.fakes import DeterministicHasher, InMemoryUserRepository

SIGNUP = {"action": "signup", "name": "Asha", "email": "asha@example.com", "password": "secret123"}


@pytest.fixture()
def flask_app(users: InMemoryUserRepository, token_service: JwtTokenService) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)

    hasher = DeterministicHasher()
    controller = AuthController(
        register_use_case=RegisterUserUseCase(
            users=users, tokens=token_service, password_hasher=hasher
        ),
        login_use_case=LoginUserUseCase(users=users, tokens=token_service, password_hasher=hasher),
        current_user_use_case=CurrentUserUseCase(users=users, tokens=token_service),
        cookies=SessionCookieManager(),
    )
    app.register_blueprint(controller.as_blueprint())
    return app


def test_signup_creates_user_and_sets_cookie(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.post("/api/auth", json={**SIGNUP, "email": " Asha@Example.COM "})

    assert response.status_code == 201
    user = response.get_json()["user"]
    assert user["name"] == "Asha"
    assert user["email"] == "asha@example.com"
    assert "password" not in user and "passwordHash" not in user

    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("auth_token=")
    assert "HttpOnly" in cookie
    assert "SameSite=Lax" in cookie
    assert "Path=/" in cookie
    assert "Max-Age=604800" in cookie
    assert "Secure" not in cookie


def test_signup_duplicate_email_returns_409(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        client.post("/api/auth", json=SIGNUP)
        response = client.post("/api/auth", json={**SIGNUP, "email": "ASHA@example.com"})

    assert response.status_code == 409
    assert response.get_json() == {"error": "Email already registered"}


def test_short_password_rejected_before_store_access(
    flask_app: Flask, users: InMemoryUserRepository
) -> None:
    with flask_app.test_client() as client:
        response = client.post("/api/auth", json={**SIGNUP, "password": "12345"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "Password must be at least 6 characters"
    assert users.calls == []


@pytest.mark.parametrize(
    "payload",
    [
        {"action": "signup", "email": "asha@example.com", "password": "secret123"},
        {"action": "signup", "name": "   ", "email": "asha@example.com", "password": "secret123"},
        {"action": "signup", "name": "Asha", "password": "secret123"},
    ],
)
def test_signup_requires_all_fields(flask_app: Flask, payload: dict[str, str]) -> None:
    with flask_app.test_client() as client:
        response = client.post("/api/auth", json=payload)

    assert response.status_code == 400
    assert response.get_json()["error"] == "Name, email and password are required"


def test_signin_requires_email_and_password(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.post("/api/auth", json={"action": "signin", "email": "a@b.co"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "Email and password are required"


def test_invalid_credentials_bodies_are_identical(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        client.post("/api/auth", json=SIGNUP)
        unknown = client.post(
            "/api/auth",
            json={"action": "signin", "email": "nobody@example.com", "password": "secret123"},
        )
        wrong = client.post(
            "/api/auth",
            json={"action": "signin", "email": "asha@example.com", "password": "nope-nope"},
        )

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.get_data() == wrong.get_data()
    assert unknown.get_json() == {"error": "Invalid credentials"}


def test_signin_then_me_returns_user(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        client.post("/api/auth", json=SIGNUP)
        client.delete_cookie("auth_token")

        signin = client.post(
            "/api/auth",
            json={"action": "signin", "email": "ASHA@example.com", "password": "secret123"},
        )
        me = client.get("/api/auth")

    assert signin.status_code == 200
    assert me.status_code == 200
    assert me.get_json()["user"] == signin.get_json()["user"]


def test_me_without_cookie_is_anonymous(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.get("/api/auth")

    assert response.status_code == 401
    assert response.get_json() == {"user": None}


def test_me_with_garbage_cookie_is_anonymous(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        client.set_cookie("auth_token", "garbage")
        response = client.get("/api/auth")

    assert response.status_code == 401
    assert response.get_json() == {"user": None}


def test_signout_clears_cookie(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        client.post("/api/auth", json=SIGNUP)
        response = client.post("/api/auth", json={"action": "signout"})
        me = client.get("/api/auth")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True}
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("auth_token=;")
    assert "Max-Age=0" in cookie
    assert me.status_code == 401


def test_signout_is_idempotent(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        first = client.post("/api/auth", json={"action": "signout"})
        second = client.post("/api/auth", json={"action": "signout"})

    assert first.status_code == second.status_code == 200


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({}, "Missing action"),
        ({"action": ""}, "Missing action"),
        ({"action": "delete"}, "Unsupported action"),
    ],
)
def test_dispatch_rejects_bad_actions(flask_app: Flask, payload: dict[str, str], message: str) -> None:
    with flask_app.test_client() as client:
        response = client.post("/api/auth", json=payload)

    assert response.status_code == 400
    assert response.get_json()["error"] == message


def test_non_json_body_is_rejected(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.post("/api/auth", data="not json", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid JSON"


def test_secure_cookie_flag_follows_manager() -> None:
    app = Flask(__name__)
    cookies = SessionCookieManager(secure=True, max_age=60)

    with app.test_request_context():
        response = cookies.attach(app.response_class(), "tok")

    cookie = response.headers["Set-Cookie"]
    assert "Secure" in cookie
    assert "Max-Age=60" in cookie


def test_padded_action_is_unsupported(flask_app: Flask, users: InMemoryUserRepository) -> None:
    with flask_app.test_client() as client:
        response = client.post("/api/auth", json={**SIGNUP, "action": " signup "})

    assert response.status_code == 400
    assert response.get_json() == {
        "error": "Unsupported action",
        "context": {"action": " signup "},
    }
    assert users.calls == []

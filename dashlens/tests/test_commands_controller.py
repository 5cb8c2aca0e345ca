from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from flask import Flask

from dashlens.application.services.password_hashing import Argon2PasswordHasher
from dashlens.application.use_cases.users.login_user import LoginUserUseCase
from dashlens.application.use_cases.users.logout_user import LogoutUserUseCase
from dashlens.application.use_cases.users.register_user import RegisterUserUseCase
from dashlens.domain.users.exceptions import HashingError
from dashlens.infrastructure.auth.session_store import InMemorySessionStore
from dashlens.interfaces.commands import AuthCommands
from dashlens.interfaces.http.controllers.commands_controller import CommandsController
from dashlens.shared.middleware.error_handler import configure_error_handling

from fakes import InMemoryUserRepository


def _build_app(commands: AuthCommands) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    app.register_blueprint(CommandsController(commands=commands).as_blueprint())
    return app


@pytest.fixture()
def flask_app() -> Flask:
    users = InMemoryUserRepository()
    sessions = InMemorySessionStore()
    hasher = Argon2PasswordHasher()
    commands = AuthCommands(
        password_hasher=hasher,
        sessions=sessions,
        register_use_case=RegisterUserUseCase(users=users, sessions=sessions, password_hasher=hasher),
        login_use_case=LoginUserUseCase(users=users, sessions=sessions, password_hasher=hasher),
        logout_use_case=LogoutUserUseCase(sessions=sessions),
    )
    return _build_app(commands)


def test_scenario_over_the_bridge(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        hashed = client.post(
            "/api/commands/hash_password", json={"password": "correct-horse-battery-staple"}
        ).get_json()["hash"]

        ok = client.post(
            "/api/commands/verify_password",
            json={"password": "correct-horse-battery-staple", "hash": hashed},
        )
        bad = client.post(
            "/api/commands/verify_password", json={"password": "wrong-password", "hash": hashed}
        )
        assert ok.get_json() == {"valid": True}
        assert bad.get_json() == {"valid": False}

        set_resp = client.post(
            "/api/commands/set_session",
            json={"session": {"user_id": 1, "username": "alice", "logged_in": True}},
        )
        assert set_resp.status_code == 200
        assert client.post("/api/commands/check_auth_status").get_json() is True
        assert client.post("/api/commands/get_current_user").get_json() == {
            "user_id": 1,
            "username": "alice",
            "logged_in": True,
        }

        client.post("/api/commands/clear_session")
        assert client.post("/api/commands/check_auth_status").get_json() is False
        assert client.post("/api/commands/get_current_user").get_json() is None


def test_malformed_hash_reports_not_valid(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.post(
            "/api/commands/verify_password", json={"password": "x", "hash": "not-a-valid-hash"}
        )

    assert response.status_code == 200
    assert response.get_json() == {"valid": False}


@pytest.mark.parametrize(
    ("command", "payload", "field"),
    [
        ("verify_password", {"password": "x"}, "hash"),
        ("set_session", {"session": {"user_id": 1, "username": "alice"}}, "session.logged_in"),
        ("set_session", {"session": {"user_id": 0, "username": "a", "logged_in": True}}, "session.user_id"),
        ("login", {"username": "alice"}, "password"),
    ],
)
def test_invalid_payload_returns_422(flask_app: Flask, command: str, payload: dict, field: str) -> None:
    with flask_app.test_client() as client:
        response = client.post(f"/api/commands/{command}", json=payload)

    assert response.status_code == 422
    body = response.get_json()
    assert body["error"] == "validation_error"
    assert field in body["context"]["fields"]


def test_hashing_failure_is_reported_as_error() -> None:
    commands = MagicMock(spec=AuthCommands)
    commands.hash_password.side_effect = HashingError("memory allocation error")
    app = _build_app(commands)

    with app.test_client() as client:
        response = client.post("/api/commands/hash_password", json={"password": "secret123"})

    assert response.status_code == 500
    assert response.get_json() == {
        "error": "hashing_failed",
        "message": "Failed to hash password: memory allocation error",
    }


def test_register_and_login_responses(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        registered = client.post(
            "/api/commands/register", json={"username": "alice", "password": "secret123"}
        ).get_json()
        rejected = client.post(
            "/api/commands/login", json={"username": "alice", "password": "wrong-one"}
        ).get_json()
        logged_out = client.post("/api/commands/logout").get_json()

    assert registered["success"] is True
    assert registered["user"] == {"user_id": 1, "username": "alice", "logged_in": True}
    assert rejected == {"success": False, "message": "Unable to sign in", "user": None}
    assert logged_out["success"] is True


def test_lone_surrogate_password_over_the_bridge(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        resp = client.post("/api/commands/hash_password", json={"password": "\ud800"})
        assert resp.status_code == 200
        hashed = resp.get_json()["hash"]

        valid = client.post(
            "/api/commands/verify_password", json={"password": "\ud800", "hash": hashed}
        ).get_json()

    assert valid == {"valid": True}

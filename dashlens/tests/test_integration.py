from __future__ import annotations

from pathlib import Path

import pytest
from flask import Flask

from dashlens.app import create_app
from dashlens.container import Container
from dashlens.shared.config import AppConfig, DatabaseConfig


@pytest.fixture()
def container(tmp_path: Path):
    config = AppConfig(
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'dashlens.db'}"),
        log_file=tmp_path / "dashlens.log",
    )
    c = Container(config)
    yield c
    c.database.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container)


def test_create_app_migrates_schema(app: Flask, container: Container) -> None:
    assert container.migration_runner.pending(container.database.engine) == []
    assert app.extensions["dashlens"] is container


def test_register_login_logout_flow(app: Flask, container: Container) -> None:
    with app.test_client() as client:
        register = client.post(
            "/api/commands/register",
            json={"username": "alice", "password": "correct-horse-battery-staple"},
        )
        assert register.status_code == 200
        assert register.get_json()["user"] == {"user_id": 1, "username": "alice", "logged_in": True}
        assert client.post("/api/commands/check_auth_status").get_json() is True

        assert client.post("/api/commands/logout").get_json()["success"] is True
        assert client.post("/api/commands/check_auth_status").get_json() is False

        login = client.post(
            "/api/commands/login",
            json={"username": "alice", "password": "correct-horse-battery-staple"},
        )
        assert login.get_json()["success"] is True
        assert client.post("/api/commands/get_current_user").get_json()["username"] == "alice"

    stored = container.user_repository.find_by_username("alice")
    assert stored is not None
    assert stored.password_hash.startswith("$argon2id$")


def test_corrupted_stored_hash_cannot_sign_in(app: Flask, container: Container) -> None:
    with app.test_client() as client:
        client.post(
            "/api/commands/register", json={"username": "alice", "password": "secret123"}
        )
        client.post("/api/commands/logout")

        with container.database.engine.begin() as conn:
            conn.exec_driver_sql("UPDATE users SET password_hash = 'corrupted' WHERE username = 'alice'")

        login = client.post(
            "/api/commands/login", json={"username": "alice", "password": "secret123"}
        )

    assert login.get_json() == {"success": False, "message": "Unable to sign in", "user": None}
    assert container.session_store.is_authenticated() is False


def test_each_container_has_its_own_session(tmp_path: Path) -> None:
    first = Container(AppConfig(database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'a.db'}")))
    second = Container(AppConfig(database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'b.db'}")))

    assert first.session_store is not second.session_store
    assert first.session_store is first.auth_commands._sessions

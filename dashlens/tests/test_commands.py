from __future__ import annotations

import pytest

from dashlens.application.services.password_hashing import Argon2PasswordHasher
from dashlens.application.use_cases.users.login_user import LoginUserUseCase
from dashlens.application.use_cases.users.logout_user import LogoutUserUseCase
from dashlens.application.use_cases.users.register_user import RegisterUserUseCase
from dashlens.infrastructure.auth.session_store import InMemorySessionStore
from dashlens.interfaces.commands import AuthCommands
from dashlens.interfaces.http.dto.commands import AuthSessionDTO

from fakes import InMemoryUserRepository


@pytest.fixture()
def commands() -> AuthCommands:
    users = InMemoryUserRepository()
    sessions = InMemorySessionStore()
    hasher = Argon2PasswordHasher()
    return AuthCommands(
        password_hasher=hasher,
        sessions=sessions,
        register_use_case=RegisterUserUseCase(users=users, sessions=sessions, password_hasher=hasher),
        login_use_case=LoginUserUseCase(users=users, sessions=sessions, password_hasher=hasher),
        logout_use_case=LogoutUserUseCase(sessions=sessions),
    )


def test_end_to_end_scenario(commands: AuthCommands) -> None:
    hashed = commands.hash_password("correct-horse-battery-staple").hash

    assert commands.verify_password("correct-horse-battery-staple", hashed).valid is True
    assert commands.verify_password("wrong-password", hashed).valid is False

    commands.set_session(AuthSessionDTO(user_id=1, username="alice", logged_in=True))
    assert commands.check_auth_status() is True
    assert commands.get_current_user() == AuthSessionDTO(user_id=1, username="alice", logged_in=True)

    commands.clear_session()
    assert commands.check_auth_status() is False
    assert commands.get_current_user() is None


def test_verify_with_malformed_hash_is_not_valid(commands: AuthCommands) -> None:
    assert commands.verify_password("anything", "not-a-valid-hash").valid is False


def test_register_login_logout(commands: AuthCommands) -> None:
    registered = commands.register("alice", "secret123")
    assert registered.success is True
    assert registered.user == AuthSessionDTO(user_id=1, username="alice", logged_in=True)

    duplicate = commands.register("alice", "secret123")
    assert duplicate.success is False
    assert duplicate.message == "Username already exists"

    assert commands.logout().success is True
    assert commands.check_auth_status() is False

    rejected = commands.login("alice", "nope-nope")
    assert rejected.success is False
    assert rejected.message == "Unable to sign in"
    assert rejected.user is None

    accepted = commands.login("alice", "secret123")
    assert accepted.success is True
    assert commands.get_current_user().username == "alice"


def test_register_validation_message(commands: AuthCommands) -> None:
    response = commands.register("", "secret123")

    assert response.success is False
    assert response.message == "Username cannot be empty"


def test_register_with_poisoned_session_store_reports_sign_in_failure() -> None:
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
    sessions._poisoned = True

    result = commands.register("alice", "secret123")

    assert result.success is False
    assert result.message == "Unable to sign in"
    assert result.user is None
    assert users.find_by_username("alice") is not None

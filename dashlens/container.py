"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from dashlens.application.services.password_hashing import Argon2PasswordHasher
from dashlens.application.use_cases.users.login_user import LoginUserUseCase
from dashlens.application.use_cases.users.logout_user import LogoutUserUseCase
from dashlens.application.use_cases.users.register_user import RegisterUserUseCase
from dashlens.infrastructure.auth.session_store import InMemorySessionStore
from dashlens.infrastructure.db import Database, MigrationRunner
from dashlens.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from dashlens.interfaces.commands import AuthCommands
from dashlens.interfaces.http.controllers.commands_controller import CommandsController
from dashlens.shared.config import AppConfig, load_config


class Container:
    """Owns every long-lived object of one application instance.

    The session store lives here rather than at module level, so each
    container (and each test) gets its own signed-in state.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config

    @cached_property
    def config(self) -> AppConfig:
        return self._config or load_config()

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def migration_runner(self) -> MigrationRunner:
        return MigrationRunner()

    @cached_property
    def password_hasher(self) -> Argon2PasswordHasher:
        return Argon2PasswordHasher()

    @cached_property
    def session_store(self) -> InMemorySessionStore:
        return InMemorySessionStore(lock_timeout=self.config.auth.session_lock_timeout)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            sessions=self.session_store,
            password_hasher=self.password_hasher,
            min_password_length=self.config.auth.min_password_length,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_store)

    @cached_property
    def auth_commands(self) -> AuthCommands:
        return AuthCommands(
            password_hasher=self.password_hasher,
            sessions=self.session_store,
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
        )

    @cached_property
    def commands_controller(self) -> CommandsController:
        return CommandsController(commands=self.auth_commands)

    def migrate(self) -> list[int]:
        return self.migration_runner.apply(self.database.engine)

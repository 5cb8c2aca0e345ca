# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TypeVar

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel, ValidationError

from dashlens.interfaces.commands import AuthCommands
from dashlens.interfaces.http.dto.commands import (
    CredentialsRequestDTO,
    HashPasswordRequestDTO,
    SetSessionRequestDTO,
    VerifyPasswordRequestDTO,
)
from dashlens.shared.errors.validation import raise_validation_error

_DTO = TypeVar("_DTO", bound=BaseModel)


def _parse(model: type[_DTO]) -> _DTO:
    try:
        return model.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


class CommandsController:
    """Local JSON bridge: one ``POST /api/commands/<name>`` per command."""

    def __init__(self, *, commands: AuthCommands) -> None:
        self._commands = commands

    def hash_password(self) -> tuple[Response, int]:
        dto = _parse(HashPasswordRequestDTO)
        return jsonify(self._commands.hash_password(dto.password).model_dump()), 200

    def verify_password(self) -> tuple[Response, int]:
        dto = _parse(VerifyPasswordRequestDTO)
        result = self._commands.verify_password(dto.password, dto.hash)
        return jsonify(result.model_dump()), 200

    def set_session(self) -> tuple[Response, int]:
        dto = _parse(SetSessionRequestDTO)
        self._commands.set_session(dto.session)
        return jsonify(None), 200

    def clear_session(self) -> tuple[Response, int]:
        self._commands.clear_session()
        return jsonify(None), 200

    def get_current_user(self) -> tuple[Response, int]:
        current = self._commands.get_current_user()
        return jsonify(current.model_dump() if current else None), 200

    def check_auth_status(self) -> tuple[Response, int]:
        return jsonify(self._commands.check_auth_status()), 200

    def register(self) -> tuple[Response, int]:
        dto = _parse(CredentialsRequestDTO)
        return jsonify(self._commands.register(dto.username, dto.password).model_dump()), 200

    def login(self) -> tuple[Response, int]:
        dto = _parse(CredentialsRequestDTO)
        return jsonify(self._commands.login(dto.username, dto.password).model_dump()), 200

    def logout(self) -> tuple[Response, int]:
        return jsonify(self._commands.logout().model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("commands", __name__, url_prefix="/api/commands")
        for name in (
            "hash_password",
            "verify_password",
            "set_session",
            "clear_session",
            "get_current_user",
            "check_auth_status",
            "register",
            "login",
            "logout",
        ):
            bp.add_url_rule(f"/{name}", endpoint=name, view_func=getattr(self, name), methods=["POST"])
        return bp

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from dashlens.domain.users.entities import AuthSession


class AuthSessionDTO(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: int = Field(gt=0)
    username: str = Field(min_length=1)
    logged_in: bool

    @classmethod
    def from_domain(cls, session: AuthSession) -> AuthSessionDTO:
        return cls(user_id=session.user_id, username=session.username, logged_in=session.logged_in)

    def to_domain(self) -> AuthSession:
        return AuthSession(user_id=self.user_id, username=self.username, logged_in=self.logged_in)


class HashPasswordRequestDTO(BaseModel):
    password: str


class HashResponseDTO(BaseModel):
    hash: str


class VerifyPasswordRequestDTO(BaseModel):
    password: str
    hash: str


class VerifyResponseDTO(BaseModel):
    valid: bool


class SetSessionRequestDTO(BaseModel):
    session: AuthSessionDTO


class CredentialsRequestDTO(BaseModel):
    username: str = Field(max_length=64)
    password: str = Field(max_length=1024)


class AuthResponseDTO(BaseModel):
    success: bool
    message: str
    user: AuthSessionDTO | None = None

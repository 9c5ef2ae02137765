from pydantic import BaseModel

from .base import CamelModel


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class SessionStatus(CamelModel):
    authenticated: bool
    username: str | None = None


class CredentialsOut(CamelModel):
    username: str


class CredentialsUpdate(BaseModel):
    username: str | None = None
    password: str | None = None

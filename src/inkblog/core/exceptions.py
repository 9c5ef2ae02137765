from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from fastapi import HTTPException, status


@dataclass(eq=False)
class BlogException(Exception):
    """Base for errors raised by services; each subclass fixes its HTTP status."""

    message: str
    code: str = "error"
    details: dict | None = None

    status_code: ClassVar[int] = status.HTTP_400_BAD_REQUEST

    def __str__(self) -> str:
        return self.message


class ValidationError(BlogException):
    code = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(BlogException):
    """Missing, expired or foreign admin session."""

    code = "authentication_error"
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(BlogException):
    """Unknown id, or a draft post requested through a public route."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class RateLimitError(BlogException):
    code = "rate_limited"
    status_code = status.HTTP_429_TOO_MANY_REQUESTS


class DatabaseError(BlogException):
    code = "database_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def map_exception_to_http(exc: BlogException) -> HTTPException:
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}

    return HTTPException(status_code=exc.status_code, detail=exc.message, headers=headers or {})

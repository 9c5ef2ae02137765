from datetime import UTC, datetime, timedelta
from typing import Any
import uuid

import jwt

from inkblog.core.config_models import SecurityConfig
from inkblog.core.exceptions import AuthenticationError

SESSION_TOKEN_TYP = "admin"


def _now_utc() -> datetime:
    return datetime.now(UTC)


def make_jti() -> str:
    """Generate a new UUID4 string to be used as JWT JTI."""
    return str(uuid.uuid4())


def encode_session_token(username: str, security: SecurityConfig) -> str:
    """
    Create an admin session token with claims: sub, iat, exp, jti, typ=admin.
    """
    issued_at = _now_utc()
    expires_at = issued_at + timedelta(days=security.session_max_age_days)

    payload: dict[str, Any] = {
        "sub": username,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
        "jti": make_jti(),
        "typ": SESSION_TOKEN_TYP,
    }
    return jwt.encode(payload, security.secret_key, algorithm=security.algorithm)


def decode_session_token(token: str, security: SecurityConfig) -> dict[str, Any]:
    """
    Decode and validate the session token signature, expiry and type.
    PyJWT exceptions are mapped to AuthenticationError (HTTP 401).
    """
    try:
        decoded: dict[str, Any] = jwt.decode(
            token,
            security.secret_key,
            algorithms=[security.algorithm],
            options={"require": ["sub", "exp", "typ"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Session expired") from None
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid session") from None

    if decoded.get("typ") != SESSION_TOKEN_TYP:
        raise AuthenticationError("Invalid session")
    return decoded

from fastapi import Response

from inkblog.core.config_models import SecurityConfig


def set_session_cookie(response: Response, token: str, security: SecurityConfig) -> None:
    response.set_cookie(
        key=security.cookie_name,
        value=token,
        max_age=security.session_max_age_seconds,
        httponly=True,
        secure=security.cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, security: SecurityConfig) -> None:
    response.set_cookie(
        key=security.cookie_name,
        value="",
        max_age=0,
        httponly=True,
        secure=security.cookie_secure,
        samesite="lax",
        path="/",
    )

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.core.config import Settings
from inkblog.core.exceptions import AuthenticationError
from inkblog.db.database import get_db
from inkblog.services import auth_service

logger = logging.getLogger(__name__)

# HTTP Bearer scheme (no auto_error to control 401 shape)
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings instance the running application was created with."""
    return request.app.state.settings


def extract_session_token(
    request: Request, credentials: HTTPAuthorizationCredentials | None, cookie_name: str
) -> str | None:
    """Session token from the cookie, falling back to an ``Authorization: Bearer`` header."""
    token = request.cookies.get(cookie_name)
    if token:
        return token
    if credentials is not None and credentials.scheme.lower() == "bearer" and credentials.credentials:
        return credentials.credentials
    return None


async def require_admin(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> str:
    """
    FastAPI dependency that:
    - Reads the session token (cookie or Bearer header)
    - Verifies signature, expiry and token type
    - Checks the subject is still the current admin
    Returns the admin username.
    """
    token = extract_session_token(request, credentials, settings.security.cookie_name)
    if not token:
        raise AuthenticationError("Unauthorized")
    return await auth_service.authenticate_token(db, token, settings.security)


async def get_optional_admin(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> str | None:
    """Admin username when the request carries a valid session, else None."""
    token = extract_session_token(request, credentials, settings.security.cookie_name)
    if not token:
        return None
    try:
        return await auth_service.authenticate_token(db, token, settings.security)
    except AuthenticationError as e:
        logger.debug("Ignoring invalid session token: %s", e)
        return None


AdminUsername = Annotated[str, Depends(require_admin)]
OptionalAdmin = Annotated[str | None, Depends(get_optional_admin)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Response

from inkblog.api.utils.cookies import clear_session_cookie, set_session_cookie
from inkblog.core.deps import AppSettings, DbSession, OptionalAdmin
from inkblog.schemas.auth import LoginRequest, SessionStatus
from inkblog.schemas.responses import MessageResponse
from inkblog.services import auth_service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=SessionStatus,
    summary="Log in as admin",
    response_model_exclude_none=True,
)
async def login(
    response: Response,
    db: DbSession,
    settings: AppSettings,
    payload: Annotated[LoginRequest, Body(...)],
) -> SessionStatus:
    token = await auth_service.login(db, payload, settings.security)
    set_session_cookie(response, token, settings.security)
    return SessionStatus(authenticated=True, username=payload.username)


@router.get(
    "/login",
    response_model=SessionStatus,
    summary="Current session status",
    response_model_exclude_none=True,
)
async def session_status(admin_user: OptionalAdmin) -> SessionStatus:
    return SessionStatus(authenticated=admin_user is not None, username=admin_user)


@router.post("/logout", response_model=MessageResponse, summary="Log out")
async def logout(response: Response, settings: AppSettings) -> MessageResponse:
    clear_session_cookie(response, settings.security)
    return MessageResponse(success=True)

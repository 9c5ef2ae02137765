from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, Response

from inkblog.api.utils.cookies import set_session_cookie
from inkblog.api.utils.request_context import parse_int
from inkblog.core.deps import AppSettings, DbSession, require_admin
from inkblog.core.jwt import encode_session_token
from inkblog.db.repositories.comment_repository import ADMIN_DEFAULT_PAGE_SIZE
from inkblog.db.repositories.like_repository import ADMIN_LIKES_PAGE_SIZE
from inkblog.schemas.admin import AdminCommentListResponse, AdminLikeListResponse, StatsResponse
from inkblog.schemas.auth import CredentialsOut, CredentialsUpdate
from inkblog.schemas.responses import MessageResponse
from inkblog.services import admin_service, auth_service, comment_service

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/credentials", response_model=CredentialsOut, summary="Current admin username")
async def get_credentials(db: DbSession) -> CredentialsOut:
    return await auth_service.get_credentials(db)


@router.put("/credentials", response_model=CredentialsOut, summary="Change admin username/password")
async def update_credentials(
    response: Response,
    db: DbSession,
    settings: AppSettings,
    payload: Annotated[CredentialsUpdate, Body(...)],
) -> CredentialsOut:
    updated = await auth_service.update_credentials(db, payload)
    # Sessions are bound to the username, so the caller gets a fresh one
    set_session_cookie(response, encode_session_token(updated.username, settings.security), settings.security)
    return updated


@router.get("/comments", response_model=AdminCommentListResponse, summary="Moderation listing")
async def list_comments(
    db: DbSession,
    q: str | None = Query(None),
    page: str | None = Query(None),
    page_size: str | None = Query(None, alias="pageSize"),
) -> AdminCommentListResponse:
    return await admin_service.list_comments(
        db, q, parse_int(page, 1), parse_int(page_size, ADMIN_DEFAULT_PAGE_SIZE)
    )


@router.delete("/comments/{comment_id}", response_model=MessageResponse, summary="Delete a comment")
async def delete_comment(comment_id: str, db: DbSession) -> MessageResponse:
    await comment_service.delete_comment(db, comment_id)
    return MessageResponse(success=True)


@router.get("/likes", response_model=AdminLikeListResponse, summary="Posts ranked by likes")
async def list_likes(
    db: DbSession,
    page: str | None = Query(None),
    page_size: str | None = Query(None, alias="pageSize"),
) -> AdminLikeListResponse:
    return await admin_service.list_liked_posts(db, parse_int(page, 1), parse_int(page_size, ADMIN_LIKES_PAGE_SIZE))


@router.get("/stats", response_model=StatsResponse, summary="Dashboard numbers for one day")
async def get_stats(
    db: DbSession,
    date: str | None = Query(None, description="YYYY-MM-DD, defaults to today (UTC)"),
) -> StatsResponse:
    return await admin_service.get_stats(db, date)

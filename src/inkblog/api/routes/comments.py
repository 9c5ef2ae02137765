from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, status

from inkblog.core.deps import AppSettings, DbSession
from inkblog.schemas.comments import CommentCreate, CommentEnvelope, CommentListResponse
from inkblog.services import comment_service

router = APIRouter(prefix="/posts/{post_id}/comments", tags=["Comments"])


@router.get("", response_model=CommentListResponse, summary="List comments of a post")
async def list_comments(post_id: str, db: DbSession) -> CommentListResponse:
    return await comment_service.list_comments(db, post_id)


@router.post(
    "",
    response_model=CommentEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment",
    description="Limited to a few comments per device per UTC day.",
)
async def add_comment(
    post_id: str,
    db: DbSession,
    settings: AppSettings,
    payload: Annotated[CommentCreate, Body(...)],
) -> CommentEnvelope:
    comment = await comment_service.add_comment(db, post_id, payload, settings.blog)
    return CommentEnvelope(comment=comment)

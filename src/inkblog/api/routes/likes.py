from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Header

from inkblog.core.deps import DbSession
from inkblog.schemas.likes import LikeStatus, LikeToggle
from inkblog.services import like_service

router = APIRouter(prefix="/posts/{post_id}/likes", tags=["Likes"])


@router.get("", response_model=LikeStatus, summary="Like count and whether this device liked")
async def get_like_status(
    post_id: str,
    db: DbSession,
    x_device_id: Annotated[str | None, Header()] = None,
) -> LikeStatus:
    return await like_service.get_like_status(db, post_id, x_device_id)


@router.post("", response_model=LikeStatus, summary="Toggle like")
async def toggle_like(post_id: str, db: DbSession, payload: Annotated[LikeToggle, Body(...)]) -> LikeStatus:
    return await like_service.toggle_like(db, post_id, payload.device_id)

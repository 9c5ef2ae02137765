from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, status

from inkblog.api.utils.request_context import parse_flag, parse_int
from inkblog.core.deps import AdminUsername, DbSession, OptionalAdmin, require_admin
from inkblog.core.exceptions import AuthenticationError
from inkblog.db.repositories.post_repository import DEFAULT_PAGE_SIZE
from inkblog.schemas.posts import (
    AdjacentPostsResponse,
    PostCreate,
    PostEnvelope,
    PostListResponse,
    PostOut,
    PostUpdate,
)
from inkblog.schemas.responses import MessageResponse
from inkblog.services import post_service

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get(
    "",
    response_model=PostListResponse,
    summary="List posts",
    description="Published posts newest first, filtered by category or keyword. "
    "With admin=true (and a session) every post including drafts is returned.",
    response_model_exclude_none=True,
)
async def list_posts(
    db: DbSession,
    admin_user: OptionalAdmin,
    category: str | None = Query(None),
    keyword: str | None = Query(None),
    page: str | None = Query(None, description="Page number starting from 1"),
    page_size: str | None = Query(None, alias="pageSize", description="Page size (1..50)"),
    admin: str | None = Query(None),
) -> PostListResponse:
    if parse_flag(admin):
        if admin_user is None:
            raise AuthenticationError("Unauthorized")
        if page is None and page_size is None:
            return await post_service.list_all_posts(db)
        return await post_service.list_all_posts(db, parse_int(page, 1), parse_int(page_size, DEFAULT_PAGE_SIZE))

    return await post_service.list_published_posts(
        db,
        category=category,
        keyword=keyword,
        page=parse_int(page, 1),
        page_size=parse_int(page_size, DEFAULT_PAGE_SIZE),
    )


@router.post(
    "",
    response_model=PostOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create post",
    dependencies=[Depends(require_admin)],
)
async def create_post(db: DbSession, payload: Annotated[PostCreate, Body(...)]) -> PostOut:
    return await post_service.create_post(db, payload)


@router.get("/{post_id}", response_model=PostEnvelope, summary="Get post by ID")
async def get_post(
    post_id: str,
    db: DbSession,
    admin_user: OptionalAdmin,
    admin: str | None = Query(None),
) -> PostEnvelope:
    include_unpublished = parse_flag(admin) and admin_user is not None
    post = await post_service.get_post(db, post_id, include_unpublished=include_unpublished)
    return PostEnvelope(post=post)


@router.put("/{post_id}", response_model=PostOut, summary="Update post (partial)")
async def update_post(
    post_id: str,
    db: DbSession,
    _admin: AdminUsername,
    payload: Annotated[PostUpdate, Body(...)],
) -> PostOut:
    return await post_service.update_post(db, post_id, payload)


@router.delete("/{post_id}", response_model=MessageResponse, summary="Delete post")
async def delete_post(post_id: str, db: DbSession, _admin: AdminUsername) -> MessageResponse:
    return await post_service.delete_post(db, post_id)


@router.get(
    "/{post_id}/adjacent",
    response_model=AdjacentPostsResponse,
    summary="Previous (newer) and next (older) published posts",
)
async def get_adjacent_posts(
    post_id: str, db: DbSession, category: str | None = Query(None)
) -> AdjacentPostsResponse:
    return await post_service.get_adjacent_posts(db, post_id, category)


@router.post("/{post_id}/views", response_model=MessageResponse, summary="Count a view")
async def record_view(post_id: str, db: DbSession) -> MessageResponse:
    return await post_service.record_view(db, post_id)

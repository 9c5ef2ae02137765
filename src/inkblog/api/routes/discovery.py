from __future__ import annotations

from fastapi import APIRouter, Query

from inkblog.api.utils.request_context import parse_flag
from inkblog.core.deps import DbSession, OptionalAdmin
from inkblog.core.exceptions import AuthenticationError
from inkblog.schemas.posts import CategoriesResponse, SearchResponse
from inkblog.services import post_service

router = APIRouter(tags=["Discovery"])


@router.get("/categories", response_model=CategoriesResponse, summary="Categories of published posts")
async def list_categories(db: DbSession) -> CategoriesResponse:
    return await post_service.get_categories(db)


@router.get("/search", response_model=SearchResponse, summary="Search posts")
async def search_posts(
    db: DbSession,
    admin_user: OptionalAdmin,
    q: str | None = Query(None, description="Substring matched against title, content and keywords"),
    admin: str | None = Query(None),
) -> SearchResponse:
    include_unpublished = parse_flag(admin)
    if include_unpublished and admin_user is None:
        raise AuthenticationError("Unauthorized")
    return await post_service.search_posts(db, q, include_unpublished=include_unpublished)

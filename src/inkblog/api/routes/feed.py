from __future__ import annotations

from fastapi import APIRouter, Response

from inkblog.core.deps import AppSettings, DbSession
from inkblog.services import feed_service

router = APIRouter(tags=["Feed"])


@router.get("/feed.xml", response_class=Response, summary="RSS 2.0 feed of published posts")
async def rss_feed(db: DbSession, settings: AppSettings) -> Response:
    xml = await feed_service.build_feed(db, settings.blog)
    return Response(content=xml, media_type="application/rss+xml; charset=utf-8")

from datetime import date
import re

from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.core.exceptions import ValidationError
from inkblog.db.models import Comment
from inkblog.db.repositories import comment_repository, like_repository, stats_repository
from inkblog.db.repositories.post_repository import clamp_pagination
from inkblog.db.utils import today_utc
from inkblog.schemas.admin import (
    AdminCommentListResponse,
    AdminCommentOut,
    AdminLikeListResponse,
    DayStats,
    LikedPostOut,
    StatsOverview,
    StatsResponse,
    TopViewedPost,
)
from inkblog.schemas.comments import CommentOut

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _admin_comment(comment: Comment, post_title: str) -> AdminCommentOut:
    return AdminCommentOut(post_title=post_title, **CommentOut.model_validate(comment).model_dump())


def parse_stats_date(value: str | None) -> date:
    """Parse ``YYYY-MM-DD``; empty means today (UTC)."""
    value = (value or "").strip()
    if not value:
        return today_utc()
    if not _DATE_RE.fullmatch(value):
        raise ValidationError("Invalid date, expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError("Invalid date, expected YYYY-MM-DD") from None


async def list_comments(
    db: AsyncSession,
    query: str | None = None,
    page: int = 1,
    page_size: int = comment_repository.ADMIN_DEFAULT_PAGE_SIZE,
) -> AdminCommentListResponse:
    page, page_size = clamp_pagination(page, page_size)
    rows, total = await comment_repository.list_admin_comments(
        db, (query or "").strip() or None, page=page, page_size=page_size
    )
    return AdminCommentListResponse(
        comments=[_admin_comment(c, title) for c, title in rows],
        total=total,
        page=page,
        page_size=page_size,
    )


async def list_liked_posts(
    db: AsyncSession, page: int = 1, page_size: int = like_repository.ADMIN_LIKES_PAGE_SIZE
) -> AdminLikeListResponse:
    page, page_size = clamp_pagination(page, page_size)
    items, total = await like_repository.list_liked_posts(db, page=page, page_size=page_size)
    return AdminLikeListResponse(
        items=[LikedPostOut.model_validate(item) for item in items],
        total=total,
        page=page,
        page_size=page_size,
    )


async def get_stats(db: AsyncSession, day_value: str | None = None) -> StatsResponse:
    day = parse_stats_date(day_value)

    overview = await stats_repository.get_overview(db)
    day_counts = await stats_repository.get_day_counts(db, day)
    top_viewed = await stats_repository.get_top_viewed(db, day)
    recent = await stats_repository.get_recent_comments(db, day)

    return StatsResponse(
        overview=StatsOverview(**overview),
        day=DayStats(date=day.isoformat(), **day_counts),
        views_top=[TopViewedPost.model_validate(item) for item in top_viewed],
        recent_comments=[_admin_comment(c, title) for c, title in recent],
    )

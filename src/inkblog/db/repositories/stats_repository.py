from datetime import date
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.db.models import Comment, Like, Post, ViewLog
from inkblog.db.repositories.decorators import handle_db_errors
from inkblog.db.utils import day_bounds

logger = logging.getLogger(__name__)

TOP_VIEWED_LIMIT: int = 10
RECENT_COMMENTS_LIMIT: int = 20


async def _scalar_int(db: AsyncSession, stmt) -> int:
    return int((await db.execute(stmt)).scalar_one() or 0)


@handle_db_errors("stats")
async def get_overview(db: AsyncSession) -> dict[str, int]:
    """All-time totals."""
    return {
        "posts": await _scalar_int(db, select(func.count(Post.id))),
        "views": await _scalar_int(db, select(func.coalesce(func.sum(Post.views), 0))),
        "likes": await _scalar_int(db, select(func.count()).select_from(Like)),
        "comments": await _scalar_int(db, select(func.count(Comment.id))),
    }


@handle_db_errors("stats")
async def get_day_counts(db: AsyncSession, day: date) -> dict[str, int]:
    start, end = day_bounds(day)
    return {
        "posts": await _scalar_int(
            db, select(func.count(Post.id)).where(Post.created_at >= start, Post.created_at < end)
        ),
        "views": await _scalar_int(
            db, select(func.count(ViewLog.id)).where(ViewLog.created_at >= start, ViewLog.created_at < end)
        ),
        "likes": await _scalar_int(
            db,
            select(func.count()).select_from(Like).where(Like.created_at >= start, Like.created_at < end),
        ),
        "comments": await _scalar_int(
            db, select(func.count(Comment.id)).where(Comment.created_at >= start, Comment.created_at < end)
        ),
    }


@handle_db_errors("stats")
async def get_top_viewed(db: AsyncSession, day: date, limit: int = TOP_VIEWED_LIMIT) -> list[dict]:
    """Posts with the most logged views during ``day``."""
    start, end = day_bounds(day)
    views = func.count(ViewLog.id).label("views")
    latest_view = func.max(ViewLog.created_at).label("latest_view_at")
    stmt = (
        select(Post.id, Post.title, views, latest_view)
        .join(ViewLog, ViewLog.post_id == Post.id)
        .where(ViewLog.created_at >= start, ViewLog.created_at < end)
        .group_by(Post.id, Post.title)
        .order_by(views.desc(), latest_view.desc())
        .limit(limit)
    )
    res = await db.execute(stmt)
    return [
        {"post_id": row.id, "title": row.title, "views": int(row.views), "latest_view_at": row.latest_view_at}
        for row in res.all()
    ]


@handle_db_errors("stats")
async def get_recent_comments(
    db: AsyncSession, day: date, limit: int = RECENT_COMMENTS_LIMIT
) -> list[tuple[Comment, str]]:
    start, end = day_bounds(day)
    stmt = (
        select(Comment, Post.title)
        .join(Post, Post.id == Comment.post_id)
        .where(Comment.created_at >= start, Comment.created_at < end)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .limit(limit)
    )
    res = await db.execute(stmt)
    return [(comment, title) for comment, title in res.all()]

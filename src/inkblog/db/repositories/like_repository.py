import logging

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.db.models import Like, Post
from inkblog.db.repositories.decorators import handle_db_errors
from inkblog.db.repositories.post_repository import clamp_pagination
from inkblog.db.utils import iso_now

logger = logging.getLogger(__name__)

ADMIN_LIKES_PAGE_SIZE: int = 20


@handle_db_errors("like")
async def toggle_like(db: AsyncSession, post_id: str, device_id: str) -> tuple[bool, int]:
    """Flip the like of ``device_id`` on ``post_id``; returns (liked, count).

    Delete first and insert only when nothing was deleted, all within the
    caller's transaction. SQLite allows one writer at a time, so the pair
    cannot interleave with another toggle.
    """
    res = await db.execute(delete(Like).where(Like.post_id == post_id, Like.device_id == device_id))
    liked = not res.rowcount
    if liked:
        stmt = (
            sqlite_insert(Like)
            .values({Like.post_id: post_id, Like.device_id: device_id, Like.created_at: iso_now()})
            .on_conflict_do_nothing(index_elements=["postId", "deviceId"])
        )
        await db.execute(stmt)

    return liked, await count_likes(db, post_id)


@handle_db_errors("like")
async def count_likes(db: AsyncSession, post_id: str) -> int:
    res = await db.execute(select(func.count()).select_from(Like).where(Like.post_id == post_id))
    return int(res.scalar_one())


@handle_db_errors("like")
async def has_liked(db: AsyncSession, post_id: str, device_id: str) -> bool:
    stmt = select(Like.post_id).where(Like.post_id == post_id, Like.device_id == device_id).limit(1)
    res = await db.execute(stmt)
    return res.first() is not None


@handle_db_errors("like")
async def list_liked_posts(
    db: AsyncSession, page: int = 1, page_size: int = ADMIN_LIKES_PAGE_SIZE
) -> tuple[list[dict], int]:
    """Posts ranked by like count, then by their most recent like."""
    page, page_size = clamp_pagination(page, page_size)

    total_stmt = select(func.count(func.distinct(Like.post_id)))
    total = int((await db.execute(total_stmt)).scalar_one())

    like_count = func.count().label("likes")
    latest_like = func.max(Like.created_at).label("latest_like_at")
    stmt = (
        select(Post.id, Post.title, like_count, latest_like)
        .join(Like, Like.post_id == Post.id)
        .group_by(Post.id, Post.title)
        .order_by(like_count.desc(), latest_like.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    res = await db.execute(stmt)
    items = [
        {"post_id": row.id, "title": row.title, "likes": int(row.likes), "latest_like_at": row.latest_like_at}
        for row in res.all()
    ]
    return items, total

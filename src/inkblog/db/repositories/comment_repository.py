from datetime import date
import logging

from sqlalchemy import delete, func, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from inkblog.db.models import Comment, Post
from inkblog.db.repositories.decorators import handle_db_errors
from inkblog.db.repositories.post_repository import MAX_PAGE_SIZE, clamp_pagination
from inkblog.db.utils import day_bounds, iso_now, new_id

logger = logging.getLogger(__name__)

ADMIN_DEFAULT_PAGE_SIZE: int = 20


@handle_db_errors("comment")
async def create_comment(db: AsyncSession, post_id: str, content: str, device_id: str) -> Comment:
    """Insert a comment with the next floor number of its post.

    The floor is computed inside the INSERT itself so two concurrent comments
    on the same post cannot read the same maximum.
    """
    comment_id = new_id()
    siblings = aliased(Comment)
    next_floor = (
        select(func.coalesce(func.max(siblings.floor), 0) + 1)
        .where(siblings.post_id == post_id)
        .scalar_subquery()
    )
    stmt = insert(Comment).values(
        {
            Comment.id: comment_id,
            Comment.post_id: post_id,
            Comment.content: content,
            Comment.floor: next_floor,
            Comment.device_id: device_id,
            Comment.created_at: iso_now(),
        }
    )
    await db.execute(stmt)

    created = await db.get(Comment, comment_id)
    if created is None:
        raise RuntimeError(f"Comment {comment_id} vanished after insert")
    logger.info("Created comment %s on post %s (floor %s)", comment_id, post_id, created.floor)
    return created


@handle_db_errors("comment")
async def get_comments(db: AsyncSession, post_id: str) -> list[Comment]:
    stmt = select(Comment).where(Comment.post_id == post_id).order_by(Comment.created_at.asc(), Comment.floor.asc())
    res = await db.execute(stmt)
    return list(res.scalars().all())


@handle_db_errors("comment")
async def count_comments(db: AsyncSession, post_id: str) -> int:
    res = await db.execute(select(func.count(Comment.id)).where(Comment.post_id == post_id))
    return int(res.scalar_one())


@handle_db_errors("comment")
async def get_today_comment_count(db: AsyncSession, device_id: str, day: date) -> int:
    """Number of comments ``device_id`` posted during the UTC day ``day``."""
    start, end = day_bounds(day)
    stmt = select(func.count(Comment.id)).where(
        Comment.device_id == device_id,
        Comment.created_at >= start,
        Comment.created_at < end,
    )
    res = await db.execute(stmt)
    return int(res.scalar_one())


@handle_db_errors("comment")
async def delete_comment(db: AsyncSession, comment_id: str) -> bool:
    res = await db.execute(delete(Comment).where(Comment.id == comment_id))
    if not res.rowcount:
        logger.info("Skip delete: comment %s not found", comment_id)
        return False
    logger.info("Deleted comment %s", comment_id)
    return True


@handle_db_errors("comment")
async def list_admin_comments(
    db: AsyncSession,
    query: str | None = None,
    page: int = 1,
    page_size: int = ADMIN_DEFAULT_PAGE_SIZE,
) -> tuple[list[tuple[Comment, str]], int]:
    """Comments joined with their post title, newest first.

    ``query`` matches either the post title or the comment body.
    """
    page, page_size = clamp_pagination(page, page_size, max_page_size=MAX_PAGE_SIZE)

    conditions = []
    if query:
        conditions.append(
            or_(
                Post.title.contains(query, autoescape=True),
                Comment.content.contains(query, autoescape=True),
            )
        )

    count_stmt = select(func.count(Comment.id)).join(Post, Post.id == Comment.post_id).where(*conditions)
    total = int((await db.execute(count_stmt)).scalar_one())

    stmt = (
        select(Comment, Post.title)
        .join(Post, Post.id == Comment.post_id)
        .where(*conditions)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    res = await db.execute(stmt)
    return [(comment, title) for comment, title in res.all()], total

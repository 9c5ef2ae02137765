from dataclasses import dataclass
import logging
from typing import Any

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.db.models import Post, ViewLog
from inkblog.db.repositories.decorators import handle_db_errors
from inkblog.db.utils import iso_now, new_id

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE: int = 50
DEFAULT_PAGE_SIZE: int = 10
DEFAULT_SEARCH_LIMIT: int = 20
# Keeps (page - 1) * page_size within SQLite's signed 64-bit INTEGER
SQLITE_MAX_INT: int = 2**63 - 1

ALLOWED_UPDATE_FIELDS: frozenset[str] = frozenset({"title", "content", "category", "keywords", "published"})


@dataclass(frozen=True)
class PostFilters:
    published_only: bool = True
    category: str | None = None
    keyword: str | None = None


def clamp_pagination(page: int, page_size: int, *, max_page_size: int = MAX_PAGE_SIZE) -> tuple[int, int]:
    """Clamp page_size to [1, max_page_size] and page to [1, the last addressable page]."""
    page_size = min(max(1, page_size), max_page_size)
    max_page = SQLITE_MAX_INT // page_size
    return min(max(1, page), max_page), page_size


def _filter_conditions(filters: PostFilters) -> list[Any]:
    conditions: list[Any] = []
    if filters.published_only:
        conditions.append(Post.published.is_(True))
    if filters.category:
        conditions.append(Post.category == filters.category)
    if filters.keyword:
        conditions.append(Post.keywords.contains(filters.keyword, autoescape=True))
    return conditions


@handle_db_errors("post")
async def list_posts(
    db: AsyncSession,
    filters: PostFilters,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> tuple[list[Post], int]:
    """Return one page of posts matching ``filters`` and the filtered total."""
    page, page_size = clamp_pagination(page, page_size)
    conditions = _filter_conditions(filters)

    count_stmt = select(func.count(Post.id)).where(*conditions)
    total = int((await db.execute(count_stmt)).scalar_one())

    stmt = (
        select(Post)
        .where(*conditions)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    res = await db.execute(stmt)
    return list(res.scalars().all()), total


@handle_db_errors("post")
async def get_all_posts(db: AsyncSession, include_unpublished: bool = True) -> list[Post]:
    stmt = select(Post).order_by(Post.created_at.desc(), Post.id.desc())
    if not include_unpublished:
        stmt = stmt.where(Post.published.is_(True))
    res = await db.execute(stmt)
    return list(res.scalars().all())


@handle_db_errors("post")
async def get_categories(db: AsyncSession) -> list[str]:
    stmt = (
        select(Post.category)
        .where(Post.published.is_(True), Post.category.is_not(None), Post.category != "")
        .distinct()
        .order_by(Post.category)
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


@handle_db_errors("post")
async def search_posts(
    db: AsyncSession,
    query: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
    include_unpublished: bool = False,
) -> list[Post]:
    """Substring search over title, content and keywords, newest first."""
    matches = or_(
        Post.title.contains(query, autoescape=True),
        Post.content.contains(query, autoescape=True),
        Post.keywords.contains(query, autoescape=True),
    )
    stmt = select(Post).where(matches).order_by(Post.created_at.desc(), Post.id.desc()).limit(max(1, limit))
    if not include_unpublished:
        stmt = stmt.where(Post.published.is_(True))
    res = await db.execute(stmt)
    return list(res.scalars().all())


@handle_db_errors("post")
async def get_post_by_id(db: AsyncSession, post_id: str, include_unpublished: bool = False) -> Post | None:
    stmt = select(Post).where(Post.id == post_id)
    if not include_unpublished:
        stmt = stmt.where(Post.published.is_(True))
    res = await db.execute(stmt)
    post = res.scalars().first()
    if not post:
        logger.debug("Post with id %s not found", post_id)
    return post


@handle_db_errors("post")
async def get_adjacent_posts(
    db: AsyncSession, post_id: str, category: str | None = None
) -> tuple[Post | None, Post | None]:
    """Return (prev, next) around ``post_id`` in (created_at, id) order.

    prev is the next-newer published post, next the next-older one. When
    ``category`` is given both are restricted to that category.
    """
    current = await get_post_by_id(db, post_id)
    if current is None:
        return None, None

    scope: list[Any] = [Post.published.is_(True)]
    if category:
        scope.append(Post.category == category)

    newer = or_(
        Post.created_at > current.created_at,
        and_(Post.created_at == current.created_at, Post.id > current.id),
    )
    older = or_(
        Post.created_at < current.created_at,
        and_(Post.created_at == current.created_at, Post.id < current.id),
    )

    prev_stmt = select(Post).where(*scope, newer).order_by(Post.created_at.asc(), Post.id.asc()).limit(1)
    next_stmt = select(Post).where(*scope, older).order_by(Post.created_at.desc(), Post.id.desc()).limit(1)

    prev_post = (await db.execute(prev_stmt)).scalars().first()
    next_post = (await db.execute(next_stmt)).scalars().first()
    return prev_post, next_post


@handle_db_errors("post")
async def create_post(
    db: AsyncSession,
    title: str,
    content: str,
    category: str = "",
    keywords: str = "",
    published: bool = True,
) -> Post:
    now = iso_now()
    new_post = Post(
        id=new_id(),
        title=title,
        content=content,
        category=category or "",
        keywords=keywords or "",
        published=published,
        views=0,
        created_at=now,
        updated_at=now,
    )
    db.add(new_post)
    await db.flush()
    logger.info("Created new post with id %s", new_post.id)
    return new_post


@handle_db_errors("post")
async def update_post(db: AsyncSession, post_id: str, fields: dict[str, Any]) -> Post | None:
    """Apply a partial update; returns None when the post does not exist."""
    post = await get_post_by_id(db, post_id, include_unpublished=True)
    if not post:
        logger.info("Skip update: post %s not found", post_id)
        return None

    for field, value in fields.items():
        if field not in ALLOWED_UPDATE_FIELDS:
            logger.warning("Attempt to update disallowed field '%s' for post %s", field, post_id)
            continue
        setattr(post, field, value)
    post.updated_at = iso_now()

    await db.flush()
    logger.info("Updated post %s (%s)", post_id, ", ".join(sorted(fields)) or "no fields")
    return post


@handle_db_errors("post")
async def delete_post_by_id(db: AsyncSession, post_id: str) -> bool:
    res = await db.execute(delete(Post).where(Post.id == post_id))
    if not res.rowcount:
        logger.info("Skip delete: post %s not found", post_id)
        return False
    logger.info("Deleted post with id %s", post_id)
    return True


@handle_db_errors("post")
async def increment_views(db: AsyncSession, post_id: str) -> bool:
    """Bump the view counter of a published post and log the view."""
    stmt = (
        update(Post)
        .where(Post.id == post_id, Post.published.is_(True))
        .values(views=Post.views + 1)
        .execution_options(synchronize_session=False)
    )
    res = await db.execute(stmt)
    if not res.rowcount:
        return False
    db.add(ViewLog(post_id=post_id, created_at=iso_now()))
    await db.flush()
    return True

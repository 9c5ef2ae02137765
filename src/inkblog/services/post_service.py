import logging

from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.core.exceptions import NotFoundError, ValidationError
from inkblog.core.validation import (
    sanitize_input,
    validate_category,
    validate_content,
    validate_search_query,
    validate_title,
)
from inkblog.db.repositories import post_repository
from inkblog.db.repositories.post_repository import PostFilters
from inkblog.schemas.posts import (
    AdjacentPostsResponse,
    CategoriesResponse,
    PostCreate,
    PostListResponse,
    PostOut,
    PostSummary,
    PostUpdate,
    SearchResponse,
)
from inkblog.schemas.responses import MessageResponse
from inkblog.services import ensure_valid

logger = logging.getLogger(__name__)


async def list_published_posts(
    db: AsyncSession,
    *,
    category: str | None = None,
    keyword: str | None = None,
    page: int = 1,
    page_size: int = post_repository.DEFAULT_PAGE_SIZE,
) -> PostListResponse:
    page, page_size = post_repository.clamp_pagination(page, page_size)
    filters = PostFilters(published_only=True, category=category, keyword=keyword)
    posts, total = await post_repository.list_posts(db, filters, page=page, page_size=page_size)
    return PostListResponse(
        posts=[PostOut.model_validate(p) for p in posts],
        total=total,
        page=page,
        page_size=page_size,
    )


async def list_all_posts(db: AsyncSession, page: int | None = None, page_size: int | None = None) -> PostListResponse:
    """Admin listing including drafts; paginated only when asked to."""
    if page is None and page_size is None:
        posts = await post_repository.get_all_posts(db, include_unpublished=True)
        return PostListResponse(posts=[PostOut.model_validate(p) for p in posts], total=len(posts))

    page, page_size = post_repository.clamp_pagination(page or 1, page_size or post_repository.DEFAULT_PAGE_SIZE)
    filters = PostFilters(published_only=False)
    posts, total = await post_repository.list_posts(db, filters, page=page, page_size=page_size)
    return PostListResponse(
        posts=[PostOut.model_validate(p) for p in posts],
        total=total,
        page=page,
        page_size=page_size,
    )


async def get_post(db: AsyncSession, post_id: str, *, include_unpublished: bool = False) -> PostOut:
    post = await post_repository.get_post_by_id(db, post_id, include_unpublished=include_unpublished)
    if not post:
        raise NotFoundError("Post not found")
    return PostOut.model_validate(post)


async def get_adjacent_posts(db: AsyncSession, post_id: str, category: str | None = None) -> AdjacentPostsResponse:
    prev_post, next_post = await post_repository.get_adjacent_posts(db, post_id, category=category or None)
    return AdjacentPostsResponse(
        prev=PostSummary.model_validate(prev_post) if prev_post else None,
        next=PostSummary.model_validate(next_post) if next_post else None,
    )


async def get_categories(db: AsyncSession) -> CategoriesResponse:
    return CategoriesResponse(categories=await post_repository.get_categories(db))


async def search_posts(db: AsyncSession, query: str | None, *, include_unpublished: bool = False) -> SearchResponse:
    query = (query or "").strip()
    if not query:
        return SearchResponse(posts=[])
    ensure_valid(validate_search_query(query))

    posts = await post_repository.search_posts(db, query, include_unpublished=include_unpublished)
    return SearchResponse(posts=[PostOut.model_validate(p) for p in posts])


async def create_post(db: AsyncSession, data: PostCreate) -> PostOut:
    ensure_valid(validate_title(data.title))
    ensure_valid(validate_content(data.content))
    ensure_valid(validate_category(data.category))

    title = sanitize_input(data.title)
    if not title:
        raise ValidationError("Title is required")
    content = sanitize_input(data.content)
    if not content:
        raise ValidationError("Content is required")

    post = await post_repository.create_post(
        db,
        title=title,
        content=content,
        category=sanitize_input(data.category),
        keywords=sanitize_input(data.keywords),
        published=data.published,
    )
    await db.commit()
    return PostOut.model_validate(post)


async def update_post(db: AsyncSession, post_id: str, data: PostUpdate) -> PostOut:
    changes = data.model_dump(exclude_unset=True)

    if "title" in changes:
        ensure_valid(validate_title(changes["title"]))
        changes["title"] = sanitize_input(changes["title"])
        if not changes["title"]:
            raise ValidationError("Title is required")
    if "content" in changes:
        ensure_valid(validate_content(changes["content"]))
        changes["content"] = sanitize_input(changes["content"])
        if not changes["content"]:
            raise ValidationError("Content is required")
    # null means "leave as is" for the optional fields
    for field in ("category", "keywords", "published"):
        if field in changes and changes[field] is None:
            del changes[field]
    if "category" in changes:
        ensure_valid(validate_category(changes["category"]))
        changes["category"] = sanitize_input(changes["category"])
    if "keywords" in changes:
        changes["keywords"] = sanitize_input(changes["keywords"])

    post = await post_repository.update_post(db, post_id, changes)
    if not post:
        raise NotFoundError("Post not found")

    await db.commit()
    return PostOut.model_validate(post)


async def delete_post(db: AsyncSession, post_id: str) -> MessageResponse:
    deleted = await post_repository.delete_post_by_id(db, post_id)
    if not deleted:
        raise NotFoundError("Post not found")
    await db.commit()
    return MessageResponse(success=True, message="Post deleted")


async def record_view(db: AsyncSession, post_id: str) -> MessageResponse:
    counted = await post_repository.increment_views(db, post_id)
    if not counted:
        raise NotFoundError("Post not found")
    await db.commit()
    return MessageResponse(success=True)

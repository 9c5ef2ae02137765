from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.core.exceptions import NotFoundError, ValidationError
from inkblog.core.validation import is_valid_device_id
from inkblog.db.repositories import like_repository, post_repository
from inkblog.schemas.likes import LikeStatus


async def _require_published_post(db: AsyncSession, post_id: str) -> None:
    if not await post_repository.get_post_by_id(db, post_id):
        raise NotFoundError("Post not found")


async def get_like_status(db: AsyncSession, post_id: str, device_id: str | None) -> LikeStatus:
    """Count for the post; ``liked`` is only true for a well-formed device id that liked it."""
    await _require_published_post(db, post_id)
    count = await like_repository.count_likes(db, post_id)
    liked = is_valid_device_id(device_id) and await like_repository.has_liked(db, post_id, device_id)
    return LikeStatus(count=count, liked=liked)


async def toggle_like(db: AsyncSession, post_id: str, device_id: str | None) -> LikeStatus:
    if not is_valid_device_id(device_id):
        raise ValidationError("Invalid device ID")
    await _require_published_post(db, post_id)

    try:
        liked, count = await like_repository.toggle_like(db, post_id, device_id)
    except IntegrityError:
        await db.rollback()
        raise NotFoundError("Post not found") from None
    await db.commit()
    return LikeStatus(count=count, liked=liked)

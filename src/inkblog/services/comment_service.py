import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.core.config_models import BlogConfig
from inkblog.core.exceptions import NotFoundError, RateLimitError, ValidationError
from inkblog.core.validation import is_valid_device_id, sanitize_input, validate_comment
from inkblog.db.repositories import comment_repository, post_repository
from inkblog.db.utils import today_utc
from inkblog.schemas.comments import CommentCreate, CommentListResponse, CommentOut
from inkblog.services import ensure_valid

logger = logging.getLogger(__name__)


async def _require_published_post(db: AsyncSession, post_id: str) -> None:
    if not await post_repository.get_post_by_id(db, post_id):
        raise NotFoundError("Post not found")


async def list_comments(db: AsyncSession, post_id: str) -> CommentListResponse:
    await _require_published_post(db, post_id)
    comments = await comment_repository.get_comments(db, post_id)
    return CommentListResponse(
        comments=[CommentOut.model_validate(c) for c in comments],
        count=len(comments),
    )


async def add_comment(db: AsyncSession, post_id: str, data: CommentCreate, blog: BlogConfig) -> CommentOut:
    """
    Store a reader comment after the publication, content, device and
    daily-limit checks. The limit check and the insert are not atomic, so two
    simultaneous requests from one device may both pass.
    """
    await _require_published_post(db, post_id)
    ensure_valid(validate_comment(data.content))
    if not is_valid_device_id(data.device_id):
        raise ValidationError("Invalid device ID")

    today_count = await comment_repository.get_today_comment_count(db, data.device_id, today_utc())
    if today_count >= blog.comment_daily_limit:
        logger.warning("Comment rejected: device %s reached the daily limit", data.device_id)
        raise RateLimitError(f"Daily comment limit reached ({blog.comment_daily_limit} per day)")

    content = sanitize_input(data.content)
    if not content:
        raise ValidationError("Comment content is required")

    try:
        comment = await comment_repository.create_comment(db, post_id, content, data.device_id)
    except IntegrityError:
        # post removed between the publication check and the insert
        await db.rollback()
        raise NotFoundError("Post not found") from None
    await db.commit()
    return CommentOut.model_validate(comment)


async def delete_comment(db: AsyncSession, comment_id: str) -> None:
    if not await comment_repository.delete_comment(db, comment_id):
        raise NotFoundError("Comment not found")
    await db.commit()

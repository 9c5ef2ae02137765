from collections.abc import Callable
import functools
import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from inkblog.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)

AsyncFunc = Callable[..., Any]

_ENTITY_KEYS = ("post_id", "comment_id", "device_id", "username", "key")


def handle_db_errors(entity_name: str = ""):
    """Decorator translating storage failures into DatabaseError.

    Operations are attempted once; there are no retries. IntegrityError is
    re-raised untouched so services can map constraint violations themselves.

    Args:
        entity_name: Entity name for logging
    """

    def decorator(func: AsyncFunc) -> AsyncFunc:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except IntegrityError:
                raise
            except SQLAlchemyError as e:
                func_name = getattr(func, "__name__", str(func))
                entity_info = _extract_entity_info(args, kwargs)
                log_prefix = f"{entity_name} " if entity_name else ""
                logger.error(f"Database error while {log_prefix}{func_name} {entity_info}: {e}")
                raise DatabaseError(message="Database failure") from e

        return wrapper

    return decorator


def _extract_entity_info(args: tuple, kwargs: dict) -> str:
    """Best-effort identifier for log messages.

    The first positional argument is the session, so the second one (when it
    is a plain string or int) is usually the entity id.
    """
    if len(args) > 1 and isinstance(args[1], int | str):
        return str(args[1])

    for key in _ENTITY_KEYS:
        if key in kwargs:
            return f"{key}={kwargs[key]}"

    return ""

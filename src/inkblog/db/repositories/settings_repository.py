import logging

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.db.models import DEFAULT_SETTINGS, Setting
from inkblog.db.repositories.decorators import handle_db_errors

logger = logging.getLogger(__name__)


@handle_db_errors("settings")
async def get_settings(db: AsyncSession) -> dict[str, str]:
    """Full settings map; missing or empty values fall back to the defaults."""
    res = await db.execute(select(Setting.key, Setting.value))
    stored = {key: value for key, value in res.all()}
    return {key: stored.get(key) or default for key, default in DEFAULT_SETTINGS.items()}


@handle_db_errors("settings")
async def update_settings(db: AsyncSession, values: dict[str, str | None]) -> dict[str, str]:
    """Upsert every known key present in ``values``; unknown keys are ignored."""
    rows = [{"key": key, "value": value or ""} for key, value in values.items() if key in DEFAULT_SETTINGS]
    ignored = sorted(set(values) - set(DEFAULT_SETTINGS))
    if ignored:
        logger.debug("Ignoring unknown settings keys: %s", ", ".join(ignored))

    if rows:
        stmt = sqlite_insert(Setting).values(rows)
        stmt = stmt.on_conflict_do_update(index_elements=["key"], set_={"value": stmt.excluded.value})
        await db.execute(stmt)
        logger.info("Updated settings: %s", ", ".join(row["key"] for row in rows))

    return await get_settings(db)

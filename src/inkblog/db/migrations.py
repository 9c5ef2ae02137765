"""Startup schema upgrade and seeding.

Tables are created when missing; tables left behind by older releases get
their missing columns added in place, so an existing database file never has
to be recreated by hand.
"""

import logging

from sqlalchemy import func, inspect, select, text
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from inkblog.core.config_models import BlogConfig
from inkblog.core.security import get_password_hash

from .database import Base
from .models import DEFAULT_SETTINGS, AdminUser, Setting
from .utils import iso_now

logger = logging.getLogger(__name__)

# (table, column name, column DDL) for columns introduced after the first release
LEGACY_COLUMNS: tuple[tuple[str, str, str], ...] = (
    ("posts", "category", "category TEXT NOT NULL DEFAULT ''"),
    ("posts", "views", "views INTEGER NOT NULL DEFAULT 0"),
    ("posts", "keywords", "keywords TEXT NOT NULL DEFAULT ''"),
    ("posts", "published", "published BOOLEAN NOT NULL DEFAULT 1"),
    ("comments", "floor", "floor INTEGER NOT NULL DEFAULT 1"),
    ("comments", "deviceId", "deviceId TEXT NOT NULL DEFAULT ''"),
)


def _add_missing_columns(conn: Connection) -> list[str]:
    inspector = inspect(conn)
    added: list[str] = []
    existing: dict[str, set[str]] = {}
    for table, column, ddl in LEGACY_COLUMNS:
        if table not in existing:
            existing[table] = {c["name"] for c in inspector.get_columns(table)}
        if column in existing[table]:
            continue
        conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {ddl}"))
        existing[table].add(column)
        added.append(f"{table}.{column}")
        logger.info("Migrated schema: added column %s.%s", table, column)
    return added


def _create_missing_indexes(conn: Connection) -> None:
    for table in Base.metadata.sorted_tables:
        for index in table.indexes:
            index.create(conn, checkfirst=True)


def _backfill_comment_floors(conn: Connection) -> None:
    """Number existing comments 1..N per post in creation order."""
    rows = conn.execute(text('SELECT id, "postId" FROM comments ORDER BY "createdAt" ASC, id ASC')).all()
    floors: dict[str, int] = {}
    for comment_id, post_id in rows:
        floors[post_id] = floors.get(post_id, 0) + 1
        conn.execute(
            text("UPDATE comments SET floor = :floor WHERE id = :id"),
            {"floor": floors[post_id], "id": comment_id},
        )
    logger.info("Back-filled floor numbers for %d comments", len(rows))


async def upgrade_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        added = await conn.run_sync(_add_missing_columns)
        await conn.run_sync(_create_missing_indexes)
        if "comments.floor" in added:
            await conn.run_sync(_backfill_comment_floors)


async def seed_defaults(session: AsyncSession, blog: BlogConfig) -> None:
    """Insert missing default settings and the initial admin account."""
    stmt = sqlite_insert(Setting).values([{"key": k, "value": v} for k, v in DEFAULT_SETTINGS.items()])
    await session.execute(stmt.on_conflict_do_nothing(index_elements=["key"]))

    admin_count = (await session.execute(select(func.count(AdminUser.id)))).scalar_one()
    if admin_count == 0:
        now = iso_now()
        session.add(
            AdminUser(
                username=blog.default_admin_username,
                password_hash=get_password_hash(blog.default_admin_password),
                created_at=now,
                updated_at=now,
            )
        )
        logger.warning(
            "Created default admin account '%s'; change its password from the admin console",
            blog.default_admin_username,
        )
    await session.commit()

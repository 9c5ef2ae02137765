from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
import logging
from pathlib import Path

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.exc import DatabaseError as SQLAlchemyDatabaseError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from inkblog.core.config_models import BlogConfig, DatabaseConfig

logger = logging.getLogger(__name__)

Base = declarative_base()


def _register_sqlite_pragmas(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # noqa: ARG001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()


def _backup_corrupted_file(path: Path) -> Path | None:
    """Move a corrupted database (and its WAL/SHM companions) out of the way."""
    if not path.exists():
        return None
    stamp = datetime.now(UTC).isoformat().replace(":", "-").replace(".", "-")
    backup = path.with_name(f"{path.name}.corrupted.{stamp}")
    try:
        path.rename(backup)
        for suffix in ("-wal", "-shm"):
            companion = path.with_name(path.name + suffix)
            if companion.exists():
                companion.rename(backup.with_name(backup.name + suffix))
    except OSError as e:
        logger.error("Failed to back up corrupted database %s: %s", path, e)
        return None
    logger.warning("Corrupted database backed up to: %s", backup)
    return backup


class Database:
    """Owns the SQLite engine and session factory for one database file.

    Lifecycle is explicit: ``open()`` checks integrity, recovers from
    corruption, migrates and seeds the schema; ``close()`` disposes the engine.
    The application lifespan owns the instance and exposes it on
    ``app.state.database``.
    """

    def __init__(self, config: DatabaseConfig, blog: BlogConfig | None = None) -> None:
        self.config = config
        self.blog = blog or BlogConfig()
        self.path = Path(config.path)
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def _create_engine(self, **kwargs) -> AsyncEngine:
        engine = create_async_engine(
            self.config.url,
            echo=self.config.echo,
            connect_args={"timeout": self.config.busy_timeout},
            **kwargs,
        )
        _register_sqlite_pragmas(engine)
        return engine

    async def _integrity_ok(self) -> bool:
        engine = create_async_engine(self.config.url, poolclass=NullPool)
        try:
            async with engine.connect() as conn:
                result = await conn.execute(text("PRAGMA integrity_check"))
                first = result.scalar()
        except SQLAlchemyDatabaseError as e:
            logger.warning("Database integrity check failed: %s", e)
            return False
        finally:
            await engine.dispose()
        if first != "ok":
            logger.warning("Database integrity check failed: %s", first)
            return False
        return True

    async def open(self) -> None:
        if self.is_open:
            return
        from .migrations import seed_defaults, upgrade_schema

        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.path.exists() and not await self._integrity_ok():
            _backup_corrupted_file(self.path)
            logger.info("Creating a new database due to corruption")

        self._engine = self._create_engine()
        self._session_maker = async_sessionmaker(
            bind=self._engine,
            autoflush=False,
            expire_on_commit=False,
        )
        await upgrade_schema(self._engine)
        async with self.session() as session:
            await seed_defaults(session, self.blog)
        logger.info("Database ready at %s", self.path)

    def session(self) -> AsyncSession:
        if self._session_maker is None:
            raise RuntimeError("Database is not open")
        return self._session_maker()

    async def check(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Database connection check failed: %s", e)
            return False

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database connections closed")
        self._engine = None
        self._session_maker = None


async def get_db(request: Request) -> AsyncGenerator[AsyncSession]:
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.debug("Rolled back request session after error: %s", e)
            raise

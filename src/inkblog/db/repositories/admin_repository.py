import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.db.models import AdminUser
from inkblog.db.repositories.decorators import handle_db_errors
from inkblog.db.utils import iso_now

logger = logging.getLogger(__name__)


@handle_db_errors("admin")
async def get_admin_user(db: AsyncSession) -> AdminUser | None:
    res = await db.execute(select(AdminUser).order_by(AdminUser.id.asc()).limit(1))
    return res.scalars().first()


@handle_db_errors("admin")
async def get_admin_by_username(db: AsyncSession, username: str) -> AdminUser | None:
    res = await db.execute(select(AdminUser).where(AdminUser.username == username))
    return res.scalars().first()


@handle_db_errors("admin")
async def create_admin(db: AsyncSession, username: str, password_hash: str) -> AdminUser:
    now = iso_now()
    admin = AdminUser(username=username, password_hash=password_hash, created_at=now, updated_at=now)
    db.add(admin)
    await db.flush()
    logger.info("Created admin account '%s'", username)
    return admin


@handle_db_errors("admin")
async def update_admin(
    db: AsyncSession, admin: AdminUser, username: str, password_hash: str | None = None
) -> AdminUser:
    """Rename the admin; the hash is replaced only when one is given."""
    admin.username = username
    if password_hash is not None:
        admin.password_hash = password_hash
    admin.updated_at = iso_now()
    await db.flush()
    logger.info("Updated admin credentials (username=%s, password_changed=%s)", username, password_hash is not None)
    return admin


@handle_db_errors("admin")
async def set_password_hash(db: AsyncSession, admin: AdminUser, password_hash: str) -> None:
    admin.password_hash = password_hash
    await db.flush()

from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.db.repositories import settings_repository
from inkblog.schemas.settings import SettingsOut, SettingsUpdate


async def get_settings(db: AsyncSession) -> SettingsOut:
    return SettingsOut.model_validate(await settings_repository.get_settings(db))


async def update_settings(db: AsyncSession, data: SettingsUpdate) -> SettingsOut:
    changes = data.model_dump(exclude_unset=True, by_alias=True)
    updated = await settings_repository.update_settings(db, changes)
    await db.commit()
    return SettingsOut.model_validate(updated)

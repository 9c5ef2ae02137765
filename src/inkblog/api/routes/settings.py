from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body

from inkblog.core.deps import AdminUsername, DbSession
from inkblog.schemas.settings import SettingsOut, SettingsUpdate
from inkblog.services import settings_service

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=SettingsOut, summary="Site settings")
async def get_settings(db: DbSession) -> SettingsOut:
    return await settings_service.get_settings(db)


@router.put("", response_model=SettingsOut, summary="Update site settings")
async def update_settings(
    db: DbSession, _admin: AdminUsername, payload: Annotated[SettingsUpdate, Body(...)]
) -> SettingsOut:
    return await settings_service.update_settings(db, payload)

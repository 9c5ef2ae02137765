from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(tags=["System"])


@router.get("/health", tags=["Health"])
async def health(request: Request) -> dict[str, Any]:
    ok = await request.app.state.database.check()
    return {
        "success": ok,
        "status": "ok" if ok else "degraded",
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/", tags=["Root"])
async def root(request: Request) -> dict[str, Any]:
    settings = request.app.state.settings
    return {
        "success": True,
        "message": f"Welcome to {settings.api_title}",
        "version": settings.api_version,
        "docs": "/docs",
        "health": "/health",
        "timestamp": datetime.now(UTC).isoformat(),
    }

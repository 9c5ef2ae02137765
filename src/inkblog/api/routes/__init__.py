from __future__ import annotations

from fastapi import APIRouter

from inkblog.api.routes.admin import router as admin_router
from inkblog.api.routes.auth import router as auth_router
from inkblog.api.routes.comments import router as comments_router
from inkblog.api.routes.discovery import router as discovery_router
from inkblog.api.routes.feed import router as feed_router
from inkblog.api.routes.likes import router as likes_router
from inkblog.api.routes.posts import router as posts_router
from inkblog.api.routes.settings import router as settings_router

# Aggregate all domain routers under /api
router = APIRouter(prefix="/api")
router.include_router(posts_router)
router.include_router(comments_router)
router.include_router(likes_router)
router.include_router(discovery_router)
router.include_router(settings_router)
router.include_router(auth_router)
router.include_router(admin_router)
router.include_router(feed_router)

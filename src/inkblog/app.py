from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from inkblog.api.handlers.exceptions import register_exception_handlers
from inkblog.api.middleware.rate_limit import register_login_rate_limit_middleware
from inkblog.api.middleware.request_id import register_request_id_middleware
from inkblog.api.middleware.security_headers import register_security_headers_middleware
from inkblog.api.routes import router as api_router
from inkblog.api.routes.system import router as system_router
from inkblog.core.config import Settings, get_settings
from inkblog.core.logging import setup_logging
from inkblog.db.database import Database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    logger.info("Starting up %s (%s)", settings.api_title, settings.environment)

    database = Database(settings.database, settings.blog)
    try:
        await database.open()
    except Exception as e:  # pragma: no cover - startup failures should be visible in logs
        logger.error(f"Application startup failed: {e}")
        raise
    app.state.database = database
    logger.info("Application startup completed")

    try:
        yield
    finally:
        logger.info("Shutting down %s", settings.api_title)
        await database.close()
        logger.info("Application shutdown completed")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    is_production = settings.environment == "production"
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=settings.api_description,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
    )
    app.state.settings = settings

    # Routers
    app.include_router(api_router)
    app.include_router(system_router)

    # CORS (from env CORS_ALLOW_ORIGINS comma-separated)
    _cors_env = os.getenv("CORS_ALLOW_ORIGINS", "")
    _cors_origins = [o.strip() for o in _cors_env.split(",") if o.strip()]
    if _cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=_cors_origins,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            allow_credentials=True,
            max_age=3600,
        )

    # Middlewares
    register_request_id_middleware(app)
    register_security_headers_middleware(app, hsts=settings.environment != "development")
    register_login_rate_limit_middleware(app, rate_per_minute=settings.blog.login_rate_limit_per_minute)

    # Exception handlers
    register_exception_handlers(app)

    return app

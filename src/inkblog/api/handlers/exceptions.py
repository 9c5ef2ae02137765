from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from inkblog.core.exceptions import BlogException, map_exception_to_http
from inkblog.schemas.responses import ErrorResponse

if TYPE_CHECKING:  # pragma: no cover
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def error_body(message: str, error_type: str) -> dict:
    return ErrorResponse(message=message, error={"type": error_type}).model_dump(mode="json")


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Register application-wide exception handlers."""

    @app.exception_handler(BlogException)
    async def blog_exception_handler(request: Request, exc: BlogException) -> JSONResponse:  # noqa: D401
        http_exc = map_exception_to_http(exc)
        if http_exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=error_body(http_exc.detail, exc.__class__.__name__),
            headers=getattr(http_exc, "headers", None) or {},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(_first_validation_message(exc), "ValidationError"),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", "InternalServerError"),
        )

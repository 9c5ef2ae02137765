from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BaseResponse(BaseModel):
    """Base response schema with common fields."""

    success: bool = Field(..., description="Whether the operation was successful")


class MessageResponse(BaseResponse):
    message: str | None = Field(None, description="Optional message")


class ErrorResponse(BaseResponse):
    """Error envelope returned by every exception handler."""

    success: bool = False
    message: str = Field(..., description="Error message")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")
    error: dict[str, Any] = Field(..., description="Error details")

from __future__ import annotations

from collections import deque
from collections.abc import Awaitable, Callable
import logging
from time import monotonic
from typing import TYPE_CHECKING

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response

from inkblog.api.handlers.exceptions import error_body
from inkblog.api.utils.request_context import extract_client_ip

if TYPE_CHECKING:  # pragma: no cover
    from fastapi import FastAPI

logger = logging.getLogger(__name__)

_WINDOW_SECONDS = 60.0
LOGIN_PATH = "/api/auth/login"


class SlidingWindowLimiter:
    """In-memory per-key limiter: at most ``rate`` hits within the trailing window."""

    def __init__(self, rate: int, window: float = _WINDOW_SECONDS) -> None:
        self.rate = rate
        self.window = window
        self._buckets: dict[str, deque[float]] = {}
        self._last_sweep = 0.0

    def __len__(self) -> int:
        return len(self._buckets)

    def _evict_idle(self, cutoff: float) -> None:
        idle = [key for key, q in self._buckets.items() if not q or q[-1] < cutoff]
        for key in idle:
            del self._buckets[key]

    def allow(self, key: str, now: float | None = None) -> bool:
        if self.rate <= 0:
            return True
        now = monotonic() if now is None else now
        cutoff = now - self.window
        if now - self._last_sweep >= self.window:
            self._evict_idle(cutoff)
            self._last_sweep = now
        q = self._buckets.setdefault(key, deque())
        while q and q[0] < cutoff:
            q.popleft()
        if len(q) >= self.rate:
            return False
        q.append(now)
        return True


def register_login_rate_limit_middleware(app: FastAPI, *, rate_per_minute: int) -> None:
    """Throttle POST /api/auth/login attempts per client IP."""
    limiter = SlidingWindowLimiter(rate_per_minute)

    @app.middleware("http")
    async def rate_limit_login(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:  # noqa: D401
        if request.method != "POST" or request.url.path != LOGIN_PATH:
            return await call_next(request)

        ip = extract_client_ip(request) or "unknown"
        if not limiter.allow(ip):
            logger.warning("Login rate limit exceeded for %s", ip)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=error_body("Too many login attempts, please try again later.", "RateLimitError"),
            )
        return await call_next(request)

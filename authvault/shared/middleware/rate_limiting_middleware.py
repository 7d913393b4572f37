# authvault/shared/middleware/rate_limiting_middleware.py

"""
Middleware for request rate limiting.

This module implements a per-IP fixed window counter. It knows nothing
about clients or tokens; expired windows are dropped by ``sweep``,
which the application runs periodically in the background.
"""

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from authvault.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

EXEMPT_PATHS = {"/docs", "/redoc", "/openapi.json", "/health"}


@dataclass
class RateWindow:
    started_at: float
    count: int = 0


class AsyncRateLimiter:
    """
    In-memory fixed window rate limiter keyed by client IP.

    Each IP may make ``max_requests`` requests per window of
    ``window_seconds``; the window starts with the first request.
    """

    def __init__(
            self,
            max_requests: int = 100,
            window_seconds: int = 60,
            clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock

        # Structure: {ip: RateWindow}
        self.windows: Dict[str, RateWindow] = {}
        self._lock = asyncio.Lock()

    async def hit(self, ip: str) -> Tuple[bool, int, int]:
        """
        Count one request from ``ip``.

        Returns:
            Tuple (allowed, remaining, reset_in)
            - allowed: False once the IP exceeded its limit in this window
            - remaining: Requests left in the window
            - reset_in: Seconds until the window resets
        """
        async with self._lock:
            now = self.clock()
            window = self.windows.get(ip)
            if window is None or now - window.started_at >= self.window_seconds:
                window = RateWindow(started_at=now)
                self.windows[ip] = window

            reset_in = max(1, math.ceil(window.started_at + self.window_seconds - now))
            if window.count >= self.max_requests:
                return False, 0, reset_in

            window.count += 1
            return True, self.max_requests - window.count, reset_in

    async def sweep(self) -> int:
        """Drop expired windows, returning how many were removed."""
        async with self._lock:
            now = self.clock()
            expired = [
                ip for ip, window in self.windows.items()
                if now - window.started_at >= self.window_seconds
            ]
            for ip in expired:
                del self.windows[ip]
            return len(expired)

    async def reset(self) -> None:
        async with self._lock:
            self.windows.clear()


# Global rate limiter instance
async_rate_limiter = AsyncRateLimiter(
    max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
)


class AsyncRateLimitingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that limits the number of requests by IP.
    """

    def __init__(self, app, limiter: Optional[AsyncRateLimiter] = None):
        super().__init__(app)
        self.limiter = limiter or async_rate_limiter

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if not settings.RATE_LIMIT_ENABLED or path in EXEMPT_PATHS:
            return await call_next(request)

        # Get the client IP
        client_ip = request.client.host if request.client else "unknown"

        allowed, remaining, reset_in = await self.limiter.hit(client_ip)
        headers = {
            "X-RateLimit-Limit": str(self.limiter.max_requests),
            "X-RateLimit-Remaining": str(remaining),
            "X-RateLimit-Reset": str(reset_in),
        }

        if not allowed:
            logger.warning(f"Rate limit exceeded for IP: {client_ip} on path: {path}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": "Too many requests. Try again later.",
                    "code": "RATE_LIMIT_EXCEEDED"
                },
                headers={**headers, "Retry-After": str(reset_in)}
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response

"""Fixed-window rate limiting middleware, keyed by client IP."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

from akwaaba_shared.config import settings

from akwaaba_api.responses import error_response

AUTH_PREFIX = "/api/auth/"
EXEMPT_PATHS = frozenset({"/health", "/ready"})
PRUNE_INTERVAL_SECONDS = 60.0


def client_ip(request: Request) -> str:
    """First hop of X-Forwarded-For, then X-Real-IP, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


@dataclass
class RateBucket:
    window: float
    window_start: float
    count: int = 0

    def expired(self, now: float) -> bool:
        return now - self.window_start >= self.window


class RateLimitMiddleware(BaseHTTPMiddleware):
    """In-process limiter. Sign-in and sign-up share a much tighter window."""

    def __init__(self, app):
        super().__init__(app)
        self._buckets: dict[str, RateBucket] = {}
        self._lock = threading.Lock()
        self._last_prune = time.monotonic()

    def _limits_for(self, request: Request) -> tuple[str, int, int]:
        ip = client_ip(request)
        if request.url.path.startswith(AUTH_PREFIX):
            return (
                f"auth:{ip}",
                settings.auth_rate_limit_requests,
                settings.auth_rate_limit_window_seconds,
            )
        return f"ip:{ip}", settings.rate_limit_requests, settings.rate_limit_window_seconds

    def _prune(self, now: float) -> None:
        """Drop buckets whose window has closed. Caller holds the lock."""
        for key in [k for k, b in self._buckets.items() if b.expired(now)]:
            del self._buckets[key]
        self._last_prune = now

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        key, max_requests, window = self._limits_for(request)
        now = time.monotonic()

        with self._lock:
            if now - self._last_prune >= PRUNE_INTERVAL_SECONDS:
                self._prune(now)
            bucket = self._buckets.get(key)
            if bucket is None or bucket.expired(now):
                bucket = self._buckets[key] = RateBucket(window=window, window_start=now)

            if bucket.count >= max_requests:
                retry_after = max(1, int(bucket.window_start + window - now))
                return JSONResponse(
                    status_code=429,
                    content=error_response(
                        "Too many requests",
                        details={"retryAfter": retry_after},
                    ),
                    headers={
                        "Retry-After": str(retry_after),
                        "X-RateLimit-Limit": str(max_requests),
                        "X-RateLimit-Remaining": "0",
                    },
                )

            bucket.count += 1
            remaining = max_requests - bucket.count

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response

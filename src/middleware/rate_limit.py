"""Simple in-memory sliding-window rate limiter.

Sufficient for a single-instance deployment; state is per process.
"""

from __future__ import annotations

import time
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.config import Settings, get_settings


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client sliding window rate limiter.

    Each client may make ``rate_limit_per_minute + rate_limit_burst`` requests
    in any 60 second window.  Clients are keyed by socket address, or by the
    first ``X-Forwarded-For`` hop when ``trust_forwarded_for`` is set (only do
    that behind a proxy which overwrites the header).
    """

    def __init__(self, app: Any, settings: Settings | None = None) -> None:
        super().__init__(app)
        s = settings or get_settings()
        self._max_requests = s.rate_limit_per_minute + s.rate_limit_burst
        self._window_seconds = 60
        self._trust_forwarded_for = s.trust_forwarded_for
        # client -> timestamps inside the current window
        self._requests: dict[str, list[float]] = {}
        self._last_sweep = time.monotonic()

    def _client_key(self, request: Request) -> str:
        if self._trust_forwarded_for:
            forwarded = request.headers.get("X-Forwarded-For")
            if forwarded:
                return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def _cleanup(self, key: str, now: float) -> list[float]:
        cutoff = now - self._window_seconds
        recent = [t for t in self._requests.get(key, ()) if t > cutoff]
        if recent:
            self._requests[key] = recent
        else:
            self._requests.pop(key, None)
        return recent

    def _sweep(self, now: float) -> None:
        """Drop clients with no request inside the window."""
        if now - self._last_sweep < self._window_seconds:
            return
        for key in list(self._requests):
            self._cleanup(key, now)
        self._last_sweep = now

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        key = self._client_key(request)
        now = time.monotonic()
        self._sweep(now)
        recent = self._cleanup(key, now)

        if len(recent) >= self._max_requests:
            retry_after = int(self._window_seconds - (now - recent[0]))
            return Response(
                content='{"detail":"Rate limit exceeded"}',
                status_code=429,
                media_type="application/json",
                headers={"Retry-After": str(max(retry_after, 1))},
            )

        recent.append(now)
        self._requests[key] = recent

        response = await call_next(request)

        remaining = self._max_requests - len(recent)
        response.headers["X-RateLimit-Limit"] = str(self._max_requests)
        response.headers["X-RateLimit-Remaining"] = str(max(remaining, 0))

        return response

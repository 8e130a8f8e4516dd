"""Per-client rate limiting for the HTTP service."""

from __future__ import annotations

import threading
import time
from collections.abc import Hashable
from typing import Any

from starlette.responses import PlainTextResponse


class RateLimiter:
    """A keyed GCRA limiter.

    One unit of quota comes back every ``per_second`` seconds, and up to
    ``burst_size`` requests may be made at once.
    """

    def __init__(self, per_second: float, burst_size: int) -> None:
        if per_second <= 0:
            raise ValueError("replenish interval must be positive")
        if burst_size <= 0:
            raise ValueError("burst size must be non-zero")
        self.per_second = float(per_second)
        self.burst_size = int(burst_size)
        self._tolerance = self.per_second * (self.burst_size - 1)
        self._arrivals: dict[Hashable, float] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._arrivals)

    def check(self, key: Hashable, now: float | None = None) -> float:
        """Record a request for ``key``; return 0.0 if allowed, else seconds to wait."""
        now = time.monotonic() if now is None else now
        with self._lock:
            arrival = max(self._arrivals.get(key, now), now)
            excess = arrival - now - self._tolerance
            if excess > 0:
                return excess
            self._arrivals[key] = arrival + self.per_second
            return 0.0

    def retain_recent(self, now: float | None = None) -> None:
        """Forget keys whose quota has fully replenished."""
        now = time.monotonic() if now is None else now
        with self._lock:
            self._arrivals = {
                key: arrival for key, arrival in self._arrivals.items() if arrival > now
            }


class RateLimitMiddleware:
    """ASGI middleware that limits HTTP requests by peer IP address."""

    def __init__(self, app: Any, limiter: RateLimiter) -> None:
        self.app = app
        self.limiter = limiter

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        client = scope.get("client")
        if not client:
            response = PlainTextResponse("Couldn't find the IP", status_code=500)
        else:
            wait = self.limiter.check(client[0])
            if wait <= 0:
                await self.app(scope, receive, send)
                return
            seconds = str(int(wait))
            response = PlainTextResponse(
                f"Too Many Requests! Wait for {seconds}s",
                status_code=429,
                headers={"x-ratelimit-after": seconds, "retry-after": seconds},
            )
        await response(scope, receive, send)
"""
In-memory request throttling per client address.

A fixed window counter per (limiter, client) pair. State lives in the
process, matching the single-process deployment; counters reset on restart.
"""

import math
import threading
import time
from collections.abc import Callable

from fastapi import Request


class RateLimitExceeded(Exception):
    """Client exhausted its request budget for the current window."""

    def __init__(self, error: str, message: str, retry_after: int) -> None:
        super().__init__(message)
        self.error = error
        self.message = message
        self.retry_after = retry_after


class FixedWindowRateLimiter:
    """
    Allows ``limit`` hits per key in each ``window_seconds`` window.

    Once ``max_keys`` clients are tracked, expired windows are dropped
    before a new client is added.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        message: str = "Please try again later.",
        error: str = "Too many requests",
        clock: Callable[[], float] = time.monotonic,
        max_keys: int = 10_000,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self.message = message
        self.error = error
        self._clock = clock
        self._max_keys = max_keys
        self._windows: dict[str, tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> None:
        """
        Count one request for ``key``.

        Raises:
            RateLimitExceeded: If the key already used its budget this window
        """
        now = self._clock()
        with self._lock:
            if key not in self._windows and len(self._windows) >= self._max_keys:
                self._evict_expired(now)
            started, count = self._windows.get(key, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            if count >= self.limit:
                retry_after = math.ceil(self.window_seconds - (now - started))
                raise RateLimitExceeded(self.error, self.message, retry_after=max(retry_after, 1))
            self._windows[key] = (started, count + 1)

    @property
    def tracked_keys(self) -> int:
        return len(self._windows)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _evict_expired(self, now: float) -> None:
        expired = [
            key
            for key, (started, _) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def enforce_general_limit(request: Request) -> None:
    """Dependency applying the API-wide limiter, if one is installed."""
    limiter = getattr(request.app.state, "general_limiter", None)
    if limiter is not None:
        limiter.hit(_client_key(request))


def enforce_register_limit(request: Request) -> None:
    """Dependency applying the registration limiter, if one is installed."""
    limiter = getattr(request.app.state, "register_limiter", None)
    if limiter is not None:
        limiter.hit(_client_key(request))

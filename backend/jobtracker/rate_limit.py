"""
In-memory sliding-window rate limiting keyed by client address.
"""
from __future__ import annotations

import threading
import time
from collections.abc import Callable

from starlette.requests import Request


class SlidingWindowLimiter:
    """Allows at most ``limit`` recorded hits per key within ``window_seconds``."""

    def __init__(self, limit: int, window_seconds: int, clock: Callable[[], float] = time.monotonic) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    def _prune(self, key: str, now: float) -> list[float]:
        window_start = now - self.window_seconds
        history = [t for t in self._hits.get(key, []) if t > window_start]
        if history:
            self._hits[key] = history
        else:
            self._hits.pop(key, None)
        return history

    def acquire(self, key: str) -> float | None:
        """Record a hit if the key is under its limit.

        Returns the recorded timestamp, which can later be handed to
        :meth:`release`, or ``None`` when the key is over its limit.
        """
        with self._lock:
            now = self._clock()
            history = self._prune(key, now)
            if len(history) >= self.limit:
                return None
            self._hits.setdefault(key, []).append(now)
            return now

    def allow(self, key: str) -> bool:
        return self.acquire(key) is not None

    def release(self, key: str, stamp: float) -> None:
        """Give back a hit previously returned by :meth:`acquire`."""
        with self._lock:
            history = self._hits.get(key)
            if history and stamp in history:
                history.remove(stamp)
                if not history:
                    del self._hits[key]

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"

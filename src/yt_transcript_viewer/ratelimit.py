"""
ratelimit.py — Fixed-window request counter keyed by client address.

Each client gets `max_requests` requests per `window` seconds; the window
starts with the client's first request and resets once it has elapsed.
State lives in process memory only.
"""

from __future__ import annotations

import threading
import time
from typing import Callable


class FixedWindowRateLimiter:
    def __init__(
        self,
        max_requests: int,
        window: float,
        now: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_requests = max_requests
        self._window = window
        self._now = now
        self._windows: dict[str, tuple[float, int]] = {}
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        """Count one request for `key`; False once the window's cap is spent."""
        current = self._now()
        with self._lock:
            self._evict(current)
            started, count = self._windows.get(key, (current, 0))
            if count >= self._max_requests:
                return False
            self._windows[key] = (started, count + 1)
            return True

    def _evict(self, current: float) -> None:
        expired = [
            key for key, (started, _) in self._windows.items()
            if current - started >= self._window
        ]
        for key in expired:
            del self._windows[key]

"""In-memory fixed-window rate limiter keyed by client address."""

import math
import time

from app.core.exceptions import RateLimitError


class RateLimiter:
    """Allow at most ``limit`` requests per client in each ``window_seconds``.

    Windows are kept in the order they started, so expired ones are trimmed
    from the front on every check.
    """

    def __init__(self, limit: int, window_seconds: int):
        self._limit = limit
        self._window = window_seconds
        # subject -> [window start, request count], oldest window first
        self._windows: dict[str, list[float]] = {}

    def __len__(self) -> int:
        return len(self._windows)

    def _evict_expired(self, now: float) -> None:
        while self._windows:
            oldest = next(iter(self._windows))
            if now - self._windows[oldest][0] < self._window:
                break
            del self._windows[oldest]

    def check(self, subject: str) -> None:
        """Count one request for ``subject``; raise RateLimitError when over."""
        now = time.monotonic()
        self._evict_expired(now)

        bucket = self._windows.get(subject)
        if bucket is None:
            bucket = [now, 0]
            self._windows[subject] = bucket

        if bucket[1] >= self._limit:
            retry_after = math.ceil(self._window - (now - bucket[0]))
            raise RateLimitError(retry_after_seconds=max(retry_after, 1))
        bucket[1] += 1

    def reset(self) -> None:
        self._windows.clear()

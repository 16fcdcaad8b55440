"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: uses a lock around each window read-modify-write.
- A window opens with the first message of a conversation and lasts
  ``window_seconds``; it is not aligned to wall-clock boundaries.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


@dataclass
class _Window:
    count: int
    reset_at: float


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter allowing ``limit`` messages per conversation per window.

    Expired windows of other conversations are only dropped once more than
    ``max_tracked_keys`` conversations are tracked, so memory stays bounded
    on long-running processes without scanning on every message.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        max_tracked_keys: int = 10000,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            limit: Maximum number of messages per window.
            window_seconds: Window length in seconds (fractions allowed).
            max_tracked_keys: Tracked conversations above which expired
                windows are pruned.
            clock: Time source returning UNIX time in seconds.

        Raises:
            ValueError: If limit, window_seconds or max_tracked_keys are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        if max_tracked_keys < 1:
            raise ValueError("max_tracked_keys must be >= 1")

        self._limit = limit
        self._window_seconds = window_seconds
        self._max_tracked_keys = max_tracked_keys
        self._clock = clock
        self._lock = threading.RLock()
        self._windows: dict[str, _Window] = {}

    @property
    def tracked_keys(self) -> int:
        """Number of conversations with a stored window."""
        with self._lock:
            return len(self._windows)

    def _prune_expired(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if now > window.reset_at]
        for key in expired:
            del self._windows[key]

    def consume(self, key: str) -> RateLimitResult:
        """Count one message for ``key`` and decide whether it is allowed.

        Args:
            key: Conversation identifier.

        Returns:
            RateLimitResult with allowance decision and metadata.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()

        with self._lock:
            window = self._windows.get(key)

            if window is None or now > window.reset_at:
                if window is None and len(self._windows) >= self._max_tracked_keys:
                    self._prune_expired(now)
                window = _Window(count=1, reset_at=now + self._window_seconds)
                self._windows[key] = window
                return RateLimitResult(
                    allowed=True,
                    limit=self._limit,
                    remaining=self._limit - 1,
                    reset_at=window.reset_at,
                    retry_after_seconds=None,
                )

            if window.count < self._limit:
                window.count += 1
                return RateLimitResult(
                    allowed=True,
                    limit=self._limit,
                    remaining=self._limit - window.count,
                    reset_at=window.reset_at,
                    retry_after_seconds=None,
                )

            return RateLimitResult(
                allowed=False,
                limit=self._limit,
                remaining=0,
                reset_at=window.reset_at,
                retry_after_seconds=max(0.0, window.reset_at - now),
            )

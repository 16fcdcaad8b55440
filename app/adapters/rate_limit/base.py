"""Rate limiter interfaces.

The command router depends on this abstraction (not the concrete
implementation) so the in-memory store can later be replaced by a shared
cache when the bot runs on several instances.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit consume operation.

    Attributes:
        allowed: Whether the message may be processed.
        limit: Max messages per window.
        remaining: Remaining messages in the current window (0 when blocked).
        reset_at: UNIX time in seconds when the current window ends.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after_seconds: float | None


class AbstractRateLimiter(ABC):
    """Interface for per-conversation rate limiters."""

    @abstractmethod
    def consume(self, key: str) -> RateLimitResult:
        """Consume one unit of budget for a given key.

        Args:
            key: Conversation identifier.

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    def allow(self, key: str) -> bool:
        """Return whether a message for ``key`` may be processed.

        Never raises: a failing limiter lets the message through so the bot
        stays available.
        """
        try:
            result = self.consume(key)
        except Exception:
            logger.exception("rate_limit.error", extra={"fail_open": True})
            return True

        if not result.allowed:
            logger.warning(
                "rate_limit.exceeded",
                extra={
                    "conversation_id": key,
                    "limit": result.limit,
                    "retry_after_s": result.retry_after_seconds,
                },
            )
        return result.allowed


class NoopRateLimiter(AbstractRateLimiter):
    """Limiter used when throttling is disabled in settings."""

    def consume(self, key: str) -> RateLimitResult:
        return RateLimitResult(
            allowed=True,
            limit=0,
            remaining=0,
            reset_at=0.0,
            retry_after_seconds=None,
        )

"""Process-wide rate limiter wiring.

The router receives its limiter through the constructor; this module only
decides which limiter a running app gets, based on settings.

Rate limiting strategy:
- Fixed window per conversation (chat id), opened by the first message.
- In-memory and per-process. Several workers or serverless instances each
  keep their own windows, so the effective limit grows with their count.
"""

from __future__ import annotations

import logging

from app.adapters.rate_limit.base import AbstractRateLimiter, NoopRateLimiter
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from app.core.config import AppSettings, settings

logger = logging.getLogger(__name__)


_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[bool, int, int, int] | None = None


def build_rate_limiter(app_settings: AppSettings) -> AbstractRateLimiter:
    """Create a limiter for the given settings.

    Args:
        app_settings: Application settings carrying the rate limit values.

    Returns:
        AbstractRateLimiter: In-memory limiter, or a pass-through one when
        rate limiting is disabled.
    """
    if not app_settings.rate_limit_enabled:
        logger.info("rate_limit.disabled")
        return NoopRateLimiter()

    return InMemoryFixedWindowRateLimiter(
        limit=app_settings.rate_limit_requests,
        window_seconds=app_settings.rate_limit_window_ms / 1000,
        max_tracked_keys=app_settings.rate_limit_max_tracked_keys,
    )


def get_rate_limiter() -> AbstractRateLimiter:
    """Return a process-wide rate limiter instance.

    The instance is cached in-module so windows survive across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.
    """

    global _limiter, _limiter_config

    cfg = settings.app
    config = (
        cfg.rate_limit_enabled,
        cfg.rate_limit_requests,
        cfg.rate_limit_window_ms,
        cfg.rate_limit_max_tracked_keys,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = build_rate_limiter(cfg)
        _limiter_config = config

    return _limiter

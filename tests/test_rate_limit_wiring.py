"""Tests for building the process-wide rate limiter from settings."""

import time
from unittest.mock import patch

import pytest

from app.adapters.rate_limit.base import NoopRateLimiter
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from app.core.config import AppSettings
from app.core.rate_limit import build_rate_limiter, get_rate_limiter


def test_disabled_builds_noop() -> None:
    limiter = build_rate_limiter(AppSettings(rate_limit_enabled=False))

    assert isinstance(limiter, NoopRateLimiter)


def test_enabled_builds_in_memory_with_seconds_window() -> None:
    limiter = build_rate_limiter(
        AppSettings(rate_limit_enabled=True, rate_limit_requests=2, rate_limit_window_ms=1500)
    )
    started = time.time()

    result = limiter.consume("42")

    assert isinstance(limiter, InMemoryFixedWindowRateLimiter)
    assert result.limit == 2
    assert result.reset_at == pytest.approx(started + 1.5, abs=0.5)
    assert limiter.allow("42") is True
    assert limiter.allow("42") is False


def test_get_rate_limiter_is_shared_until_config_changes() -> None:
    with patch("app.core.rate_limit.settings") as mock_settings:
        mock_settings.app = AppSettings(rate_limit_enabled=True, rate_limit_requests=3)
        first = get_rate_limiter()
        assert get_rate_limiter() is first

        mock_settings.app = AppSettings(rate_limit_enabled=True, rate_limit_requests=5)
        assert get_rate_limiter() is not first

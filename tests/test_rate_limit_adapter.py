"""Unit tests for the in-memory rate limiter adapter."""

from unittest.mock import Mock

import pytest

from app.adapters.rate_limit.base import NoopRateLimiter
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter


def test_allows_exactly_limit_then_blocks() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(limit=3, window_seconds=5.0, clock=clock)

    decisions = [limiter.allow("42") for _ in range(5)]

    assert decisions == [True, True, True, False, False]


def test_remaining_counts_down() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(limit=2, window_seconds=5.0, clock=clock)

    first = limiter.consume("42")
    second = limiter.consume("42")
    blocked = limiter.consume("42")

    assert (first.remaining, second.remaining) == (1, 0)
    assert blocked.allowed is False
    assert blocked.reset_at == 1005.0
    assert blocked.retry_after_seconds == pytest.approx(5.0)


def test_window_opens_at_first_message() -> None:
    clock = Mock(return_value=1003.0)
    limiter = InMemoryFixedWindowRateLimiter(limit=1, window_seconds=5.0, clock=clock)

    assert limiter.consume("42").reset_at == 1008.0


def test_resets_only_after_reset_at() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(limit=1, window_seconds=5.0, clock=clock)

    assert limiter.allow("42") is True
    assert limiter.allow("42") is False

    # Still inside the window at exactly reset_at
    clock.return_value = 1005.0
    assert limiter.allow("42") is False

    clock.return_value = 1005.001
    assert limiter.allow("42") is True
    assert limiter.allow("42") is False


def test_isolated_by_conversation() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(limit=1, window_seconds=5.0, clock=clock)

    assert limiter.allow("k1") is True
    assert limiter.allow("k1") is False

    assert limiter.allow("k2") is True


def test_allow_fails_open_when_clock_breaks() -> None:
    clock = Mock(side_effect=RuntimeError("clock unavailable"))
    limiter = InMemoryFixedWindowRateLimiter(limit=1, window_seconds=5.0, clock=clock)

    assert limiter.allow("42") is True
    assert limiter.allow("42") is True


def test_allow_fails_open_on_empty_key() -> None:
    limiter = InMemoryFixedWindowRateLimiter(limit=1, window_seconds=5.0)

    assert limiter.allow("") is True


def test_prunes_expired_windows_when_full() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(
        limit=1, window_seconds=5.0, max_tracked_keys=2, clock=clock
    )
    limiter.consume("a")
    limiter.consume("b")

    clock.return_value = 1010.0
    limiter.consume("c")

    assert limiter.tracked_keys == 1


def test_keeps_live_windows_when_full() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(
        limit=1, window_seconds=5.0, max_tracked_keys=1, clock=clock
    )
    limiter.consume("a")
    limiter.consume("b")

    assert limiter.tracked_keys == 2
    assert limiter.allow("a") is False


def test_noop_limiter_always_allows() -> None:
    limiter = NoopRateLimiter()

    assert all(limiter.allow("42") for _ in range(100))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"limit": 0, "window_seconds": 5.0},
        {"limit": 1, "window_seconds": 0},
        {"limit": 1, "window_seconds": 5.0, "max_tracked_keys": 0},
    ],
)
def test_invalid_constructor_args(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        InMemoryFixedWindowRateLimiter(**kwargs)


def test_consume_rejects_empty_key() -> None:
    limiter = InMemoryFixedWindowRateLimiter(limit=1, window_seconds=5.0)

    with pytest.raises(ValueError):
        limiter.consume("")


def test_fresh_limiter_is_truthy() -> None:
    limiter = InMemoryFixedWindowRateLimiter(limit=1, window_seconds=5.0)

    assert limiter.tracked_keys == 0
    assert bool(limiter) is True

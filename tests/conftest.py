"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It sets TESTING so no .env file is loaded, and pins the environment the
settings object is built from.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["TESTING"] = "true"

os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456:test-token")
os.environ.setdefault("TELEGRAM_ADMIN_IDS", "")
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.pop("AIRTABLE_API_KEY", None)
os.environ.pop("AIRTABLE_BASE_ID", None)

from unittest.mock import AsyncMock, Mock

import pytest

from app.adapters.messaging.base import AbstractMessageSender, SendResult
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from app.core.auth import AdminPolicy
from app.core.errors import Result
from app.services.command_router import CommandRouter
from app.services.payment_service import PaymentService


@pytest.fixture
def clock() -> Mock:
    """Controllable time source for rate limiter tests."""
    return Mock(return_value=1000.0)


@pytest.fixture
def limiter(clock: Mock) -> InMemoryFixedWindowRateLimiter:
    return InMemoryFixedWindowRateLimiter(limit=3, window_seconds=5.0, clock=clock)


@pytest.fixture
def payments() -> AsyncMock:
    """PaymentService double with empty, successful defaults."""
    service = AsyncMock(spec=PaymentService)
    service.list_payments.return_value = Result.success([])
    return service


@pytest.fixture
def make_router(limiter, payments):
    """Build a CommandRouter; admin policy and limiter can be overridden."""

    def _make(admin_policy: AdminPolicy | None = None, rate_limiter=None) -> CommandRouter:
        return CommandRouter(
            limiter=rate_limiter if rate_limiter is not None else limiter,
            payments=payments,
            admin_policy=admin_policy if admin_policy is not None else AdminPolicy(),
        )

    return _make


@pytest.fixture
def sender() -> AsyncMock:
    """Message sender double that accepts every message."""
    mock = AsyncMock(spec=AbstractMessageSender)
    mock.send_message.return_value = SendResult(ok=True, status_code=200)
    return mock

"""Rate limiting adapters.

The bot starts with an in-memory, per-process limiter; the abstract
interface leaves room for a shared store when several instances serve the
same webhook.
"""

from app.adapters.rate_limit.base import AbstractRateLimiter, NoopRateLimiter, RateLimitResult
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "NoopRateLimiter",
    "RateLimitResult",
]

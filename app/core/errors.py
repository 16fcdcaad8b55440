"""Application-level exception and result types.

Adapters raise the exceptions below; services convert them into a
``Result`` tagged with an ``ErrorKind`` so the command router can pick the
user-facing reply by matching on the kind instead of catching everything.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, NotRequired, TypedDict, TypeVar


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    code: str
    message: str
    hint: str
    http_status: int
    operation: str
    provider: str
    allowed: list[str]
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when user input (command arguments) fails validation."""


class AuthenticationAppError(AppError):
    """Raised when a sender is not allowed to run a command."""


class ConfigurationAppError(AppError):
    """Raised when a write needs external credentials that are not set."""


class TransportAppError(AppError):
    """Raised when an external call fails or answers with a non-success status."""


class ErrorKind(str, Enum):
    """Failure categories reported by services."""

    NOT_CONFIGURED = "not_configured"
    TRANSPORT = "transport"
    UNEXPECTED = "unexpected"


T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a service operation.

    Attributes:
        value: Payload when the operation succeeded.
        error: Failure category, ``None`` on success.
        detail: Short diagnostic text for logs (never shown to users).
    """

    value: T | None = None
    error: ErrorKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, detail: str | None = None) -> "Result[T]":
        return cls(error=error, detail=detail)

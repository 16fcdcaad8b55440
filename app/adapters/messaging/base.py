from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SendResult:
    """Outcome of an outbound message delivery.

    Attributes:
        ok: Whether the platform accepted the message.
        status_code: HTTP status, when a response was received.
        error: Short failure description for logs.
    """

    ok: bool
    status_code: int | None = None
    error: str | None = None


class AbstractMessageSender(ABC):
    """Interface for delivering replies to a conversation."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        ...

    @abstractmethod
    async def send_message(
        self,
        chat_id: int | str,
        text: str,
        *,
        parse_mode: str | None = None,
    ) -> SendResult:
        """Deliver ``text`` to ``chat_id`` once.

        Implementations must not raise and must not retry; failures are
        reported through :class:`SendResult`.
        """
        ...

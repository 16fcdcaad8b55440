"""Command router turning one inbound message into one reply.

Every message goes through the same steps, in this order:
1. Per-conversation rate limit.
2. Command lookup on the first token (case-insensitive, leading ``/``
   optional, ``@botname`` suffix ignored).
3. For admin commands: authorization, then argument count, then argument
   values, and only then the record store.

Each message is handled on its own; there is no conversation state.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.core.auth import AdminPolicy
from app.core.errors import AuthenticationAppError, ErrorKind, ValidationAppError
from app.schemas.payment import PaymentRecord, Provider
from app.schemas.telegram import InboundMessage, Reply
from app.services.payment_service import PaymentService
from app.utils import replies
from app.utils.text_sanitizer import safe_text, split_command

logger = logging.getLogger(__name__)

COMMAND_MARKER = "/"

Handler = Callable[[InboundMessage, list[str]], Awaitable[Reply]]


def parse_command(token: str) -> tuple[str, bool]:
    """Normalize the first token of a message.

    Args:
        token: First whitespace-delimited token of the trimmed text.

    Returns:
        Tuple of (command name without marker, lower-cased; whether the
        token started with the command marker).

    Examples:
        >>> parse_command("/Start@VHubBot")
        ('start', True)
        >>> parse_command("payments")
        ('payments', False)
    """
    token = token.lower()
    if not token.startswith(COMMAND_MARKER):
        return token, False

    name = token[len(COMMAND_MARKER):]
    name = name.split("@", 1)[0]
    return name, True


def format_payments(records: list[PaymentRecord]) -> str:
    """Render stored records as a Markdown bullet list, in store order."""
    lines = [
        replies.PAYMENT_LINE.format(
            provider=safe_text(record.provider),
            details=safe_text(record.details),
        )
        for record in records
    ]
    return replies.PAYMENTS_HEADER + "".join(lines)


class CommandRouter:
    """Dispatch table from command names to handlers.

    Attributes:
        limiter: Per-conversation rate limiter.
        payments: Payment details service.
        admin_policy: Allow-list deciding who may run admin commands.
    """

    def __init__(
        self,
        *,
        limiter: AbstractRateLimiter,
        payments: PaymentService,
        admin_policy: AdminPolicy,
    ) -> None:
        self.limiter = limiter
        self.payments = payments
        self.admin_policy = admin_policy
        self._handlers: dict[str, Handler] = {
            "start": self._handle_help,
            "help": self._handle_help,
            "profile": self._handle_profile,
            "me": self._handle_profile,
            "setpayment": self._handle_setpayment,
            "getpayments": self._handle_getpayments,
            "payments": self._handle_getpayments,
        }

    async def route(self, message: InboundMessage) -> Reply:
        """Produce the reply for ``message``.

        Never raises; an unexpected fault produces a generic apology.
        """
        try:
            return await self._route(message)
        except Exception:
            logger.exception("router.unexpected_error", extra={"chat_id": message.chat_id})
            return Reply(text=replies.UNEXPECTED_ERROR)

    async def _route(self, message: InboundMessage) -> Reply:
        if not self.limiter.allow(str(message.chat_id)):
            return Reply(text=replies.RATE_LIMITED)

        parts = split_command(message.text)
        command, has_marker = parse_command(parts[0])
        handler = self._handlers.get(command)

        if handler is None:
            logger.info(
                "router.unmatched",
                extra={"chat_id": message.chat_id, "has_marker": has_marker},
            )
            if has_marker:
                return Reply(text=replies.UNKNOWN_COMMAND)
            return Reply(text=replies.PLAIN_TEXT_FALLBACK)

        logger.info(
            "router.command",
            extra={"chat_id": message.chat_id, "sender_id": message.sender_id, "command": command},
        )
        return await handler(message, parts[1:])

    async def _handle_help(self, message: InboundMessage, args: list[str]) -> Reply:
        return Reply(text=replies.HELP_MESSAGE, parse_mode="Markdown")

    async def _handle_profile(self, message: InboundMessage, args: list[str]) -> Reply:
        name = message.first_name or message.username or replies.PROFILE_DEFAULT_NAME
        handle = (
            f"@{safe_text(message.username)}"
            if message.username
            else replies.PROFILE_NO_USERNAME
        )
        user_id = message.sender_id if message.sender_id is not None else replies.PROFILE_NO_USERNAME
        text = replies.PROFILE_TEMPLATE.format(
            name=safe_text(name),
            user_id=user_id,
            handle=handle,
        )
        return Reply(text=text, parse_mode="Markdown")

    def _parse_setpayment(self, message: InboundMessage, args: list[str]) -> tuple[str, str]:
        """Authorize the sender and validate ``<provider> <details>``.

        Raises:
            AuthenticationAppError: If the sender is not an admin.
            ValidationAppError: If arguments are missing or the provider is unknown.
        """
        self.admin_policy.require_admin(message.sender_id, command="setpayment")

        if len(args) < 2:
            raise ValidationAppError(
                code="setpayment_usage",
                message=replies.SETPAYMENT_USAGE,
                details={"actual": len(args)},
            )

        provider = args[0].lower()
        if provider not in Provider.values():
            raise ValidationAppError(
                code="invalid_provider",
                message=replies.INVALID_PROVIDER,
                details={"provider": provider, "allowed": Provider.values()},
            )

        return provider, " ".join(args[1:])

    async def _handle_setpayment(self, message: InboundMessage, args: list[str]) -> Reply:
        try:
            provider, details = self._parse_setpayment(message, args)
        except (AuthenticationAppError, ValidationAppError) as exc:
            logger.info(
                "router.setpayment_rejected",
                extra={"chat_id": message.chat_id, "error_code": exc.code},
            )
            return Reply(text=exc.message)

        result = await self.payments.set_payment(provider, details)

        if result.ok:
            return Reply(
                text=replies.PAYMENT_UPDATED.format(provider=safe_text(provider)),
                parse_mode="Markdown",
            )
        if result.error is ErrorKind.NOT_CONFIGURED:
            # Echo-only mode: nothing was persisted
            return Reply(
                text=replies.PAYMENT_ECHO.format(
                    provider=safe_text(provider),
                    details=safe_text(details),
                )
            )
        return Reply(text=replies.PAYMENT_UPDATE_FAILED)

    async def _handle_getpayments(self, message: InboundMessage, args: list[str]) -> Reply:
        result = await self.payments.list_payments()

        if not result.ok:
            return Reply(text=replies.PAYMENTS_READ_FAILED)
        if not result.value:
            return Reply(text=replies.NO_PAYMENTS)
        return Reply(text=format_payments(result.value), parse_mode="Markdown")

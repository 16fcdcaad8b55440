"""Webhook dispatcher.

Boundary between the raw Telegram update and the command router:
extracts the conversation, sender and text, asks the router for a reply and
delivers it once. Nothing raised while processing leaves this module, so the
webhook can always acknowledge the update and Telegram does not redeliver it.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from app.adapters.messaging.base import AbstractMessageSender
from app.schemas.telegram import InboundMessage, TelegramUpdate
from app.services.command_router import CommandRouter

logger = logging.getLogger(__name__)


def extract_message(payload: dict[str, Any]) -> InboundMessage | None:
    """Build the normalized message from an update payload.

    Supports ``message``, ``edited_message`` and ``callback_query.message``
    updates, in that order of preference.

    Args:
        payload: Decoded update JSON.

    Returns:
        InboundMessage, or None when the update carries no chat to answer.
    """
    try:
        update = TelegramUpdate.model_validate(payload)
    except ValidationError as exc:
        logger.warning("dispatcher.invalid_update", extra={"error_count": exc.error_count()})
        return None

    source = update.effective_message()
    if source is None or source.chat is None or source.chat.id in (None, ""):
        return None

    sender = source.from_
    return InboundMessage(
        chat_id=source.chat.id,
        sender_id=sender.id if sender else None,
        text=(source.text or "").strip(),
        first_name=sender.first_name if sender else None,
        username=sender.username if sender else None,
    )


class WebhookDispatcher:
    """Runs one update through the router and sends the reply.

    Attributes:
        router: Command router producing replies.
        sender: Outbound message client.
    """

    def __init__(self, *, router: CommandRouter, sender: AbstractMessageSender) -> None:
        self.router = router
        self.sender = sender

    async def dispatch(self, payload: dict[str, Any]) -> bool:
        """Process one update.

        Returns:
            bool: True when a reply was produced and delivered. False covers
            ignored updates, failed deliveries and internal faults alike; the
            caller acknowledges the update either way.
        """
        try:
            message = extract_message(payload)
            if message is None:
                logger.info(
                    "dispatcher.no_chat_id",
                    extra={"update_keys": sorted(payload)[:20]},
                )
                return False

            reply = await self.router.route(message)
            result = await self.sender.send_message(
                message.chat_id,
                reply.text,
                parse_mode=reply.parse_mode,
            )
            if not result.ok:
                logger.error(
                    "dispatcher.reply_not_delivered",
                    extra={
                        "chat_id": message.chat_id,
                        "status_code": result.status_code,
                        "error": result.error,
                    },
                )
            return result.ok
        except Exception:
            logger.exception("dispatcher.unexpected_error")
            return False

"""Messaging adapter layer - outbound replies to the chat platform."""

from app.adapters.messaging.base import AbstractMessageSender, SendResult
from app.adapters.messaging.factory import create_message_sender
from app.adapters.messaging.telegram_client import TelegramClient

__all__ = [
    "AbstractMessageSender",
    "SendResult",
    "TelegramClient",
    "create_message_sender",
]

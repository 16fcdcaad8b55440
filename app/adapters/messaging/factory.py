"""Factory for the outbound message sender."""

from app.adapters.messaging.base import AbstractMessageSender
from app.adapters.messaging.telegram_client import TelegramClient
from app.core.config import TelegramSettings, settings


def create_message_sender(telegram: TelegramSettings | None = None) -> AbstractMessageSender:
    """Build the Telegram client from settings.

    A missing token still yields a client; every send then fails fast and is
    logged, while the webhook keeps acknowledging updates.
    """
    cfg = telegram or settings.telegram
    return TelegramClient(
        bot_token=cfg.bot_token,
        api_url=cfg.api_url,
        timeout_seconds=cfg.timeout_seconds,
    )

"""Telegram Bot API client adapter."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.adapters.messaging.base import AbstractMessageSender, SendResult

logger = logging.getLogger(__name__)


class TelegramClient(AbstractMessageSender):
    """Sends replies through the Bot API ``sendMessage`` method.

    Each call is a single attempt. Telegram does not deduplicate messages,
    so retrying here could post the same reply twice.
    """

    def __init__(
        self,
        bot_token: str | None,
        api_url: str = "https://api.telegram.org",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._bot_token = bot_token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._bot_token)

    def _method_url(self, method: str) -> str:
        return f"{self._api_url}/bot{self._bot_token}/{method}"

    async def send_message(
        self,
        chat_id: int | str,
        text: str,
        *,
        parse_mode: str | None = None,
    ) -> SendResult:
        if not self.is_configured:
            logger.error(
                "telegram.send_skipped",
                extra={"reason": "bot_token_missing", "chat_id": chat_id},
            )
            return SendResult(ok=False, error="bot token not configured")

        body: dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            body["parse_mode"] = parse_mode

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(self._method_url("sendMessage"), json=body)
        except httpx.HTTPError as exc:
            logger.error(
                "telegram.send_failed",
                extra={"chat_id": chat_id, "error_type": type(exc).__name__},
            )
            return SendResult(ok=False, error=type(exc).__name__)

        if not response.is_success:
            logger.error(
                "telegram.send_failed",
                extra={
                    "chat_id": chat_id,
                    "status_code": response.status_code,
                    "body": response.text[:500],
                },
            )
            return SendResult(
                ok=False,
                status_code=response.status_code,
                error=f"Telegram API error {response.status_code}",
            )

        try:
            payload = response.json()
        except ValueError:
            payload = None

        # Telegram reports some failures as 200 with {"ok": false}
        if isinstance(payload, dict) and payload.get("ok") is False:
            logger.error(
                "telegram.send_rejected",
                extra={"chat_id": chat_id, "description": payload.get("description")},
            )
            return SendResult(
                ok=False,
                status_code=response.status_code,
                error=str(payload.get("description") or "rejected"),
            )

        logger.info("telegram.sent", extra={"chat_id": chat_id, "parse_mode": parse_mode})
        return SendResult(ok=True, status_code=response.status_code)

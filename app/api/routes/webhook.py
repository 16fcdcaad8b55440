from __future__ import annotations

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from app.adapters.messaging.factory import create_message_sender
from app.adapters.records.factory import create_record_store
from app.core.auth import AdminPolicy
from app.core.rate_limit import get_rate_limiter
from app.services.command_router import CommandRouter
from app.services.dispatcher import WebhookDispatcher
from app.services.payment_service import PaymentService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Webhook"])

ACK = "ok"


def get_dispatcher() -> WebhookDispatcher:
    """Assemble the dispatcher for one webhook call.

    Only the rate limiter is shared between calls; the other collaborators
    are stateless and rebuilt from settings.
    """
    command_router = CommandRouter(
        limiter=get_rate_limiter(),
        payments=PaymentService(create_record_store()),
        admin_policy=AdminPolicy.from_settings(),
    )
    return WebhookDispatcher(router=command_router, sender=create_message_sender())


async def _read_payload(request: Request) -> dict[str, Any]:
    """Decode the request body, treating anything but a JSON object as empty."""
    body = await request.body()
    try:
        payload = json.loads(body) if body else {}
    except ValueError:
        logger.warning("webhook.invalid_json", extra={"body_length": len(body)})
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post("/webhook/telegram", response_class=PlainTextResponse)
async def telegram_webhook(
    request: Request,
    dispatcher: Annotated[WebhookDispatcher, Depends(get_dispatcher)],
) -> PlainTextResponse:
    """Receive a Telegram update.

    Always answers 200 ``ok``, whatever happened while processing, so
    Telegram never redelivers an update because of an internal fault.
    """
    try:
        payload = await _read_payload(request)
        await dispatcher.dispatch(payload)
    except Exception:
        logger.exception("webhook.unhandled_error")
    return PlainTextResponse(ACK)


@router.get("/webhook/telegram", response_class=PlainTextResponse)
async def telegram_webhook_probe() -> PlainTextResponse:
    """Acknowledge non-POST calls (manual checks, uptime probes)."""
    return PlainTextResponse(ACK)

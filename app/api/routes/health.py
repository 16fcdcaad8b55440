from __future__ import annotations

from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Health check endpoint.

    Reports whether the bot can reply (bot token set) and whether payment
    details are persisted (Airtable credentials set). Missing configuration
    degrades the bot but does not make it unhealthy.

    Returns:
        dict: ``status`` plus the two configuration flags.
    """

    return {
        "status": "ok",
        "telegram_configured": bool(settings.telegram.bot_token),
        "store_configured": bool(settings.airtable.api_key and settings.airtable.base_id),
    }

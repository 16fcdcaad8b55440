from __future__ import annotations

"""Application factory for FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests and the ASGI entrypoint build the same app.
"""

import logging

from fastapi import FastAPI

from app.api.routes import health_router, webhook_router
from app.core.auth import AdminPolicy
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware
from app.core.openapi import apply_openapi_customizations

logger = logging.getLogger(__name__)


def _log_configuration_warnings() -> None:
    """Report degraded modes once at start-up instead of on every update."""
    if not settings.telegram.bot_token:
        logger.error("config.bot_token_missing", extra={"effect": "replies_not_sent"})

    if not (settings.airtable.api_key and settings.airtable.base_id):
        logger.warning("config.store_not_configured", extra={"effect": "setpayment_echo_only"})

    if AdminPolicy.from_settings().is_open:
        logger.warning("config.admin_policy_open", extra={"effect": "every_sender_is_admin"})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)
    _log_configuration_warnings()

    app = FastAPI(
        title="Payment Details Bot",
        description=(
            "Telegram webhook for a small command bot: /start, /profile, "
            "/setpayment (admin) and /getpayments. Payment details are kept "
            "in Airtable when configured."
        ),
        version="0.1.0",
        debug=settings.app.debug,
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(webhook_router)
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app

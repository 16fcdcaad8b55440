"""OpenAPI metadata customization.

Adds tag descriptions to the generated schema and documents the update
shape the webhook accepts, since the route reads the raw body instead of a
typed model.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

from app.schemas.telegram import TelegramUpdate

WEBHOOK_PATH = "/webhook/telegram"


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and the webhook body."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        desired_tags = [
            {
                "name": "Webhook",
                "description": "Telegram update intake. Always answers 200 ok.",
            },
            {
                "name": "Health",
                "description": "Liveness and configuration status.",
            },
        ]
        for tag in desired_tags:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        post_op = schema.get("paths", {}).get(WEBHOOK_PATH, {}).get("post")
        if isinstance(post_op, dict):
            update_schema = TelegramUpdate.model_json_schema(
                by_alias=True,
                ref_template="#/components/schemas/{model}",
            )
            component_schemas = schema.setdefault("components", {}).setdefault("schemas", {})
            component_schemas.update(update_schema.pop("$defs", {}))
            component_schemas["TelegramUpdate"] = update_schema
            post_op.setdefault(
                "requestBody",
                {
                    "required": False,
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/TelegramUpdate"},
                        }
                    },
                },
            )

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]

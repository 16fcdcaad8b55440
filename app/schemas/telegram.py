"""Telegram webhook payload schemas and the normalized message types.

Only the fields the bot reads are modelled; everything else in an update is
ignored. All fields are optional so malformed updates still parse and can be
acknowledged.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TelegramUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    first_name: str | None = None
    username: str | None = None


class TelegramChat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    type: str | None = None


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message_id: int | None = None
    chat: TelegramChat | None = None
    from_: TelegramUser | None = Field(default=None, alias="from")
    text: str | None = None


class TelegramCallbackQuery(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    message: TelegramMessage | None = None


class TelegramUpdate(BaseModel):
    """Subset of a Telegram ``Update`` object.

    Example payload:
        {
            "update_id": 123456789,
            "message": {
                "message_id": 1,
                "chat": {"id": 42, "type": "private"},
                "from": {"id": 987654321, "first_name": "Ali", "username": "ali"},
                "text": "/getpayments"
            }
        }
    """

    model_config = ConfigDict(extra="ignore")

    update_id: int | None = None
    message: TelegramMessage | None = None
    edited_message: TelegramMessage | None = None
    callback_query: TelegramCallbackQuery | None = None

    def effective_message(self) -> TelegramMessage | None:
        """Message the bot should answer: new, edited, then callback source."""
        if self.message is not None:
            return self.message
        if self.edited_message is not None:
            return self.edited_message
        if self.callback_query is not None:
            return self.callback_query.message
        return None


class InboundMessage(BaseModel):
    """Normalized message handed to the command router."""

    chat_id: int | str = Field(..., description="Conversation to reply to.")
    sender_id: int | None = Field(default=None, description="Telegram user id of the sender.")
    text: str = Field(default="", description="Trimmed message text.")
    first_name: str | None = None
    username: str | None = None


ParseMode = Literal["Markdown"]


class Reply(BaseModel):
    """Outbound message produced by the router."""

    text: str
    parse_mode: ParseMode | None = None

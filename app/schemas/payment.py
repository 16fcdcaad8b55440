"""Pydantic schemas for payment provider records."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Provider(str, Enum):
    """Payment methods the bot can hold details for."""

    JAZZCASH = "jazzcash"
    EASYPAISA = "easypaisa"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class PaymentRecord(BaseModel):
    """A provider row as stored in the records table.

    ``provider`` stays a plain string because rows edited by hand in the
    table may hold values outside :class:`Provider`; they are still listed.
    """

    provider: str = Field(..., description="Provider label, e.g. 'jazzcash'.")
    details: str = Field("", description="Free-text account details shown to users.")
    record_id: str | None = Field(
        default=None,
        description="Store-assigned id of the row, when known.",
    )


class UpsertResult(BaseModel):
    """Outcome of a successful create-or-update."""

    record_id: str | None = Field(default=None, description="Id of the written row.")
    created: bool = Field(..., description="True when a new row was created.")

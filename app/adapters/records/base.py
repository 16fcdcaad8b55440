from __future__ import annotations

from abc import ABC, abstractmethod

from app.schemas.payment import PaymentRecord, UpsertResult


class AbstractRecordStore(ABC):
    """Interface for the table holding one row per payment provider."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials for the backing store are present."""
        ...

    @abstractmethod
    async def list_all(self) -> list[PaymentRecord]:
        """Return the stored provider rows in store order.

        Returns:
            list[PaymentRecord]: Rows, empty when the store is not configured.

        Raises:
            TransportAppError: If the store cannot be read.
        """
        ...

    @abstractmethod
    async def upsert(self, provider: str, details: str) -> UpsertResult:
        """Create the row for ``provider`` or update the existing one.

        Args:
            provider: Provider key used to look up the row.
            details: New details text.

        Returns:
            UpsertResult: Written row id and whether it was created.

        Raises:
            ConfigurationAppError: If the store is not configured.
            TransportAppError: If any store call fails.
        """
        ...

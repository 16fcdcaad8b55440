"""Payment details service.

Sits between the command router and the record store. Store exceptions stop
here and come back as a ``Result`` whose ``ErrorKind`` tells the router
which reply to send.
"""

import logging

from app.adapters.records.base import AbstractRecordStore
from app.core.errors import ConfigurationAppError, ErrorKind, Result, TransportAppError
from app.schemas.payment import PaymentRecord, UpsertResult

logger = logging.getLogger(__name__)


class PaymentService:
    """Reads and writes per-provider payment details.

    Attributes:
        store: Record store adapter holding one row per provider.
    """

    def __init__(self, store: AbstractRecordStore) -> None:
        self.store = store

    async def list_payments(self) -> Result[list[PaymentRecord]]:
        """List stored payment details.

        An unconfigured store reads as empty; only a failed read is an error.
        """
        try:
            return Result.success(await self.store.list_all())
        except ConfigurationAppError:
            return Result.success([])
        except TransportAppError as exc:
            logger.error("payments.list_failed", extra={"error_code": exc.code})
            return Result.failure(ErrorKind.TRANSPORT, exc.message)
        except Exception as exc:
            logger.exception("payments.list_unexpected")
            return Result.failure(ErrorKind.UNEXPECTED, str(exc))

    async def set_payment(self, provider: str, details: str) -> Result[UpsertResult]:
        """Create or update the details stored for ``provider``.

        Args:
            provider: Validated provider key.
            details: Details text to store.

        Returns:
            Result carrying the UpsertResult, or NOT_CONFIGURED / TRANSPORT /
            UNEXPECTED.
        """
        try:
            outcome = await self.store.upsert(provider, details)
        except ConfigurationAppError as exc:
            logger.warning("payments.store_not_configured", extra={"provider": provider})
            return Result.failure(ErrorKind.NOT_CONFIGURED, exc.message)
        except TransportAppError as exc:
            logger.error(
                "payments.update_failed",
                extra={"provider": provider, "error_code": exc.code},
            )
            return Result.failure(ErrorKind.TRANSPORT, exc.message)
        except Exception as exc:
            logger.exception("payments.update_unexpected", extra={"provider": provider})
            return Result.failure(ErrorKind.UNEXPECTED, str(exc))

        return Result.success(outcome)

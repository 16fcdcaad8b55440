"""Airtable record store adapter.

Rows hold two fields, ``Provider`` and ``Details``. Airtable has no unique
constraint or conditional write, so :meth:`AirtableRecordStore.upsert` is a
find-then-create-or-update sequence of independent requests:

- Two concurrent upserts for the same provider can both miss the lookup and
  create two rows.
- A concurrent create between lookup and patch is not seen; the first row
  returned by the lookup is the one patched.

Duplicate rows are left for an operator to clean up in the Airtable UI.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.adapters.records.base import AbstractRecordStore
from app.core.errors import ConfigurationAppError, TransportAppError
from app.schemas.payment import PaymentRecord, UpsertResult

logger = logging.getLogger(__name__)

PROVIDER_FIELD = "Provider"
DETAILS_FIELD = "Details"
UNKNOWN_PROVIDER = "unknown"


def build_provider_formula(provider: str) -> str:
    """Build an exact-match ``filterByFormula`` expression for a provider."""
    escaped = provider.replace("\\", "\\\\").replace('"', '\\"')
    return f'{{{PROVIDER_FIELD}}}="{escaped}"'


def _to_record(raw: dict[str, Any]) -> PaymentRecord:
    fields = raw.get("fields") or {}
    return PaymentRecord(
        provider=str(fields.get(PROVIDER_FIELD) or UNKNOWN_PROVIDER),
        details=str(fields.get(DETAILS_FIELD) or ""),
        record_id=raw.get("id"),
    )


class AirtableRecordStore(AbstractRecordStore):
    """Payment records kept in an Airtable table.

    A new ``httpx.AsyncClient`` is opened per operation; the webhook handles
    one short request at a time and keeps no connection state between them.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        base_id: str | None,
        table: str = "Payments",
        view: str | None = "Grid view",
        page_size: int = 50,
        api_url: str = "https://api.airtable.com/v0",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            api_key: Airtable token; the store is a no-op reader without it.
            base_id: Airtable base id.
            table: Table name.
            view: View used for listing (None lists in table order).
            page_size: Maximum rows returned by :meth:`list_all`.
            api_url: REST API base URL.
            timeout_seconds: Per-request timeout.
            transport: Optional httpx transport (used by tests).
        """
        self._api_key = api_key
        self._base_id = base_id
        self._table = table
        self._view = view
        self._page_size = page_size
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._base_id)

    @property
    def _table_url(self) -> str:
        return f"{self._api_url}/{self._base_id}/{quote(self._table, safe='')}"

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON object.

        Raises:
            TransportAppError: On network failure, non-2xx status or a body
                that is not a JSON object.
        """
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=headers,
                )
        except httpx.HTTPError as exc:
            logger.error(
                "records.request_failed",
                extra={"operation": operation, "error_type": type(exc).__name__},
            )
            raise TransportAppError(
                code="store_unreachable",
                message="Record store could not be reached",
                details={"operation": operation},
            ) from exc

        if not response.is_success:
            logger.error(
                "records.bad_status",
                extra={
                    "operation": operation,
                    "status_code": response.status_code,
                    "body": response.text[:500],
                },
            )
            raise TransportAppError(
                code="store_bad_status",
                message=f"Record store answered {response.status_code}",
                details={"operation": operation, "http_status": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportAppError(
                code="store_bad_payload",
                message="Record store returned invalid JSON",
                details={"operation": operation},
            ) from exc

        if not isinstance(payload, dict):
            raise TransportAppError(
                code="store_bad_payload",
                message="Record store returned an unexpected payload",
                details={"operation": operation},
            )
        return payload

    async def list_all(self) -> list[PaymentRecord]:
        if not self.is_configured:
            logger.info("records.list.skipped", extra={"reason": "store_not_configured"})
            return []

        params: dict[str, Any] = {"pageSize": self._page_size}
        if self._view:
            params["view"] = self._view

        payload = await self._request("list", "GET", self._table_url, params=params)
        records = [_to_record(raw) for raw in payload.get("records") or []]
        logger.info("records.list.ok", extra={"count": len(records)})
        return records

    async def find_by_provider(self, provider: str) -> list[PaymentRecord]:
        """Return rows whose Provider field equals ``provider`` exactly."""
        payload = await self._request(
            "find",
            "GET",
            self._table_url,
            params={"filterByFormula": build_provider_formula(provider)},
        )
        return [_to_record(raw) for raw in payload.get("records") or []]

    async def upsert(self, provider: str, details: str) -> UpsertResult:
        if not self.is_configured:
            raise ConfigurationAppError(
                code="store_not_configured",
                message="Airtable not configured",
                details={"hint": "Set AIRTABLE_API_KEY and AIRTABLE_BASE_ID"},
            )

        fields = {PROVIDER_FIELD: provider, DETAILS_FIELD: details}
        existing = await self.find_by_provider(provider)

        if existing:
            if len(existing) > 1:
                logger.warning(
                    "records.upsert.duplicates",
                    extra={"provider": provider, "count": len(existing)},
                )
            target = existing[0]
            if not target.record_id:
                raise TransportAppError(
                    code="store_bad_payload",
                    message="Record store returned a row without an id",
                    details={"operation": "find", "provider": provider},
                )
            payload = await self._request(
                "update",
                "PATCH",
                f"{self._table_url}/{target.record_id}",
                json={"fields": fields},
            )
            logger.info(
                "records.upsert.updated",
                extra={"provider": provider, "record_id": payload.get("id", target.record_id)},
            )
            return UpsertResult(record_id=payload.get("id", target.record_id), created=False)

        payload = await self._request("create", "POST", self._table_url, json={"fields": fields})
        logger.info(
            "records.upsert.created",
            extra={"provider": provider, "record_id": payload.get("id")},
        )
        return UpsertResult(record_id=payload.get("id"), created=True)

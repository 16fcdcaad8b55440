"""Unit tests for PaymentService error-to-result mapping."""

from unittest.mock import AsyncMock

import pytest

from app.adapters.records.base import AbstractRecordStore
from app.core.errors import ConfigurationAppError, ErrorKind, TransportAppError
from app.schemas.payment import PaymentRecord, UpsertResult
from app.services.payment_service import PaymentService


@pytest.fixture
def store() -> AsyncMock:
    return AsyncMock(spec=AbstractRecordStore)


class TestSetPayment:
    @pytest.mark.asyncio
    async def test_success_wraps_upsert_result(self, store: AsyncMock) -> None:
        store.upsert.return_value = UpsertResult(record_id="rec1", created=True)
        service = PaymentService(store)

        result = await service.set_payment("jazzcash", "0300-1234567")

        assert result.ok is True
        assert result.value.record_id == "rec1"
        store.upsert.assert_awaited_once_with("jazzcash", "0300-1234567")

    @pytest.mark.asyncio
    async def test_configuration_error_maps_to_not_configured(self, store: AsyncMock) -> None:
        store.upsert.side_effect = ConfigurationAppError(
            code="store_not_configured", message="Airtable not configured"
        )
        service = PaymentService(store)

        result = await service.set_payment("jazzcash", "x")

        assert result.ok is False
        assert result.error is ErrorKind.NOT_CONFIGURED

    @pytest.mark.asyncio
    async def test_transport_error_maps_to_transport(self, store: AsyncMock) -> None:
        store.upsert.side_effect = TransportAppError(code="store_bad_status", message="500")
        service = PaymentService(store)

        result = await service.set_payment("jazzcash", "x")

        assert result.error is ErrorKind.TRANSPORT
        assert result.detail == "500"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(self, store: AsyncMock) -> None:
        store.upsert.side_effect = KeyError("fields")
        service = PaymentService(store)

        result = await service.set_payment("jazzcash", "x")

        assert result.error is ErrorKind.UNEXPECTED


class TestListPayments:
    @pytest.mark.asyncio
    async def test_returns_records(self, store: AsyncMock) -> None:
        records = [PaymentRecord(provider="jazzcash", details="A")]
        store.list_all.return_value = records
        service = PaymentService(store)

        result = await service.list_payments()

        assert result.ok is True
        assert result.value == records

    @pytest.mark.asyncio
    async def test_configuration_error_reads_as_empty(self, store: AsyncMock) -> None:
        store.list_all.side_effect = ConfigurationAppError(code="c", message="m")
        service = PaymentService(store)

        result = await service.list_payments()

        assert result.ok is True
        assert result.value == []

    @pytest.mark.asyncio
    async def test_transport_error_is_reported(self, store: AsyncMock) -> None:
        store.list_all.side_effect = TransportAppError(code="store_unreachable", message="down")
        service = PaymentService(store)

        result = await service.list_payments()

        assert result.ok is False
        assert result.error is ErrorKind.TRANSPORT

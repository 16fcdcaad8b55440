"""Tests for global exception handlers.

Validates that all exception types are handled consistently with
proper HTTP status codes, error format, and no information leakage.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.errors import (
    AppError,
    AuthenticationAppError,
    ConfigurationAppError,
    TransportAppError,
    ValidationAppError,
)
from app.core.exception_handlers import (
    general_exception_handler,
    setup_exception_handlers,
    status_code_for,
)


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers, raise_server_exceptions=False)


@pytest.mark.parametrize(
    "exc, expected",
    [
        (ValidationAppError(code="v", message="v"), 400),
        (AuthenticationAppError(code="a", message="a"), 403),
        (ConfigurationAppError(code="c", message="c"), 503),
        (TransportAppError(code="t", message="t"), 502),
        (AppError(code="x", message="x"), 400),
    ],
)
def test_status_code_for(exc: AppError, expected: int) -> None:
    assert status_code_for(exc) == expected


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    def test_validation_error_includes_details(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-validation")
        async def test_endpoint():
            raise ValidationAppError(
                code="invalid_provider",
                message="Invalid provider. Allowed: jazzcash, easypaisa",
                details={"provider": "bitcoin", "allowed": ["jazzcash", "easypaisa"]},
            )

        response = client.get("/test-validation")

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "invalid_provider"
        assert data["error"]["details"]["provider"] == "bitcoin"
        assert "request_id" in data["error"]

    def test_authentication_error_returns_403(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-auth")
        async def test_endpoint():
            raise AuthenticationAppError(
                code="admin_only",
                message="Only admin(s) can use /setpayment.",
            )

        response = client.get("/test-auth")

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "admin_only"

    def test_configuration_error_returns_503(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-config")
        async def test_endpoint():
            raise ConfigurationAppError(
                code="store_not_configured",
                message="Airtable not configured",
            )

        response = client.get("/test-config")

        assert response.status_code == 503
        assert "details" not in response.json()["error"]

    def test_transport_error_returns_502(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-transport")
        async def test_endpoint():
            raise TransportAppError(
                code="store_bad_status",
                message="Airtable returned HTTP 500",
                details={"http_status": 500},
            )

        response = client.get("/test-transport")

        assert response.status_code == 502
        assert response.json()["error"]["details"]["http_status"] == 500


class TestGeneralExceptionHandler:
    """Test fallback handler for unexpected exceptions."""

    def test_unexpected_exception_returns_generic_500(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-crash")
        async def test_endpoint():
            raise RuntimeError("Airtable key key-123 rejected")

        response = client.get("/test-crash")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "internal_server_error"
        assert "key-123" not in response.text

    def test_general_exception_handler_never_leaks_stack_trace(self):
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        response = asyncio.run(general_exception_handler(request, ValueError("Test error with details")))

        response_text = bytes(response.body).decode()
        data = json.loads(response_text)
        assert response.status_code == 500
        assert "request_id" in data["error"]
        assert "Traceback" not in response_text
        assert "ValueError" not in response_text


def test_setup_exception_handlers_registers_handlers(app_with_handlers: FastAPI):
    assert AppError in app_with_handlers.exception_handlers
    assert Exception in app_with_handlers.exception_handlers

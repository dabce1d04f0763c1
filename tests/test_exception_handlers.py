"""Tests for global exception handlers.

Validates that all exception types are handled consistently with
proper HTTP status codes, error format, and no information leakage.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from ladybug_api.core.errors import AppError, UpstreamAppError, ValidationAppError
from ladybug_api.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers, raise_server_exceptions=False)


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    def test_validation_error_returns_400(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-validation")
        async def test_endpoint():
            raise ValidationAppError(code="test_validation", message="Test validation error")

        response = client.get("/test-validation")

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "test_validation"
        assert data["error"]["message"] == "Test validation error"
        assert "request_id" in data["error"]

    def test_validation_error_includes_details(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-validation-details")
        async def test_endpoint():
            raise ValidationAppError(
                code="parameter_too_long",
                message="Too long",
                details={"parameter": "text", "max_length": 1000, "actual_length": 1200},
            )

        response = client.get("/test-validation-details")

        assert response.status_code == 400
        details = response.json()["error"]["details"]
        assert details["max_length"] == 1000
        assert details["actual_length"] == 1200

    def test_upstream_error_returns_502(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-upstream")
        async def test_endpoint():
            raise UpstreamAppError(code="translation_failed", message="Upstream down")

        response = client.get("/test-upstream")

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "translation_failed"

    def test_details_omitted_when_empty(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-format")
        async def test_endpoint():
            raise ValidationAppError(code="test", message="test")

        data = client.get("/test-format").json()

        assert set(data["error"]) == {"code", "message", "request_id"}


class TestNotFoundHandler:
    def test_unknown_path_lists_available_endpoints(self, make_app):
        client = TestClient(make_app())

        response = client.get("/nope")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "not_found"
        assert data["error"]["message"] == "Endpoint not found"
        assert data["path"] == "/nope"
        assert "/tools/hash" in data["availableEndpoints"]
        assert "/health" in data["availableEndpoints"]
        assert data["availableEndpoints"] == sorted(data["availableEndpoints"])
        assert "/openapi.json" not in data["availableEndpoints"]

    def test_nested_router_paths_are_listed(self, client: TestClient, app_with_handlers: FastAPI):
        inner = APIRouter()

        @inner.get("/leaf")
        async def leaf():
            return {}

        outer = APIRouter(prefix="/outer")
        outer.include_router(inner)
        app_with_handlers.include_router(outer)

        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json()["availableEndpoints"] == ["/outer/leaf"]


class TestGeneralExceptionHandler:
    """Test fallback handler for unexpected exceptions."""

    def test_unexpected_exception_returns_500(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-crash")
        async def test_endpoint():
            raise RuntimeError("database connection failed")

        response = client.get("/test-crash")

        assert response.status_code == 500
        data = response.json()
        assert data["error"]["code"] == "internal_server_error"
        assert "database connection" not in response.text

    def test_general_exception_handler_never_leaks_stack_trace(self):
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        exc = ValueError("Test error with details")
        response = asyncio.run(general_exception_handler(request, exc))

        response_text = bytes(response.body).decode()
        data = json.loads(response_text)
        assert response.status_code == 500
        assert data["error"]["message"] == "Something went wrong. Please try again later."
        assert "Traceback" not in response_text
        assert "ValueError" not in response_text


def test_setup_exception_handlers_registers_handlers(app_with_handlers: FastAPI):
    assert AppError in app_with_handlers.exception_handlers
    assert Exception in app_with_handlers.exception_handlers

"""Tests for exception classes and the failure envelope handlers."""

import pytest
from fastapi import APIRouter, FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from app.core.exceptions import (
    GENERIC_ERROR_MESSAGE,
    DatabaseError,
    InventoryError,
    NotFoundError,
    ValidationError,
    register_exception_handlers,
)
from app.core.middleware import RequestIdMiddleware

router = APIRouter(prefix="/_test_errors")


@router.get("/not-found")
async def raise_not_found():
    raise NotFoundError("Store not found", details={"store_id": 1})


@router.get("/validation")
async def raise_validation():
    raise ValidationError(errors=[{"field": "limit", "message": "limit must be between 1 and 100"}])


@router.get("/database")
async def raise_database():
    raise DatabaseError("Failed to fetch store performance data", details={"limit": 10})


@router.get("/sqlalchemy")
async def raise_sqlalchemy():
    raise OperationalError("SELECT 1", {}, Exception("server closed the connection"))


@router.get("/unexpected")
async def raise_unexpected():
    raise RuntimeError("secret internal detail")


@pytest.fixture
async def error_client():
    """Client for a bare app wired with the production handlers."""
    error_app = FastAPI()
    error_app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(error_app)
    error_app.include_router(router)

    transport = ASGITransport(app=error_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestExceptionClasses:
    """Tests for the InventoryError hierarchy."""

    def test_status_codes(self):
        assert NotFoundError().status_code == 404
        assert ValidationError().status_code == 400
        assert DatabaseError().status_code == 500

    def test_subclasses_share_base(self):
        for exc in (NotFoundError(), ValidationError(), DatabaseError()):
            assert isinstance(exc, InventoryError)

    def test_validation_error_carries_field_errors(self):
        exc = ValidationError(errors=[{"field": "storeId", "message": "storeId is required"}])

        assert exc.message == "Validation failed"
        assert exc.errors[0]["field"] == "storeId"


class TestExceptionHandlers:
    """Tests for the JSON failure envelope."""

    async def test_not_found(self, error_client):
        response = await error_client.get("/_test_errors/not-found")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Store not found"
        assert "details" not in body

    async def test_service_validation_error(self, error_client):
        response = await error_client.get("/_test_errors/validation")

        assert response.status_code == 400
        assert response.json()["details"] == [
            {"field": "limit", "message": "limit must be between 1 and 100"}
        ]

    async def test_database_error_hides_message(self, error_client):
        response = await error_client.get("/_test_errors/database")

        assert response.status_code == 500
        assert response.json()["error"] == GENERIC_ERROR_MESSAGE

    async def test_unhandled_storage_error_is_500(self, error_client):
        response = await error_client.get("/_test_errors/sqlalchemy")

        assert response.status_code == 500
        assert response.json()["error"] == GENERIC_ERROR_MESSAGE
        assert "server closed" not in response.text

    async def test_unexpected_error_is_500(self, error_client):
        response = await error_client.get("/_test_errors/unexpected")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == GENERIC_ERROR_MESSAGE
        assert "secret" not in response.text

    async def test_unknown_route(self, error_client):
        response = await error_client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] == "Route not found"

    async def test_wrong_method(self, error_client):
        response = await error_client.post("/_test_errors/not-found")

        assert response.status_code == 405
        assert response.json()["success"] is False

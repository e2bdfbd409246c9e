"""Test fixtures for stores module."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import get_db
from app.features.stores.schemas import StoreResponse
from app.main import app

CREATED_AT = datetime(2024, 1, 15, 9, 30, tzinfo=UTC)


@pytest.fixture
def mock_session() -> AsyncMock:
    """AsyncSession mock (``add`` is synchronous on the real session)."""
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
async def client(mock_session: AsyncMock):
    """Create async test client with the session dependency mocked out."""

    async def override_get_db():
        yield mock_session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def sample_store_data() -> dict[str, str]:
    """Valid store body in wire (camelCase) form."""
    return {
        "name": "Downtown Market",
        "address": "100 Main St",
        "city": "Springfield",
        "state": "IL",
        "zipCode": "62701",
        "phoneNumber": "555-0100",
        "email": "downtown@example.com",
    }


@pytest.fixture
def sample_store() -> StoreResponse:
    """Store as returned by the service layer."""
    return StoreResponse(
        id=1,
        name="Downtown Market",
        address="100 Main St",
        city="Springfield",
        state="IL",
        zip_code="62701",
        phone_number="555-0100",
        email="downtown@example.com",
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )

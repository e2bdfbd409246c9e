"""Test fixtures for core module."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import get_database
from app.main import app


@pytest.fixture
def fake_database() -> MagicMock:
    """Storage handle whose ping succeeds unless told otherwise."""
    database = MagicMock()
    database.ping = AsyncMock()
    return database


@pytest.fixture
async def client(fake_database: MagicMock):
    """Create async test client with the storage handle mocked out."""
    app.dependency_overrides[get_database] = lambda: fake_database
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

"""Shared pytest fixtures for InventoryAnalytics end-to-end tests.

These fixtures talk to a real PostgreSQL database (docker-compose up -d).
Feature test packages under app/ carry their own conftest.py because pytest
only discovers fixtures along the test file's directory path.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import Base, Database
from app.main import app


@pytest.fixture
async def database():
    """Real storage handle with freshly created tables.

    Creates all tables before the test and drops them afterwards.
    """
    handle = Database.from_settings()

    async with handle.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield handle

    async with handle.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await handle.dispose()


@pytest.fixture
async def db_session(database: Database):
    """Create async database session for integration tests."""
    async with database.session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
async def client(database: Database):
    """Create async HTTP client bound to the real database handle.

    ASGITransport does not run the lifespan, so the handle is attached to
    ``app.state`` here the way startup would.
    """
    app.state.database = database
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    del app.state.database

"""Fixtures for data platform integration tests.

Note: The db_session fixture is duplicated here because pytest fixtures are discovered
based on conftest.py files in the directory path. Tests in app/features/*/tests/ cannot
see fixtures in tests/conftest.py since it's not in their parent path.
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import get_settings
from app.core.database import Base
from app.features.data_platform.models import Product, Store


@pytest.fixture
async def db_session():
    """Create async database session for integration tests.

    Creates all tables, provides a session, and drops them afterwards.
    Requires PostgreSQL to be running (docker-compose up -d).
    """
    settings = get_settings()
    engine = create_async_engine(settings.database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def sample_store(db_session: AsyncSession) -> Store:
    """Persisted store."""
    store = Store(
        name="Downtown Market",
        address="100 Main St",
        city="Springfield",
        state="IL",
        zip_code="62701",
    )
    db_session.add(store)
    await db_session.commit()
    return store


@pytest.fixture
async def sample_product(db_session: AsyncSession, sample_store: Store) -> Product:
    """Persisted product with stock."""
    product = Product(
        store_id=sample_store.id,
        name="Espresso Machine",
        category="Appliances",
        price=Decimal("100.00"),
        quantity_in_stock=10,
        sku="APP-00001",
    )
    db_session.add(product)
    await db_session.commit()
    return product

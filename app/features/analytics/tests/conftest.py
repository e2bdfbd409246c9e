"""Test fixtures for analytics module."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import get_database
from app.features.analytics.aggregations import (
    InventoryCounts,
    ProductMetricsRow,
    SalesTotals,
    StoreMetricsRow,
)
from app.main import app


class FakeDatabase:
    """Stand-in for ``Database`` handing out one mocked session."""

    def __init__(self) -> None:
        self.db = AsyncMock()
        self.db.add = MagicMock()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncMock]:
        yield self.db


@pytest.fixture
def fake_database() -> FakeDatabase:
    """Storage handle whose session is an AsyncMock."""
    return FakeDatabase()


@pytest.fixture
async def client(fake_database: FakeDatabase):
    """Create async test client with the storage handle mocked out."""
    app.dependency_overrides[get_database] = lambda: fake_database
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_store_row():
    """Factory for StoreMetricsRow with a $100 product carrying 10 units."""

    def _make(**overrides) -> StoreMetricsRow:
        values = {
            "store_id": 1,
            "store_name": "Downtown Market",
            "store_city": "Springfield",
            "store_state": "IL",
            "product_count": 1,
            "active_product_count": 1,
            "inventory_value": Decimal("1000.00"),
            "price_total": Decimal("100.00"),
            "sales_revenue": Decimal("500.00"),
            "units_sold": 5,
        }
        values.update(overrides)
        return StoreMetricsRow(**values)

    return _make


@pytest.fixture
def make_product_row():
    """Factory for ProductMetricsRow: $100 product, stock 10, sales of 3 and 2 units."""

    def _make(**overrides) -> ProductMetricsRow:
        values = {
            "product_id": 1,
            "product_name": "Espresso Machine",
            "product_category": "Appliances",
            "product_sku": "APP-00001",
            "current_stock": 10,
            "current_price": Decimal("100.00"),
            "units_sold": 5,
            "revenue": Decimal("500.00"),
            "sale_count": 2,
        }
        values.update(overrides)
        return ProductMetricsRow(**values)

    return _make


@pytest.fixture
def sample_totals() -> SalesTotals:
    """Current-period totals."""
    return SalesTotals(revenue=Decimal("500.00"), units=5)


@pytest.fixture
def sample_counts() -> InventoryCounts:
    """Catalogue counters."""
    return InventoryCounts(total_stores=2, total_products=3, low_stock_products=1)

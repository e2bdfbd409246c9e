"""Test fixtures for products module."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import get_db
from app.features.data_platform.models import Product, Store
from app.features.products.schemas import ProductResponse
from app.features.stores.schemas import StoreSummary
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
def sample_product_data() -> dict:
    """Valid product body in wire (camelCase) form."""
    return {
        "storeId": 1,
        "name": "Cola Classic",
        "description": "12oz can",
        "category": "Beverages",
        "price": "2.99",
        "quantityInStock": 40,
        "sku": "BEV-00001",
    }


@pytest.fixture
def sample_product() -> ProductResponse:
    """Product as returned by the service layer."""
    return ProductResponse(
        id=10,
        store_id=1,
        name="Cola Classic",
        description="12oz can",
        category="Beverages",
        price=Decimal("2.99"),
        quantity_in_stock=40,
        sku="BEV-00001",
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
        store=StoreSummary(id=1, name="Downtown Market", city="Springfield", state="IL"),
    )


@pytest.fixture
def make_product_row():
    """Factory for Product ORM rows with their store attached."""

    def _make(**overrides) -> Product:
        store = Store(id=1, name="Downtown Market", city="Springfield", state="IL")
        values = {
            "id": 10,
            "store_id": 1,
            "name": "Cola Classic",
            "description": None,
            "category": "Beverages",
            "price": Decimal("2.99"),
            "quantity_in_stock": 40,
            "sku": "BEV-00001",
            "created_at": CREATED_AT,
            "updated_at": CREATED_AT,
        }
        values.update(overrides)
        product = Product(**values)
        product.store = store
        return product

    return _make

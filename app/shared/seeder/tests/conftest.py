"""Pytest fixtures for seeder tests."""

import random
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from app.shared.seeder.config import DimensionConfig, SalesConfig


@pytest.fixture
def rng():
    """Create a seeded random number generator."""
    return random.Random(42)


@pytest.fixture
def dimension_config():
    """Create a minimal dimension config for testing."""
    return DimensionConfig(
        stores=3,
        products_per_store=4,
        product_categories=["Audio", "Gaming"],
        min_stock=0,
        max_stock=20,
    )


@pytest.fixture
def sales_config():
    """Create a short sales window for testing."""
    return SalesConfig(
        days=7,
        min_daily_sales=2,
        max_daily_sales=4,
        max_quantity=3,
        popular_share=0.5,
        popular_extra_sales=2,
    )


@pytest.fixture
def now():
    """Fixed end of the sales window (mid-afternoon)."""
    return datetime(2024, 6, 15, 15, 30, tzinfo=UTC)


@pytest.fixture
def sellable_products():
    """(product_id, store_id, price) tuples."""
    return [
        (1, 1, Decimal("19.99")),
        (2, 1, Decimal("5.00")),
        (3, 2, Decimal("249.99")),
        (4, 2, Decimal("0.99")),
    ]

"""Tests for sample sale generation."""

import random
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from app.features.analytics.sample_data import SampleSalesGenerator

NOW = datetime(2024, 6, 1, 12, tzinfo=UTC)
PRODUCTS = [(1, Decimal("9.99")), (2, Decimal("100.00"))]


class TestSampleSalesGenerator:
    """Tests for SampleSalesGenerator.generate."""

    def test_generates_requested_count(self):
        generator = SampleSalesGenerator(rng=random.Random(42))

        sales = generator.generate(store_id=3, products=PRODUCTS, count=50, now=NOW)

        assert len(sales) == 50
        assert {sale.store_id for sale in sales} == {3}

    def test_sales_are_consistent(self):
        """Unit price is the product price and totals are exact."""
        prices = dict(PRODUCTS)
        generator = SampleSalesGenerator(rng=random.Random(7), max_quantity=5)

        for sale in generator.generate(store_id=1, products=PRODUCTS, count=100, now=NOW):
            assert sale.unit_price == prices[sale.product_id]
            assert 1 <= sale.quantity_sold <= 5
            assert sale.total_amount == sale.unit_price * sale.quantity_sold
            assert NOW - timedelta(days=30) <= sale.sale_date <= NOW

    def test_no_products_yields_nothing(self):
        generator = SampleSalesGenerator(rng=random.Random(1))

        assert generator.generate(store_id=1, products=[], count=10, now=NOW) == []

    def test_seeded_generation_is_reproducible(self):
        first = SampleSalesGenerator(rng=random.Random(99)).generate(1, PRODUCTS, 20, NOW)
        second = SampleSalesGenerator(rng=random.Random(99)).generate(1, PRODUCTS, 20, NOW)

        assert first == second

    def test_as_row_matches_table_columns(self):
        (sale,) = SampleSalesGenerator(rng=random.Random(5)).generate(1, PRODUCTS[:1], 1, NOW)

        row = sale.as_row()

        assert set(row) == {
            "product_id",
            "store_id",
            "quantity_sold",
            "unit_price",
            "total_amount",
            "sale_date",
        }
        assert row["product_id"] == 1

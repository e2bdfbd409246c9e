"""Unit tests for analytics service.

Aggregation queries are patched; the service is exercised against a fake
storage handle.
"""

import random
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import DatabaseError, NotFoundError, ValidationError
from app.features.analytics.aggregations import SalesBucketRow, SalesTotals
from app.features.analytics.schemas import TimeGranularity
from app.features.analytics.service import AnalyticsService

AGGREGATIONS = "app.features.analytics.aggregations"
START = datetime(2024, 1, 1, tzinfo=UTC)
END = datetime(2024, 1, 11, tzinfo=UTC)


class TestResolveRange:
    """Tests for AnalyticsService.resolve_range."""

    def test_defaults_to_last_30_days(self, fake_database):
        start, end = AnalyticsService(fake_database).resolve_range(None, None)

        assert end - start == timedelta(days=30)
        assert end.tzinfo is not None

    def test_missing_start_only(self, fake_database):
        """Each bound defaults independently."""
        end_date = datetime.now(UTC)

        start, end = AnalyticsService(fake_database).resolve_range(None, end_date)

        assert end == end_date
        assert start < end

    def test_naive_datetimes_are_utc(self, fake_database):
        start, end = AnalyticsService(fake_database).resolve_range(
            datetime(2024, 1, 1), datetime(2024, 1, 2)
        )

        assert start == START
        assert end.tzinfo == UTC

    def test_start_after_end_rejected(self, fake_database):
        with pytest.raises(ValidationError) as exc_info:
            AnalyticsService(fake_database).resolve_range(END, START)

        assert exc_info.value.errors[0]["field"] == "startDate"
        assert exc_info.value.status_code == 400


class TestSalesAnalytics:
    """Tests for AnalyticsService.get_sales_analytics."""

    async def test_builds_series_and_meta(self, fake_database):
        rows = [
            SalesBucketRow(
                bucket_start=START,
                total_quantity=5,
                total_revenue=Decimal("500.00"),
                unique_products=1,
                store_count=1,
            )
        ]
        with patch(f"{AGGREGATIONS}.fetch_sales_buckets", new=AsyncMock(return_value=rows)) as fetch:
            result = await AnalyticsService(fake_database).get_sales_analytics(
                start_date=START, end_date=END, store_id=4, group_by="week"
            )

        assert result.data[0].period_label == "2024-W01"
        assert result.data[0].average_order_value == Decimal("100.00")
        assert result.meta.group_by == TimeGranularity.WEEK
        assert result.meta.store_id == 4
        assert result.meta.record_count == 1
        assert fetch.await_args.args[1:] == (START, END, TimeGranularity.WEEK, 4)

    async def test_invalid_group_by(self, fake_database):
        with pytest.raises(ValidationError) as exc_info:
            await AnalyticsService(fake_database).get_sales_analytics(group_by="year")

        assert exc_info.value.errors[0]["field"] == "groupBy"

    async def test_query_failure_becomes_database_error(self, fake_database):
        with patch(
            f"{AGGREGATIONS}.fetch_sales_buckets",
            new=AsyncMock(side_effect=SQLAlchemyError("connection reset")),
        ):
            with pytest.raises(DatabaseError) as exc_info:
                await AnalyticsService(fake_database).get_sales_analytics(START, END)

        assert exc_info.value.message == "Failed to fetch sales analytics data"
        assert exc_info.value.status_code == 500


class TestStorePerformance:
    """Tests for AnalyticsService.get_store_performance."""

    async def test_ranks_stores(self, fake_database, make_store_row):
        rows = [
            make_store_row(store_id=1, sales_revenue=Decimal("0"), units_sold=0),
            make_store_row(store_id=2),
        ]
        with patch(f"{AGGREGATIONS}.fetch_store_metrics", new=AsyncMock(return_value=rows)):
            result = await AnalyticsService(fake_database).get_store_performance(START, END)

        assert [item.store_id for item in result.data] == [2, 1]
        assert result.meta.limit == 10

    @pytest.mark.parametrize("limit", [0, 101])
    async def test_limit_out_of_range(self, fake_database, limit):
        with pytest.raises(ValidationError) as exc_info:
            await AnalyticsService(fake_database).get_store_performance(limit=limit)

        assert exc_info.value.errors[0]["field"] == "limit"


class TestProductPerformance:
    """Tests for AnalyticsService.get_product_performance."""

    async def test_requires_store_id(self, fake_database):
        with pytest.raises(ValidationError) as exc_info:
            await AnalyticsService(fake_database).get_product_performance(None)

        assert exc_info.value.errors[0]["field"] == "storeId"

    async def test_unknown_store(self, fake_database):
        fake_database.db.scalar.return_value = None

        with pytest.raises(NotFoundError):
            await AnalyticsService(fake_database).get_product_performance(99, START, END)

    async def test_ranks_products(self, fake_database, make_product_row):
        fake_database.db.scalar.return_value = 1
        rows = [
            make_product_row(product_id=1, revenue=Decimal("50"), units_sold=1),
            make_product_row(product_id=2),
        ]
        with patch(f"{AGGREGATIONS}.fetch_product_metrics", new=AsyncMock(return_value=rows)):
            result = await AnalyticsService(fake_database).get_product_performance(
                1, START, END, limit=5
            )

        assert [(item.product_id, item.product_rank) for item in result.data] == [(2, 1), (1, 2)]
        assert result.data[0].revenue_per_day == Decimal("50.00")
        assert result.meta.store_id == 1


class TestDashboardSummary:
    """Tests for AnalyticsService.get_dashboard_summary."""

    async def test_summary(self, fake_database, make_store_row, sample_counts):
        async def totals(db, start, end):
            if start == START:
                return SalesTotals(revenue=Decimal("500.00"), units=5)
            return SalesTotals(revenue=Decimal("400.00"), units=4)

        with (
            patch(f"{AGGREGATIONS}.fetch_sales_totals", new=AsyncMock(side_effect=totals)) as fetch,
            patch(
                f"{AGGREGATIONS}.fetch_store_metrics",
                new=AsyncMock(
                    return_value=[
                        make_store_row(
                            store_id=1,
                            store_name="Quiet",
                            units_sold=0,
                            sales_revenue=Decimal("0"),
                        ),
                        make_store_row(store_id=2, store_name="Busy"),
                    ]
                ),
            ),
            patch(
                f"{AGGREGATIONS}.fetch_inventory_counts",
                new=AsyncMock(return_value=sample_counts),
            ),
        ):
            result = await AnalyticsService(fake_database).get_dashboard_summary(START, END)

        summary = result.data
        assert summary.total_revenue == Decimal("500.00")
        assert summary.total_units == 5
        assert summary.average_order_value == Decimal("100.00")
        assert summary.top_performing_store == "Busy"
        assert summary.growth_rate == Decimal("25.00")
        assert summary.total_stores == 2
        assert summary.low_stock_alerts == 1
        assert result.meta.generated_at is not None

        previous_call = [call for call in fetch.await_args_list if call.args[1] != START][0]
        assert previous_call.args[1] == START - (END - START)
        assert previous_call.args[2] == START - timedelta(microseconds=1)

    async def test_no_stores(self, fake_database, sample_counts):
        with (
            patch(
                f"{AGGREGATIONS}.fetch_sales_totals",
                new=AsyncMock(return_value=SalesTotals(revenue=Decimal("0"), units=0)),
            ),
            patch(f"{AGGREGATIONS}.fetch_store_metrics", new=AsyncMock(return_value=[])),
            patch(
                f"{AGGREGATIONS}.fetch_inventory_counts",
                new=AsyncMock(return_value=sample_counts),
            ),
        ):
            result = await AnalyticsService(fake_database).get_dashboard_summary(START, END)

        assert result.data.top_performing_store == "N/A"
        assert result.data.growth_rate == Decimal("0.00")
        assert result.data.average_order_value == Decimal("0.00")

    async def test_failing_inventory_counts_fail_the_summary(
        self, fake_database, make_store_row, sample_totals
    ):
        """One failed sub-fetch fails the whole dashboard."""
        with (
            patch(
                f"{AGGREGATIONS}.fetch_sales_totals",
                new=AsyncMock(return_value=sample_totals),
            ),
            patch(
                f"{AGGREGATIONS}.fetch_store_metrics",
                new=AsyncMock(return_value=[make_store_row()]),
            ),
            patch(
                f"{AGGREGATIONS}.fetch_inventory_counts",
                new=AsyncMock(side_effect=SQLAlchemyError("connection lost")),
            ),
            pytest.raises(DatabaseError) as exc_info,
        ):
            await AnalyticsService(fake_database).get_dashboard_summary(START, END)

        assert exc_info.value.message == "Failed to fetch dashboard inventory counts"

    async def test_failing_previous_period_fails_the_summary(
        self, fake_database, make_store_row, sample_totals, sample_counts
    ):
        async def totals(db, start, end):
            if start == START:
                return sample_totals
            raise SQLAlchemyError("statement timeout")

        with (
            patch(f"{AGGREGATIONS}.fetch_sales_totals", new=AsyncMock(side_effect=totals)),
            patch(
                f"{AGGREGATIONS}.fetch_store_metrics",
                new=AsyncMock(return_value=[make_store_row()]),
            ),
            patch(
                f"{AGGREGATIONS}.fetch_inventory_counts",
                new=AsyncMock(return_value=sample_counts),
            ),
            pytest.raises(DatabaseError) as exc_info,
        ):
            await AnalyticsService(fake_database).get_dashboard_summary(START, END)

        assert exc_info.value.message == "Failed to fetch dashboard previous period totals"
        assert exc_info.value.status_code == 500


class TestGenerateSampleData:
    """Tests for AnalyticsService.generate_sample_data."""

    async def test_inserts_sales(self, fake_database):
        fake_database.db.scalar.return_value = 1
        prices = [(10, Decimal("9.99")), (11, Decimal("4.50"))]
        service = AnalyticsService(fake_database, rng=random.Random(42))

        with patch(f"{AGGREGATIONS}.fetch_in_stock_prices", new=AsyncMock(return_value=prices)):
            result = await service.generate_sample_data(1, 25)

        assert result.sales_created == 25
        assert result.products_used == 2
        fake_database.db.execute.assert_awaited_once()
        _, rows = fake_database.db.execute.await_args.args
        assert len(rows) == 25
        assert {row["store_id"] for row in rows} == {1}

    async def test_no_stock_creates_nothing(self, fake_database):
        fake_database.db.scalar.return_value = 1

        with patch(f"{AGGREGATIONS}.fetch_in_stock_prices", new=AsyncMock(return_value=[])):
            result = await AnalyticsService(fake_database).generate_sample_data(1, 10)

        assert result.sales_created == 0
        fake_database.db.execute.assert_not_awaited()

    @pytest.mark.parametrize("count", [0, 1001])
    async def test_count_out_of_range(self, fake_database, count):
        with pytest.raises(ValidationError) as exc_info:
            await AnalyticsService(fake_database).generate_sample_data(1, count)

        assert exc_info.value.errors[0]["field"] == "numberOfSales"

    async def test_unknown_store(self, fake_database):
        fake_database.db.scalar.return_value = None

        with pytest.raises(NotFoundError):
            await AnalyticsService(fake_database).generate_sample_data(99, 10)

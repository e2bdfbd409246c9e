"""Service layer for analytics operations.

Composes the SQL aggregations with the scoring rules into response objects.
Each read opens its own session from the shared ``Database`` handle, so the
dashboard can run its four independent reads concurrently.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import Database
from app.core.exceptions import DatabaseError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.features.analytics import aggregations, scoring
from app.features.analytics.sample_data import SampleSalesGenerator
from app.features.analytics.schemas import (
    AnalyticsMeta,
    AnalyticsResponse,
    DashboardSummary,
    ProductPerformanceItem,
    SalesAnalyticsItem,
    SampleDataResult,
    StorePerformanceItem,
    TimeGranularity,
)
from app.features.data_platform.models import ProductSale, Store

logger = get_logger(__name__)
R = TypeVar("R")


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class AnalyticsService:
    """Service for sales analytics, rankings and the dashboard summary.

    Args:
        database: Storage handle used to open one session per read.
        rng: Random source for sample-data generation.
    """

    def __init__(self, database: Database, rng: random.Random | None = None) -> None:
        self.database = database
        self.settings = get_settings()
        self.sample_generator = SampleSalesGenerator(
            rng=rng,
            max_quantity=self.settings.sample_data_max_quantity,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def resolve_range(
        self,
        start_date: datetime | None,
        end_date: datetime | None,
    ) -> tuple[datetime, datetime]:
        """Apply the default range (last N days ending now) to missing bounds.

        Raises:
            ValidationError: If start is after end.
        """
        now = datetime.now(UTC)
        end = _as_utc(end_date) if end_date is not None else now
        if start_date is not None:
            start = _as_utc(start_date)
        else:
            start = now - timedelta(days=self.settings.analytics_default_range_days)

        if start > end:
            raise ValidationError(
                errors=[{"field": "startDate", "message": "startDate must not be after endDate"}],
                details={"start_date": start.isoformat(), "end_date": end.isoformat()},
            )
        return start, end

    def _check_limit(self, limit: int) -> None:
        if not 1 <= limit <= self.settings.analytics_max_limit:
            raise ValidationError(
                errors=[
                    {
                        "field": "limit",
                        "message": f"limit must be between 1 and {self.settings.analytics_max_limit}",
                    }
                ],
            )

    async def _read(
        self,
        operation: str,
        query: Callable[[AsyncSession], Awaitable[R]],
        context: dict[str, Any],
    ) -> R:
        """Run one read in its own session, converting storage failures."""
        try:
            async with self.database.session() as db:
                return await query(db)
        except SQLAlchemyError as e:
            logger.error(
                "analytics.query_failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
                **context,
            )
            raise DatabaseError(f"Failed to fetch {operation}", details=context) from e

    async def _ensure_store(self, store_id: int) -> None:
        async def query(db: AsyncSession) -> int | None:
            return await db.scalar(select(Store.id).where(Store.id == store_id))

        found = await self._read("store lookup", query, {"store_id": store_id})
        if found is None:
            raise NotFoundError("Store not found", details={"store_id": store_id})

    # =========================================================================
    # Sales Analytics
    # =========================================================================

    async def get_sales_analytics(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        store_id: int | None = None,
        group_by: TimeGranularity | str = TimeGranularity.DAY,
    ) -> AnalyticsResponse[list[SalesAnalyticsItem]]:
        """Sales time series bucketed by hour, day, week or month.

        Args:
            start_date: Range start (inclusive), default 30 days ago.
            end_date: Range end (inclusive), default now.
            store_id: Restrict to one store.
            group_by: Bucket size.

        Returns:
            Buckets in ascending time order; empty buckets are omitted.

        Raises:
            ValidationError: If group_by is not a supported granularity.
        """
        try:
            granularity = TimeGranularity(group_by)
        except ValueError as e:
            allowed = ", ".join(g.value for g in TimeGranularity)
            raise ValidationError(
                errors=[{"field": "groupBy", "message": f"groupBy must be one of: {allowed}"}],
            ) from e
        start, end = self.resolve_range(start_date, end_date)
        context = {
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "store_id": store_id,
            "group_by": granularity.value,
        }

        rows = await self._read(
            "sales analytics data",
            lambda db: aggregations.fetch_sales_buckets(db, start, end, granularity, store_id),
            context,
        )
        items = scoring.build_sales_series(rows, granularity)

        logger.info("analytics.sales_computed", record_count=len(items), **context)

        return AnalyticsResponse(
            data=items,
            meta=AnalyticsMeta(
                start_date=start,
                end_date=end,
                store_id=store_id,
                group_by=granularity,
                record_count=len(items),
            ),
        )

    # =========================================================================
    # Rankings
    # =========================================================================

    async def get_store_performance(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int | None = None,
    ) -> AnalyticsResponse[list[StorePerformanceItem]]:
        """Rank all stores by performance score.

        Stores without products or sales are included with zero metrics.

        Raises:
            ValidationError: If limit is outside 1..max.
        """
        limit = limit if limit is not None else self.settings.analytics_default_limit
        self._check_limit(limit)
        start, end = self.resolve_range(start_date, end_date)
        context = {"start_date": start.isoformat(), "end_date": end.isoformat(), "limit": limit}

        rows = await self._read(
            "store performance data",
            lambda db: aggregations.fetch_store_metrics(db, start, end),
            context,
        )
        items = scoring.rank_stores(rows, limit)

        logger.info("analytics.store_rankings_computed", record_count=len(items), **context)

        return AnalyticsResponse(
            data=items,
            meta=AnalyticsMeta(start_date=start, end_date=end, limit=limit, record_count=len(items)),
        )

    async def get_product_performance(
        self,
        store_id: int | None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int | None = None,
    ) -> AnalyticsResponse[list[ProductPerformanceItem]]:
        """Rank one store's products by revenue, units sold and sale count.

        Raises:
            ValidationError: If store_id is missing or limit is out of range.
            NotFoundError: If the store does not exist.
        """
        if store_id is None or store_id <= 0:
            raise ValidationError(
                errors=[{"field": "storeId", "message": "storeId is required"}],
            )
        limit = limit if limit is not None else self.settings.analytics_default_limit
        self._check_limit(limit)
        start, end = self.resolve_range(start_date, end_date)
        await self._ensure_store(store_id)
        context = {
            "store_id": store_id,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "limit": limit,
        }

        rows = await self._read(
            "product performance data",
            lambda db: aggregations.fetch_product_metrics(db, store_id, start, end),
            context,
        )
        items = scoring.rank_products(rows, start, end, limit)

        logger.info("analytics.product_rankings_computed", record_count=len(items), **context)

        return AnalyticsResponse(
            data=items,
            meta=AnalyticsMeta(
                start_date=start,
                end_date=end,
                store_id=store_id,
                limit=limit,
                record_count=len(items),
            ),
        )

    # =========================================================================
    # Dashboard
    # =========================================================================

    async def get_dashboard_summary(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> AnalyticsResponse[DashboardSummary]:
        """Headline totals, top store, growth rate and catalogue counters.

        The previous period has the same length as the requested range and
        ends one microsecond before it starts.
        """
        start, end = self.resolve_range(start_date, end_date)
        previous_end = start - timedelta(microseconds=1)
        previous_start = start - (end - start)
        threshold = self.settings.low_stock_threshold
        context = {"start_date": start.isoformat(), "end_date": end.isoformat()}

        current, store_rows, previous, counts = await asyncio.gather(
            self._read(
                "dashboard sales totals",
                lambda db: aggregations.fetch_sales_totals(db, start, end),
                context,
            ),
            self._read(
                "dashboard store rankings",
                lambda db: aggregations.fetch_store_metrics(db, start, end),
                context,
            ),
            self._read(
                "dashboard previous period totals",
                lambda db: aggregations.fetch_sales_totals(db, previous_start, previous_end),
                context,
            ),
            self._read(
                "dashboard inventory counts",
                lambda db: aggregations.fetch_inventory_counts(db, threshold),
                context,
            ),
        )

        top = scoring.rank_stores(store_rows, limit=1)
        summary = DashboardSummary(
            total_revenue=scoring.round2(current.revenue),
            total_units=current.units,
            average_order_value=scoring.average_order_value(current.revenue, current.units),
            top_performing_store=top[0].store_name if top else "N/A",
            growth_rate=scoring.growth_rate(current.revenue, previous.revenue),
            total_stores=counts.total_stores,
            total_products=counts.total_products,
            low_stock_alerts=counts.low_stock_products,
        )

        logger.info(
            "analytics.dashboard_computed",
            total_revenue=float(summary.total_revenue),
            growth_rate=float(summary.growth_rate),
            **context,
        )

        return AnalyticsResponse(
            data=summary,
            meta=AnalyticsMeta(start_date=start, end_date=end, generated_at=datetime.now(UTC)),
        )

    # =========================================================================
    # Sample Data
    # =========================================================================

    async def generate_sample_data(self, store_id: int, number_of_sales: int) -> SampleDataResult:
        """Insert random sales for a store's in-stock products.

        Returns:
            How many sales were created; 0 when the store has no stock.

        Raises:
            ValidationError: If number_of_sales is out of range.
            NotFoundError: If the store does not exist.
        """
        max_sales = self.settings.sample_data_max_sales
        if not 1 <= number_of_sales <= max_sales:
            raise ValidationError(
                errors=[
                    {
                        "field": "numberOfSales",
                        "message": f"numberOfSales must be between 1 and {max_sales}",
                    }
                ],
            )
        await self._ensure_store(store_id)

        async def write(db: AsyncSession) -> tuple[int, int]:
            products = await aggregations.fetch_in_stock_prices(db, store_id)
            sales = self.sample_generator.generate(
                store_id, products, number_of_sales, now=datetime.now(UTC)
            )
            if sales:
                await db.execute(insert(ProductSale), [sale.as_row() for sale in sales])
            return len(sales), len(products)

        created, products_used = await self._read(
            "sample data generation",
            write,
            {"store_id": store_id, "number_of_sales": number_of_sales},
        )

        logger.info(
            "analytics.sample_data_generated",
            store_id=store_id,
            requested=number_of_sales,
            created=created,
            products_used=products_used,
        )
        return SampleDataResult(
            store_id=store_id,
            sales_created=created,
            products_used=products_used,
        )

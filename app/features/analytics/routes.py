"""API routes for analytics endpoints.

Sales time series, store and product rankings, the dashboard summary and a
sample-data generator for development. Dates are ISO 8601; ranges are
inclusive and default to the last 30 days.
"""

from datetime import datetime

from fastapi import APIRouter, Body, Depends, Path, Query, status

from app.core.database import Database, get_database
from app.features.analytics.schemas import (
    AnalyticsResponse,
    DashboardSummary,
    ProductPerformanceItem,
    SalesAnalyticsItem,
    SampleDataRequest,
    SampleDataResult,
    StorePerformanceItem,
    TimeGranularity,
)
from app.features.analytics.service import AnalyticsService
from app.shared.schemas import ApiResponse


router = APIRouter(prefix="/analytics", tags=["analytics"])

START_DATE_DESCRIPTION = "Range start (inclusive), ISO 8601. Defaults to 30 days ago."
END_DATE_DESCRIPTION = "Range end (inclusive), ISO 8601. Defaults to now."


# =============================================================================
# Sales Endpoints
# =============================================================================


@router.get(
    "/sales",
    response_model=AnalyticsResponse[list[SalesAnalyticsItem]],
    response_model_exclude_none=True,
    summary="Sales time series",
    description="""
Sales totals bucketed by time.

**Metrics per bucket**:
- `totalQuantity`: Units sold
- `totalRevenue`: Sum of sale totals (2 dp)
- `uniqueProducts`: Distinct products sold
- `averageOrderValue`: totalRevenue / totalQuantity (2 dp, 0 when nothing sold)
- `storeCount`: Distinct stores with sales

**Grouping**: `groupBy` is one of hour, day (default), week, month.
Buckets without sales are omitted; buckets are returned oldest first.

**Example Use Cases**:
1. Daily sales this month: `GET /analytics/sales?startDate=2024-01-01&endDate=2024-01-31`
2. Weekly sales for one store: `GET /analytics/sales?storeId=3&groupBy=week`
""",
)
async def get_sales_analytics(
    database: Database = Depends(get_database),
    start_date: datetime | None = Query(None, alias="startDate", description=START_DATE_DESCRIPTION),
    end_date: datetime | None = Query(None, alias="endDate", description=END_DATE_DESCRIPTION),
    store_id: int | None = Query(None, alias="storeId", gt=0, description="Filter by store."),
    group_by: TimeGranularity = Query(
        TimeGranularity.DAY, alias="groupBy", description="Bucket size."
    ),
) -> AnalyticsResponse[list[SalesAnalyticsItem]]:
    """Sales totals per time bucket."""
    service = AnalyticsService(database)
    return await service.get_sales_analytics(
        start_date=start_date,
        end_date=end_date,
        store_id=store_id,
        group_by=group_by,
    )


# =============================================================================
# Ranking Endpoints
# =============================================================================


@router.get(
    "/stores/performance",
    response_model=AnalyticsResponse[list[StorePerformanceItem]],
    response_model_exclude_none=True,
    summary="Store performance rankings",
    description="""
Rank stores by a composite performance score.

**Score** (2 dp):
`revenue x 0.4 + unitsSold x averageProductPrice x 0.3 + activeProducts x 100 x 0.2
+ (revenue / inventoryValue x 1000) x 0.1`

The turnover term is 0 when the store holds no inventory value. Every store is
ranked, including stores without products or sales. `limit` defaults to 10
(max 100).
""",
)
async def get_store_performance(
    database: Database = Depends(get_database),
    start_date: datetime | None = Query(None, alias="startDate", description=START_DATE_DESCRIPTION),
    end_date: datetime | None = Query(None, alias="endDate", description=END_DATE_DESCRIPTION),
    limit: int = Query(10, ge=1, le=100, description="Maximum stores to return."),
) -> AnalyticsResponse[list[StorePerformanceItem]]:
    """Ranked store performance."""
    service = AnalyticsService(database)
    return await service.get_store_performance(
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )


@router.get(
    "/stores/{storeId}/products",
    response_model=AnalyticsResponse[list[ProductPerformanceItem]],
    response_model_exclude_none=True,
    summary="Product performance for a store",
    description="""
Rank a store's products by revenue, then units sold, then number of sales.

Products without sales in the range are included with zero totals.
`revenuePerDay` divides revenue by the range length in days; `stockTurnoverRate`
is units sold / current stock (0 when out of stock). Returns 404 if the store
does not exist.
""",
)
async def get_product_performance(
    database: Database = Depends(get_database),
    store_id: int = Path(..., alias="storeId", gt=0, description="Store ID."),
    start_date: datetime | None = Query(None, alias="startDate", description=START_DATE_DESCRIPTION),
    end_date: datetime | None = Query(None, alias="endDate", description=END_DATE_DESCRIPTION),
    limit: int = Query(10, ge=1, le=100, description="Maximum products to return."),
) -> AnalyticsResponse[list[ProductPerformanceItem]]:
    """Ranked product performance within one store."""
    service = AnalyticsService(database)
    return await service.get_product_performance(
        store_id,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )


# =============================================================================
# Dashboard Endpoints
# =============================================================================


@router.get(
    "/dashboard",
    response_model=AnalyticsResponse[DashboardSummary],
    response_model_exclude_none=True,
    summary="Dashboard summary",
    description="""
Headline KPIs for a date range.

- `totalRevenue`, `totalUnits`, `averageOrderValue` over the range
- `topPerformingStore`: name of the best-scoring store ("N/A" if none)
- `growthRate`: revenue change in percent against the preceding period of
  equal length (0 when that period had no revenue)
- `totalStores`, `totalProducts`, `lowStockAlerts` (stock at or below 10)
""",
)
async def get_dashboard_summary(
    database: Database = Depends(get_database),
    start_date: datetime | None = Query(None, alias="startDate", description=START_DATE_DESCRIPTION),
    end_date: datetime | None = Query(None, alias="endDate", description=END_DATE_DESCRIPTION),
) -> AnalyticsResponse[DashboardSummary]:
    """Dashboard KPIs."""
    service = AnalyticsService(database)
    return await service.get_dashboard_summary(start_date=start_date, end_date=end_date)


# =============================================================================
# Sample Data Endpoints
# =============================================================================


@router.post(
    "/stores/{storeId}/sample-data",
    response_model=ApiResponse[SampleDataResult],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Generate sample sales",
    description="""
Insert `numberOfSales` (1-1000, default 100) random sales for the store's
in-stock products, dated within the last 30 days. Intended for development
and demos. Returns 404 if the store does not exist.
""",
)
async def generate_sample_data(
    database: Database = Depends(get_database),
    store_id: int = Path(..., alias="storeId", gt=0, description="Store ID."),
    payload: SampleDataRequest | None = Body(None),
) -> ApiResponse[SampleDataResult]:
    """Generate random sales for a store."""
    payload = payload or SampleDataRequest()
    service = AnalyticsService(database)
    result = await service.generate_sample_data(store_id, payload.number_of_sales)
    return ApiResponse(
        data=result,
        message=f"Generated {result.sales_created} sample sales",
    )

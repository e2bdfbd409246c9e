"""Pydantic schemas for analytics endpoints.

Metric values are held as ``Decimal`` internally and emitted as JSON numbers.
Money values carry two decimal places, turnover ratios four.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Generic, TypeVar

from pydantic import Field, PlainSerializer

from app.shared.schemas import CamelModel

T = TypeVar("T")

# Exact in Python, a JSON number on the wire
Metric = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# =============================================================================
# Enums
# =============================================================================


class TimeGranularity(str, Enum):
    """Bucket size for the sales time series."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


# =============================================================================
# Request Schemas
# =============================================================================


class SampleDataRequest(CamelModel):
    """Body for POST /analytics/stores/{storeId}/sample-data."""

    number_of_sales: int = Field(
        100,
        ge=1,
        le=1000,
        description="How many random sales to generate for the store's products.",
    )


# =============================================================================
# Result Schemas
# =============================================================================


class SalesAnalyticsItem(CamelModel):
    """One time bucket of the sales series."""

    time_period: datetime = Field(..., description="Start of the bucket.")
    period_label: str = Field(
        ...,
        description="Bucket label: 'YYYY-MM-DD HH:MM' (hour), 'YYYY-MM-DD' (day), "
        "'YYYY-Www' ISO week (week) or 'YYYY-MM' (month).",
    )
    total_quantity: int = Field(..., ge=0, description="Units sold in the bucket.")
    total_revenue: Metric = Field(..., description="Sum of sale totals, 2 dp.")
    unique_products: int = Field(..., ge=0, description="Distinct products sold.")
    average_order_value: Metric = Field(
        ..., description="Revenue per unit sold (revenue / quantity), 2 dp."
    )
    store_count: int = Field(..., ge=0, description="Distinct stores with sales.")


class StorePerformanceItem(CamelModel):
    """Scored and ranked store."""

    store_id: int
    store_name: str
    store_city: str
    store_state: str
    total_products: int = Field(..., ge=0, description="All products of the store.")
    active_products: int = Field(..., ge=0, description="Products with stock above zero.")
    total_inventory_value: Metric = Field(..., description="Sum of price x stock, 2 dp.")
    total_sales_revenue: Metric = Field(..., description="Revenue in the range, 2 dp.")
    total_units_sold: int = Field(..., ge=0)
    average_product_price: Metric = Field(..., description="Mean product price, 2 dp.")
    inventory_turnover_ratio: Metric = Field(
        ..., description="Sales revenue / inventory value, 4 dp; 0 when either is 0."
    )
    performance_score: Metric = Field(..., description="Weighted composite score, 2 dp.")
    performance_rank: int = Field(..., ge=1, description="1 = best score.")


class ProductPerformanceItem(CamelModel):
    """Ranked product within one store."""

    product_id: int
    product_name: str
    product_category: str
    product_sku: str
    current_stock: int = Field(..., ge=0)
    current_price: Metric
    total_units_sold: int = Field(..., ge=0)
    total_revenue: Metric = Field(..., description="Revenue in the range, 2 dp.")
    average_sale_price: Metric = Field(..., description="Revenue / units sold, 2 dp.")
    sales_frequency: int = Field(..., ge=0, description="Number of sale events.")
    revenue_per_day: Metric = Field(..., description="Revenue / days in the range, 2 dp.")
    stock_turnover_rate: Metric = Field(
        ..., description="Units sold / current stock, 4 dp; 0 when stock is 0."
    )
    product_rank: int = Field(..., ge=1)


class DashboardSummary(CamelModel):
    """Headline figures for the dashboard."""

    total_revenue: Metric
    total_units: int = Field(..., ge=0)
    average_order_value: Metric = Field(..., description="Revenue / units, 2 dp.")
    top_performing_store: str = Field(
        "N/A", description="Name of the highest-scoring store, 'N/A' when there are no stores."
    )
    growth_rate: Metric = Field(
        ...,
        description="Percent change against the preceding period of equal length, 2 dp. "
        "0 when the previous period had no revenue.",
    )
    total_stores: int = Field(..., ge=0)
    total_products: int = Field(..., ge=0)
    low_stock_alerts: int = Field(..., ge=0, description="Products at or below the threshold.")


class SampleDataResult(CamelModel):
    """Outcome of sample-data generation."""

    store_id: int
    sales_created: int = Field(..., ge=0)
    products_used: int = Field(..., ge=0)


# =============================================================================
# Response Schemas
# =============================================================================


class AnalyticsMeta(CamelModel):
    """Query echo attached to analytics responses."""

    start_date: datetime
    end_date: datetime
    store_id: int | None = None
    group_by: TimeGranularity | None = None
    limit: int | None = None
    record_count: int | None = None
    generated_at: datetime | None = None


class AnalyticsResponse(CamelModel, Generic[T]):
    """Success envelope for analytics results."""

    success: bool = True
    data: T
    meta: AnalyticsMeta

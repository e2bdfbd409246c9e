"""Derived metrics, scoring and ranking for analytics results.

Pure functions over the raw rows produced by ``aggregations``. All arithmetic
is done in ``Decimal`` and rounded half-up: money and scores to 2 places,
turnover ratios to 4.

Store performance score::

    revenue * 0.4
    + units_sold * avg_product_price * 0.3
    + active_products * 100 * 0.2
    + (revenue / inventory_value * 1000) * 0.1   # 0 when inventory_value is 0

The score uses the rounded average price and the unrounded turnover ratio.
"""

from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from app.features.analytics.aggregations import (
    ProductMetricsRow,
    SalesBucketRow,
    StoreMetricsRow,
)
from app.features.analytics.schemas import (
    ProductPerformanceItem,
    SalesAnalyticsItem,
    StorePerformanceItem,
    TimeGranularity,
)

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
ZERO = Decimal("0")

REVENUE_WEIGHT = Decimal("0.4")
UNITS_WEIGHT = Decimal("0.3")
ACTIVE_PRODUCTS_WEIGHT = Decimal("0.2")
TURNOVER_WEIGHT = Decimal("0.1")
ACTIVE_PRODUCT_POINTS = Decimal("100")
TURNOVER_SCALE = Decimal("1000")

SECONDS_PER_DAY = Decimal("86400")


def round2(value: Decimal) -> Decimal:
    """Round half-up to 2 decimal places."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def round4(value: Decimal) -> Decimal:
    """Round half-up to 4 decimal places."""
    return value.quantize(FOUR_PLACES, rounding=ROUND_HALF_UP)


# =============================================================================
# Sales Series
# =============================================================================


def period_label(bucket_start: datetime, granularity: TimeGranularity) -> str:
    """Human-readable label for a bucket start.

    Weeks use ISO year and week number, so the label always agrees with the
    Monday that ``date_trunc('week', ...)`` returns.
    """
    granularity = TimeGranularity(granularity)
    if bucket_start.tzinfo is not None:
        bucket_start = bucket_start.astimezone(UTC)
    if granularity == TimeGranularity.HOUR:
        return bucket_start.strftime("%Y-%m-%d %H:%M")
    if granularity == TimeGranularity.DAY:
        return bucket_start.strftime("%Y-%m-%d")
    if granularity == TimeGranularity.WEEK:
        iso_year, iso_week, _ = bucket_start.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    return bucket_start.strftime("%Y-%m")


def average_order_value(revenue: Decimal, quantity: int) -> Decimal:
    """Revenue per unit sold, 0 when nothing was sold."""
    if quantity <= 0:
        return ZERO.quantize(TWO_PLACES)
    return round2(revenue / Decimal(quantity))


def build_sales_series(
    rows: list[SalesBucketRow],
    granularity: TimeGranularity,
) -> list[SalesAnalyticsItem]:
    """Convert bucket rows to response items, preserving their order."""
    return [
        SalesAnalyticsItem(
            time_period=row.bucket_start,
            period_label=period_label(row.bucket_start, granularity),
            total_quantity=row.total_quantity,
            total_revenue=round2(row.total_revenue),
            unique_products=row.unique_products,
            average_order_value=average_order_value(row.total_revenue, row.total_quantity),
            store_count=row.store_count,
        )
        for row in rows
    ]


# =============================================================================
# Store Performance
# =============================================================================


def store_performance_score(row: StoreMetricsRow) -> tuple[Decimal, Decimal, Decimal]:
    """Score one store.

    Returns:
        Tuple of (average product price, display turnover ratio, score).
    """
    if row.product_count > 0:
        avg_price = round2(row.price_total / Decimal(row.product_count))
    else:
        avg_price = ZERO

    exact_turnover = row.sales_revenue / row.inventory_value if row.inventory_value > 0 else ZERO
    display_turnover = round4(exact_turnover) if row.sales_revenue > 0 else ZERO

    score = (
        row.sales_revenue * REVENUE_WEIGHT
        + Decimal(row.units_sold) * avg_price * UNITS_WEIGHT
        + Decimal(row.active_product_count) * ACTIVE_PRODUCT_POINTS * ACTIVE_PRODUCTS_WEIGHT
        + exact_turnover * TURNOVER_SCALE * TURNOVER_WEIGHT
    )
    return round2(avg_price), round4(display_turnover), round2(score)


def rank_stores(rows: list[StoreMetricsRow], limit: int | None = None) -> list[StorePerformanceItem]:
    """Score stores and rank them by score, highest first.

    Ties keep the input order (store ID ascending). Ranks are consecutive
    starting at 1; ``limit`` truncates after ranking.
    """
    scored = []
    for row in rows:
        avg_price, turnover, score = store_performance_score(row)
        scored.append((score, row, avg_price, turnover))

    scored.sort(key=lambda entry: entry[0], reverse=True)
    if limit is not None:
        scored = scored[:limit]

    return [
        StorePerformanceItem(
            store_id=row.store_id,
            store_name=row.store_name,
            store_city=row.store_city,
            store_state=row.store_state,
            total_products=row.product_count,
            active_products=row.active_product_count,
            total_inventory_value=round2(row.inventory_value),
            total_sales_revenue=round2(row.sales_revenue),
            total_units_sold=row.units_sold,
            average_product_price=avg_price,
            inventory_turnover_ratio=turnover,
            performance_score=score,
            performance_rank=rank,
        )
        for rank, (score, row, avg_price, turnover) in enumerate(scored, start=1)
    ]


# =============================================================================
# Product Performance
# =============================================================================


def range_days(start: datetime, end: datetime) -> Decimal:
    """Length of a range in fractional days."""
    return Decimal(str((end - start).total_seconds())) / SECONDS_PER_DAY


def rank_products(
    rows: list[ProductMetricsRow],
    start: datetime,
    end: datetime,
    limit: int | None = None,
) -> list[ProductPerformanceItem]:
    """Rank products by revenue, then units sold, then sale count, descending.

    Ties on all three keep the input order (product ID ascending).
    """
    days = range_days(start, end)
    ordered = sorted(
        rows,
        key=lambda row: (row.revenue, row.units_sold, row.sale_count),
        reverse=True,
    )
    if limit is not None:
        ordered = ordered[:limit]

    items = []
    for rank, row in enumerate(ordered, start=1):
        if row.units_sold > 0:
            avg_sale_price = round2(row.revenue / Decimal(row.units_sold))
        else:
            avg_sale_price = ZERO.quantize(TWO_PLACES)
        revenue_per_day = round2(row.revenue / days) if days > 0 else ZERO.quantize(TWO_PLACES)
        if row.current_stock > 0 and row.units_sold > 0:
            turnover = round4(Decimal(row.units_sold) / Decimal(row.current_stock))
        else:
            turnover = ZERO.quantize(FOUR_PLACES)

        items.append(
            ProductPerformanceItem(
                product_id=row.product_id,
                product_name=row.product_name,
                product_category=row.product_category,
                product_sku=row.product_sku,
                current_stock=row.current_stock,
                current_price=round2(row.current_price),
                total_units_sold=row.units_sold,
                total_revenue=round2(row.revenue),
                average_sale_price=avg_sale_price,
                sales_frequency=row.sale_count,
                revenue_per_day=revenue_per_day,
                stock_turnover_rate=turnover,
                product_rank=rank,
            )
        )
    return items


# =============================================================================
# Dashboard
# =============================================================================


def growth_rate(current: Decimal, previous: Decimal) -> Decimal:
    """Percent change of ``current`` over ``previous``, 0 when ``previous`` is 0."""
    if previous <= 0:
        return ZERO.quantize(TWO_PLACES)
    return round2((current - previous) / previous * Decimal("100"))

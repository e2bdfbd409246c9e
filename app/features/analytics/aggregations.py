"""SQL aggregations over the sales fact table.

Each function runs one statement and returns plain rows of raw sums and
counts. Rounding, derived ratios and ranking are applied afterwards in
``app.features.analytics.scoring``.

Date ranges are inclusive on both ends.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy import case, distinct, func, literal_column, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.analytics.schemas import TimeGranularity
from app.features.data_platform.models import Product, ProductSale, Store

# =============================================================================
# Row Types
# =============================================================================


@dataclass(frozen=True)
class SalesBucketRow:
    """Raw totals for one time bucket."""

    bucket_start: datetime
    total_quantity: int
    total_revenue: Decimal
    unique_products: int
    store_count: int


@dataclass(frozen=True)
class StoreMetricsRow:
    """Raw catalogue and sales totals for one store."""

    store_id: int
    store_name: str
    store_city: str
    store_state: str
    product_count: int
    active_product_count: int
    inventory_value: Decimal
    price_total: Decimal
    sales_revenue: Decimal
    units_sold: int


@dataclass(frozen=True)
class ProductMetricsRow:
    """Raw sales totals for one product."""

    product_id: int
    product_name: str
    product_category: str
    product_sku: str
    current_stock: int
    current_price: Decimal
    units_sold: int
    revenue: Decimal
    sale_count: int


@dataclass(frozen=True)
class SalesTotals:
    """Revenue and units over a whole range."""

    revenue: Decimal
    units: int


@dataclass(frozen=True)
class InventoryCounts:
    """Catalogue-wide counters."""

    total_stores: int
    total_products: int
    low_stock_products: int


def _in_range(start: datetime, end: datetime):
    return ProductSale.sale_date.between(start, end)


# =============================================================================
# Queries
# =============================================================================


async def fetch_sales_buckets(
    db: AsyncSession,
    start: datetime,
    end: datetime,
    granularity: TimeGranularity,
    store_id: int | None = None,
) -> list[SalesBucketRow]:
    """Sum sales per time bucket, oldest bucket first.

    Buckets without sales are not returned.
    """
    # Inlined as literals so SELECT and GROUP BY render the same expression;
    # the unit comes from the TimeGranularity enum only. Buckets are cut at UTC
    # boundaries whatever the session TimeZone is.
    unit = literal_column(f"'{TimeGranularity(granularity).value}'")
    bucket = func.date_trunc(unit, ProductSale.sale_date, literal_column("'UTC'"))

    stmt = (
        select(
            bucket.label("bucket_start"),
            func.coalesce(func.sum(ProductSale.quantity_sold), 0).label("total_quantity"),
            func.coalesce(func.sum(ProductSale.total_amount), 0).label("total_revenue"),
            func.count(distinct(ProductSale.product_id)).label("unique_products"),
            func.count(distinct(ProductSale.store_id)).label("store_count"),
        )
        .where(_in_range(start, end))
        .group_by(bucket)
        .order_by(bucket)
    )
    if store_id is not None:
        stmt = stmt.where(ProductSale.store_id == store_id)

    result = await db.execute(stmt)
    return [
        SalesBucketRow(
            bucket_start=row.bucket_start,
            total_quantity=int(row.total_quantity),
            total_revenue=Decimal(row.total_revenue),
            unique_products=int(row.unique_products),
            store_count=int(row.store_count),
        )
        for row in result
    ]


async def fetch_store_metrics(
    db: AsyncSession,
    start: datetime,
    end: datetime,
) -> list[StoreMetricsRow]:
    """Catalogue and sales totals for every store, ordered by store ID.

    Product and sales totals are aggregated in separate subqueries and joined
    per store, so a store's sales are counted once regardless of how many
    products it carries.
    """
    product_stats = (
        select(
            Product.store_id.label("store_id"),
            func.count(Product.id).label("product_count"),
            func.count(case((Product.quantity_in_stock > 0, Product.id))).label(
                "active_product_count"
            ),
            func.sum(Product.price * Product.quantity_in_stock).label("inventory_value"),
            func.sum(Product.price).label("price_total"),
        )
        .group_by(Product.store_id)
        .subquery()
    )
    sales_stats = (
        select(
            ProductSale.store_id.label("store_id"),
            func.sum(ProductSale.total_amount).label("sales_revenue"),
            func.sum(ProductSale.quantity_sold).label("units_sold"),
        )
        .where(_in_range(start, end))
        .group_by(ProductSale.store_id)
        .subquery()
    )

    stmt = (
        select(
            Store.id.label("store_id"),
            Store.name.label("store_name"),
            Store.city.label("store_city"),
            Store.state.label("store_state"),
            func.coalesce(product_stats.c.product_count, 0).label("product_count"),
            func.coalesce(product_stats.c.active_product_count, 0).label("active_product_count"),
            func.coalesce(product_stats.c.inventory_value, 0).label("inventory_value"),
            func.coalesce(product_stats.c.price_total, 0).label("price_total"),
            func.coalesce(sales_stats.c.sales_revenue, 0).label("sales_revenue"),
            func.coalesce(sales_stats.c.units_sold, 0).label("units_sold"),
        )
        .outerjoin(product_stats, product_stats.c.store_id == Store.id)
        .outerjoin(sales_stats, sales_stats.c.store_id == Store.id)
        .order_by(Store.id)
    )

    result = await db.execute(stmt)
    return [
        StoreMetricsRow(
            store_id=row.store_id,
            store_name=row.store_name,
            store_city=row.store_city,
            store_state=row.store_state,
            product_count=int(row.product_count),
            active_product_count=int(row.active_product_count),
            inventory_value=Decimal(row.inventory_value),
            price_total=Decimal(row.price_total),
            sales_revenue=Decimal(row.sales_revenue),
            units_sold=int(row.units_sold),
        )
        for row in result
    ]


async def fetch_product_metrics(
    db: AsyncSession,
    store_id: int,
    start: datetime,
    end: datetime,
) -> list[ProductMetricsRow]:
    """Sales totals for every product of a store, ordered by product ID.

    Products without sales in the range are included with zero totals.
    """
    sales_stats = (
        select(
            ProductSale.product_id.label("product_id"),
            func.sum(ProductSale.quantity_sold).label("units_sold"),
            func.sum(ProductSale.total_amount).label("revenue"),
            func.count(ProductSale.id).label("sale_count"),
        )
        .where(_in_range(start, end))
        .group_by(ProductSale.product_id)
        .subquery()
    )

    stmt = (
        select(
            Product.id.label("product_id"),
            Product.name.label("product_name"),
            Product.category.label("product_category"),
            Product.sku.label("product_sku"),
            Product.quantity_in_stock.label("current_stock"),
            Product.price.label("current_price"),
            func.coalesce(sales_stats.c.units_sold, 0).label("units_sold"),
            func.coalesce(sales_stats.c.revenue, 0).label("revenue"),
            func.coalesce(sales_stats.c.sale_count, 0).label("sale_count"),
        )
        .outerjoin(sales_stats, sales_stats.c.product_id == Product.id)
        .where(Product.store_id == store_id)
        .order_by(Product.id)
    )

    result = await db.execute(stmt)
    return [
        ProductMetricsRow(
            product_id=row.product_id,
            product_name=row.product_name,
            product_category=row.product_category,
            product_sku=row.product_sku,
            current_stock=int(row.current_stock),
            current_price=Decimal(row.current_price),
            units_sold=int(row.units_sold),
            revenue=Decimal(row.revenue),
            sale_count=int(row.sale_count),
        )
        for row in result
    ]


async def fetch_sales_totals(db: AsyncSession, start: datetime, end: datetime) -> SalesTotals:
    """Revenue and units across all stores in the range."""
    stmt = select(
        func.coalesce(func.sum(ProductSale.total_amount), 0).label("revenue"),
        func.coalesce(func.sum(ProductSale.quantity_sold), 0).label("units"),
    ).where(_in_range(start, end))

    row = (await db.execute(stmt)).one()
    return SalesTotals(revenue=Decimal(row.revenue), units=int(row.units))


async def fetch_inventory_counts(db: AsyncSession, low_stock_threshold: int) -> InventoryCounts:
    """Store count, product count and low-stock product count."""
    stmt = select(
        select(func.count(Store.id)).scalar_subquery().label("total_stores"),
        select(func.count(Product.id)).scalar_subquery().label("total_products"),
        select(func.count(Product.id))
        .where(Product.quantity_in_stock <= low_stock_threshold)
        .scalar_subquery()
        .label("low_stock_products"),
    )

    row = (await db.execute(stmt)).one()
    return InventoryCounts(
        total_stores=int(row.total_stores),
        total_products=int(row.total_products),
        low_stock_products=int(row.low_stock_products),
    )


async def fetch_in_stock_prices(db: AsyncSession, store_id: int) -> list[tuple[int, Decimal]]:
    """(product_id, price) for the store's products with stock above zero."""
    stmt = (
        select(Product.id, Product.price)
        .where(Product.store_id == store_id, Product.quantity_in_stock > 0)
        .order_by(Product.id)
    )
    result = await db.execute(stmt)
    return [(row.id, Decimal(row.price)) for row in result]

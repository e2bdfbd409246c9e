"""Core seeder orchestration module."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import delete, func, insert, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.features.data_platform.models import Product, ProductSale, Store
from app.shared.seeder.generators import ProductGenerator, SalesGenerator, StoreGenerator

if TYPE_CHECKING:
    from app.shared.seeder.config import SeederConfig

logger = get_logger(__name__)


@dataclass
class SeederResult:
    """Result of a seeder operation.

    Attributes:
        stores_count: Number of stores generated.
        products_count: Number of products generated.
        sales_count: Number of sales records generated.
        seed: Random seed used.
    """

    stores_count: int = 0
    products_count: int = 0
    sales_count: int = 0
    seed: int = 42


class DataSeeder:
    """Orchestrates demo data generation for the inventory schema.

    Stores are inserted first, then products for each store, then a sales
    history over the configured window for every product.
    """

    def __init__(self, config: SeederConfig) -> None:
        """Initialize the data seeder.

        Args:
            config: Seeder configuration.
        """
        self.config = config
        self.rng = random.Random(config.seed)

    async def _batch_insert(
        self,
        db: AsyncSession,
        table: type,
        records: list[dict[str, Any]],
        batch_size: int | None = None,
    ) -> list[int]:
        """Insert records in batches.

        Args:
            db: Async database session.
            table: SQLAlchemy model class.
            records: List of record dictionaries.
            batch_size: Override batch size.

        Returns:
            Primary keys of the inserted rows, in insertion order.
        """
        if not records:
            return []

        size = batch_size or self.config.batch_size
        ids: list[int] = []

        for i in range(0, len(records), size):
            batch = records[i : i + size]
            stmt = insert(table).returning(table.id, sort_by_parameter_order=True)
            result = await db.execute(stmt, batch)
            ids.extend(result.scalars().all())

        return ids

    async def _insert_sales(
        self,
        db: AsyncSession,
        products: list[tuple[int, int, Decimal]],
        now: datetime,
    ) -> int:
        sales_gen = SalesGenerator(self.rng, self.config.sales)
        sales_records = sales_gen.generate(products, now)

        logger.info("seeder.sales.generating", count=len(sales_records))

        await self._batch_insert(db, ProductSale, sales_records)
        return len(sales_records)

    async def generate_full(self, db: AsyncSession, now: datetime | None = None) -> SeederResult:
        """Generate stores, products and a sales history from scratch.

        Args:
            db: Async database session.
            now: End of the sales window (defaults to the current time).

        Returns:
            SeederResult with counts of generated records.
        """
        now = now or datetime.now(UTC)
        logger.info(
            "seeder.full_generation.started",
            seed=self.config.seed,
            stores=self.config.dimensions.stores,
            products_per_store=self.config.dimensions.products_per_store,
            days=self.config.sales.days,
        )

        store_records = StoreGenerator(self.rng, self.config.dimensions).generate()
        logger.info("seeder.stores.generating", count=len(store_records))
        store_ids = await self._batch_insert(db, Store, store_records)

        product_records = ProductGenerator(self.rng, self.config.dimensions).generate(store_ids)
        logger.info("seeder.products.generating", count=len(product_records))
        product_ids = await self._batch_insert(db, Product, product_records)

        products = [
            (product_id, record["store_id"], record["price"])
            for product_id, record in zip(product_ids, product_records, strict=True)
        ]
        sales_count = await self._insert_sales(db, products, now)

        await db.commit()

        result = SeederResult(
            stores_count=len(store_ids),
            products_count=len(product_ids),
            sales_count=sales_count,
            seed=self.config.seed,
        )

        logger.info(
            "seeder.full_generation.completed",
            stores=result.stores_count,
            products=result.products_count,
            sales=result.sales_count,
            seed=self.config.seed,
        )

        return result

    async def append_sales(self, db: AsyncSession, now: datetime | None = None) -> SeederResult:
        """Append a sales history for the existing products.

        Args:
            db: Async database session.
            now: End of the sales window (defaults to the current time).

        Returns:
            SeederResult with the number of appended sales.

        Raises:
            ValueError: If there are no products to sell.
        """
        now = now or datetime.now(UTC)
        logger.info("seeder.append.started", seed=self.config.seed, days=self.config.sales.days)

        result = await db.execute(select(Product.id, Product.store_id, Product.price))
        products = [(row[0], row[1], row[2]) for row in result.fetchall()]

        if not products:
            raise ValueError("No products found. Run --full-new first to create stores and products.")

        sales_count = await self._insert_sales(db, products, now)
        await db.commit()

        logger.info("seeder.append.completed", sales=sales_count)

        return SeederResult(sales_count=sales_count, seed=self.config.seed)

    async def delete_data(
        self,
        db: AsyncSession,
        scope: Literal["all", "sales"] = "all",
        dry_run: bool = False,
    ) -> dict[str, int]:
        """Delete data with safety guards.

        Args:
            db: Async database session.
            scope: ``sales`` clears only sale records; ``all`` clears every table.
            dry_run: If True, only preview what would be deleted.

        Returns:
            Dictionary of table names to row counts (deleted or would be deleted).
        """
        # Children before parents
        tables: list[tuple[str, type]] = [("product_sales", ProductSale)]
        if scope == "all":
            tables.extend([("products", Product), ("stores", Store)])

        counts: dict[str, int] = {}
        for name, model in tables:
            result = await db.execute(select(func.count()).select_from(model))
            counts[name] = result.scalar() or 0

        if dry_run:
            logger.info("seeder.delete.dry_run", scope=scope, counts=counts)
            return counts

        for name, model in tables:
            logger.info(f"seeder.delete.{name}", count=counts.get(name, 0))
            await db.execute(delete(model))

        await db.commit()

        logger.info(
            "seeder.delete.completed",
            scope=scope,
            total_deleted=sum(counts.values()),
        )

        return counts

    async def get_current_counts(self, db: AsyncSession) -> dict[str, int]:
        """Get current row counts for all inventory tables.

        Args:
            db: Async database session.

        Returns:
            Dictionary of table names to row counts.
        """
        tables = [
            ("stores", Store),
            ("products", Product),
            ("product_sales", ProductSale),
        ]

        counts: dict[str, int] = {}
        for name, model in tables:
            result = await db.execute(select(func.count()).select_from(model))
            counts[name] = result.scalar() or 0

        return counts

    async def verify_data_integrity(self, db: AsyncSession) -> list[str]:
        """Verify data integrity.

        Checks:
        - Sales point at the store that owns their product
        - Sale quantities are positive
        - Sale totals match unit price x quantity

        Args:
            db: Async database session.

        Returns:
            List of error messages (empty if all checks pass).
        """
        errors: list[str] = []

        store_mismatch = text("""
            SELECT COUNT(*) FROM product_sales s
            JOIN products p ON s.product_id = p.id
            WHERE s.store_id <> p.store_id
        """)
        result = await db.execute(store_mismatch)
        mismatch_count = result.scalar() or 0
        if mismatch_count > 0:
            errors.append(f"Found {mismatch_count} sales recorded against the wrong store")

        non_positive = text("SELECT COUNT(*) FROM product_sales WHERE quantity_sold <= 0")
        result = await db.execute(non_positive)
        bad_qty = result.scalar() or 0
        if bad_qty > 0:
            errors.append(f"Found {bad_qty} sales with non-positive quantity")

        total_mismatch = text(
            "SELECT COUNT(*) FROM product_sales WHERE total_amount <> unit_price * quantity_sold"
        )
        result = await db.execute(total_mismatch)
        bad_totals = result.scalar() or 0
        if bad_totals > 0:
            errors.append(f"Found {bad_totals} sales whose total differs from price x quantity")

        return errors

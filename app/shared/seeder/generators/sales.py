"""Sales history generator."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.shared.seeder.config import SalesConfig


class SalesGenerator:
    """Generator for ``product_sales`` records.

    Each day in the window receives a random number of sales at random
    products, timed within business hours. A share of products is marked
    popular and receives extra sales so rankings have a clear top.
    """

    def __init__(self, rng: random.Random, config: SalesConfig) -> None:
        """Initialize the sales generator.

        Args:
            rng: Random number generator for reproducibility.
            config: Sales configuration.
        """
        self.rng = rng
        self.config = config

    def _sale_time(self, day: datetime, now: datetime) -> datetime:
        hour = self.rng.randint(self.config.open_hour, self.config.close_hour - 1)
        minute = self.rng.randint(0, 59)
        # Never in the future
        return min(day.replace(hour=hour, minute=minute, second=0, microsecond=0), now)

    def _record(
        self,
        product: tuple[int, int, Decimal],
        sale_date: datetime,
    ) -> dict[str, int | Decimal | datetime]:
        product_id, store_id, price = product
        quantity = self.rng.randint(1, self.config.max_quantity)
        return {
            "product_id": product_id,
            "store_id": store_id,
            "quantity_sold": quantity,
            "unit_price": price,
            "total_amount": price * quantity,
            "sale_date": sale_date,
        }

    def generate(
        self,
        products: list[tuple[int, int, Decimal]],
        now: datetime,
    ) -> list[dict[str, int | Decimal | datetime]]:
        """Generate sales over the configured window ending at ``now``.

        Args:
            products: (product_id, store_id, price) for every sellable product.
            now: End of the window; day 0 is today.

        Returns:
            List of sale dictionaries ready for database insertion.
        """
        if not products:
            return []

        sales: list[dict[str, int | Decimal | datetime]] = []
        days = [now - timedelta(days=offset) for offset in range(self.config.days)]

        for day in days:
            for _ in range(self.rng.randint(self.config.min_daily_sales, self.config.max_daily_sales)):
                sales.append(self._record(self.rng.choice(products), self._sale_time(day, now)))

        popular_count = int(len(products) * self.config.popular_share)
        for product in self.rng.sample(products, popular_count):
            for _ in range(self.config.popular_extra_sales):
                sales.append(self._record(product, self._sale_time(self.rng.choice(days), now)))

        return sales

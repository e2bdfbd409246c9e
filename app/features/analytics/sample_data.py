"""Random sale generation for development and demos."""

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

SAMPLE_WINDOW_DAYS = 30


@dataclass(frozen=True)
class SampleSale:
    """One generated sale, ready for insertion into ``product_sales``."""

    product_id: int
    store_id: int
    quantity_sold: int
    unit_price: Decimal
    total_amount: Decimal
    sale_date: datetime

    def as_row(self) -> dict[str, object]:
        return {
            "product_id": self.product_id,
            "store_id": self.store_id,
            "quantity_sold": self.quantity_sold,
            "unit_price": self.unit_price,
            "total_amount": self.total_amount,
            "sale_date": self.sale_date,
        }


class SampleSalesGenerator:
    """Generate sales for a store's products.

    Each sale picks a product uniformly, a quantity in ``1..max_quantity``,
    the product's current price as unit price, and a timestamp uniformly
    distributed over the ``window_days`` before ``now``.

    Args:
        rng: Random source; pass a seeded instance for reproducible output.
        max_quantity: Upper bound for units per sale.
        window_days: How far back sale dates may go.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        max_quantity: int = 5,
        window_days: int = SAMPLE_WINDOW_DAYS,
    ) -> None:
        self.rng = rng or random.Random()
        self.max_quantity = max_quantity
        self.window_days = window_days

    def generate(
        self,
        store_id: int,
        products: list[tuple[int, Decimal]],
        count: int,
        now: datetime,
    ) -> list[SampleSale]:
        """Generate ``count`` sales, or none when ``products`` is empty.

        Args:
            store_id: Store the sales are recorded against.
            products: (product_id, current price) pairs to sample from.
            count: Number of sales to generate.
            now: Upper bound for sale dates.

        Returns:
            Generated sales in creation order.
        """
        if not products:
            return []

        window_seconds = self.window_days * 86400
        sales = []
        for _ in range(count):
            product_id, price = self.rng.choice(products)
            quantity = self.rng.randint(1, self.max_quantity)
            offset = timedelta(seconds=self.rng.uniform(0, window_seconds))
            sales.append(
                SampleSale(
                    product_id=product_id,
                    store_id=store_id,
                    quantity_sold=quantity,
                    unit_price=price,
                    total_amount=price * quantity,
                    sale_date=now - offset,
                )
            )
        return sales

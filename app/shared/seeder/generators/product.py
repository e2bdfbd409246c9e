"""Product generator."""

from __future__ import annotations

import random
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.shared.seeder.config import DimensionConfig


# (name, description) per category
CATALOGUE_BY_CATEGORY: dict[str, list[tuple[str, str]]] = {
    "Smartphones": [
        ("Phone Pro", "Flagship smartphone with triple camera"),
        ("Phone Lite", "Affordable smartphone with all-day battery"),
        ("Phone Max", "Large-screen smartphone with stylus support"),
    ],
    "Laptops": [
        ("Ultrabook 13", "Ultra-portable laptop with 16GB RAM"),
        ("Workstation 16", "High-performance laptop for creators"),
        ("Chromebook 14", "Lightweight laptop for everyday tasks"),
    ],
    "Tablets": [
        ("Tablet Pro 12.9", "Professional tablet with pen support"),
        ("Tablet Mini", "Compact tablet for reading and media"),
    ],
    "Gaming": [
        ("Console X", "Next-gen gaming console with 4K output"),
        ("Handheld OLED", "Portable console with OLED screen"),
        ("Wireless Controller", "Rechargeable controller with haptics"),
    ],
    "Audio": [
        ("Noise-Cancelling Headphones", "Over-ear wireless headphones"),
        ("Wireless Earbuds", "True wireless earbuds with charging case"),
        ("Smart Speaker", "Voice-controlled speaker"),
    ],
    "Accessories": [
        ("USB-C Charger", "65W fast charger"),
        ("Laptop Sleeve", "Padded sleeve for 13-15 inch laptops"),
        ("Screen Protector", "Tempered glass screen protector"),
    ],
}

PRICE_RANGES: dict[str, tuple[int, int]] = {
    "Smartphones": (299, 1199),
    "Laptops": (399, 2499),
    "Tablets": (199, 1299),
    "Gaming": (49, 599),
    "Audio": (49, 449),
    "Accessories": (9, 79),
}

DEFAULT_ITEMS = [("Gadget", "General purpose device")]
DEFAULT_PRICE_RANGE = (10, 100)


class ProductGenerator:
    """Generator for product records."""

    # Five-digit suffix: 90,000 SKUs per category prefix
    MAX_SKU_SPACE = 90000
    MAX_SKU_ATTEMPTS = 1000

    def __init__(self, rng: random.Random, config: DimensionConfig) -> None:
        """Initialize the product generator.

        Args:
            rng: Random number generator for reproducibility.
            config: Dimension configuration.
        """
        self.rng = rng
        self.config = config
        self._used_skus: set[str] = set()

    def _generate_unique_sku(self, category: str) -> str:
        """Generate a unique SKU prefixed with the category initials.

        Raises:
            RuntimeError: If SKU space is exhausted or max attempts exceeded.
        """
        if len(self._used_skus) >= self.MAX_SKU_SPACE:
            raise RuntimeError(
                f"SKU space exhausted: {len(self._used_skus)} SKUs already generated"
            )

        prefix = category[:3].upper()
        for _ in range(self.MAX_SKU_ATTEMPTS):
            sku = f"{prefix}-{self.rng.randint(10000, 99999)}"
            if sku not in self._used_skus:
                self._used_skus.add(sku)
                return sku

        raise RuntimeError(
            f"Failed to generate unique SKU after {self.MAX_SKU_ATTEMPTS} attempts. "
            f"SKU space utilization: {len(self._used_skus)}/{self.MAX_SKU_SPACE}"
        )

    def _generate_price(self, category: str) -> Decimal:
        """Price within the category range, ending in .99."""
        low, high = PRICE_RANGES.get(category, DEFAULT_PRICE_RANGE)
        return Decimal(self.rng.randint(low, high)) + Decimal("0.99")

    def generate(self, store_ids: list[int]) -> list[dict[str, str | int | Decimal | None]]:
        """Generate product records for each store.

        Args:
            store_ids: Stores to attach products to.

        Returns:
            List of product dictionaries ready for database insertion.
        """
        products: list[dict[str, str | int | Decimal | None]] = []

        for store_id in store_ids:
            for _ in range(self.config.products_per_store):
                category = self.rng.choice(self.config.product_categories)
                name, description = self.rng.choice(
                    CATALOGUE_BY_CATEGORY.get(category, DEFAULT_ITEMS)
                )
                product: dict[str, str | int | Decimal | None] = {
                    "store_id": store_id,
                    "name": name,
                    "description": description,
                    "category": category,
                    "price": self._generate_price(category),
                    "quantity_in_stock": self.rng.randint(
                        self.config.min_stock, self.config.max_stock
                    ),
                    "sku": self._generate_unique_sku(category),
                }
                products.append(product)

        return products

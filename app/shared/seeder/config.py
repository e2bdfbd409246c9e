"""Configuration dataclasses for the seeder module."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ScenarioPreset(str, Enum):
    """Pre-built scenario presets for common demo and testing needs."""

    DEMO = "demo"
    SMALL = "small"
    BUSY = "busy"
    LOW_STOCK = "low_stock"


@dataclass
class DimensionConfig:
    """Configuration for store and product generation.

    Attributes:
        stores: Number of stores to generate.
        products_per_store: Number of products generated for each store.
        product_categories: Categories to draw products from.
        min_stock: Lowest initial stock level.
        max_stock: Highest initial stock level.
    """

    stores: int = 8
    products_per_store: int = 6
    product_categories: list[str] = field(
        default_factory=lambda: [
            "Smartphones",
            "Laptops",
            "Tablets",
            "Gaming",
            "Audio",
            "Accessories",
        ]
    )
    min_stock: int = 0
    max_stock: int = 80


@dataclass
class SalesConfig:
    """Configuration for sales history generation.

    Attributes:
        days: How many days back from now sales are spread over.
        min_daily_sales: Fewest sales generated per day.
        max_daily_sales: Most sales generated per day.
        max_quantity: Upper bound for units per sale.
        open_hour: First hour of the business day (sale times start here).
        close_hour: Hour the business day ends.
        popular_share: Fraction of products that receive extra sales.
        popular_extra_sales: Extra sales per popular product.
    """

    days: int = 30
    min_daily_sales: int = 3
    max_daily_sales: int = 8
    max_quantity: int = 5
    open_hour: int = 9
    close_hour: int = 20
    popular_share: float = 0.2
    popular_extra_sales: int = 5


@dataclass
class SeederConfig:
    """Master configuration for the data seeder.

    Attributes:
        seed: Random seed for reproducibility.
        dimensions: Store and product generation configuration.
        sales: Sales generation configuration.
        batch_size: Batch size for database inserts.
    """

    seed: int = 42
    dimensions: DimensionConfig = field(default_factory=DimensionConfig)
    sales: SalesConfig = field(default_factory=SalesConfig)
    batch_size: int = 1000

    @classmethod
    def from_scenario(cls, scenario: ScenarioPreset, seed: int = 42) -> SeederConfig:
        """Create configuration from a pre-built scenario.

        Args:
            scenario: The scenario preset to use.
            seed: Random seed for reproducibility.

        Returns:
            SeederConfig configured for the scenario.
        """
        if scenario == ScenarioPreset.SMALL:
            return cls(
                seed=seed,
                dimensions=DimensionConfig(stores=2, products_per_store=3),
                sales=SalesConfig(days=7, min_daily_sales=1, max_daily_sales=3),
            )

        if scenario == ScenarioPreset.BUSY:
            return cls(
                seed=seed,
                dimensions=DimensionConfig(stores=20, products_per_store=15),
                sales=SalesConfig(
                    days=90,
                    min_daily_sales=20,
                    max_daily_sales=60,
                    popular_share=0.3,
                    popular_extra_sales=20,
                ),
            )

        if scenario == ScenarioPreset.LOW_STOCK:
            return cls(
                seed=seed,
                dimensions=DimensionConfig(min_stock=0, max_stock=12),
            )

        # Default to demo
        return cls(seed=seed)

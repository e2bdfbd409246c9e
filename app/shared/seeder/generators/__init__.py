"""Data generators for stores, products and sales."""

from app.shared.seeder.generators.product import ProductGenerator
from app.shared.seeder.generators.sales import SalesGenerator
from app.shared.seeder.generators.store import StoreGenerator

__all__ = [
    "ProductGenerator",
    "SalesGenerator",
    "StoreGenerator",
]

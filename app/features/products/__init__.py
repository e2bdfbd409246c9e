"""Product management module.

Products belong to exactly one store and carry the price and stock level
used by the analytics aggregations.
"""

from app.features.products.routes import router, store_products_router
from app.features.products.schemas import (
    BulkStockUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from app.features.products.service import ProductService

__all__ = [
    "BulkStockUpdate",
    "ProductCreate",
    "ProductResponse",
    "ProductService",
    "ProductUpdate",
    "router",
    "store_products_router",
]

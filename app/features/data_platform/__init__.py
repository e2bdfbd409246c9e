"""Data platform feature holding the inventory schema.

- stores, products: catalogue tables owned by a store.
- product_sales: sale events used by the analytics aggregations.
"""

from app.features.data_platform.models import Product, ProductSale, Store

__all__ = [
    "Product",
    "ProductSale",
    "Store",
]

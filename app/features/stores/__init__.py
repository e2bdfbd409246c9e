"""Store management module.

Stores are the top-level owner of products and sales; deleting a store
removes everything beneath it.
"""

from app.features.stores.routes import router
from app.features.stores.schemas import (
    StoreCreate,
    StoreResponse,
    StoreSummary,
    StoreUpdate,
)
from app.features.stores.service import StoreService

__all__ = [
    "StoreCreate",
    "StoreResponse",
    "StoreService",
    "StoreSummary",
    "StoreUpdate",
    "router",
]

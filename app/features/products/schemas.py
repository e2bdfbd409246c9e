"""Pydantic schemas for product endpoints."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import Field, field_validator, model_validator

from app.features.stores.schemas import StoreSummary
from app.shared.schemas import CamelModel

# =============================================================================
# Enums
# =============================================================================


class ProductSortField(str, Enum):
    """Sortable product columns, by wire name."""

    NAME = "name"
    PRICE = "price"
    QUANTITY_IN_STOCK = "quantityInStock"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


# =============================================================================
# Request Schemas
# =============================================================================


class ProductCreate(CamelModel):
    """Body for POST /products.

    ``price`` accepts a decimal string ("19.99") or a number, with at most two
    decimal places.
    """

    store_id: int = Field(..., gt=0, description="Owning store ID.")
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, description="Free-text description.")
    category: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Unit price.")
    quantity_in_stock: int = Field(0, ge=0, description="Units on hand.")
    sku: str = Field(..., min_length=1, max_length=100, description="Stock keeping unit.")


class ProductUpdate(CamelModel):
    """Body for PUT /products/{id}.

    The owning store cannot be changed; a ``storeId`` in the body is ignored.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(None, min_length=1, max_length=100)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    quantity_in_stock: int | None = Field(None, ge=0)
    sku: str | None = Field(None, min_length=1, max_length=100)

    @field_validator("name", "category", "price", "quantity_in_stock", "sku", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        """Omit a field to keep it; null would clear a required column."""
        if value is None:
            raise ValueError("must not be null")
        return value


class StockUpdateItem(CamelModel):
    """One entry of a bulk stock update."""

    id: int = Field(..., gt=0, description="Product ID.")
    quantity_in_stock: int = Field(..., ge=0, description="New stock level.")


class BulkStockUpdate(CamelModel):
    """Body for PATCH /products/bulk-update-stock.

    Accepts either ``{"products": [...]}`` or a bare list of updates.
    """

    products: list[StockUpdateItem] = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def wrap_bare_list(cls, data: Any) -> Any:
        """Allow the update list to be sent without the wrapping object."""
        if isinstance(data, list):
            return {"products": data}
        return data


# =============================================================================
# Response Schemas
# =============================================================================


class ProductResponse(CamelModel):
    """Product record with its owning store summary."""

    id: int
    store_id: int
    name: str
    description: str | None = None
    category: str
    price: Decimal = Field(..., description="Unit price (decimal string on the wire).")
    quantity_in_stock: int
    sku: str
    created_at: datetime
    updated_at: datetime
    store: StoreSummary | None = None

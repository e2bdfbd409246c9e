"""Pydantic schemas for store endpoints.

Wire names are camelCase (``zipCode``, ``phoneNumber``); attributes are snake_case
and map one-to-one onto the ``stores`` table columns.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from app.shared.schemas import CamelModel

# Loose address check: something@something.tld, no whitespace
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# =============================================================================
# Request Schemas
# =============================================================================


class StoreCreate(CamelModel):
    """Body for POST /stores."""

    name: str = Field(..., min_length=1, max_length=255, description="Store display name.")
    address: str = Field(..., min_length=1, description="Street address.")
    city: str = Field(..., min_length=1, max_length=100, description="City.")
    state: str = Field(..., min_length=1, max_length=50, description="State or region.")
    zip_code: str = Field(..., min_length=1, max_length=10, description="Postal code.")
    phone_number: str | None = Field(None, max_length=20, description="Contact phone number.")
    email: str | None = Field(
        None,
        max_length=255,
        pattern=EMAIL_PATTERN,
        description="Contact email address.",
    )


class StoreUpdate(CamelModel):
    """Body for PUT /stores/{id}. Only fields present in the body are changed."""

    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1)
    city: str | None = Field(None, min_length=1, max_length=100)
    state: str | None = Field(None, min_length=1, max_length=50)
    zip_code: str | None = Field(None, min_length=1, max_length=10)
    phone_number: str | None = Field(None, max_length=20)
    email: str | None = Field(None, max_length=255, pattern=EMAIL_PATTERN)

    @field_validator("name", "address", "city", "state", "zip_code", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        """Required columns can be changed but not cleared."""
        if value is None:
            raise ValueError("must not be null")
        return value


# =============================================================================
# Response Schemas
# =============================================================================


class StoreResponse(CamelModel):
    """Store record as returned by the API."""

    id: int = Field(..., description="Store ID. Use as storeId in product and analytics calls.")
    name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone_number: str | None = None
    email: str | None = None
    created_at: datetime
    updated_at: datetime


class StoreSummary(CamelModel):
    """Compact store reference embedded in product responses."""

    id: int
    name: str
    city: str
    state: str

"""Shared Pydantic schemas for API requests and responses."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model exposing camelCase names on the wire.

    Python code uses snake_case attributes; JSON bodies and responses use the
    camelCase aliases (``zip_code`` <-> ``zipCode``). Both names are accepted
    on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationParams(BaseModel):
    """Pagination query parameters."""

    page: int = Field(1, ge=1, description="Page number (1-indexed)")
    limit: int = Field(10, ge=1, le=100, description="Items per page")

    @property
    def offset(self) -> int:
        """Calculate SQL offset from page number."""
        return (self.page - 1) * self.limit


class PaginationMeta(CamelModel):
    """Pagination block returned in ``meta`` for list endpoints."""

    page: int = Field(..., ge=1, description="Current page number")
    limit: int = Field(..., ge=1, description="Items per page")
    total: int = Field(..., ge=0, description="Total item count matching the filters")
    pages: int = Field(..., ge=0, description="Total number of pages")
    has_next: bool = Field(..., description="Whether a following page exists")
    has_prev: bool = Field(..., description="Whether a preceding page exists")


class ApiResponse(CamelModel, Generic[T]):
    """Success envelope wrapping a single payload."""

    success: bool = Field(True, description="Always true for successful responses")
    data: T | None = Field(None, description="Response payload")
    message: str | None = Field(None, description="Human-readable outcome message")
    meta: dict[str, Any] | None = Field(None, description="Additional response metadata")


class PaginatedResponse(CamelModel, Generic[T]):
    """Success envelope wrapping one page of items."""

    success: bool = Field(True, description="Always true for successful responses")
    data: list[T] = Field(..., description="Page of items")
    meta: PaginationMeta = Field(..., description="Pagination metadata")

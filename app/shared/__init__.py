"""Shared utilities used across 3+ features."""

from app.shared.models import CreatedAtMixin, TimestampMixin
from app.shared.schemas import (
    ApiResponse,
    CamelModel,
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
)

__all__ = [
    "ApiResponse",
    "CamelModel",
    "CreatedAtMixin",
    "PaginatedResponse",
    "PaginationMeta",
    "PaginationParams",
    "TimestampMixin",
]

"""Shared utility functions."""

import math
from typing import TypeVar

from app.shared.schemas import PaginatedResponse, PaginationMeta, PaginationParams

T = TypeVar("T")


def pagination_meta(total: int, pagination: PaginationParams) -> PaginationMeta:
    """Build the pagination block for a list response.

    Args:
        total: Total count of all matching items.
        pagination: Pagination parameters used for the query.

    Returns:
        PaginationMeta with computed page count and navigation flags.
    """
    pages = math.ceil(total / pagination.limit) if total > 0 else 0
    return PaginationMeta(
        page=pagination.page,
        limit=pagination.limit,
        total=total,
        pages=pages,
        has_next=pagination.page < pages,
        has_prev=pagination.page > 1,
    )


def paginate_response(
    items: list[T],
    total: int,
    pagination: PaginationParams,
) -> PaginatedResponse[T]:
    """Create a paginated response from items and total count.

    Args:
        items: List of items for the current page.
        total: Total count of all items.
        pagination: Pagination parameters used for the query.

    Returns:
        PaginatedResponse with computed pagination metadata.
    """
    return PaginatedResponse[T](
        data=items,
        meta=pagination_meta(total, pagination),
    )

"""JSON response envelope shared by every API endpoint.

Successful responses look like ``{"success": true, "data": ..., "message": ..., "meta": ...}``
and failures like ``{"success": false, "error": ..., "details": [...]}``. The error
shape is part of the client contract, so handlers build it through the helpers here.
"""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.core.logging import get_logger, request_id_ctx

logger = get_logger(__name__)


# =============================================================================
# Error Schemas
# =============================================================================


class FieldError(BaseModel):
    """A single field-level validation failure."""

    field: str = Field(..., description="Wire name of the offending field (dot path if nested).")
    message: str = Field(..., description="Human-readable reason the value was rejected.")


class ErrorResponse(BaseModel):
    """Failure envelope.

    Attributes:
        success: Always false.
        error: Short error summary safe to show to clients.
        details: Field-level errors (validation failures only).
        request_id: Request correlation ID for support requests.
    """

    success: bool = Field(False, description="Always false for errors.")
    error: str = Field(..., description="Short error summary.")
    details: list[FieldError] | None = Field(
        None,
        description="Field-level validation errors. Present for 400 validation responses.",
    )
    request_id: str | None = Field(
        None,
        description="Request correlation ID. Include in support requests.",
    )


# =============================================================================
# Helper Functions
# =============================================================================


def error_response(
    status: int,
    error: str,
    details: list[dict[str, Any]] | None = None,
) -> JSONResponse:
    """Create a failure envelope response.

    Args:
        status: HTTP status code.
        error: Short error summary.
        details: Field-level errors as ``{"field", "message"}`` mappings (optional).

    Returns:
        JSONResponse with the failure envelope.
    """
    body = ErrorResponse(
        error=error,
        details=[FieldError(**item) for item in details] if details is not None else None,
        request_id=request_id_ctx.get(),
    )
    return JSONResponse(
        status_code=status,
        content=body.model_dump(exclude_none=True),
    )

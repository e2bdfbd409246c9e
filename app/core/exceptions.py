"""Custom exceptions and FastAPI exception handlers.

Every handler answers with the ``{"success": false, "error": ...}`` envelope from
``app.core.responses``. Internal failures are logged with full context and
reported to clients with a generic message only.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging import get_logger
from app.core.responses import error_response

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"

# Request locations stripped from Pydantic error paths
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


# =============================================================================
# Exception Classes
# =============================================================================


class InventoryError(Exception):
    """Base exception for inventory application errors.

    All application-specific exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application error.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            status_code: HTTP status code.
            details: Additional error context (logged, never returned for 5xx).
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}


class NotFoundError(InventoryError):
    """Resource not found error.

    Use when a requested store or product does not exist.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            details=details,
        )


class ValidationError(InventoryError):
    """Input validation error.

    Raised by services when a parameter is out of range before any query runs.
    ``errors`` carries ``{"field", "message"}`` items for the response body.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: list[dict[str, str]] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details=details,
        )
        self.errors = errors or []


class DatabaseError(InventoryError):
    """Database operation error.

    Use when a query or connection fails unexpectedly.
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="DATABASE_ERROR",
            status_code=500,
            details=details,
        )


# =============================================================================
# Exception Handlers
# =============================================================================


def _field_path(loc: tuple[Any, ...] | list[Any]) -> str:
    """Join a Pydantic error location into a dotted wire field name."""
    parts = list(loc)
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(str(part) for part in parts)


async def inventory_exception_handler(
    request: Request,
    exc: InventoryError,
) -> JSONResponse:
    """Handle InventoryError exceptions.

    Args:
        request: FastAPI request object.
        exc: The raised exception.

    Returns:
        Failure envelope response.
    """
    if isinstance(exc, ValidationError):
        logger.warning(
            "app.validation_error",
            error=exc.message,
            path=str(request.url.path),
            fields=[e.get("field") for e in exc.errors],
        )
        return error_response(
            status=exc.status_code,
            error=exc.message,
            details=exc.errors or None,
        )

    if exc.status_code >= 500:
        logger.error(
            "app.error_handled",
            error=exc.message,
            error_type=type(exc).__name__,
            error_code=exc.code,
            status_code=exc.status_code,
            details=exc.details,
            path=str(request.url.path),
            exc_info=True,
        )
        return error_response(status=exc.status_code, error=GENERIC_ERROR_MESSAGE)

    logger.warning(
        "app.error_handled",
        error=exc.message,
        error_type=type(exc).__name__,
        error_code=exc.code,
        status_code=exc.status_code,
        path=str(request.url.path),
    )
    return error_response(status=exc.status_code, error=exc.message)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle Pydantic request validation errors.

    Converts Pydantic errors to the itemized ``details`` list, one entry per
    offending field, using the field's wire name.

    Args:
        request: FastAPI request object.
        exc: Pydantic validation error.

    Returns:
        400 failure envelope with field-level errors.
    """
    field_errors: list[dict[str, str]] = []
    for error in exc.errors():
        field_errors.append(
            {
                "field": _field_path(error.get("loc", ())),
                "message": str(error.get("msg", "Validation failed")),
            }
        )

    logger.warning(
        "app.validation_error",
        error_count=len(field_errors),
        path=str(request.url.path),
        fields=[e["field"] for e in field_errors],
    )

    return error_response(
        status=400,
        error="Validation failed",
        details=field_errors,
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle routing-level HTTP errors (unknown route, wrong method)."""
    if exc.status_code == 404:
        message = "Route not found"
    else:
        message = str(exc.detail)

    logger.info(
        "app.http_error",
        status_code=exc.status_code,
        path=str(request.url.path),
    )
    return error_response(status=exc.status_code, error=message)


async def database_exception_handler(
    request: Request,
    exc: SQLAlchemyError,
) -> JSONResponse:
    """Handle storage errors that escaped the service layer."""
    logger.error(
        "app.database_error",
        error=str(exc),
        error_type=type(exc).__name__,
        path=str(request.url.path),
        exc_info=True,
    )
    return error_response(status=500, error=GENERIC_ERROR_MESSAGE)


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: FastAPI request object.
        exc: The raised exception.

    Returns:
        500 failure envelope with a generic message.
    """
    logger.error(
        "app.unhandled_error",
        error=str(exc),
        error_type=type(exc).__name__,
        path=str(request.url.path),
        exc_info=True,
    )

    return error_response(status=500, error=GENERIC_ERROR_MESSAGE)


# =============================================================================
# Handler Registration
# =============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(InventoryError, inventory_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

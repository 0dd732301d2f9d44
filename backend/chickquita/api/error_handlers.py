"""Error Handlers — global exception handlers for the Chickquita API.

Invariants:
    - StoreError escaping a route → 500 (409 for UniquenessViolation) in the Error envelope
    - RequestValidationError → 400 Error.Validation with field-level violations
    - Exception (catch-all) → never leaks internal details
    - Every body has the same shape as Error.to_response()

Design Decisions:
    - Three-layer handler: store boundary (StoreError), validation (Pydantic), catch-all (Exception)
    - Kept out of main.py so the app module only wires things together
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from chickquita.core.errors import (
    Error, ErrorCode, FieldViolation, StoreError, UniquenessViolation,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_store_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_store_error_handler(app: FastAPI) -> None:
    """Register handler for store failures raised outside a command handler."""

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(
            f"StoreError: {exc.message}",
            extra={"error_code": ErrorCode.FAILURE.value, "path": request.url.path},
        )
        if isinstance(exc, UniquenessViolation):
            error = Error.conflict("The request conflicts with existing data")
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT, content=error.to_response(),
            )
        error = Error(ErrorCode.FAILURE, "An unexpected error occurred")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": ErrorCode.VALIDATION.value, "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        error = Error(ErrorCode.FAILURE, "An unexpected error occurred")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error.to_response(),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    violations = [
        FieldViolation(
            ".".join(str(loc) for loc in e["loc"] if loc != "body"),
            e["msg"],
        )
        for e in exc.errors()
    ]
    return Error.from_violations(violations).to_response()

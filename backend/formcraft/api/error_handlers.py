"""Error Handlers — global exception handlers for the FormCraft API.

Invariants:
    - FormCraftError → structured JSON with error code, reason, message, severity
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (FormCraftError), validation (Pydantic), catch-all (Exception)
    - Client errors logged at warning, storage errors at error with the chained cause
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from formcraft.core.errors import FormCraftError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_formcraft_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_formcraft_error_handler(app: FastAPI) -> None:
    """Register FormCraft domain/infrastructure error handler."""

    @app.exception_handler(FormCraftError)
    async def formcraft_error_handler(request: Request, exc: FormCraftError):
        """Handle all FormCraft domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "reason": exc.reason,
            "path": request.url.path,
        }
        if exc.http_status >= 500:
            logger.error(
                f"FormCraftError: {exc.message}", extra=extra,
                exc_info=exc.__cause__,
            )
        else:
            logger.warning(f"FormCraftError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
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
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "reason": None,
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "reason": "invalid-request",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }

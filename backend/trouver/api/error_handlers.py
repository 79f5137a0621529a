"""Error Handlers - global exception handlers for the Trouver API.

Invariants:
    - TrouverError -> structured JSON with error code, message, severity
    - RequestValidationError -> the same VALIDATION_ERROR shape as core ValidationError
    - PersistenceError detail is logged, never returned
    - Exception (catch-all) -> never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from trouver.core.errors import ErrorSeverity, PersistenceError, TrouverError, ValidationError
from trouver.schemas.validation import violations_from

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_trouver_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_trouver_error_handler(app: FastAPI) -> None:

    @app.exception_handler(TrouverError)
    async def trouver_error_handler(request: Request, exc: TrouverError):
        """Handle all Trouver domain/store errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "principal_id": exc.context.principal_id,
            "operation": exc.context.operation,
        }
        if isinstance(exc, PersistenceError):
            logger.error(f"PersistenceError: {exc.message} ({exc.reason})", extra=extra)
        elif exc.severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            logger.error(f"TrouverError: {exc.message}", extra=extra)
        else:
            logger.warning(f"TrouverError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Render request-level validation failures as ValidationError."""
        error = ValidationError(violations_from(exc.errors()))
        logger.warning(
            f"Validation error on {request.url.path}: {error.fields}",
            extra={"error_code": error.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )

"""Error Handlers — global exception handlers for the quote API.

Invariants:
    - ShipQuoteError → its own envelope and HTTP status (VALIDATION_ERROR → flat 400)
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Two-layer handler: domain (ShipQuoteError), catch-all (Exception). No route
      declares Pydantic-parsed parameters, so request validation is core/validate_request's job
    - The quote endpoint never reaches the catch-all: QuoteService degrades to fallback first
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shipquote.core.errors import ShipQuoteError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_shipquote_error_handler(app)
    _register_generic_error_handler(app)


def _register_shipquote_error_handler(app: FastAPI) -> None:
    """Register domain error handler."""

    @app.exception_handler(ShipQuoteError)
    async def shipquote_error_handler(request: Request, exc: ShipQuoteError):
        """Handle all quote domain errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"ShipQuoteError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
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
                "error": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        )

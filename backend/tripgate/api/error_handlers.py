"""Error Handlers: global exception handlers for the gateway.

Invariants:
    - GatewayError -> its own ClientResponse (status + flat body, or upstream bytes)
    - RequestValidationError -> 400 validation_error with field-level details
    - Exception (catch-all) -> 500 internal_error, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tripgate.api.responses import to_http_response
from tripgate.core.errors import ErrorSeverity, GatewayError, LocalFault, ValidationFault

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_gateway_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_gateway_error_handler(app: FastAPI) -> None:

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        """Handle all mapped gateway errors."""
        exc.context.path = request.url.path
        logger.log(
            _LOG_LEVELS[exc.severity],
            f"GatewayError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "upstream": exc.context.upstream,
                "status_code": exc.http_status,
            },
        )
        return to_http_response(exc.to_client_response())


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "validation_error", "path": request.url.path},
        )
        fault = build_validation_fault(exc)
        return to_http_response(fault.to_client_response())


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "internal_error", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=LocalFault().to_body(),
        )


def build_validation_fault(exc: RequestValidationError) -> ValidationFault:
    """Structured validation fault from Pydantic errors."""
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    return ValidationFault("Invalid request data", details=details)

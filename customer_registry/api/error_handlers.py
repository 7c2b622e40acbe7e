"""Error Handlers — global exception handlers for the customer registry API.

Invariants:
    - Every error body has the OperationResult shape: success=false, data=null, error=<message>
    - CustomerRegistryError → its own http_status and message
    - RequestValidationError → 400 with the offending fields named in the message
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (CustomerRegistryError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py: keeps the app factory short
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from customer_registry.core.errors import CustomerRegistryError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def failure_body(message: str) -> dict:
    return {"success": False, "data": None, "error": message}


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(CustomerRegistryError)
    async def registry_error_handler(request: Request, exc: CustomerRegistryError):
        """Handle customer registry errors raised outside a use case (e.g. bad filters)."""
        logger.log(
            exc.log_level,
            f"CustomerRegistryError: {exc.message}",
            extra={**exc.log_extra(), "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=failure_body(exc.message),
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
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=failure_body(_describe_validation_errors(exc)),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all. Never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure_body("Internal server error"),
        )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """'Invalid request data: body.name: Input should be a valid string; ...'"""
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )
    return f"Invalid request data: {details}" if details else "Invalid request data"

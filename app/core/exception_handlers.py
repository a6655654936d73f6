"""Global exception handlers for consistent error responses.

This module registers exception handlers that convert all exceptions
to a unified JSON response format.
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException

logger = logging.getLogger("app.exception")


# Error types for framework-raised HTTP errors (unknown routes, wrong methods)
HTTP_ERROR_TYPES = {
    401: "authentication_error",
    403: "authorization_error",
    404: "not_found",
    405: "method_not_allowed",
}

# Leading loc entries that name where a field came from, not the field
_LOCATION_ROOTS = ("body", "query", "path")


def _request_context(request: Request, status_code: int) -> dict[str, Any]:
    return {
        "request_id": getattr(request.state, "request_id", None),
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
    }


def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an AppException as ``{"type", "message"}``.

    Server-side failures are logged at error level, client errors at info.
    """
    extra = {**_request_context(request, exc.status_code), "error_type": exc.error_type}
    if exc.status_code >= 500:
        logger.error("AppException: %s - %s", exc.error_type, exc.message, extra=extra)
    else:
        logger.info("AppException: %s - %s", exc.error_type, exc.message, extra=extra)
    return JSONResponse(
        status_code=exc.status_code,
        content={"type": exc.error_type, "message": exc.message},
    )


def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render routing errors raised by Starlette in the same shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "type": HTTP_ERROR_TYPES.get(exc.status_code, "http_error"),
            "message": str(exc.detail),
        },
        headers=getattr(exc, "headers", None),
    )


def _describe_error(error: Any) -> str:
    field = ".".join(str(loc) for loc in error["loc"] if loc not in _LOCATION_ROOTS)
    return f"{field}: {error['msg']}" if field else error["msg"]


def format_validation_errors(errors: Sequence[Any]) -> str:
    """Collapse Pydantic error dicts into a single "field: msg; ..." string."""
    return "; ".join(_describe_error(error) for error in errors)


def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic request validation errors with unified format.

    Malformed input is reported as 400, the same status as ValidationError.
    """
    message = format_validation_errors(exc.errors())
    return JSONResponse(
        status_code=400,
        content={"type": "validation_error", "message": message},
    )


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors."""
    logger.error(
        "Unhandled exception: %s %s - %s",
        request.method,
        request.url.path,
        exc,
        extra=_request_context(request, 500),
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"type": "internal_error", "message": "An unexpected error occurred"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

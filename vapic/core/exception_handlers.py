"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps vapic and framework
exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vapic.core.config import get_settings
from vapic.domain.exceptions import VapicException

logger = logging.getLogger(__name__)

# Map error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "INPUT_ERROR": 400,
    "INVALID_PARAMETER": 400,
    "MALFORMED_VERSION": 400,
    "CACHE_MISS": 404,
    "NO_QUALIFYING_VERSION": 404,
    "BACKING_STORE_ERROR": 503,
}


def status_for(exc: VapicException) -> int:
    """Return the HTTP status for a vapic exception (400 when unmapped)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def vapic_error_response(exc: VapicException) -> JSONResponse:
    """Return JSON from VapicException.to_dict() with the mapped status code."""
    return JSONResponse(status_code=status_for(exc), content=exc.to_dict())


def _vapic_exception_handler(request: Request, exc: VapicException) -> JSONResponse:
    if exc.error_code == "BACKING_STORE_ERROR":
        logger.error("Backing store failure on %s: %s", request.url.path, exc.message)
    return vapic_error_response(exc)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: VapicException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(VapicException, _vapic_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)

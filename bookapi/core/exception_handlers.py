"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses (SRP, OCP for adding new handlers).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookapi.core.config import get_settings
from bookapi.domain.exceptions import (
    AuthenticationException,
    BookApiException,
    StoreException,
    ValidationException,
)

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "VALIDATION_ERROR": 400,
    "DESERIALIZATION_ERROR": 400,
    "STORE_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}


def _book_api_exception_handler(
    request: Request, exc: BookApiException
) -> JSONResponse:
    """Return JSON from BookApiException.to_dict() with the mapped status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.details)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: ValidationException
) -> JSONResponse:
    """Return 400 whose body is the serialized violation list."""
    return JSONResponse(
        status_code=400,
        content=[v.to_dict() for v in exc.violations],
    )


def _authentication_exception_handler(
    request: Request, exc: AuthenticationException
) -> JSONResponse:
    """Return 401 with a Bearer challenge."""
    return JSONResponse(
        status_code=401,
        content=exc.to_dict(),
        headers={"WWW-Authenticate": "Bearer"},
    )


def _store_exception_handler(request: Request, exc: StoreException) -> JSONResponse:
    """Return 500; store details only when debug is True."""
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.details)
    body: dict[str, Any] = {"error": exc.error_code, "message": exc.message}
    if get_settings().debug:
        body["details"] = exc.details
    return JSONResponse(status_code=500, content=body)


def _request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details (query/path parameters)."""
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
        headers=getattr(exc, "headers", None),
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

    Starlette picks the handler of the most specific class in the MRO, so the
    ValidationException, AuthenticationException and StoreException handlers
    take precedence over the BookApiException one.
    """
    app.add_exception_handler(ValidationException, _validation_exception_handler)
    app.add_exception_handler(AuthenticationException, _authentication_exception_handler)
    app.add_exception_handler(StoreException, _store_exception_handler)
    app.add_exception_handler(BookApiException, _book_api_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)

"""Global exception handlers for consistent error responses.

Design:
- AppError subclasses -> appropriate HTTP status (400, 502)
- 404 -> JSON body listing the available endpoints
- Unexpected Exception -> generic 500 (safety net)
- All responses include request_id for tracing
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ladybug_api.core.errors import AppError, UpstreamAppError, ValidationAppError
from ladybug_api.core.logging import get_request_id

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[AppError], int] = {
    ValidationAppError: 400,
    UpstreamAppError: 502,
}


def _status_for(exc: AppError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return 400


def _available_endpoints(app: FastAPI) -> list[str]:
    # The generated schema lists every public path, whatever the router nesting.
    return sorted(app.openapi().get("paths", {}))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render domain errors as ``{"success": false, "error": {...}}``.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with the status mapped from the error type.
    """
    status_code = _status_for(exc)

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "path": request.url.path,
        },
    )

    error_content: dict = {
        "code": exc.code,
        "message": exc.message,
        "request_id": get_request_id(),
    }
    if exc.details:
        error_content["details"] = exc.details

    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error_content},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors; unknown paths also list the available endpoints."""

    content: dict = {
        "success": False,
        "error": {
            "code": "not_found" if exc.status_code == 404 else "http_error",
            "message": "Endpoint not found" if exc.status_code == 404 else str(exc.detail),
            "request_id": get_request_id(),
        },
    }
    if exc.status_code == 404:
        content["path"] = request.url.path
        content["availableEndpoints"] = _available_endpoints(request.app)

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors.

    Logs the failure for debugging and returns a generic message; no stack
    traces or exception text reach the client.
    """
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": {
                "code": "internal_server_error",
                "message": "Something went wrong. Please try again later.",
                "request_id": get_request_id(),
            },
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Example:
        >>> from fastapi import FastAPI
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(Exception)(general_exception_handler)

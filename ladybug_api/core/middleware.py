"""HTTP middleware for request correlation and security headers.

Usage:
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(security_headers_middleware)  # outermost
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from ladybug_api.core.exception_handlers import general_exception_handler
from ladybug_api.core.logging import clear_request_id, set_request_id

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}


async def request_id_middleware(request: Request, call_next) -> Response:
    """Propagate or generate a request id and time the request.

    The incoming id header (configurable via LOG_REQUEST_ID_HEADER) is reused
    when present, otherwise a UUID4 is generated. The id lives in contextvars
    for the duration of the request so every log line carries it, and is echoed
    back together with ``X-Request-Duration-ms``.
    """

    header_name = request.app.state.settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    except Exception as exc:
        # Rendered here, while the request id is still bound, instead of in
        # ServerErrorMiddleware outside every user middleware.
        response = await general_exception_handler(request, exc)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


async def security_headers_middleware(request: Request, call_next) -> Response:
    """Attach the static security headers to every response, 429s included."""

    response: Response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response

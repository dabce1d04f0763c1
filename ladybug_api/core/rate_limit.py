"""Rate limiting middleware.

Every inbound request passes through the limiter before routing, so throttled
clients never reach a handler or the response cache.

The limiter, the client identity resolver and the settings are read from
``request.app.state``; they are constructed by the application factory.
"""

from __future__ import annotations

import logging

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from ladybug_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from ladybug_api.core.client_identity import ClientIdResolver
from ladybug_api.core.config import Settings
from ladybug_api.core.logging import hash_identifier

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS_MESSAGE = "Too many requests, please try again later."


def build_rejection_response(result: RateLimitResult, *, include_headers: bool) -> JSONResponse:
    """Build the fixed 429 response for a rejected request.

    Args:
        result: Rejected limiter result.
        include_headers: Whether to add Retry-After and X-RateLimit-* headers.

    Returns:
        JSONResponse with status 429.
    """

    headers: dict[str, str] = {}
    if include_headers:
        headers["Retry-After"] = str(result.retry_after_seconds or 0)
        headers["X-RateLimit-Limit"] = str(result.limit)
        headers["X-RateLimit-Remaining"] = str(result.remaining)
        headers["X-RateLimit-Reset"] = str(result.reset_at)

    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"success": False, "error": TOO_MANY_REQUESTS_MESSAGE},
        headers=headers or None,
    )


async def rate_limit_middleware(request: Request, call_next) -> Response:
    """HTTP middleware admitting or rejecting requests per client.

    Exempt paths and a disabled limiter pass straight through. Admitted
    requests continue down the stack; rejected ones get a 429 without the
    handler running.
    """

    app_settings: Settings = request.app.state.settings
    limiter: AbstractRateLimiter | None = getattr(request.app.state, "rate_limiter", None)

    if limiter is None or request.url.path in app_settings.app.rate_limit_exempt_paths:
        return await call_next(request)

    resolve_client_id: ClientIdResolver = request.app.state.client_id_resolver
    client_id = resolve_client_id(request)
    client_hash = hash_identifier(client_id)

    result = limiter.check_and_record(client_id)
    if result.allowed:
        logger.debug(
            "rate_limit.admitted",
            extra={
                "client_hash": client_hash,
                "limit": result.limit,
                "remaining": result.remaining,
            },
        )
        response = await call_next(request)
        if app_settings.app.rate_limit_include_headers:
            response.headers.setdefault("X-RateLimit-Limit", str(result.limit))
            response.headers.setdefault("X-RateLimit-Remaining", str(result.remaining))
        return response

    logger.warning(
        "rate_limit.rejected",
        extra={
            "client_hash": client_hash,
            "limit": result.limit,
            "window_s": app_settings.app.rate_limit_window_seconds,
            "retry_after_s": result.retry_after_seconds,
            "path": request.url.path,
        },
    )
    return build_rejection_response(result, include_headers=app_settings.app.rate_limit_include_headers)

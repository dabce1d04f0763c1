"""Route class that serves GET responses from the response cache.

Routers whose handlers are read-only and stable for the cache TTL opt in with
``APIRouter(route_class=CachedRoute)``. Handlers that produce a fresh random
value per call must stay on a plain router, otherwise clients would receive
the same "random" value for the whole TTL.

A handler can keep one particular response out of the cache (e.g. a degraded
fallback answer) by setting ``Cache-Control: no-store`` on it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Coroutine

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from ladybug_api.utils.response_cache import ResponseCache, build_cache_key

logger = logging.getLogger(__name__)

CACHE_STATUS_HEADER = "X-Cache"
OPENAPI_CACHED_MARKER = "x-cached"


def _is_storable(response: Response) -> bool:
    if not 200 <= response.status_code < 300:
        return False
    if "no-store" in response.headers.get("cache-control", "").lower():
        return False
    return response.headers.get("content-type", "").startswith("application/json")


class CachedRoute(APIRoute):
    """APIRoute wrapping the handler with cache lookup and store.

    Only the JSON body is cached. A hit is rebuilt as a plain ``JSONResponse``,
    so headers a handler set on the original response are not replayed; the
    middleware headers (request id, security, rate limit) are added again on
    the way out. The one handler-set header in use, ``Cache-Control:
    no-store``, only ever appears on responses that are never stored.
    """

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        openapi_extra = {**(kwargs.pop("openapi_extra", None) or {}), OPENAPI_CACHED_MARKER: True}
        super().__init__(path, endpoint, openapi_extra=openapi_extra, **kwargs)

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        route_handler = super().get_route_handler()

        async def cached_route_handler(request: Request) -> Response:
            cache: ResponseCache | None = getattr(request.app.state, "response_cache", None)
            if cache is None or request.method != "GET":
                return await route_handler(request)

            key = build_cache_key(request)
            payload = cache.lookup(key)
            if payload is not None:
                return JSONResponse(content=payload, headers={CACHE_STATUS_HEADER: "HIT"})

            # Exceptions propagate to the handlers before anything is stored.
            response = await route_handler(request)
            if _is_storable(response):
                cache.store(key, json.loads(response.body))
                response.headers[CACHE_STATUS_HEADER] = "MISS"
            else:
                response.headers[CACHE_STATUS_HEADER] = "BYPASS"
            return response

        return cached_route_handler

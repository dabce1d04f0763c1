"""Service metadata and runtime status."""

from __future__ import annotations

import platform
import time

from fastapi import APIRouter, Request

from ladybug_api.api.cached_route import CachedRoute
from ladybug_api.core.config import Settings
from ladybug_api.schemas.common import utc_now_iso

router = APIRouter(prefix="/api", tags=["Meta"], route_class=CachedRoute)
status_router = APIRouter(prefix="/api", tags=["Meta"])


def _uptime(request: Request) -> float:
    return round(time.monotonic() - request.app.state.started_at, 3)


def _cached_entries(request: Request) -> int:
    cache = request.app.state.response_cache
    return len(cache) if cache is not None else 0


@router.get("/info")
async def api_info(request: Request) -> dict:
    """Service description; cached like any other read-only endpoint."""
    cfg: Settings = request.app.state.settings
    return {
        "success": True,
        "data": {
            "name": cfg.app.name,
            "version": cfg.app.version,
            "description": "REST API of small text, data and AI utilities.",
            "uptime": _uptime(request),
            "timestamp": utc_now_iso(),
            "server": {
                "python": platform.python_version(),
                "platform": platform.system().lower(),
                "cachedEndpoints": _cached_entries(request),
            },
        },
    }


@status_router.get("/status")
async def api_status(request: Request) -> dict:
    """Live status including limiter and cache statistics (never cached)."""
    cfg: Settings = request.app.state.settings
    limiter = request.app.state.rate_limiter
    cache = request.app.state.response_cache

    return {
        "success": True,
        "status": "Active",
        "uptime": _uptime(request),
        "timestamp": utc_now_iso(),
        "server": {
            "name": cfg.app.name,
            "version": cfg.app.version,
            "python": platform.python_version(),
            "cachedEndpoints": _cached_entries(request),
        },
        "features": {
            "rateLimit": (
                f"{cfg.app.rate_limit_max} requests / {cfg.app.rate_limit_window_seconds:g} seconds"
                if limiter is not None
                else "disabled"
            ),
            "cache": f"{cfg.app.cache_ttl_seconds:g} seconds TTL" if cache is not None else "disabled",
            "security": "Security headers enabled",
        },
        "rateLimiter": limiter.stats() if limiter is not None else None,
        "cache": cache.stats() if cache is not None else None,
    }

"""Application factory for the FastAPI app.

Builds the owned components (rate limiter, response cache, client identity
resolver, AI service), attaches them to ``app.state``, and wires middleware,
handlers and routers. Each call returns an independent app, so tests never
share limiter or cache state.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ladybug_api.adapters.image.http_client import ImageProviderClient
from ladybug_api.adapters.llm.factory import create_llm_client
from ladybug_api.adapters.rate_limit.base import AbstractRateLimiter
from ladybug_api.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from ladybug_api.adapters.translation.http_client import HttpTranslationClient
from ladybug_api.api.routes import (
    ai_router,
    business_router,
    generators_router,
    health_router,
    meta_router,
    social_router,
    status_router,
    tools_router,
)
from ladybug_api.core.client_identity import build_client_id_resolver
from ladybug_api.core.config import AppSettings, Settings, settings
from ladybug_api.core.exception_handlers import setup_exception_handlers
from ladybug_api.core.logging import configure_logging
from ladybug_api.core.middleware import request_id_middleware, security_headers_middleware
from ladybug_api.core.openapi import apply_openapi_customizations
from ladybug_api.core.rate_limit import rate_limit_middleware
from ladybug_api.services.ai_service import AIService
from ladybug_api.utils.response_cache import ResponseCache

logger = logging.getLogger(__name__)


def build_rate_limiter(app_settings: AppSettings) -> AbstractRateLimiter | None:
    if not app_settings.rate_limit_enabled:
        return None
    return InMemorySlidingWindowRateLimiter(
        limit=app_settings.rate_limit_max,
        window_seconds=app_settings.rate_limit_window_seconds,
        max_clients=app_settings.rate_limit_max_clients,
    )


def build_response_cache(app_settings: AppSettings) -> ResponseCache | None:
    if not app_settings.cache_enabled:
        return None
    return ResponseCache(
        ttl_seconds=app_settings.cache_ttl_seconds,
        max_entries=app_settings.cache_max_entries,
    )


def build_ai_service(cfg: Settings) -> AIService:
    translator = HttpTranslationClient(
        cfg.upstream.translate_url,
        timeout_seconds=cfg.upstream.timeout_seconds,
    )
    images = ImageProviderClient(
        cfg.upstream.image_providers,
        timeout_seconds=cfg.upstream.image_timeout_seconds,
    )
    return AIService(llm=create_llm_client(cfg.llm), translator=translator, images=images)


async def sweep_periodically(app: FastAPI, interval_seconds: float) -> None:
    """Forget idle clients and stale cache entries every ``interval_seconds``."""

    while True:
        await asyncio.sleep(interval_seconds)
        limiter: AbstractRateLimiter | None = app.state.rate_limiter
        cache: ResponseCache | None = app.state.response_cache
        removed_clients = limiter.sweep() if limiter is not None else 0
        removed_entries = cache.sweep() if cache is not None else 0
        logger.debug(
            "sweep.completed",
            extra={"removed_clients": removed_clients, "removed_entries": removed_entries},
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run the background sweep while serving; clear state and close clients on shutdown."""

    interval = app.state.settings.app.sweep_interval_seconds
    sweeper = asyncio.create_task(sweep_periodically(app, interval)) if interval > 0 else None
    logger.info("startup.complete", extra={"sweep_interval_s": interval})

    try:
        yield
    finally:
        if sweeper is not None:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper

        if app.state.response_cache is not None:
            app.state.response_cache.clear()

        service: AIService = app.state.ai_service
        if service.llm is not None:
            await service.llm.aclose()
        if service.translator is not None:
            await service.translator.aclose()
        if service.images is not None:
            await service.images.aclose()

        logger.info("shutdown.complete", extra={"cache_cleared": app.state.response_cache is not None})


def create_app(
    app_settings: Settings | None = None,
    *,
    ai_service: AIService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        app_settings: Settings to use; defaults to the global settings.
        ai_service: Pre-built AI service (tests inject fakes); built from settings otherwise.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    cfg = app_settings or settings

    # Logging first so subsequent init logs are formatted as desired
    configure_logging(cfg.log)

    app = FastAPI(
        title=cfg.app.name,
        description=(
            "REST API of small utilities: hashing, Morse code, Roman numerals, base64, "
            "JSON formatting, validators, demo data, social helpers, and AI, translation "
            "and text-to-image proxies with "
            "fallbacks. Per-client sliding window rate limiting and a response cache "
            "for read-only endpoints."
        ),
        version=cfg.app.version,
        debug=cfg.app.debug,
        lifespan=lifespan,
    )

    app.state.settings = cfg
    app.state.started_at = time.monotonic()
    app.state.rate_limiter = build_rate_limiter(cfg.app)
    app.state.response_cache = build_response_cache(cfg.app)
    app.state.client_id_resolver = build_client_id_resolver(
        cfg.app.client_id_strategy,
        cfg.app.trusted_proxies,
    )
    app.state.ai_service = ai_service or build_ai_service(cfg)

    # Middleware: the last registered runs first (security headers -> request id -> CORS -> rate limit)
    app.middleware("http")(rate_limit_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.app.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(security_headers_middleware)

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(meta_router)
    app.include_router(status_router)
    app.include_router(ai_router)
    app.include_router(tools_router)
    app.include_router(business_router)
    app.include_router(social_router)
    app.include_router(generators_router)

    apply_openapi_customizations(app)

    logger.info(
        "app.created",
        extra={
            "rate_limit_enabled": app.state.rate_limiter is not None,
            "cache_enabled": app.state.response_cache is not None,
            "client_id_strategy": cfg.app.client_id_strategy,
        },
    )
    return app

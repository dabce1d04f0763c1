from __future__ import annotations

from ladybug_api.api.routes.ai import router as ai_router
from ladybug_api.api.routes.business import router as business_router
from ladybug_api.api.routes.generators import router as generators_router
from ladybug_api.api.routes.health import router as health_router
from ladybug_api.api.routes.meta import router as meta_router
from ladybug_api.api.routes.meta import status_router
from ladybug_api.api.routes.social import router as social_router
from ladybug_api.api.routes.tools import router as tools_router

__all__ = [
    "ai_router",
    "business_router",
    "generators_router",
    "health_router",
    "meta_router",
    "social_router",
    "status_router",
    "tools_router",
]

from __future__ import annotations

import time

from fastapi import APIRouter, Request

from ladybug_api.schemas.common import utc_now_iso

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request) -> dict:
    """Health check endpoint.

    Exempt from rate limiting so load balancers can always check it.

    Returns:
        dict: Status, timestamp and process uptime in seconds.
    """

    return {
        "status": "healthy",
        "timestamp": utc_now_iso(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
    }

"""Endpoints producing a fresh random value per request.

These live on a plain router: wrapping them in the response cache would hand
every client the same "random" value for the whole TTL.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from ladybug_api.api.dependencies import get_ai_service
from ladybug_api.schemas.ai import ImageResponse
from ladybug_api.schemas.business import WeatherResponse
from ladybug_api.schemas.tools import UUIDResponse
from ladybug_api.services import business
from ladybug_api.services.ai_service import AIService

router = APIRouter(tags=["Generators"])


@router.get("/dev/uuid-generator", response_model=UUIDResponse)
async def uuid_generator(count: int = Query(1, ge=1, description="Number of UUIDs (capped at 10)")) -> UUIDResponse:
    return business.generate_uuids(count)


@router.get("/data/weather", response_model=WeatherResponse)
async def weather(
    city: str = Query("New York", description="City name, echoed back"),
    units: str = Query("metric", description="metric or imperial, echoed back"),
) -> WeatherResponse:
    """Demo weather reading with random values."""
    return business.demo_weather(city, units)


@router.get("/ai/texttoimg", response_model=ImageResponse, tags=["AI"])
async def text_to_image(
    response: Response,
    service: Annotated[AIService, Depends(get_ai_service)],
    prompt: str | None = Query(None, description="Image description (max 200 characters)"),
    size: str = Query("1024x1024", description="Requested size, echoed back"),
    style: str = Query("realistic", description="Requested style, echoed back"),
) -> ImageResponse:
    """Image URL from the first text-to-image provider that answers (random seed per call)."""
    result = await service.text_to_image(prompt, size, style)
    if result.metadata.source == "Fallback":
        response.headers["Cache-Control"] = "no-store"
    return result

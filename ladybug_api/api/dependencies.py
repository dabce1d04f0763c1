"""FastAPI dependencies resolving the components owned by the application."""

from __future__ import annotations

from fastapi import Request

from ladybug_api.services.ai_service import AIService


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service

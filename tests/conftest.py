"""Pytest configuration and fixtures shared across all test modules.

Environment defaults are set before any application import so the settings
object never picks up a developer's .env file or real provider credentials.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["TESTING"] = "true"
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("LLM_PROVIDER", None)
os.environ.pop("LLM_API_KEY", None)

from typing import Any, Callable

import pytest
from fastapi import FastAPI
from starlette.requests import Request

from ladybug_api.adapters.image.http_client import ImageProviderClient
from ladybug_api.adapters.llm.base import AbstractLLMClient
from ladybug_api.adapters.translation.http_client import HttpTranslationClient
from ladybug_api.core.app_factory import create_app
from ladybug_api.core.config import AppSettings, Settings, UpstreamSettings
from ladybug_api.services.ai_service import AIService


class FakeClock:
    """Deterministic clock used to test expiration logic."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class FakeLLM(AbstractLLMClient):
    """LLM double recording prompts and replying with canned text or an error."""

    def __init__(self, reply: str = "Hello from the model", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []
        self.closed = False

    async def generate_text(self, prompt: str, *, system: str | None = None, **kwargs: Any) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self) -> None:
        self.closed = True


def build_request(
    path: str = "/",
    query_string: bytes = b"",
    *,
    client: tuple[str, int] | None = ("203.0.113.7", 50000),
    headers: dict[str, str] | None = None,
) -> Request:
    """Build a bare Starlette request from an ASGI scope."""
    scope = {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "root_path": "",
        "query_string": query_string,
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_app() -> Callable[..., FastAPI]:
    """Factory building an isolated app; keyword arguments override AppSettings fields."""

    def _make(
        *,
        llm: AbstractLLMClient | None = None,
        translator: HttpTranslationClient | None = None,
        images: ImageProviderClient | None = None,
        upstream: UpstreamSettings | None = None,
        **app_overrides: Any,
    ) -> FastAPI:
        app_settings = AppSettings(**{"sweep_interval_seconds": 0, **app_overrides})
        cfg = Settings(app=app_settings, upstream=upstream or UpstreamSettings())
        return create_app(
            cfg,
            ai_service=AIService(llm=llm, translator=translator, images=images),
        )

    return _make

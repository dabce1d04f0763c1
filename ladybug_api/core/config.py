"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None

# Text-to-image providers in preference order
DEFAULT_IMAGE_PROVIDERS: dict[str, str] = {
    "Pollinations AI": "https://image.pollinations.ai/prompt/{prompt}?width=1024&height=1024&nologo=true&seed={seed}",
    "ArtDroid": "https://api.artdroid.tech/ai-imagegen?prompt={prompt}",
    "AlexFlipnote": "https://api.alexflipnote.dev/ai-image?prompt={prompt}",
    "Unsplash": "https://source.unsplash.com/1600x900/?{prompt}",
}


# Nested BaseSettings don't inherit env_file, so populate os.environ up front
if _env_file and os.getenv("TESTING") != "true":
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_app_settings() -> "AppSettings":
    """Build app settings from environment.

    Pydantic Settings (v2) populates values from environment variables;
    static type checkers still treat fields as constructor arguments.
    """

    return AppSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


def _build_llm_settings() -> "LLMSettings":
    return LLMSettings()  # type: ignore[call-arg]


def _build_upstream_settings() -> "UpstreamSettings":
    return UpstreamSettings()  # type: ignore[call-arg]


class AppSettings(BaseSettings):
    """Application-wide configuration, including the limiter and cache tunables."""

    name: str = Field("Ladybug API", description="Service display name")
    version: str = Field("2.2.0", description="Service version reported by /api/info")
    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client sliding window rate limiting",
    )
    rate_limit_max: int = Field(
        100,
        description="Maximum number of admitted requests per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: float = Field(
        15 * 60,
        description="Sliding window length in seconds",
        gt=0,
    )
    rate_limit_max_clients: int | None = Field(
        10_000,
        description="Maximum number of tracked clients (None for unlimited)",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )
    rate_limit_exempt_paths: list[str] = Field(
        default_factory=lambda: ["/health"],
        description="Paths that bypass the rate limiter",
    )

    cache_enabled: bool = Field(
        True,
        description="Enable the response cache for cacheable routes",
    )
    cache_ttl_seconds: float = Field(
        5 * 60,
        description="Freshness window of cached responses in seconds",
        gt=0,
    )
    cache_max_entries: int | None = Field(
        4096,
        description="Maximum number of cached responses (None for unlimited)",
        ge=1,
    )

    sweep_interval_seconds: float = Field(
        60.0,
        description="Interval of the background sweep of stale limiter/cache entries (0 disables)",
        ge=0,
    )

    client_id_strategy: str = Field(
        "direct",
        description="How to identify clients: 'direct' (socket peer) or 'trusted_proxy'",
    )
    trusted_proxies: list[str] = Field(
        default_factory=list,
        description="Proxy addresses/networks whose X-Forwarded-For header is honoured",
    )
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="CORS allowed origins",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: 'json' or 'plain'")
    output: str = Field("stdout", description="Log output: 'stdout' or 'file'")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate the log file after this many bytes (0 disables rotation)",
    )
    backup_count: int = Field(5, description="Number of rotated files to keep")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header carrying the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class LLMSettings(BaseSettings):
    """LLM provider configuration.

    All fields are optional: without a provider the AI endpoints answer with
    their fallback text.
    """

    provider: str | None = Field(
        None,
        description="LLM provider name (e.g., openai)",
    )
    model: str = Field(
        "gpt-4o-mini",
        description="Model name",
    )
    api_key: str | None = Field(
        None,
        description="API key for cloud providers",
    )
    base_url: str | None = Field(
        None,
        description="Custom API endpoint (OpenAI-compatible servers)",
    )
    timeout_seconds: float = Field(
        15.0,
        description="Request timeout in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        case_sensitive=False,
    )


class UpstreamSettings(BaseSettings):
    """Third-party HTTP services proxied by the API."""

    translate_url: str = Field(
        "https://api.popcat.xyz/translate",
        description="Translation endpoint (GET text, to, from -> {'translated': ...})",
    )
    timeout_seconds: float = Field(
        10.0,
        description="Timeout applied to proxied calls",
    )
    image_providers: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_IMAGE_PROVIDERS),
        description="Text-to-image providers in preference order; URL templates take {prompt} and {seed}",
    )
    image_timeout_seconds: float = Field(
        5.0,
        description="Timeout of each provider availability check",
    )
    screenshot_url: str = Field(
        "https://shot.screenshotapi.net/screenshot",
        description="Screenshot service used for Twitter profile screenshots",
    )
    screenshot_api_token: str | None = Field(
        None,
        description="API token of the screenshot service (omitted from URLs when unset)",
    )

    model_config = SettingsConfigDict(
        env_prefix="UPSTREAM_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Environments:
    - development: Local development
    - testing: Automated tests (uses .env.testing)
    - staging: Pre-production (uses .env.staging)
    - production: Production deployment (uses .env.production)
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)
    llm: LLMSettings = Field(default_factory=_build_llm_settings)
    upstream: UpstreamSettings = Field(default_factory=_build_upstream_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()

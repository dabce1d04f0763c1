"""OpenAPI metadata and customization utilities.

Enriches the generated schema with tags metadata. Operations served through
the response cache carry an ``x-cached`` extension, set by ``CachedRoute``.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {"name": "AI", "description": "LLM and translation proxies with fallbacks, plus text analysis."},
    {"name": "Tools", "description": "Hashing, Morse code, Roman numerals, base64 and JSON formatting."},
    {"name": "Business", "description": "Validators, color palettes and demo currency conversion."},
    {"name": "Social", "description": "Demo social media helpers."},
    {"name": "Generators", "description": "Random values and live upstream lookups; never cached."},
    {"name": "Meta", "description": "Service information and runtime status."},
    {"name": "Health", "description": "Liveness check, exempt from rate limiting."},
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags metadata."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]

"""Shared response model plumbing.

Public payloads use camelCase keys; models are declared in snake_case and
serialized by alias (FastAPI's default for ``response_model``).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(ApiModel):
    """Envelope fields present on every successful payload."""

    success: Literal[True] = True
    timestamp: str = Field(
        default_factory=utc_now_iso,
        description="ISO-8601 UTC instant the payload was produced (cached payloads keep it).",
    )


ResponseSource = Literal["AI", "Fallback"]

"""Pydantic schemas for text/number tool and developer endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from ladybug_api.schemas.common import ApiModel, ApiResponse


class HashResponse(ApiResponse):
    text: str
    algorithm: str
    hash: str = Field(..., description="Hex digest of the UTF-8 encoded text.")


class MorseResponse(ApiResponse):
    action: Literal["encode", "decode"]
    input: str
    output: str


class RomanResponse(ApiResponse):
    number: int = Field(..., ge=1, le=3999)
    roman: str


class SizeInfo(ApiModel):
    input: int
    output: int


class Base64Response(ApiResponse):
    action: Literal["encode", "decode"]
    input: str
    output: str
    size: SizeInfo


class JsonSizeInfo(ApiModel):
    original: int
    formatted: int


class JsonFormatResponse(ApiResponse):
    original: str
    formatted: str
    is_valid: bool = Field(..., description="False when the input was not valid JSON (returned unchanged).")
    indent: int
    size: JsonSizeInfo


class UUIDResponse(ApiResponse):
    version: int = 4
    count: int
    uuids: list[str]

"""Pydantic schemas for the social media helper endpoints."""

from __future__ import annotations

from ladybug_api.schemas.common import ApiResponse


class TwitterScreenshotResponse(ApiResponse):
    username: str
    screenshot_url: str
    theme: str
    twitter_url: str
    note: str


class InstagramDownloadResponse(ApiResponse):
    url: str
    download_url: str
    media_type: str
    note: str

"""Pydantic schemas for AI-flavoured endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from ladybug_api.schemas.common import ApiModel, ApiResponse, ResponseSource


class ChatResponse(ApiResponse):
    query: str
    response: str
    model: str
    source: ResponseSource


class WriterMetadata(ApiModel):
    length: str
    words: int
    source: ResponseSource


class WriterResponse(ApiResponse):
    topic: str
    type: str
    story: str
    metadata: WriterMetadata


class SummaryResponse(ApiResponse):
    original_length: int
    summary: str
    length: str
    source: ResponseSource


class TranslationResponse(ApiResponse):
    original: str
    translated: str
    source_language: str = Field(..., alias="from")
    to: str
    source: ResponseSource


class SentimentResponse(ApiResponse):
    text: str
    sentiment: Literal["positive", "negative", "neutral"]
    score: int = Field(..., ge=-100, le=100)
    confidence: int = Field(..., ge=0, le=100)


class GrammarResponse(ApiResponse):
    original: str
    corrected: str
    issues: list[str]
    score: int = Field(..., ge=0, le=100)


class KeywordItem(ApiModel):
    keyword: str
    frequency: int
    relevance: int


class KeywordResponse(ApiResponse):
    text: str
    keywords: list[KeywordItem]
    total_words: int
    unique_keywords: int


class ImageMetadata(ApiModel):
    size: str
    style: str
    api: str
    source: ResponseSource


class ImageResponse(ApiResponse):
    prompt: str
    image_url: str
    download: str
    metadata: ImageMetadata

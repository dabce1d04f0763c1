from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from ladybug_api.api.cached_route import CachedRoute
from ladybug_api.api.dependencies import get_ai_service
from ladybug_api.schemas.ai import (
    ChatResponse,
    GrammarResponse,
    KeywordResponse,
    SentimentResponse,
    SummaryResponse,
    TranslationResponse,
    WriterResponse,
)
from ladybug_api.services import text_tools
from ladybug_api.services.ai_service import AIService

router = APIRouter(prefix="/ai", tags=["AI"], route_class=CachedRoute)

AIServiceDep = Annotated[AIService, Depends(get_ai_service)]


def _skip_cache_on_fallback(response: Response, source: str) -> None:
    # Fallback text is a degraded answer; let the next request retry upstream.
    if source == "Fallback":
        response.headers["Cache-Control"] = "no-store"


@router.get("/chatgpt", response_model=ChatResponse)
async def chatgpt(
    response: Response,
    service: AIServiceDep,
    text: str | None = Query(None, description="Message for the assistant (max 1000 characters)"),
) -> ChatResponse:
    """Chat with the configured LLM, falling back to a placeholder reply."""
    result = await service.chat(text)
    _skip_cache_on_fallback(response, result.source)
    return result


@router.get("/writer", response_model=WriterResponse)
async def writer(
    response: Response,
    service: AIServiceDep,
    topic: str | None = Query(None, description="Topic to write about (max 100 characters)"),
    type: str = Query("story", description="story, article, poem, script, blog, essay, speech or lyrics"),
    length: str = Query("medium", description="Desired length hint"),
) -> WriterResponse:
    result = await service.write(topic, type, length)
    _skip_cache_on_fallback(response, result.metadata.source)
    return result


@router.get("/summarize", response_model=SummaryResponse)
async def summarize(
    response: Response,
    service: AIServiceDep,
    text: str | None = Query(None, description="Text to summarize (min 50 characters)"),
    length: str = Query("medium", description="short, medium or long"),
) -> SummaryResponse:
    result = await service.summarize(text, length)
    _skip_cache_on_fallback(response, result.source)
    return result


@router.get("/translate", response_model=TranslationResponse)
async def translate(
    response: Response,
    service: AIServiceDep,
    text: str | None = Query(None, description="Text to translate (max 500 characters)"),
    to: str = Query("en", description="Target language code"),
    source_language: str = Query("auto", alias="from", description="Source language code"),
) -> TranslationResponse:
    """Proxy a translation request; the text is echoed with a marker when the service is down."""
    result = await service.translate(text, to, source_language)
    _skip_cache_on_fallback(response, result.source)
    return result


@router.get("/sentiment", response_model=SentimentResponse)
async def sentiment(text: str | None = Query(None, description="Text to analyze")) -> SentimentResponse:
    return text_tools.analyze_sentiment(text)


@router.get("/grammar", response_model=GrammarResponse)
async def grammar(text: str | None = Query(None, description="Text to check")) -> GrammarResponse:
    return text_tools.check_grammar(text)


@router.get("/keyword", response_model=KeywordResponse)
async def keyword(
    text: str | None = Query(None, description="Text to extract keywords from"),
    max: int = Query(10, ge=1, description="Maximum keywords to return (capped at 20)"),
) -> KeywordResponse:
    return text_tools.extract_keywords(text, max)

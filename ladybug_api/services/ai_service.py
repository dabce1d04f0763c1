"""AI endpoint service: LLM, translation and image proxies with fallbacks.

Upstream failures never surface to the client. When the provider is not
configured or a call fails, the service answers with canned text and marks the
payload ``source="Fallback"``; the routes then keep that payload out of the
response cache.
"""

from __future__ import annotations

import logging

from ladybug_api.adapters.image.http_client import ImageProviderClient, build_image_urls
from ladybug_api.adapters.llm.base import AbstractLLMClient
from ladybug_api.adapters.translation.http_client import HttpTranslationClient
from ladybug_api.core.config import DEFAULT_IMAGE_PROVIDERS
from ladybug_api.core.errors import UpstreamAppError
from ladybug_api.schemas.ai import (
    ChatResponse,
    ImageMetadata,
    ImageResponse,
    SummaryResponse,
    TranslationResponse,
    WriterMetadata,
    WriterResponse,
)
from ladybug_api.services.inputs import require_choice, require_text
from ladybug_api.utils.text_normalizer import normalize_whitespace

logger = logging.getLogger(__name__)

CHAT_MODEL_NAME = "ChatGPT Premium"
CHAT_SYSTEM_PROMPT = "You are Ladybug, a concise and friendly assistant."

MAX_CHAT_CHARS = 1000
MAX_TOPIC_CHARS = 100
MAX_TRANSLATE_CHARS = 500
MIN_SUMMARY_CHARS = 50
MAX_IMAGE_PROMPT_CHARS = 200

WRITER_PROMPTS: dict[str, str] = {
    "story": "Write a creative and engaging story about: {topic}",
    "article": "Write an informative article about: {topic}",
    "poem": "Write a beautiful poem about: {topic}",
    "script": "Write a short script about: {topic}",
    "blog": "Write a blog post about: {topic}",
    "essay": "Write an essay about: {topic}",
    "speech": "Write a speech about: {topic}",
    "lyrics": "Write song lyrics about: {topic}",
}

WRITER_FALLBACKS: dict[str, str] = {
    "story": (
        "Once upon a time, in a world shaped by {topic}, a small discovery set off a "
        "chain of events nobody could have predicted."
    ),
    "article": (
        "{topic}: An Overview\n\n{topic} has become a subject worth understanding. "
        "This article looks at where it stands today and where it may be heading."
    ),
    "poem": "Ode to {topic}\n\nIn quiet hours and morning light,\n{topic} lingers, clear and bright.",
    "blog": "My Journey with {topic}\n\nIt started as curiosity about {topic} and turned into a habit I keep coming back to.",
    "essay": "The Significance of {topic}\n\nFew subjects reward careful attention as much as {topic}.",
    "speech": "Friends and colleagues,\n\nToday I want to talk about {topic}, and why it matters to all of us.",
    "lyrics": "{topic}\n\nVerse 1:\nWhen I think about {topic}\nThe whole room starts to glow",
}

SUMMARY_PROMPTS: dict[str, str] = {
    "short": "Summarize this text in 1-2 sentences:",
    "medium": "Summarize this text in a brief paragraph:",
    "long": "Provide a detailed summary of this text:",
}


def build_writer_prompt(topic: str, content_type: str) -> str:
    template = WRITER_PROMPTS.get(content_type, WRITER_PROMPTS["story"])
    return template.format(topic=topic)


def fallback_content(topic: str, content_type: str) -> str:
    template = WRITER_FALLBACKS.get(content_type, WRITER_FALLBACKS["story"])
    return template.format(topic=topic)


class AIService:
    """Orchestrates LLM, translation and image provider calls for the /ai endpoints."""

    def __init__(
        self,
        llm: AbstractLLMClient | None,
        translator: HttpTranslationClient | None = None,
        images: ImageProviderClient | None = None,
    ) -> None:
        self.llm = llm
        self.translator = translator
        self.images = images

    async def _ask(self, prompt: str, *, operation: str, **kwargs) -> str | None:
        """Return the LLM reply, or None when the provider is unavailable or fails."""
        if self.llm is None:
            logger.info("upstream.fallback", extra={"operation": operation, "reason": "llm_not_configured"})
            return None
        try:
            return await self.llm.generate_text(prompt, system=CHAT_SYSTEM_PROMPT, **kwargs)
        except UpstreamAppError as exc:
            logger.warning(
                "upstream.fallback",
                extra={"operation": operation, "reason": exc.code, "error_message": exc.message},
            )
            return None

    async def chat(self, text: str | None) -> ChatResponse:
        query = require_text(text, "text", max_length=MAX_CHAT_CHARS)
        reply = await self._ask(query, operation="chat")
        if reply is None:
            return ChatResponse(
                query=query,
                response=(
                    f'I understand you\'re asking about: "{query}". The AI service is temporarily '
                    "unavailable, so this is a placeholder answer. Try again later for a real response."
                ),
                model=CHAT_MODEL_NAME,
                source="Fallback",
            )
        return ChatResponse(query=query, response=reply, model=CHAT_MODEL_NAME, source="AI")

    async def write(self, topic: str | None, content_type: str = "story", length: str = "medium") -> WriterResponse:
        topic = require_text(topic, "topic", max_length=MAX_TOPIC_CHARS)
        content_type = content_type.strip().lower()
        content = await self._ask(build_writer_prompt(topic, content_type), operation="write")
        source = "AI"
        if content is None:
            content = fallback_content(topic, content_type)
            source = "Fallback"

        return WriterResponse(
            topic=topic,
            type=content_type,
            story=content,
            metadata=WriterMetadata(length=length, words=len(content.split()), source=source),
        )

    async def summarize(self, text: str | None, length: str = "medium") -> SummaryResponse:
        text = normalize_whitespace(require_text(text, "text", min_length=MIN_SUMMARY_CHARS, max_length=20000))
        length = require_choice(length, "length", tuple(SUMMARY_PROMPTS))
        summary = await self._ask(f"{SUMMARY_PROMPTS[length]} {text}", operation="summarize")
        source = "AI"
        if summary is None:
            summary = (
                f"Summary ({length}): This text discusses {text[:50]}... The original content spans "
                f"{len(text)} characters. Try again later for an AI-generated summary."
            )
            source = "Fallback"

        return SummaryResponse(original_length=len(text), summary=summary, length=length, source=source)

    async def translate(self, text: str | None, to: str = "en", source_language: str = "auto") -> TranslationResponse:
        text = require_text(text, "text", max_length=MAX_TRANSLATE_CHARS)
        translated: str | None = None

        if self.translator is not None:
            try:
                translated = await self.translator.translate(text, to=to, source=source_language)
            except UpstreamAppError as exc:
                logger.warning(
                    "upstream.fallback",
                    extra={"operation": "translate", "reason": exc.code, "error_message": exc.message},
                )

        if translated is None:
            return TranslationResponse(
                original=text,
                translated=f"[Translated to {to}]: {text}",
                source_language=source_language,
                to=to,
                source="Fallback",
            )
        return TranslationResponse(
            original=text,
            translated=translated,
            source_language=source_language,
            to=to,
            source="AI",
        )

    async def text_to_image(
        self,
        prompt: str | None,
        size: str = "1024x1024",
        style: str = "realistic",
        *,
        seed: float | None = None,
    ) -> ImageResponse:
        """Point at the first image provider that is up.

        Without a reachable provider the first candidate URL is returned anyway,
        marked ``source="Fallback"``.
        """
        prompt = require_text(prompt, "prompt", max_length=MAX_IMAGE_PROMPT_CHARS)

        if self.images is not None:
            candidates = self.images.candidates(prompt, seed)
            try:
                api, image_url = await self.images.first_available(candidates)
            except UpstreamAppError as exc:
                logger.warning(
                    "upstream.fallback",
                    extra={"operation": "text_to_image", "reason": exc.code, "error_message": exc.message},
                )
            else:
                return ImageResponse(
                    prompt=prompt,
                    image_url=image_url,
                    download=image_url,
                    metadata=ImageMetadata(size=size, style=style, api=api, source="AI"),
                )
        else:
            logger.info("upstream.fallback", extra={"operation": "text_to_image", "reason": "images_not_configured"})
            candidates = build_image_urls(DEFAULT_IMAGE_PROVIDERS, prompt, 0 if seed is None else seed)

        api, image_url = candidates[0]
        return ImageResponse(
            prompt=prompt,
            image_url=image_url,
            download=image_url,
            metadata=ImageMetadata(size=size, style=style, api=api, source="Fallback"),
        )

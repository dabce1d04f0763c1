"""OpenAI LLM client adapter."""

from typing import Any

from openai import AsyncOpenAI

from ladybug_api.adapters.llm.base import AbstractLLMClient
from ladybug_api.core.errors import UpstreamAppError


class OpenAIClient(AbstractLLMClient):
    """Client for OpenAI-compatible chat completions.

    Uses the official OpenAI Python SDK with async support.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout_seconds: float = 15.0,
    ) -> None:
        """Initialize OpenAI async client.

        Args:
            api_key: OpenAI API key for authentication.
            model: Model name (e.g., "gpt-4o-mini").
            base_url: Optional custom base URL for OpenAI-compatible servers.
            timeout_seconds: Timeout for requests in seconds.
        """
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self.model = model

    async def generate_text(
        self,
        prompt: str,
        *,
        system: str | None = None,
        **kwargs: Any,
    ) -> str:
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        request_params: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": kwargs.pop("temperature", 0.7),
        }

        allowed_params = {"max_tokens", "top_p", "frequency_penalty", "presence_penalty", "seed"}
        for param in allowed_params:
            if param in kwargs:
                request_params[param] = kwargs[param]

        try:
            response = await self.client.chat.completions.create(**request_params)
        except Exception as exc:
            raise UpstreamAppError(
                code="llm_request_failed",
                message=f"OpenAI API error: {exc}",
                details={"upstream": "openai"},
            ) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise UpstreamAppError(
                code="llm_empty_response",
                message="LLM returned an empty response",
                details={"upstream": "openai"},
            )

        return content.strip()

    async def aclose(self) -> None:
        await self.client.close()

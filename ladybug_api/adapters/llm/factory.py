"""Factory for creating LLM client instances."""

import logging

from ladybug_api.adapters.llm.base import AbstractLLMClient
from ladybug_api.adapters.llm.openai_client import OpenAIClient
from ladybug_api.core.config import LLMSettings, settings
from ladybug_api.core.errors import ValidationAppError

logger = logging.getLogger(__name__)


def create_llm_client(llm_settings: LLMSettings | None = None) -> AbstractLLMClient | None:
    """Instantiate the LLM client selected by configuration.

    Args:
        llm_settings: LLM settings; defaults to the global settings.

    Returns:
        Configured client, or None when no provider is configured (the AI
        endpoints then answer with their fallback text).

    Raises:
        ValidationAppError: If provider-specific requirements are not met.
    """
    cfg = llm_settings or settings.llm

    if not cfg.provider:
        logger.info("llm.disabled", extra={"reason": "provider_not_configured"})
        return None

    provider = cfg.provider.lower()

    if provider == "openai":
        if not cfg.api_key:
            raise ValidationAppError(
                code="llm_missing_api_key",
                message="OpenAI provider requires LLM_API_KEY environment variable",
            )
        return OpenAIClient(
            api_key=cfg.api_key,
            model=cfg.model,
            base_url=cfg.base_url,
            timeout_seconds=cfg.timeout_seconds,
        )

    raise ValidationAppError(
        code="llm_unknown_provider",
        message=f"Unknown LLM provider: '{provider}'. Supported providers: openai",
    )

"""LLM adapter layer - abstracts over chat completion providers."""

from ladybug_api.adapters.llm.base import AbstractLLMClient
from ladybug_api.adapters.llm.factory import create_llm_client
from ladybug_api.adapters.llm.openai_client import OpenAIClient

__all__ = [
    "AbstractLLMClient",
    "OpenAIClient",
    "create_llm_client",
]

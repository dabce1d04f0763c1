from abc import ABC, abstractmethod
from typing import Any


class AbstractLLMClient(ABC):
	"""Interface for LLM clients that produce free-form text replies."""

	@abstractmethod
	async def generate_text(
		self,
		prompt: str,
		*,
		system: str | None = None,
		**kwargs: Any,
	) -> str:
		"""Generate a text reply from the model.

		Args:
			prompt: User message to send to the model.
			system: Optional system instruction (persona, output constraints).
			**kwargs: Provider-specific options (e.g., temperature, max_tokens).

		Returns:
			str: The model's reply, stripped of surrounding whitespace.

		Raises:
			UpstreamAppError: If the provider call fails or returns no content.
		"""
		...

	async def aclose(self) -> None:
		"""Release network resources held by the client."""
		return None

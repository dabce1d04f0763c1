"""Text-to-image provider client.

Providers render an image straight from a GET URL, so "generating" an image
means building that URL. Availability is checked with a HEAD request, walking
the providers in preference order until one answers.
"""

from __future__ import annotations

import logging
import random
from typing import Mapping
from urllib.parse import quote

import httpx

from ladybug_api.core.errors import UpstreamAppError

logger = logging.getLogger(__name__)


def build_image_urls(providers: Mapping[str, str], prompt: str, seed: float) -> list[tuple[str, str]]:
    """Fill each provider URL template with the encoded prompt and the seed.

    Returns:
        ``(provider name, image URL)`` pairs in preference order.
    """
    encoded = quote(prompt, safe="")
    return [(name, template.format(prompt=encoded, seed=seed)) for name, template in providers.items()]


class ImageProviderClient:
    """Picks the first text-to-image provider that answers a HEAD request."""

    def __init__(
        self,
        providers: Mapping[str, str],
        *,
        timeout_seconds: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not providers:
            raise ValueError("at least one image provider is required")
        self.providers = dict(providers)
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds, follow_redirects=True)

    def candidates(self, prompt: str, seed: float | None = None) -> list[tuple[str, str]]:
        return build_image_urls(self.providers, prompt, random.random() if seed is None else seed)

    async def first_available(self, candidates: list[tuple[str, str]]) -> tuple[str, str]:
        """Return the first ``(name, url)`` whose HEAD request succeeds.

        Raises:
            UpstreamAppError: If no provider answers.
        """
        for name, url in candidates:
            try:
                response = await self._client.head(url)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                logger.debug("image_provider.unavailable", extra={"provider": name, "error_type": type(exc).__name__})
                continue
            return name, url

        raise UpstreamAppError(
            code="image_providers_unavailable",
            message="No text-to-image provider answered",
            details={"upstream": ", ".join(name for name, _ in candidates)},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

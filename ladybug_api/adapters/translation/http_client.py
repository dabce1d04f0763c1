"""HTTP translation client.

Calls a GET endpoint taking ``text``, ``to`` and ``from`` query parameters and
answering ``{"translated": "..."}``.
"""

from __future__ import annotations

import httpx

from ladybug_api.core.errors import UpstreamAppError


class HttpTranslationClient:
    """Thin async wrapper around the configured translation endpoint."""

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            url: Translation endpoint URL.
            timeout_seconds: Timeout applied to each call.
            client: Optional pre-built httpx client (tests inject a MockTransport).
        """
        self.url = url
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def translate(self, text: str, *, to: str, source: str = "auto") -> str:
        """Translate ``text`` into language ``to``.

        Raises:
            UpstreamAppError: On transport errors, non-2xx status or an unusable body.
        """
        try:
            response = await self._client.get(
                self.url,
                params={"text": text, "to": to.lower(), "from": source.lower()},
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamAppError(
                code="translation_failed",
                message=f"Translation service error: {exc}",
                details={"upstream": self.url},
            ) from exc

        translated = body.get("translated") if isinstance(body, dict) else None
        if not isinstance(translated, str) or not translated.strip():
            raise UpstreamAppError(
                code="translation_empty",
                message="Translation service returned no text",
                details={"upstream": self.url},
            )
        return translated

    async def aclose(self) -> None:
        await self._client.aclose()

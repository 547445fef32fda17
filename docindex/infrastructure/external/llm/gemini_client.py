"""Gemini generateContent client (REST over httpx, no SDK).

Implements IInferenceClient. Each generate() call is exactly one HTTP
request; retrying is the categorizer's job. Failures are classified into
the domain's TransportError / EndpointError / MalformedResponseError so
the retry policy can tell them apart.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from docindex.domain.exceptions import (
    EndpointError,
    MalformedResponseError,
    TransportError,
)
from docindex.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def extract_generated_text(envelope: Any) -> str | None:
    """Return candidates[0].content.parts[0].text, or None if any step is missing."""
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text else None


class GeminiClient:
    """Async client for one model's generateContent endpoint.

    The API key travels as the `key` query parameter. It is never logged
    and never included in exception messages.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self.model = model
        self.endpoint = f"{base_url.rstrip('/')}/models/{model}:generateContent"
        self._http = (
            http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        )
        self._owns_http = http_client is None
        self._timeout = timeout

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def generate(self, payload: dict[str, Any]) -> str:
        """POST payload and return the model's generated text.

        Raises:
            TransportError: Request could not be sent or completed, or a success
                response body is not JSON.
            EndpointError: Endpoint answered with a non-2xx status.
            MalformedResponseError: Success envelope has no generated text.
        """
        try:
            response = await self._http.post(
                self.endpoint,
                params={"key": self._api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise TransportError(type(e).__name__) from e

        if not response.is_success:
            logger.error(
                "Inference endpoint %s returned status=%d",
                self.model,
                response.status_code,
            )
            raise EndpointError(response.status_code)

        try:
            envelope = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TransportError("response body is not JSON") from e

        text = extract_generated_text(envelope)
        if text is None:
            raise MalformedResponseError("response has no generated text")
        return text

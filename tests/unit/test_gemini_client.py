"""Tests for GeminiClient failure classification (httpx.MockTransport, no network)."""

import json

import httpx
import pytest

from docindex.domain.exceptions import (
    EndpointError,
    MalformedResponseError,
    TransportError,
)
from docindex.infrastructure.external.llm.gemini_client import (
    GeminiClient,
    extract_generated_text,
)

API_KEY = "test-secret-key"


def _envelope(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _client(handler) -> tuple[GeminiClient, httpx.AsyncClient]:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return (
        GeminiClient(API_KEY, "test-model", base_url="https://llm.test/v1beta", http_client=http),
        http,
    )


async def test_generate_posts_payload_and_returns_text() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_envelope('{"topic": "a"}'))

    client, http = _client(handler)
    async with http:
        text = await client.generate({"contents": []})

    assert text == '{"topic": "a"}'
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/test-model:generateContent"
    assert request.url.params["key"] == API_KEY
    assert json.loads(request.content) == {"contents": []}


async def test_connection_error_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client, http = _client(handler)
    async with http:
        with pytest.raises(TransportError) as exc_info:
            await client.generate({})
    assert API_KEY not in str(exc_info.value)


async def test_timeout_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    client, http = _client(handler)
    async with http:
        with pytest.raises(TransportError):
            await client.generate({})


@pytest.mark.parametrize("status", [400, 403, 429, 500, 503])
async def test_non_success_status_is_endpoint_error(status: int) -> None:
    client, http = _client(lambda request: httpx.Response(status, json={"error": {}}))
    async with http:
        with pytest.raises(EndpointError) as exc_info:
            await client.generate({})
    assert exc_info.value.status_code == status


async def test_non_json_envelope_is_transport_error() -> None:
    client, http = _client(lambda request: httpx.Response(200, content=b"<html>"))
    async with http:
        with pytest.raises(TransportError):
            await client.generate({})


@pytest.mark.parametrize(
    "envelope",
    [
        {},
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        _envelope(""),
    ],
    ids=["no-candidates", "empty-candidates", "no-parts", "empty-text"],
)
async def test_missing_text_is_malformed(envelope: dict) -> None:
    client, http = _client(lambda request: httpx.Response(200, json=envelope))
    async with http:
        with pytest.raises(MalformedResponseError):
            await client.generate({})


def test_extract_generated_text_tolerates_wrong_types() -> None:
    assert extract_generated_text(None) is None
    assert extract_generated_text({"candidates": "nope"}) is None
    assert extract_generated_text(_envelope("ok")) == "ok"


async def test_aclose_does_not_close_injected_client() -> None:
    client, http = _client(lambda request: httpx.Response(200, json=_envelope("x")))
    await client.aclose()
    assert not http.is_closed
    await http.aclose()

"""Tests for the x.gd link shortener client."""

import asyncio

import aiohttp
import pytest

from relaybot.constants import SHORTENER_API_URL
from relaybot.shortener import LinkShortener

LINK = "https://discord.com/channels/1/2/3"


class FakeResponse:
    def __init__(self, status: int, body: str | bytes):
        self.status = status
        self._body = body

    async def read(self):
        if isinstance(self._body, bytes):
            return self._body
        return self._body.encode("utf-8")

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeSession:
    """Replaces aiohttp.ClientSession; records each GET call."""

    def __init__(self, status: int = 200, body: str | bytes = "", error: Exception | None = None):
        self.status = status
        self.body = body
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status, self.body)


@pytest.mark.asyncio
async def test_shorten_success():
    session = FakeSession(body='{"status": 200, "shorturl": "https://x.gd/abc"}')
    shortener = LinkShortener(session, "secret-key")

    result = await shortener.shorten(LINK)

    assert result.value == "https://x.gd/abc"
    assert not result.degraded
    url, kwargs = session.calls[0]
    assert url == SHORTENER_API_URL
    assert kwargs["params"] == {"url": LINK, "key": "secret-key"}


@pytest.mark.asyncio
async def test_shorten_http_error_returns_original():
    session = FakeSession(status=503, body="unavailable")
    result = await LinkShortener(session, "k").shorten(LINK)

    assert result.value == LINK
    assert result.fallback_reason == "HTTP 503"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        "not json",
        '{"status": 200}',
        '["https://x.gd/abc"]',
        '{"shorturl": 12}',
        '{"shorturl": ""}',
    ],
)
async def test_shorten_malformed_body_returns_original(body):
    result = await LinkShortener(FakeSession(body=body), "k").shorten(LINK)

    assert result.value == LINK
    assert result.fallback_reason == "malformed response"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [aiohttp.ClientConnectionError("connection refused"), asyncio.TimeoutError()],
)
async def test_shorten_transport_error_returns_original(error):
    result = await LinkShortener(FakeSession(error=error), "k").shorten(LINK)

    assert result.value == LINK
    assert result.degraded


@pytest.mark.asyncio
async def test_shorten_non_utf8_body_returns_original():
    session = FakeSession(body=b'{"shorturl": "\xff\xfe"}')
    result = await LinkShortener(session, "k").shorten(LINK)

    assert result.value == LINK
    assert result.fallback_reason == "malformed response"

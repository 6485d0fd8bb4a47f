"""Unit tests for retriever.http.HttpFetcher error mapping."""

from __future__ import annotations

import httpx
import pytest

from retriever.http import HttpFetcher
from utils.exceptions import FetchError, FetchFailure


def _fetcher(handler) -> HttpFetcher:
    return HttpFetcher(timeout=5, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_json_decodes_body():
    fetcher = _fetcher(lambda request: httpx.Response(200, json={"docs": [{"id": "a"}]}))
    async with fetcher:
        body = await fetcher.get_json("http://hypatia.test/search/")
    assert body == {"docs": [{"id": "a"}]}


@pytest.mark.asyncio
async def test_get_text_returns_raw_body():
    fetcher = _fetcher(lambda request: httpx.Response(200, text="<video/>"))
    async with fetcher:
        assert await fetcher.get_text("http://hypatia.test/index.xml") == "<video/>"


@pytest.mark.asyncio
async def test_non_2xx_is_status_failure():
    fetcher = _fetcher(lambda request: httpx.Response(404, text="missing"))
    async with fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.get_json("http://hypatia.test/missing")
    assert info.value.cause == FetchFailure.STATUS
    assert info.value.status_code == 404
    assert info.value.url == "http://hypatia.test/missing"


@pytest.mark.asyncio
async def test_invalid_json_is_decode_failure():
    fetcher = _fetcher(lambda request: httpx.Response(200, text="not json"))
    async with fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.get_json("http://hypatia.test/search/")
    assert info.value.cause == FetchFailure.DECODE


@pytest.mark.asyncio
async def test_timeout_is_timeout_failure():
    def _handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    fetcher = _fetcher(_handler)
    async with fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.get_text("http://hypatia.test/slow")
    assert info.value.cause == FetchFailure.TIMEOUT


@pytest.mark.asyncio
async def test_connect_error_is_unreachable_failure():
    def _handler(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    fetcher = _fetcher(_handler)
    async with fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.get_json("http://hypatia.cnn.com/")
    assert info.value.cause == FetchFailure.UNREACHABLE
    assert "hypatia.cnn.com" in str(info.value)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "url, fragment",
    [
        ("ht://invalid-url", "Invalid protocol"),
        ("not-a-url-at-all", "Invalid URI"),
        ("", "required"),
        (None, "required"),
    ],
)
async def test_malformed_urls_are_protocol_failures(url, fragment):
    calls = []

    def _handler(request):
        calls.append(request)
        return httpx.Response(200, text="")

    fetcher = _fetcher(_handler)
    async with fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.get_text(url)
    assert info.value.cause == FetchFailure.PROTOCOL
    assert fragment in str(info.value)
    assert calls == []


def test_timeout_has_one_second_floor():
    fetcher = HttpFetcher(timeout=0)
    assert fetcher.timeout == 1.0
    fetcher.timeout = 20
    assert fetcher.timeout == 20.0


@pytest.mark.asyncio
async def test_per_call_timeout_follows_current_value():
    seen = []

    def _handler(request):
        seen.append(request.extensions["timeout"]["read"])
        return httpx.Response(200, json={})

    fetcher = _fetcher(_handler)
    async with fetcher:
        await fetcher.get_json("http://hypatia.test/a")
        fetcher.timeout = 12
        await fetcher.get_json("http://hypatia.test/b")
    assert seen == [5.0, 12.0]


@pytest.mark.asyncio
async def test_closed_fetcher_refuses_requests_without_reopening():
    calls = []

    def _handler(request):
        calls.append(str(request.url))
        return httpx.Response(200, json={})

    fetcher = _fetcher(_handler)
    await fetcher.get_json("http://hypatia.test/a")
    await fetcher.close()

    with pytest.raises(FetchError) as info:
        await fetcher.get_json("http://hypatia.test/b")

    assert info.value.cause == FetchFailure.PROTOCOL
    assert fetcher.closed
    assert fetcher._client is None
    assert calls == ["http://hypatia.test/a"]

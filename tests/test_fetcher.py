"""Tests for the HTML fetcher.

``respx`` patches ``httpx`` at the transport layer so no real network calls
are made.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from src.modules.scraper.exceptions import FetchError
from src.modules.scraper.fetcher import HtmlFetcher

_URL = "https://blog.example.com/blogs/"


class TestHtmlFetcher:
    async def test_returns_body_text(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(200, text="<html>ok</html>"))
            async with HtmlFetcher() as fetcher:
                html = await fetcher.fetch(_URL)

        assert html == "<html>ok</html>"

    async def test_sends_browser_headers(self) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(return_value=httpx.Response(200, text=""))
            async with HtmlFetcher() as fetcher:
                await fetcher.fetch(_URL)

        request = route.calls.last.request
        assert request.headers["User-Agent"].startswith("Mozilla/5.0")
        assert "text/html" in request.headers["Accept"]
        assert request.headers["Accept-Language"].startswith("en-US")

    async def test_http_error_raises_fetch_error(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(404, text="Not Found"))
            async with HtmlFetcher() as fetcher:
                with pytest.raises(FetchError) as exc_info:
                    await fetcher.fetch(_URL)

        assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)
        assert exc_info.value.url == _URL

    async def test_network_error_raises_fetch_error(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(side_effect=httpx.ConnectError("connection refused"))
            async with HtmlFetcher() as fetcher:
                with pytest.raises(FetchError):
                    await fetcher.fetch(_URL)

    async def test_timeout_raises_fetch_error(self) -> None:
        with respx.mock:
            respx.get(_URL).mock(side_effect=httpx.ReadTimeout("too slow"))
            async with HtmlFetcher(timeout=0.1) as fetcher:
                with pytest.raises(FetchError):
                    await fetcher.fetch(_URL)

    async def test_single_attempt(self) -> None:
        with respx.mock:
            route = respx.get(_URL).mock(return_value=httpx.Response(503))
            async with HtmlFetcher() as fetcher:
                with pytest.raises(FetchError):
                    await fetcher.fetch(_URL)

        assert route.call_count == 1

    async def test_external_client_left_open(self) -> None:
        client = httpx.AsyncClient()
        async with HtmlFetcher(client=client):
            pass

        assert not client.is_closed
        await client.aclose()

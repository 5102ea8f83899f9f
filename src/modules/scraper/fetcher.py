import logging

import httpx

from src.modules.scraper.exceptions import FetchError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30.0

_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


class HtmlFetcher:
    """Single-attempt HTML fetcher with browser-like headers.

    Owns its ``httpx.AsyncClient`` unless one is passed in; use it as an
    async context manager so the owned client is closed.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self._client = client or httpx.AsyncClient()
        self._owns_client = client is None
        self._timeout = timeout

    async def __aenter__(self) -> "HtmlFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch(self, url: str) -> str:
        try:
            response = await self._client.get(
                url,
                headers=_HEADERS,
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except (httpx.HTTPStatusError, httpx.RequestError) as exc:
            logger.debug("Fetch of %s failed: %s", url, exc)
            raise FetchError(url, exc) from exc
        logger.debug("Fetched %s (%d bytes)", url, len(response.content))
        return response.text

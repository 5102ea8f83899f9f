class ScraperError(Exception):
    """Base class for scraper failures."""


class FetchError(ScraperError):
    """Network, HTTP status or timeout failure while fetching a page."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to fetch {url}: {cause}")


class ExtractionError(ScraperError):
    """Unexpected failure while parsing a fetched article page."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to extract {url}: {cause}")

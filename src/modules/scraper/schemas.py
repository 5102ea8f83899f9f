from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict


class ScraperConfig(BaseModel):
    """Explicit run parameters handed to the scraper."""

    model_config = ConfigDict(frozen=True)

    blog_url: str
    batch_size: int = 5
    request_delay: float = 1.0
    request_timeout: float = 30.0


class ArticleCandidate(BaseModel):
    """An article link found on a listing page, not yet fetched."""

    url: str
    title: str = ""


class ScrapedArticle(BaseModel):
    """Complete article after scraping the individual article page."""

    model_config = ConfigDict(frozen=True)

    title: str
    content: str
    url: str
    published_date: datetime | None = None
    scraped_at: datetime


class ArticleOutcome(BaseModel):
    """Result of scraping one candidate: either an article or a failure reason."""

    url: str
    status: Literal["scraped", "failed"]
    article: ScrapedArticle | None = None
    reason: str | None = None

    @classmethod
    def scraped(cls, article: ScrapedArticle) -> "ArticleOutcome":
        return cls(url=article.url, status="scraped", article=article)

    @classmethod
    def failed(cls, url: str, reason: str) -> "ArticleOutcome":
        return cls(url=url, status="failed", reason=reason)

    @property
    def ok(self) -> bool:
        return self.status == "scraped"


class ScrapeResult(BaseModel):
    """Aggregated result of a full scrape run."""

    articles: list[ScrapedArticle]
    selected: int
    failed: int

    @property
    def total(self) -> int:
        return len(self.articles)

import logging

from src.modules.scraper.article import parse_article
from src.modules.scraper.exceptions import ExtractionError, FetchError
from src.modules.scraper.fetcher import HtmlFetcher
from src.modules.scraper.links import extract_links
from src.modules.scraper.pagination import resolve_last_page
from src.modules.scraper.schemas import (
    ArticleCandidate,
    ArticleOutcome,
    ScrapedArticle,
    ScraperConfig,
    ScrapeResult,
)
from src.modules.scraper.throttle import FixedDelayRateLimiter, RateLimiter

logger = logging.getLogger(__name__)


class ScraperService:
    """Scrapes the oldest articles of a paginated blog."""

    def __init__(
        self,
        config: ScraperConfig,
        fetcher: HtmlFetcher,
        limiter: RateLimiter | None = None,
    ) -> None:
        self._config = config
        self._fetcher = fetcher
        self._limiter = limiter or FixedDelayRateLimiter(config.request_delay)

    # ── URL building ────────────────────────────────────────────

    def _build_listing_url(self, page: int) -> str:
        if page <= 1:
            return self._config.blog_url
        return f"{self._config.blog_url}page/{page}/"

    # ── Listing ─────────────────────────────────────────────────

    async def find_oldest_candidates(self, batch_size: int) -> list[ArticleCandidate]:
        """Return the trailing *batch_size* candidates of the last listing page.

        Listing pages are assumed newest-first, so the tail of the highest
        page holds the oldest posts of the blog.

        Raises:
            FetchError: If the root or last listing page cannot be fetched.
        """
        root_html = await self._fetcher.fetch(self._config.blog_url)
        last_page = resolve_last_page(root_html)

        last_page_url = self._build_listing_url(last_page)
        logger.info("Fetching last page: %s", last_page_url)
        last_page_html = await self._fetcher.fetch(last_page_url)

        candidates = extract_links(last_page_html, self._config.blog_url, last_page_url)
        logger.info("Found %d article links on last page", len(candidates))
        if batch_size <= 0:
            return []
        return candidates[-batch_size:]

    # ── Article ─────────────────────────────────────────────────

    async def extract_article(self, url: str) -> ArticleOutcome:
        try:
            html = await self._fetcher.fetch(url)
        except FetchError as exc:
            logger.error("Failed to scrape article %s: %s", url, exc.cause)
            return ArticleOutcome.failed(url, f"fetch failed: {exc.cause}")

        try:
            article = parse_article(html, url)
        except ExtractionError as exc:
            logger.exception("Failed to scrape article %s", url)
            return ArticleOutcome.failed(url, f"extraction failed: {exc.cause}")

        logger.info(
            "Scraped: [%s] %s (%d chars)",
            article.published_date, article.title, len(article.content),
        )
        return ArticleOutcome.scraped(article)

    # ── Orchestration ───────────────────────────────────────────

    async def collect_oldest_articles(self, batch_size: int | None = None) -> ScrapeResult:
        if batch_size is None:
            batch_size = self._config.batch_size
        logger.info("Starting scrape of %s", self._config.blog_url)

        candidates = await self.find_oldest_candidates(batch_size)
        if not candidates:
            logger.warning("No articles found on the last page")
            return ScrapeResult(articles=[], selected=0, failed=0)

        logger.info("Scraping %d oldest articles", len(candidates))
        articles: list[ScrapedArticle] = []
        failed = 0
        for index, candidate in enumerate(candidates):
            if index:
                await self._limiter.wait()
            logger.info("Scraping: %s", candidate.url)
            outcome = await self.extract_article(candidate.url)
            if outcome.ok:
                articles.append(outcome.article)
            else:
                failed += 1

        logger.info(
            "Scraping complete: %d articles scraped, %d failed",
            len(articles), failed,
        )
        return ScrapeResult(articles=articles, selected=len(candidates), failed=failed)

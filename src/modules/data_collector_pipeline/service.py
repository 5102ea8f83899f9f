import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from src.config.settings import Settings
from src.modules.data_collector_pipeline.composer import PipelineComposer
from src.modules.data_collector_pipeline.schemas import RunReport
from src.modules.persistence.contracts import ArticleStoreContract
from src.modules.persistence.service import article_repository
from src.modules.scraper.fetcher import HtmlFetcher
from src.modules.scraper.schemas import ScrapedArticle, ScraperConfig
from src.modules.scraper.service import ScraperService
from src.modules.scraper.throttle import RateLimiter

logger = logging.getLogger(__name__)


class DataCollectorPipelineService:
    def __init__(
        self,
        config: ScraperConfig,
        store: ArticleStoreContract,
        limiter: RateLimiter | None = None,
        cron_hour: int = 3,
        cron_minute: int = 0,
    ) -> None:
        self._config = config
        self._store = store
        self._limiter = limiter
        self._trigger = CronTrigger(hour=cron_hour, minute=cron_minute)
        self._composer = PipelineComposer()
        self._composer.add_step("scrape", self._scrape)
        self._composer.add_step("persist", self._persist)
        self._scheduler = AsyncIOScheduler()
        self._scraped_articles: list[ScrapedArticle] = []
        self._report = RunReport()

    @classmethod
    def from_settings(cls, settings: Settings) -> "DataCollectorPipelineService":
        return cls(
            settings.scraper_config(),
            article_repository,
            cron_hour=settings.scrape_cron_hour,
            cron_minute=settings.scrape_cron_minute,
        )

    async def _scrape(self) -> None:
        async with HtmlFetcher(timeout=self._config.request_timeout) as fetcher:
            scraper = ScraperService(self._config, fetcher, self._limiter)
            result = await scraper.collect_oldest_articles()
        self._scraped_articles = result.articles
        self._report.selected = result.selected
        self._report.scraped = result.total
        self._report.failed += result.failed
        logger.info("Scrape step collected %d articles", result.total)

    async def _persist(self) -> None:
        if not self._scraped_articles:
            logger.warning("No articles were scraped")
            return
        logger.info("Saving %d articles to database...", len(self._scraped_articles))
        saved = await self._store.save_new(self._scraped_articles)
        self._report.saved = saved.saved
        self._report.skipped = saved.skipped
        self._report.failed += saved.failed

    async def run_once(self) -> RunReport:
        """Scrape the oldest batch and store the new articles.

        Raises:
            FetchError: If a listing page cannot be fetched.
        """
        self._scraped_articles = []
        self._report = RunReport()
        await self._composer.run()
        report = self._report
        logger.info(
            "Scraping complete! Saved: %d, Skipped: %d, Failed: %d",
            report.saved, report.skipped, report.failed,
        )
        return report

    async def _scheduled_run(self) -> None:
        try:
            await self.run_once()
        except Exception:
            logger.exception("Scheduled scrape run failed")

    async def start(self) -> None:
        await self._scheduled_run()
        self._scheduler.add_job(
            self._scheduled_run,
            self._trigger,
            id="data_collector_pipeline",
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info("Scheduler started, pipeline trigger: %s", self._trigger)

    async def stop(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.config.database import async_session
from src.modules.persistence.contracts import ArticleStoreContract, SaveReport
from src.modules.persistence.exceptions import (
    DuplicateKeyError,
    PersistenceError,
    ValidationError,
)
from src.modules.persistence.models import TITLE_MAX_LENGTH, URL_MAX_LENGTH, Article
from src.modules.scraper.schemas import ScrapedArticle

logger = logging.getLogger(__name__)


def _validate(article: ScrapedArticle) -> None:
    if not article.url.strip():
        raise ValidationError("url", "Article URL is required")
    if len(article.url) > URL_MAX_LENGTH:
        raise ValidationError("url", f"URL cannot exceed {URL_MAX_LENGTH} characters")
    if not article.title.strip():
        raise ValidationError("title", "Title is required")
    if len(article.title) > TITLE_MAX_LENGTH:
        raise ValidationError("title", f"Title cannot exceed {TITLE_MAX_LENGTH} characters")
    if not article.content.strip():
        raise ValidationError("content", "Content is required")


class ArticleRepository(ArticleStoreContract):
    """Create-if-absent article store keyed by URL."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = async_session) -> None:
        self._session_factory = session_factory

    async def find_by_url(self, url: str) -> Article | None:
        async with self._session_factory() as session:
            result = await session.execute(select(Article).where(Article.url == url))
            return result.scalar_one_or_none()

    async def create(self, article: ScrapedArticle) -> Article:
        _validate(article)
        async with self._session_factory() as session:
            row = Article(
                url=article.url.strip(),
                title=article.title.strip(),
                content=article.content,
                published_date=article.published_date,
                scraped_at=article.scraped_at,
            )
            session.add(row)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateKeyError(article.url) from exc
            await session.refresh(row)
            return row

    async def save_new(self, articles: list[ScrapedArticle]) -> SaveReport:
        report = SaveReport()
        for article in articles:
            try:
                if await self.find_by_url(article.url) is not None:
                    logger.info("Skipping duplicate: %s", article.title)
                    report.skipped += 1
                    continue
                await self.create(article)
            except DuplicateKeyError:
                logger.warning("Stored concurrently, skipping: %s", article.url)
                report.skipped += 1
                continue
            except PersistenceError as exc:
                logger.error("Failed to save article %s: %s", article.url, exc)
                report.failed += 1
                continue
            except SQLAlchemyError:
                logger.exception("Database error while saving %s", article.url)
                report.failed += 1
                continue
            logger.info("Saved: %s", article.title)
            report.saved += 1

        logger.info(
            "Stored articles: saved=%d skipped=%d failed=%d",
            report.saved, report.skipped, report.failed,
        )
        return report


article_repository = ArticleRepository()

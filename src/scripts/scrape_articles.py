"""One-shot scrape: fetch the oldest blog articles and store the new ones.

Run with ``blog-scrape`` or ``python -m src.scripts.scrape_articles``.
Exits non-zero only when the listing pages cannot be processed.
"""

import asyncio
import logging
import sys

from src.config.database import engine, init_models
from src.config.logging_config import setup_logging
from src.config.settings import settings
from src.modules.data_collector_pipeline.service import DataCollectorPipelineService

logger = logging.getLogger(__name__)


async def run_scraper(service: DataCollectorPipelineService) -> int:
    try:
        logger.info("Initialising database...")
        await init_models()
        report = await service.run_once()
    except Exception:
        logger.exception("Scraper script failed")
        return 1
    finally:
        await engine.dispose()
        logger.info("Database connection closed")

    if report.selected == 0:
        logger.warning("No articles were scraped")
    return 0


def main() -> None:
    setup_logging(settings.log_level)
    service = DataCollectorPipelineService.from_settings(settings)
    sys.exit(asyncio.run(run_scraper(service)))


if __name__ == "__main__":
    main()

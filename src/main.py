import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.config.database import engine, init_models
from src.config.logging_config import setup_logging
from src.config.settings import settings
from src.modules.data_collector_pipeline.service import DataCollectorPipelineService

logger = logging.getLogger(__name__)

setup_logging(settings.log_level)
pipeline_service = DataCollectorPipelineService.from_settings(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("Database tables synced")
    if settings.scheduler_enabled:
        await pipeline_service.start()
    yield
    await pipeline_service.stop()
    await engine.dispose()


app = FastAPI(title="Blog Archive Scraper", lifespan=lifespan)


@app.get("/health")
async def health():
    return {"status": "ok"}

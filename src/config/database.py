from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from src.config.settings import settings

engine = create_async_engine(settings.database_url)
async_session = async_sessionmaker(engine, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def init_models(bind: AsyncEngine | None = None) -> None:
    """Create any missing tables on *bind* (the application engine by default)."""
    import src.modules.persistence.models  # noqa: F401  register ORM models

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

from abc import ABC, abstractmethod

from pydantic import BaseModel

from src.modules.scraper.schemas import ScrapedArticle


class SaveReport(BaseModel):
    saved: int = 0
    skipped: int = 0
    failed: int = 0


class ArticleStoreContract(ABC):
    @abstractmethod
    async def find_by_url(self, url: str) -> object | None: ...

    @abstractmethod
    async def create(self, article: ScrapedArticle) -> object: ...

    @abstractmethod
    async def save_new(self, articles: list[ScrapedArticle]) -> SaveReport: ...

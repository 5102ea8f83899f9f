from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.modules.scraper.schemas import ScraperConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    blog_url: str = "https://beyondchats.com/blogs/"
    database_url: str = "sqlite+aiosqlite:///./articles.db"
    log_level: str = "INFO"

    scrape_batch_size: int = 5
    scrape_request_delay: float = 1.0
    scrape_request_timeout: float = 30.0

    scheduler_enabled: bool = True
    scrape_cron_hour: int = 3
    scrape_cron_minute: int = 0

    @field_validator("blog_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else f"{value}/"

    def scraper_config(self) -> ScraperConfig:
        return ScraperConfig(
            blog_url=self.blog_url,
            batch_size=self.scrape_batch_size,
            request_delay=self.scrape_request_delay,
            request_timeout=self.scrape_request_timeout,
        )


settings = Settings()

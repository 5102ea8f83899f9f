"""Shared fixtures: HTML page builders, a recording rate limiter and an
in-memory article store.

The store uses ``sqlite+aiosqlite`` with a ``StaticPool`` so every session
of one test talks to the same in-memory database.
"""

from __future__ import annotations

from typing import AsyncIterator

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.config.database import init_models
from src.modules.persistence.service import ArticleRepository
from src.modules.scraper.schemas import ScraperConfig
from src.modules.scraper.throttle import RateLimiter

BLOG_URL = "https://blog.example.com/blogs/"

LONG_PARAGRAPH = (
    "Customer support teams rely on chatbots to answer routine questions, "
    "freeing people to focus on the conversations that need a human touch."
)


def article_url(slug: str) -> str:
    return f"{BLOG_URL}{slug}/"


def listing_html(slugs: list[str], last_page: int | None = None) -> str:
    """A listing page with one ``<article>`` card per slug, newest first."""
    cards = "\n".join(
        f'<article class="post"><h2 class="entry-title">'
        f'<a href="{article_url(slug)}">Post {slug.upper()} headline</a></h2>'
        f'<a class="read-more" href="{article_url(slug)}">Read more</a></article>'
        for slug in slugs
    )
    pagination = ""
    if last_page:
        links = "".join(
            f'<a class="page-numbers" href="{BLOG_URL}page/{n}/">{n}</a>'
            for n in range(2, last_page + 1)
        )
        pagination = f'<nav class="nav-links"><span class="page-numbers current">1</span>{links}</nav>'
    return f"<html><body><main>{cards}</main>{pagination}</body></html>"


def article_html(title: str, published: str = "2021-03-04T05:06:07Z") -> str:
    return (
        f"<html><head><title>{title} | Example Blog</title></head><body>"
        f"<article><h1>{title}</h1>"
        f'<time datetime="{published}">March 4</time>'
        f'<div class="entry-content"><p>{LONG_PARAGRAPH}</p>\n<p>{LONG_PARAGRAPH}</p></div>'
        f"</article></body></html>"
    )


class RecordingRateLimiter(RateLimiter):
    def __init__(self) -> None:
        self.calls = 0

    async def wait(self) -> None:
        self.calls += 1


@pytest.fixture()
def config() -> ScraperConfig:
    return ScraperConfig(blog_url=BLOG_URL, batch_size=5, request_delay=0.0, request_timeout=5.0)


@pytest.fixture()
def limiter() -> RecordingRateLimiter:
    return RecordingRateLimiter()


@pytest.fixture()
async def repository() -> AsyncIterator[ArticleRepository]:
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_models(engine)
    yield ArticleRepository(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()

"""Article page parsing.

Each field is read by an ordered list of independent strategies
``(soup) -> value | None``; the first strategy to return a value wins.
"""

import logging
import re
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from functools import partial

from bs4 import BeautifulSoup, Tag
from dateutil import parser as date_parser

from src.modules.scraper.exceptions import ExtractionError
from src.modules.scraper.schemas import ScrapedArticle

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 100
MIN_PARAGRAPH_LENGTH = 20
PARAGRAPH_SEPARATOR = "\n\n"
TITLE_SEPARATORS = ("|", "-")

CONTENT_SELECTORS = (
    "article .entry-content",
    ".entry-content",
    ".post-content",
    ".article-content",
    ".blog-content",
    "article p",
    ".content p",
    "main p",
)
FALLBACK_PARAGRAPH_SELECTOR = "article p, main p, .post p, .blog-post p"

DATE_CLASS_SELECTORS = (".post-date", ".entry-date", ".published", ".date")

Strategy = Callable[[BeautifulSoup], str | None]


def _text(element: Tag) -> str:
    return re.sub(r"\s+", " ", element.get_text()).strip()


def _first(strategies: Sequence[Strategy], soup: BeautifulSoup) -> str | None:
    for strategy in strategies:
        value = strategy(soup)
        if value:
            return value
    return None


# ── Title ───────────────────────────────────────────────────

def _selected_text(selector: str, soup: BeautifulSoup) -> str | None:
    element = soup.select_one(selector)
    return _text(element) if element else None


TITLE_STRATEGIES: tuple[Strategy, ...] = (
    partial(_selected_text, "h1"),
    partial(_selected_text, "title"),
    partial(_selected_text, ".entry-title"),
    partial(_selected_text, ".post-title"),
)


def clean_title(raw: str) -> str:
    """Drop a site-name suffix such as ``"Post | Site"`` or ``"Post - Site"``."""
    for separator in TITLE_SEPARATORS:
        raw = raw.split(separator, 1)[0]
    return raw.strip()


def extract_title(soup: BeautifulSoup) -> str:
    return clean_title(_first(TITLE_STRATEGIES, soup) or "")


# ── Content ─────────────────────────────────────────────────

def _block_text(element: Tag) -> str:
    """Text of a content container, one blank-line separated block per ``<p>``."""
    paragraphs = [text for text in (_text(p) for p in element.find_all("p")) if text]
    if not paragraphs:
        return _text(element)
    return PARAGRAPH_SEPARATOR.join(paragraphs)


def _joined_text(selector: str, soup: BeautifulSoup) -> str | None:
    elements = soup.select(selector)
    if not elements:
        return None
    content = PARAGRAPH_SEPARATOR.join(_block_text(el) for el in elements)
    return content if len(content) > MIN_CONTENT_LENGTH else None


CONTENT_STRATEGIES: tuple[Strategy, ...] = tuple(
    partial(_joined_text, selector) for selector in CONTENT_SELECTORS
)


def _long_paragraphs(soup: BeautifulSoup) -> str:
    paragraphs = (_text(p) for p in soup.select(FALLBACK_PARAGRAPH_SELECTOR))
    return PARAGRAPH_SEPARATOR.join(
        text for text in paragraphs if len(text) > MIN_PARAGRAPH_LENGTH
    )


def extract_content(soup: BeautifulSoup) -> str:
    content = _first(CONTENT_STRATEGIES, soup)
    if content is None:
        logger.debug("No content container matched, collecting paragraphs")
        content = _long_paragraphs(soup)
    return content


# ── Published date ──────────────────────────────────────────

def _time_datetime(soup: BeautifulSoup) -> str | None:
    element = soup.select_one("time[datetime]")
    return element.get("datetime") if element else None


def _date_class(selector: str, soup: BeautifulSoup) -> str | None:
    element = soup.select_one(selector)
    if element is None:
        return None
    return element.get("datetime") or element.get("content") or _text(element)


def _meta_published_time(soup: BeautifulSoup) -> str | None:
    element = soup.select_one('meta[property="article:published_time"]')
    return element.get("content") if element else None


DATE_STRATEGIES: tuple[Strategy, ...] = (
    _time_datetime,
    *(partial(_date_class, selector) for selector in DATE_CLASS_SELECTORS),
    _meta_published_time,
)


def parse_timestamp(raw: str) -> datetime | None:
    try:
        parsed = date_parser.parse(raw)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def extract_published_date(soup: BeautifulSoup) -> datetime | None:
    # Unlike title and content, a source only wins if its value parses.
    for strategy in DATE_STRATEGIES:
        raw = strategy(soup)
        if raw:
            parsed = parse_timestamp(raw.strip())
            if parsed is not None:
                return parsed
    return None


# ── Article ─────────────────────────────────────────────────

def parse_article(html: str, url: str) -> ScrapedArticle:
    """Build a :class:`ScrapedArticle` from an article page.

    Raises:
        ExtractionError: If parsing the markup fails unexpectedly.
    """
    try:
        soup = BeautifulSoup(html, "lxml")
        title = extract_title(soup)
        content = extract_content(soup)
        published_date = extract_published_date(soup)
    except Exception as exc:
        raise ExtractionError(url, exc) from exc

    if not title:
        logger.warning("No title found for %s", url)
    if len(content) < MIN_CONTENT_LENGTH:
        logger.warning(
            "Short content for %s (%d chars), extraction may be degraded",
            url, len(content),
        )

    return ScrapedArticle(
        title=title,
        content=content,
        url=url,
        published_date=published_date,
        scraped_at=datetime.now(UTC),
    )

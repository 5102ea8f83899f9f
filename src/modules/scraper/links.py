import logging
from collections.abc import Iterable
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from src.modules.scraper.schemas import ArticleCandidate

logger = logging.getLogger(__name__)

# Ordered by how reliably the anchor text is the post headline.
LINK_SELECTORS = (
    "article a",
    ".post a",
    ".blog-post a",
    "h2 a",
    "h3 a",
    ".entry-title a",
    ".post-title a",
    "a.read-more",
    '.card a[href*="/"]',
)

EXCLUDED_SEGMENTS = ("/page/", "/category/", "/tag/")
MIN_FALLBACK_TITLE_LENGTH = 10


def _host(url: str) -> str:
    host = urlparse(url).netloc.lower()
    return host[4:] if host.startswith("www.") else host


def _same_page(a: str, b: str) -> bool:
    return a.rstrip("/") == b.rstrip("/")


def _anchor_text(anchor: Tag) -> str:
    return " ".join(anchor.get_text().split())


class _LinkFilter:
    """Inclusion rule shared by the structured pass and the fallback scan."""

    def __init__(self, blog_url: str, page_url: str | None = None) -> None:
        self.blog_url = blog_url
        self.page_url = page_url or blog_url
        self.host = _host(blog_url)

    def resolve(self, href: str | None) -> str | None:
        if not href:
            return None
        href = href.strip()
        if "#" in href:
            return None
        url = urljoin(self.page_url, href)
        if urlparse(url).scheme not in ("http", "https"):
            return None
        if _host(url) != self.host:
            return None
        if any(segment in url for segment in EXCLUDED_SEGMENTS):
            return None
        if _same_page(url, self.blog_url):
            return None
        return url


def _collect(
    anchors: Iterable[Tag],
    link_filter: _LinkFilter,
    found: dict[str, ArticleCandidate],
    min_title_length: int = 0,
) -> None:
    for anchor in anchors:
        url = link_filter.resolve(anchor.get("href"))
        if url is None or url in found:
            continue
        title = _anchor_text(anchor)
        if min_title_length and len(title) <= min_title_length:
            continue
        found[url] = ArticleCandidate(url=url, title=title or anchor.get("title", "").strip())


def extract_links(
    html: str, blog_url: str, page_url: str | None = None
) -> list[ArticleCandidate]:
    """Return article candidates from a listing page in first-seen order.

    Relative hrefs resolve against *page_url*, the listing page the HTML came
    from (the blog root when omitted).

    Every selector in ``LINK_SELECTORS`` is applied; when none of them yields
    an article link, every anchor on the page is scanned and kept only if its
    text looks like a headline.
    """
    soup = BeautifulSoup(html, "lxml")
    link_filter = _LinkFilter(blog_url, page_url)
    found: dict[str, ArticleCandidate] = {}

    for selector in LINK_SELECTORS:
        before = len(found)
        _collect(soup.select(selector), link_filter, found)
        logger.debug("Selector %r added %d links", selector, len(found) - before)

    if not found:
        logger.debug("No structured matches, scanning all anchors")
        _collect(
            soup.find_all("a"),
            link_filter,
            found,
            min_title_length=MIN_FALLBACK_TITLE_LENGTH,
        )

    return list(found.values())

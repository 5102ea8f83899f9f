import logging
import re

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_PAGE_HREF = re.compile(r"/page/(\d+)")
_LEADING_INT = re.compile(r"\d+")

# Numbered controls; themes disagree on which of these wraps the last page.
PAGINATION_SELECTORS = (".pagination a", ".nav-links a", ".page-numbers")


def _max_from_hrefs(soup: BeautifulSoup) -> int:
    highest = 0
    for link in soup.select('a[href*="/page/"]'):
        match = _PAGE_HREF.search(link.get("href", ""))
        if match:
            highest = max(highest, int(match.group(1)))
    return highest


def _max_from_controls(soup: BeautifulSoup) -> int:
    highest = 0
    for element in soup.select(", ".join(PAGINATION_SELECTORS)):
        match = _LEADING_INT.match(element.get_text().strip())
        if match:
            highest = max(highest, int(match.group()))
    return highest


def resolve_last_page(html: str) -> int:
    """Return the highest listing page number linked from *html* (at least 1)."""
    soup = BeautifulSoup(html, "lxml")
    last_page = max(1, _max_from_hrefs(soup), _max_from_controls(soup))
    logger.info("Found last page number: %d", last_page)
    return last_page

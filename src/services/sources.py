"""Per-source scrapers for the supported listing sites.

Each scraper knows its site's URL scheme and listing markup. `scrape()`
always returns a ScrapeResult envelope and never raises.
"""

import time
from urllib.parse import quote

import logfire
from bs4 import Tag

from src.constants import (
    DRAMACOOL_NAME,
    DRAMACOOL_ORIGIN,
    KISSASIAN_NAME,
    KISSASIAN_ORIGIN,
)
from src.models.scraper_models import DramaRecord, ScrapeResult
from src.services.extractor import (
    absolutize_url,
    element_attr,
    element_text,
    extract_items,
)
from src.services.fetcher import HttpxPageFetcher, PageFetcher


def encode_query(query: str) -> str:
    """Percent-encode a query string the way browsers encode URI components."""
    return quote(query, safe="!~*'()")


class SourceScraper:
    """Base class for a scraper bound to one fixed site.

    Subclasses set `name`, `origin` and `item_selector`, and implement
    `build_url()` and `parse_item()`.
    """

    name: str = ""
    origin: str = ""
    item_selector: str = ""

    def __init__(self, fetcher: PageFetcher | None = None):
        """Initialize the scraper.

        Args:
            fetcher: Page fetcher implementation (defaults to HttpxPageFetcher)
        """
        self._fetcher = fetcher or HttpxPageFetcher.from_settings()

    def build_url(self, query: str, page: int) -> str:
        raise NotImplementedError

    def parse_item(self, element: Tag) -> DramaRecord | None:
        raise NotImplementedError

    async def scrape(self, query: str = "", page: int = 1) -> ScrapeResult:
        """Scrape search results (non-empty query) or the recent listing page.

        Args:
            query: Search query; empty means "recently added"
            page: Listing page number (search ignores it)

        Returns:
            ScrapeResult; on any failure success=False with the error message
        """
        start_time = time.time()
        url = None
        try:
            url = self.build_url(query, page)
            html = await self._fetcher.fetch(url)
            dramas = extract_items(html, self.item_selector, self.parse_item, self.name)
        except Exception as e:
            logfire.error(
                "Source scrape failed", source=self.name, url=url, error=str(e)
            )
            return ScrapeResult.failed(self.name, page, str(e) or type(e).__name__)

        logfire.info(
            "Source scrape completed",
            source=self.name,
            url=url,
            count=len(dramas),
            total_time_ms=(time.time() - start_time) * 1000,
        )
        return ScrapeResult.ok(self.name, page, dramas)


class DramaCoolScraper(SourceScraper):
    """Scraper for DramaCool episode listings."""

    name = DRAMACOOL_NAME
    origin = DRAMACOOL_ORIGIN
    item_selector = ".list-episode-item"

    def build_url(self, query: str, page: int) -> str:
        if query:
            return f"{self.origin}/search?keyword={encode_query(query)}"
        return f"{self.origin}/recently-added?page={page}"

    def parse_item(self, element: Tag) -> DramaRecord | None:
        title_el = element.select_one(".episode-title a")
        title = element_text(title_el)
        if not title:
            return None
        return DramaRecord(
            title=title,
            url=absolutize_url(element_attr(title_el, "href"), self.origin),
            image=element_attr(element.select_one("img"), "src"),
            episode=element_text(element.select_one(".episode-number")),
            source=self.name,
        )


class KissAsianScraper(SourceScraper):
    """Scraper for the KissAsian drama listing table."""

    name = KISSASIAN_NAME
    origin = KISSASIAN_ORIGIN
    item_selector = ".listing tr"

    def build_url(self, query: str, page: int) -> str:
        if query:
            return f"{self.origin}/Search/?s={encode_query(query)}"
        return f"{self.origin}/Drama/List?page={page}"

    def parse_item(self, element: Tag) -> DramaRecord | None:
        title_el = element.select_one("td:first-child a")
        title = element_text(title_el)
        if not title:
            return None
        return DramaRecord(
            title=title,
            url=absolutize_url(element_attr(title_el, "href"), self.origin),
            genre=element_text(element.select_one("td:nth-child(2)")),
            status=element_text(element.select_one("td:nth-child(3)")),
            source=self.name,
        )

"""Best-effort detail extraction from arbitrary drama pages."""

from typing import Sequence

import logfire
from bs4 import BeautifulSoup, Tag

from src.constants import (
    DEFAULT_DETAILS_SOURCE,
    DETAIL_DESCRIPTION_SELECTORS,
    DETAIL_GENRES_SELECTOR,
    DETAIL_IMAGE_SELECTORS,
    DETAIL_TITLE_SELECTORS,
    DETAIL_YEAR_SELECTORS,
)
from src.models.scraper_models import DetailsResult, DramaDetails
from src.services.extractor import element_attr, element_text, parse_html
from src.services.fetcher import HttpxPageFetcher, PageFetcher


def select_first(soup: BeautifulSoup, selectors: Sequence[str]) -> Tag | None:
    """Return the first match of the first selector that matches anything."""
    for selector in selectors:
        element = soup.select_one(selector)
        if element is not None:
            return element
    return None


def extract_details(html: str, url: str, source: str) -> DramaDetails:
    """Pull whatever details the page exposes; missing fields stay None."""
    soup = parse_html(html)
    genres = [
        text
        for text in (element_text(el) for el in soup.select(DETAIL_GENRES_SELECTOR))
        if text
    ]
    return DramaDetails(
        url=url,
        source=source,
        title=element_text(select_first(soup, DETAIL_TITLE_SELECTORS)),
        description=element_text(select_first(soup, DETAIL_DESCRIPTION_SELECTORS)),
        image=element_attr(select_first(soup, DETAIL_IMAGE_SELECTORS), "src"),
        year=element_text(select_first(soup, DETAIL_YEAR_SELECTORS)),
        genres=genres or None,
    )


class DetailExtractor:
    """Fetch a drama page and extract its details."""

    def __init__(self, fetcher: PageFetcher | None = None):
        self._fetcher = fetcher or HttpxPageFetcher.from_settings()

    async def fetch_details(
        self, url: str, source: str = DEFAULT_DETAILS_SOURCE
    ) -> DetailsResult:
        """Fetch and extract details for one page.

        Args:
            url: Absolute URL of the drama page
            source: Source tag echoed back in the result

        Returns:
            DetailsResult; success=False only when the page itself fails
        """
        try:
            html = await self._fetcher.fetch(url)
            details = extract_details(html, url, source)
        except Exception as e:
            logfire.error("Drama details scraping failed", url=url, error=str(e))
            return DetailsResult(success=False, error=str(e) or type(e).__name__)

        logfire.info(
            "Drama details extracted",
            url=url,
            source=source,
            fields=sorted(details.model_dump(exclude_none=True)),
        )
        return DetailsResult(success=True, data=details)

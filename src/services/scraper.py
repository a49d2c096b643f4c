"""Drama scraping service: per-request facade over the sources.

The route layer builds one DramaScraperService per request (see
`get_scraper_service`) and dispatches on the requested source key.
"""

from src.constants import ALL_SOURCES_KEY, DEFAULT_DETAILS_SOURCE, SOURCE_KEYS
from src.models.scraper_models import AggregateResult, DetailsResult, ScrapeResult
from src.services.aggregator import scrape_all
from src.services.details import DetailExtractor
from src.services.fetcher import HttpxPageFetcher, PageFetcher
from src.services.sources import DramaCoolScraper, KissAsianScraper, SourceScraper


class DramaScraperService:
    """Coordinate source scrapers, the aggregator and the detail extractor.

    Components can be injected for testing.
    """

    def __init__(
        self,
        fetcher: PageFetcher | None = None,
        scrapers: list[SourceScraper] | None = None,
        detail_extractor: DetailExtractor | None = None,
    ):
        """Initialize the service.

        Args:
            fetcher: Page fetcher shared by the default components
            scrapers: Source scrapers in merge order (defaults to DramaCool, KissAsian)
            detail_extractor: Detail extractor (defaults to one using `fetcher`)
        """
        self._fetcher = fetcher or HttpxPageFetcher.from_settings()
        self._scrapers = scrapers or [
            DramaCoolScraper(self._fetcher),
            KissAsianScraper(self._fetcher),
        ]
        self._detail_extractor = detail_extractor or DetailExtractor(self._fetcher)

    @property
    def source_names(self) -> list[str]:
        return [scraper.name for scraper in self._scrapers]

    def get_source(self, source_key: str) -> SourceScraper | None:
        """Look up a scraper by API key ("dramacool") or name ("DramaCool")."""
        name = SOURCE_KEYS.get(source_key.lower(), source_key)
        for scraper in self._scrapers:
            if scraper.name.lower() == name.lower():
                return scraper
        return None

    async def scrape_source(
        self, source_key: str, query: str = "", page: int = 1
    ) -> ScrapeResult:
        scraper = self.get_source(source_key)
        if scraper is None:
            return ScrapeResult.failed(source_key, page, f"Unknown source: {source_key}")
        return await scraper.scrape(query, page)

    async def scrape_all(self, query: str = "", page: int = 1) -> AggregateResult:
        return await scrape_all(self._scrapers, query, page)

    async def search(
        self, query: str = "", page: int = 1, source: str = ALL_SOURCES_KEY
    ) -> ScrapeResult | AggregateResult:
        """Dispatch to one source, or to all of them for "all" and unknown keys."""
        if source.lower() in SOURCE_KEYS and self.get_source(source) is not None:
            return await self.scrape_source(source, query, page)
        return await self.scrape_all(query, page)

    async def get_details(
        self, url: str, source: str = DEFAULT_DETAILS_SOURCE
    ) -> DetailsResult:
        return await self._detail_extractor.fetch_details(url, source)


def get_scraper_service() -> DramaScraperService:
    """Factory (and FastAPI dependency) creating a fresh service per request."""
    return DramaScraperService()

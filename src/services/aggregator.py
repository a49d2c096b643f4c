"""Multi-source fan-out: scrape every source concurrently and merge."""

import asyncio
import time
from typing import Sequence

import logfire

from src.models.scraper_models import AggregateResult, DramaRecord, SourceStatus
from src.services.sources import SourceScraper


async def scrape_all(
    scrapers: Sequence[SourceScraper], query: str = "", page: int = 1
) -> AggregateResult:
    """Scrape all sources concurrently and merge their results.

    Every source is awaited to completion; one failing source never cancels
    the others. Merged data keeps the order of `scrapers`, not completion
    order. The overall result only fails if the orchestration itself raises.

    Args:
        scrapers: Source scrapers, in merge order
        query: Search query; empty means "recently added"
        page: Listing page number

    Returns:
        AggregateResult with merged data and a status entry per source
    """
    start_time = time.time()
    try:
        # Coroutines are created (dispatched) before gather awaits any of them
        outcomes = await asyncio.gather(
            *(scraper.scrape(query, page) for scraper in scrapers),
            return_exceptions=True,
        )

        combined: list[DramaRecord] = []
        sources: dict[str, SourceStatus] = {}
        for scraper, outcome in zip(scrapers, outcomes):
            if isinstance(outcome, BaseException):
                sources[scraper.name] = SourceStatus(
                    success=False, error=str(outcome) or "Unknown error"
                )
            elif outcome.success:
                combined.extend(outcome.data)
                sources[scraper.name] = SourceStatus(
                    success=True, count=len(outcome.data)
                )
            else:
                sources[scraper.name] = SourceStatus(
                    success=False, error=outcome.error or "Unknown error"
                )
    except Exception as e:
        error = str(e) or type(e).__name__
        logfire.error("Multi-source scraping failed", query=query, error=error)
        return AggregateResult(success=False, page=page, query=query, error=error)

    logfire.info(
        "Multi-source scrape completed",
        query=query,
        page=page,
        total=len(combined),
        failed_sources=[name for name, status in sources.items() if not status.success],
        total_time_ms=(time.time() - start_time) * 1000,
    )
    return AggregateResult(
        success=True,
        data=combined,
        total=len(combined),
        page=page,
        query=query,
        sources=sources,
    )

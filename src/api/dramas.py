"""Drama search, recent listing and detail endpoints.

Handlers validate query parameters, delegate to DramaScraperService and
shape the JSON envelope. The service never raises for upstream failures;
it reports them through `success=False`, which is mapped to a 500 here.
"""

import logging
import re

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import HttpUrl, TypeAdapter, ValidationError

from src.constants import (
    ALL_SOURCES_KEY,
    DEFAULT_DETAILS_SOURCE,
    MAX_RECENT_PAGE,
    MIN_QUERY_LENGTH,
    MIN_RECENT_PAGE,
)
from src.models.scraper_models import AggregateResult
from src.services.scraper import DramaScraperService, get_scraper_service

logger = logging.getLogger(__name__)
router = APIRouter()

_http_url = TypeAdapter(HttpUrl)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_page(raw: str | None) -> int:
    """Parse a page parameter leniently: leading integer, else 1 (0 counts as missing)."""
    match = _LEADING_INT.match(raw or "")
    if not match:
        return 1
    return int(match.group(1)) or 1


def is_valid_url(url: str) -> bool:
    try:
        _http_url.validate_python(url)
    except ValidationError:
        return False
    return True


def error_response(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": error, **extra}
    )


def _listing_payload(result, **metadata) -> dict:
    payload = {
        "success": True,
        **metadata,
        "total": result.total,
        "data": [record.model_dump(exclude_none=True) for record in result.data],
    }
    if isinstance(result, AggregateResult):
        payload["sources"] = {
            name: status.model_dump(exclude_none=True)
            for name, status in result.sources.items()
        }
    return payload


@router.get("/search")
async def search_dramas(
    q: str | None = None,
    page: str | None = None,
    source: str = ALL_SOURCES_KEY,
    service: DramaScraperService = Depends(get_scraper_service),
):
    """Search one source or all of them."""
    if not q or len(q.strip()) < MIN_QUERY_LENGTH:
        return error_response(
            400,
            f'Query parameter "q" is required and must be at least '
            f"{MIN_QUERY_LENGTH} characters long.",
            example="/api/search?q=squid+game&page=1&source=all",
        )

    page_num = parse_page(page)
    try:
        result = await service.search(q, page_num, source)
    except Exception as e:
        logger.exception("Search API error: %s", e)
        return error_response(
            500,
            "Internal server error occurred while processing your request.",
            message=str(e),
        )

    if not result.success:
        logger.warning("Search failed for source=%s: %s", source, result.error)
        return error_response(
            500,
            "Failed to scrape data from the specified source(s).",
            details=result.error,
        )

    return _listing_payload(result, query=q, page=page_num, source=source)


@router.get("/recent")
async def recent_dramas(
    page: str | None = None,
    source: str = ALL_SOURCES_KEY,
    service: DramaScraperService = Depends(get_scraper_service),
):
    """List recently added dramas."""
    page_num = parse_page(page)
    if not MIN_RECENT_PAGE <= page_num <= MAX_RECENT_PAGE:
        return error_response(
            400,
            f"Page number must be between {MIN_RECENT_PAGE} and {MAX_RECENT_PAGE}.",
            example="/api/recent?page=1&source=all",
        )

    try:
        result = await service.search("", page_num, source)
    except Exception as e:
        logger.exception("Recent API error: %s", e)
        return error_response(
            500,
            "Internal server error occurred while fetching recent dramas.",
            message=str(e),
        )

    if not result.success:
        logger.warning("Recent listing failed for source=%s: %s", source, result.error)
        return error_response(
            500,
            "Failed to scrape recent dramas from the specified source(s).",
            details=result.error,
        )

    return _listing_payload(result, page=page_num, source=source)


@router.get("/details")
async def drama_details(
    url: str | None = None,
    source: str = DEFAULT_DETAILS_SOURCE,
    service: DramaScraperService = Depends(get_scraper_service),
):
    """Fetch best-effort details for a single drama page."""
    if not url:
        return error_response(
            400,
            "URL parameter is required.",
            example="/api/details?url=https://dramacool.pa/drama-detail/squid-game",
        )
    if not is_valid_url(url):
        return error_response(400, "Invalid URL format provided.")

    try:
        result = await service.get_details(url, source)
    except Exception as e:
        logger.exception("Details API error: %s", e)
        return error_response(
            500,
            "Internal server error occurred while fetching drama details.",
            message=str(e),
        )

    if not result.success:
        logger.warning("Details fetch failed for %s: %s", url, result.error)
        return error_response(
            500, "Failed to fetch drama details.", details=result.error
        )

    return {
        "success": True,
        "url": url,
        "source": source,
        "data": result.data.model_dump(exclude_none=True),
    }

"""API capability listing served at /api/."""

from fastapi import APIRouter, Request

from src.constants import (
    APP_NAME,
    APP_VERSION,
    DRAMACOOL_NAME,
    DRAMACOOL_ORIGIN,
    KISSASIAN_NAME,
    KISSASIAN_ORIGIN,
    MAX_RECENT_PAGE,
    MIN_QUERY_LENGTH,
)

router = APIRouter()


def _source_label(name: str, origin: str) -> str:
    return f"{name} ({origin.split('://', 1)[-1]})"


@router.get("/")
async def api_index(request: Request):
    """Describe the available endpoints with examples for this host."""
    host = request.headers.get("host")
    base_url = f"https://{host}" if host else "http://localhost:8000"
    source_choices = "all, dramacool, kissasian"

    return {
        "success": True,
        "message": APP_NAME,
        "version": APP_VERSION,
        "endpoints": {
            "search": {
                "url": f"{base_url}/api/search",
                "method": "GET",
                "description": "Search for K-dramas",
                "parameters": {
                    "q": f"Search query (required, min {MIN_QUERY_LENGTH} characters)",
                    "page": "Page number (optional, default: 1)",
                    "source": f"Source to scrape (optional: {source_choices}, default: all)",
                },
                "example": f"{base_url}/api/search?q=squid+game&page=1&source=all",
            },
            "recent": {
                "url": f"{base_url}/api/recent",
                "method": "GET",
                "description": "Get recently added K-dramas",
                "parameters": {
                    "page": f"Page number (optional, default: 1, max: {MAX_RECENT_PAGE})",
                    "source": f"Source to scrape (optional: {source_choices}, default: all)",
                },
                "example": f"{base_url}/api/recent?page=1&source=all",
            },
            "details": {
                "url": f"{base_url}/api/details",
                "method": "GET",
                "description": "Get detailed information about a specific drama",
                "parameters": {
                    "url": "Full URL to the drama page (required)",
                    "source": "Source identifier (optional, default: auto)",
                },
                "example": (
                    f"{base_url}/api/details?url={DRAMACOOL_ORIGIN}/drama-detail/squid-game"
                ),
            },
        },
        "sources": [
            _source_label(DRAMACOOL_NAME, DRAMACOOL_ORIGIN),
            _source_label(KISSASIAN_NAME, KISSASIAN_ORIGIN),
        ],
        "documentation": f"{base_url}/api/",
        "note": (
            "This API is for educational purposes only. Please respect the "
            "terms of service of the scraped websites."
        ),
    }

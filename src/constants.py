"""Application-wide constants.

This module centralizes source URLs, selectors, timeouts and request
limits so the scrapers and the route layer share a single source of truth.
"""

# =============================================================================
# HTTP Configuration
# =============================================================================

# Default timeout for outbound scraper requests (seconds)
DEFAULT_HTTP_TIMEOUT_SECONDS = 15.0

# Default outbound User-Agent (overridable via USER_AGENT)
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Browser-like headers sent with every outbound request (User-Agent added at runtime)
BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

# =============================================================================
# Sources
# =============================================================================

DRAMACOOL_NAME = "DramaCool"
DRAMACOOL_ORIGIN = "https://dramacool.pa"

KISSASIAN_NAME = "KissAsian"
KISSASIAN_ORIGIN = "https://kissasian.lu"

# Source keys accepted by the API, mapped to source names
SOURCE_KEYS = {
    "dramacool": DRAMACOOL_NAME,
    "kissasian": KISSASIAN_NAME,
}
ALL_SOURCES_KEY = "all"

# Source tag used for detail lookups when the caller does not specify one
DEFAULT_DETAILS_SOURCE = "auto"

# =============================================================================
# Detail Page Selectors (tried in order, first match wins)
# =============================================================================

DETAIL_TITLE_SELECTORS = ("h1", ".title", ".drama-title", ".movie-title")
DETAIL_DESCRIPTION_SELECTORS = (".description", ".summary", ".plot", ".synopsis")
DETAIL_IMAGE_SELECTORS = (".poster img", ".drama-image img", 'img[alt*="poster"]')
DETAIL_YEAR_SELECTORS = (".year", ".release-date", '[class*="year"]')
DETAIL_GENRES_SELECTOR = '.genre a, .genres a, [class*="genre"] a'

# =============================================================================
# Request Constraints
# =============================================================================

# Minimum search query length (after stripping whitespace)
MIN_QUERY_LENGTH = 2

# Allowed page range for recent listings
MIN_RECENT_PAGE = 1
MAX_RECENT_PAGE = 50

# =============================================================================
# Application Metadata
# =============================================================================

APP_NAME = "K-Drama Scraper API"
APP_VERSION = "1.0.0"

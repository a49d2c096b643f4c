"""Outbound page fetching for the scrapers.

Every request carries the same browser-like headers and a fixed timeout.
A fresh client is opened per fetch so nothing is held between calls.
"""

from typing import Protocol

import httpx
import logfire

from src.config import get_settings
from src.constants import (
    BROWSER_HEADERS,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)


class FetchError(ValueError):
    """Raised when a page cannot be fetched (network error, timeout, non-2xx)."""

    pass


class PageFetcher(Protocol):
    """Protocol for fetching page content."""

    async def fetch(self, url: str) -> str:
        """Fetch HTML content from URL.

        Raises:
            FetchError: If the fetch fails
        """
        ...


def build_headers(user_agent: str = DEFAULT_USER_AGENT) -> dict[str, str]:
    """Browser-like request headers with the given User-Agent."""
    return {"User-Agent": user_agent, **BROWSER_HEADERS}


class HttpxPageFetcher:
    """Fetch pages using httpx with fixed headers and timeout."""

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        headers: dict[str, str] | None = None,
    ):
        """Initialize the page fetcher.

        Args:
            timeout: HTTP timeout in seconds
            headers: Optional custom headers (defaults to browser-like headers)
        """
        self._timeout = timeout
        self._headers = headers or build_headers()

    @classmethod
    def from_settings(cls) -> "HttpxPageFetcher":
        """Build a fetcher using the configured User-Agent and timeout."""
        settings = get_settings()
        return cls(
            timeout=settings.scraper_timeout_seconds,
            headers=build_headers(settings.user_agent),
        )

    async def fetch(self, url: str) -> str:
        """Fetch a page and return its HTML.

        Args:
            url: The URL to fetch

        Returns:
            HTML content as string

        Raises:
            FetchError: On transport errors, timeouts and non-2xx responses
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers=self._headers,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise FetchError(
                f"Failed to fetch {url}: timed out after {self._timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        logfire.info(
            "Page fetched",
            url=url,
            status_code=response.status_code,
            content_length=len(response.text),
        )
        return response.text

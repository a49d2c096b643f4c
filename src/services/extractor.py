"""Markup extraction helpers shared by the source scrapers.

`extract_items` folds over the item nodes of a listing page: each node
either yields a record or is skipped, and one broken node never stops the
rest of the page from being extracted.
"""

from typing import Callable
from urllib.parse import urlparse

import logfire
from bs4 import BeautifulSoup, Tag

from src.models.scraper_models import DramaRecord

ItemParser = Callable[[Tag], DramaRecord | None]


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def element_text(element: Tag | None) -> str | None:
    """Whitespace-collapsed text of an element, or None if missing or blank."""
    if element is None:
        return None
    text = " ".join(element.get_text().split())
    return text or None


def element_attr(element: Tag | None, name: str) -> str | None:
    """Stripped attribute value of an element, or None if missing or blank."""
    if element is None:
        return None
    value = element.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    if value is None:
        return None
    return value.strip() or None


def absolutize_url(url: str | None, origin: str) -> str | None:
    """Rewrite a root-relative URL against the source origin.

    "/foo" becomes "<origin>/foo" and "//host/foo" takes the origin's scheme.
    Anything else (absolute URLs included) is returned unchanged.
    """
    if not url:
        return url
    if url.startswith("//"):
        return f"{urlparse(origin).scheme}:{url}"
    if url.startswith("/"):
        return f"{origin.rstrip('/')}{url}"
    return url


def extract_items(
    html: str, item_selector: str, parse_item: ItemParser, source: str
) -> list[DramaRecord]:
    """Run parse_item over every node matching item_selector.

    Nodes for which parse_item returns None are skipped. Nodes that raise
    are logged and skipped.

    Args:
        html: Raw page markup
        item_selector: CSS selector matching one node per listing item
        parse_item: Converts one item node into a record (or None)
        source: Source name, used for logging

    Returns:
        Records in document order
    """
    soup = parse_html(html)
    records: list[DramaRecord] = []
    for element in soup.select(item_selector):
        try:
            record = parse_item(element)
        except Exception as e:
            logfire.warn("Error parsing drama item", source=source, error=str(e))
            continue
        if record is not None:
            records.append(record)
    return records

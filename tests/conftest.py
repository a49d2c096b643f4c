"""Shared pytest fixtures and configuration.

Fixture Categories:
1. HTTP mocking: respx_mock
2. Sample markup: dramacool_html, kissasian_html, details_html
3. Mock components: mock_fetcher, mock_scraper_service
4. Infrastructure: mock_settings, mock_logfire, logfire_capture, test_client
"""

import os
from unittest.mock import AsyncMock, MagicMock, Mock, patch

import pytest
import respx

from src.models.scraper_models import (
    AggregateResult,
    DetailsResult,
    DramaDetails,
    DramaRecord,
    SourceStatus,
)
from tests.markup import dramacool_item, kissasian_page, kissasian_row

# Suppress warnings when logfire isn't configured during tests
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")


@pytest.fixture
def respx_mock():
    """Respx mock fixture for HTTP mocking."""
    with respx.mock:
        yield respx


# =============================================================================
# Sample Markup
# =============================================================================


@pytest.fixture
def dramacool_html():
    """DramaCool listing with two titled items and one item without a title."""
    items = [
        dramacool_item("Squid Game", "/drama-detail/squid-game", "EP 9"),
        dramacool_item("Squid Game 2", "https://dramacool.pa/drama-detail/squid-game-2"),
        dramacool_item(None, "/drama-detail/untitled"),
    ]
    return f'<html><body><ul class="list">{"".join(items)}</ul></body></html>'


@pytest.fixture
def kissasian_html():
    """KissAsian listing table with five rows plus a header row."""
    rows = [
        kissasian_row(f"Drama {i}", f"/Drama/Drama-{i}", "Romance", "Completed")
        for i in range(1, 6)
    ]
    return kissasian_page(rows)


@pytest.fixture
def details_html():
    """Drama detail page matching every detail selector."""
    return """
    <html><body>
        <h1>Squid Game</h1>
        <div class="poster"><img src="https://img.example.com/squid.jpg" alt="cover"></div>
        <p class="synopsis">
            Hundreds of cash-strapped players
            accept a strange invitation.
        </p>
        <span class="release-date">2021</span>
        <div class="genres"><a href="/g/thriller">Thriller</a><a href="/g/drama">Drama</a></div>
    </body></html>
    """


# =============================================================================
# Mock Components
# =============================================================================


@pytest.fixture
def mock_fetcher():
    """Mock PageFetcher; set fetch.return_value / side_effect in the test."""
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(return_value="<html><body></body></html>")
    return fetcher


@pytest.fixture
def sample_records():
    return [
        DramaRecord(
            title="Squid Game",
            url="https://dramacool.pa/drama-detail/squid-game",
            image="https://img.dramacool.pa/squid.jpg",
            episode="EP 9",
            source="DramaCool",
        ),
        DramaRecord(
            title="Drama 1",
            url="https://kissasian.lu/Drama/Drama-1",
            genre="Romance",
            status="Completed",
            source="KissAsian",
        ),
    ]


@pytest.fixture
def mock_scraper_service(sample_records):
    """Mock DramaScraperService with successful default results.

    search() returns an AggregateResult over sample_records and
    get_details() returns a DetailsResult with a title only.
    """
    from src.services.scraper import DramaScraperService

    service = AsyncMock(spec=DramaScraperService)
    service.search = AsyncMock(
        return_value=AggregateResult(
            success=True,
            data=sample_records,
            total=len(sample_records),
            page=1,
            query="squid game",
            sources={
                "DramaCool": SourceStatus(success=True, count=1),
                "KissAsian": SourceStatus(success=True, count=1),
            },
        )
    )
    service.get_details = AsyncMock(
        return_value=DetailsResult(
            success=True,
            data=DramaDetails(
                url="https://dramacool.pa/drama-detail/squid-game",
                source="auto",
                title="Squid Game",
            ),
        )
    )
    return service


# =============================================================================
# Infrastructure
# =============================================================================


@pytest.fixture
def mock_settings(monkeypatch):
    """Mock application settings."""
    from src.config import Settings

    settings = Settings(
        user_agent="TestAgent/1.0",
        scraper_timeout_seconds=15.0,
        env="local",
        logfire_token=None,
        sentry_dsn=None,
    )

    monkeypatch.setattr("src.config.get_settings", lambda: settings)
    # Patch where get_settings is used so components see the mock
    monkeypatch.setattr("src.main.get_settings", lambda: settings)
    monkeypatch.setattr("src.services.fetcher.get_settings", lambda: settings)
    monkeypatch.setattr("src.logging_config.get_settings", lambda: settings)
    return settings


@pytest.fixture
def test_client(mock_settings, mock_logfire, mock_scraper_service):
    """FastAPI TestClient with the scraper service replaced by a mock."""
    from fastapi.testclient import TestClient

    from src.main import app
    from src.services.scraper import get_scraper_service

    app.dependency_overrides[get_scraper_service] = lambda: mock_scraper_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def logfire_capture():
    """
    Capture Logfire logs for testing.

    This fixture patches Logfire to capture log calls for assertion.
    """
    captured_logs = []

    def capture(level):
        def _capture(*args, **kwargs):
            captured_logs.append((level, args, kwargs))

        return _capture

    with (
        patch("logfire.info", side_effect=capture("info")),
        patch("logfire.warn", side_effect=capture("warn")),
        patch("logfire.error", side_effect=capture("error")),
    ):
        yield captured_logs


@pytest.fixture
def mock_logfire(monkeypatch):
    """
    Mock Logfire for testing without actual logging.

    Useful for tests that don't need to verify logging behavior.
    """
    from contextlib import contextmanager

    @contextmanager
    def mock_span(*args, **kwargs):
        yield {}

    mock_logfire_module = MagicMock()
    mock_logfire_module.info = Mock()
    mock_logfire_module.warn = Mock()
    mock_logfire_module.error = Mock()
    mock_logfire_module.span = mock_span
    mock_logfire_module.configure = Mock()
    mock_logfire_module.instrument_fastapi = Mock()
    mock_logfire_module.instrument_httpx = Mock()

    # Patch module-level imports in our code (only modules that use logfire)
    monkeypatch.setattr("src.services.fetcher.logfire", mock_logfire_module)
    monkeypatch.setattr("src.services.extractor.logfire", mock_logfire_module)
    monkeypatch.setattr("src.services.sources.logfire", mock_logfire_module)
    monkeypatch.setattr("src.services.aggregator.logfire", mock_logfire_module)
    monkeypatch.setattr("src.services.details.logfire", mock_logfire_module)
    monkeypatch.setattr("src.middleware.correlation_id.logfire", mock_logfire_module)
    monkeypatch.setattr("src.logging_config.logfire", mock_logfire_module)
    monkeypatch.setattr("src.main.logfire", mock_logfire_module)

    return mock_logfire_module

"""Tests for scraper result models."""

import pytest
from pydantic import ValidationError

from src.models.scraper_models import (
    AggregateResult,
    DetailsResult,
    DramaDetails,
    DramaRecord,
    ScrapeResult,
    SourceStatus,
)


class TestDramaRecord:
    """Test DramaRecord model."""

    def test_minimal_record(self):
        record = DramaRecord(title="Goblin", source="KissAsian")
        assert record.url is None
        assert record.model_dump(exclude_none=True) == {
            "title": "Goblin",
            "source": "KissAsian",
        }

    def test_title_required(self):
        with pytest.raises(ValidationError):
            DramaRecord(source="DramaCool")


class TestScrapeResult:
    """Test ScrapeResult envelope invariants."""

    def test_ok_sets_total(self):
        records = [DramaRecord(title=str(i), source="DramaCool") for i in range(3)]
        result = ScrapeResult.ok("DramaCool", 2, records)

        assert result.success is True
        assert result.total == 3
        assert result.page == 2
        assert result.error is None

    def test_failed_has_no_data(self):
        result = ScrapeResult.failed("KissAsian", 1, "timeout")

        assert result.success is False
        assert result.data == []
        assert result.total == 0
        assert result.error == "timeout"

    def test_success_with_error_rejected(self):
        with pytest.raises(ValidationError):
            ScrapeResult(success=True, source="DramaCool", error="boom")

    def test_failure_without_error_rejected(self):
        with pytest.raises(ValidationError):
            ScrapeResult(success=False, source="DramaCool")

    def test_failure_with_data_rejected(self):
        with pytest.raises(ValidationError):
            ScrapeResult(
                success=False,
                source="DramaCool",
                error="boom",
                data=[DramaRecord(title="x", source="DramaCool")],
            )


class TestDetailsResult:
    """Test DetailsResult envelope invariants."""

    def test_success(self):
        result = DetailsResult(
            success=True, data=DramaDetails(url="https://x.example", source="auto")
        )
        assert result.data.genres is None

    def test_failure_requires_error(self):
        with pytest.raises(ValidationError):
            DetailsResult(success=False)

    def test_failure_rejects_data(self):
        with pytest.raises(ValidationError):
            DetailsResult(
                success=False,
                error="boom",
                data=DramaDetails(url="https://x.example", source="auto"),
            )

    def test_success_requires_data(self):
        with pytest.raises(ValidationError):
            DetailsResult(success=True)


class TestAggregateResult:
    """Test AggregateResult defaults."""

    def test_defaults(self):
        result = AggregateResult(success=False, error="boom")
        assert result.data == []
        assert result.sources == {}
        assert result.total == 0

    def test_source_status_dump(self):
        assert SourceStatus(success=True, count=4).model_dump(exclude_none=True) == {
            "success": True,
            "count": 4,
        }

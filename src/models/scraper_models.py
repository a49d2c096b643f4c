"""Models for scraper results: listing records, envelopes and detail pages."""

from pydantic import BaseModel, Field, model_validator


class DramaRecord(BaseModel):
    """A single drama listing scraped from one source."""

    title: str
    url: str | None = None
    image: str | None = None
    source: str
    # DramaCool
    episode: str | None = None
    # KissAsian
    genre: str | None = None
    status: str | None = None


class ScrapeResult(BaseModel):
    """Envelope returned by a single-source scrape.

    A failed scrape never carries data; a successful one never carries an error.
    """

    success: bool
    data: list[DramaRecord] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    source: str
    error: str | None = None

    @model_validator(mode="after")
    def _check_envelope(self) -> "ScrapeResult":
        if self.success and self.error is not None:
            raise ValueError("successful result must not carry an error")
        if not self.success and (self.data or not self.error):
            raise ValueError("failed result must have an error and no data")
        return self

    @classmethod
    def ok(cls, source: str, page: int, data: list[DramaRecord]) -> "ScrapeResult":
        return cls(success=True, data=data, total=len(data), page=page, source=source)

    @classmethod
    def failed(cls, source: str, page: int, error: str) -> "ScrapeResult":
        return cls(success=False, page=page, source=source, error=error)


class SourceStatus(BaseModel):
    """Per-source outcome recorded by the aggregator."""

    success: bool
    count: int | None = None
    error: str | None = None


class AggregateResult(BaseModel):
    """Merged result of scraping every source."""

    success: bool
    data: list[DramaRecord] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    query: str = ""
    sources: dict[str, SourceStatus] = Field(default_factory=dict)
    error: str | None = None


class DramaDetails(BaseModel):
    """Best-effort details pulled from an arbitrary drama page."""

    url: str
    source: str
    title: str | None = None
    description: str | None = None
    image: str | None = None
    year: str | None = None
    genres: list[str] | None = None


class DetailsResult(BaseModel):
    """Envelope returned by the detail extractor."""

    success: bool
    data: DramaDetails | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _check_envelope(self) -> "DetailsResult":
        if self.success and (self.error is not None or self.data is None):
            raise ValueError("successful result must carry data and no error")
        if not self.success and (self.data is not None or not self.error):
            raise ValueError("failed result must have an error and no data")
        return self

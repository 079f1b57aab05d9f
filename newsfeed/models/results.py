"""Result models returned by ingestion runs."""

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, Field


class IngestResult(BaseModel):
    """Counters for one fetch path during one cycle."""

    source: str = Field(description="Fetch path name ('reddit', 'newsapi')")
    fetched: int = Field(default=0, ge=0, description="Items returned by the source")
    imported: int = Field(default=0, ge=0, description="Articles written to the store")
    skipped: int = Field(default=0, ge=0, description="Items the store reported as duplicates")
    filtered: int = Field(default=0, ge=0, description="Items rejected for language")
    failed: int = Field(default=0, ge=0, description="Items dropped after an error")
    sources_attempted: int = Field(default=0, ge=0, description="Communities/categories queried")
    sources_failed: int = Field(default=0, ge=0, description="Communities/categories that errored")
    cancelled: bool = Field(default=False, description="Stopped early by the stop signal")
    skipped_reason: str | None = Field(
        default=None, description="Why the whole path was skipped, if it was"
    )
    errors: list[str] = Field(default_factory=list, description="Error messages if any")


class CycleResult(BaseModel):
    """Outcome of one complete fetch-translate-dedupe-persist cycle."""

    cycle_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8], description="Log correlation id")
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = Field(default=None)
    results: list[IngestResult] = Field(default_factory=list)
    cancelled: bool = Field(default=False)
    errors: list[str] = Field(default_factory=list, description="Path-level failures")

    @property
    def imported(self) -> int:
        return sum(r.imported for r in self.results)

    @property
    def skipped(self) -> int:
        return sum(r.skipped for r in self.results)

    @property
    def filtered(self) -> int:
        return sum(r.filtered for r in self.results)

    @property
    def failed(self) -> int:
        return sum(r.failed for r in self.results)

    @property
    def elapsed_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def get(self, source: str) -> IngestResult | None:
        """Return the result for a fetch path, if it ran."""
        for result in self.results:
            if result.source == source:
                return result
        return None

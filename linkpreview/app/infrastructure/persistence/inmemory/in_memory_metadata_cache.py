"""In-memory cache for tests and local mode. Process-local; lost on restart."""
from __future__ import annotations

from linkpreview.app.domain.models import MetadataRecord


class InMemoryMetadataCache:
    def __init__(self) -> None:
        self.records: dict[str, MetadataRecord] = {}

    @property
    def enabled(self) -> bool:
        return True

    async def get(self, url: str) -> MetadataRecord | None:
        return self.records.get(url)

    async def put(self, record: MetadataRecord) -> bool:
        # first write wins, records are immutable once cached
        if record.url in self.records:
            return False
        self.records[record.url] = record
        return True


class NullMetadataCache:
    """Caching disabled: every lookup misses and writes are dropped."""

    @property
    def enabled(self) -> bool:
        return False

    async def get(self, url: str) -> MetadataRecord | None:
        return None

    async def put(self, record: MetadataRecord) -> bool:
        return False

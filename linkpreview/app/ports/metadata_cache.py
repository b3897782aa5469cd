"""Port: advisory read-through cache for metadata records.

Implementations must never raise: lookup errors are a miss, write errors are
logged and reported as False.
"""
from __future__ import annotations

from typing import Protocol

from linkpreview.app.domain.models import MetadataRecord


class MetadataCache(Protocol):
    @property
    def enabled(self) -> bool: ...

    async def get(self, url: str) -> MetadataRecord | None: ...

    async def put(self, record: MetadataRecord) -> bool: ...

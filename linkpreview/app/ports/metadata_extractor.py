"""Port: page metadata extraction used by the request handlers."""
from __future__ import annotations

from typing import Protocol

from linkpreview.app.domain.models import ExtractedMetadata


class MetadataExtractor(Protocol):
    async def extract(self, url: str) -> ExtractedMetadata | None: ...

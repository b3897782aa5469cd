"""Domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class OpenGraphTags:
    """`og:*` properties found in the page head."""

    title: str | None = None
    description: str | None = None
    image: str | None = None
    site_name: str | None = None
    type: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class MetaTags:
    """Generic `<meta name=...>` values; title falls back to `<title>`."""

    title: str | None = None
    description: str | None = None
    image: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class ImageRef:
    url: str


@dataclass(frozen=True)
class ExtractedMetadata:
    """Raw extraction result for a single page (value object)."""

    og: OpenGraphTags = field(default_factory=OpenGraphTags)
    meta: MetaTags = field(default_factory=MetaTags)
    images: tuple[ImageRef, ...] = ()

    @property
    def first_image_url(self) -> str | None:
        return self.images[0].url if self.images else None


@dataclass(frozen=True)
class MetadataRecord:
    """Normalized link preview, keyed by the normalized request URL.

    Immutable once cached; there is no update path.
    """

    url: str
    title: str
    description: str | None
    image: str
    site_name: str
    hostname: str

    def __post_init__(self) -> None:
        if not isinstance(self.url, str) or not self.url:
            raise TypeError("record.url must be a non-empty str")
        if self.description is not None and not isinstance(self.description, str):
            raise TypeError("record.description must be a str or None")

    def to_dict(self) -> dict[str, Any]:
        """Serialisable dict for persistence, using the wire field names."""
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "siteName": self.site_name,
            "hostname": self.hostname,
        }

    @staticmethod
    def from_dict(doc: dict[str, Any]) -> "MetadataRecord":
        description = doc.get("description")
        return MetadataRecord(
            url=str(doc["url"]),
            title=str(doc.get("title") or ""),
            description=str(description) if description is not None else None,
            image=str(doc.get("image") or ""),
            site_name=str(doc.get("siteName") or ""),
            hostname=str(doc.get("hostname") or ""),
        )

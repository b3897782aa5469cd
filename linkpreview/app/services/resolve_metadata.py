"""
Read-through metadata resolution: cache lookup, then extraction.

Accepts plain Python types and the cache/extractor ports; returns an outcome.
The router translates the outcome to HTTP status codes and schedules the
cache write after the response is sent.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger

from linkpreview.app.core import SERVICE_NAME
from linkpreview.app.domain.models import ExtractedMetadata, MetadataRecord
from linkpreview.app.ports.metadata_cache import MetadataCache
from linkpreview.app.ports.metadata_extractor import MetadataExtractor


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


@dataclass(frozen=True)
class ResolveMetadataOutcome:
    """Result of resolve_metadata.
    record=None => extraction yielded nothing (not found).
    cached=True => record came from the cache and must not be written back.
    """
    record: MetadataRecord | None = None
    cached: bool = False

    @property
    def found(self) -> bool:
        return self.record is not None

    @property
    def needs_persist(self) -> bool:
        return self.record is not None and not self.cached


def build_record(
    url: str,
    hostname: str,
    extracted: ExtractedMetadata,
    *,
    placeholder_image: str,
) -> MetadataRecord:
    """Normalize extracted tags into a record.

    image: og:image, then the first page image, then the placeholder.
    description: og:description, then meta description, then None.
    """
    og, meta = extracted.og, extracted.meta
    return MetadataRecord(
        url=url,
        title=og.title or meta.title or "",
        description=og.description or meta.description or None,
        image=og.image or extracted.first_image_url or placeholder_image,
        site_name=og.site_name or "",
        hostname=hostname,
    )


async def resolve_metadata(
    url: str,
    hostname: str,
    *,
    cache: MetadataCache | None,
    extractor: MetadataExtractor,
    placeholder_image: str,
) -> ResolveMetadataOutcome:
    """
    Resolve a normalized, validated URL to a record.
    A cache hit short-circuits extraction; a cache miss or cache error falls through.
    """
    if cache is not None:
        try:
            cached = await cache.get(url)
        except Exception as e:
            logger.bind(service_name=SERVICE_NAME, event="cache_get_failed", url=url).warning(
                "cache lookup raised: {}", e
            )
            cached = None
        if cached is not None:
            _log("cache_hit", url=url)
            return ResolveMetadataOutcome(record=cached, cached=True)

    extracted = await extractor.extract(url)
    if extracted is None:
        _log("metadata_not_found", url=url)
        return ResolveMetadataOutcome()

    record = build_record(url, hostname, extracted, placeholder_image=placeholder_image)
    return ResolveMetadataOutcome(record=record)


async def persist_record(cache: MetadataCache, record: MetadataRecord) -> bool:
    """Best-effort cache write, run after the response has been sent."""
    try:
        stored = await cache.put(record)
    except Exception as e:
        logger.bind(service_name=SERVICE_NAME, event="cache_put_failed", url=record.url).warning(
            "cache write raised: {}", e
        )
        return False
    _log("cache_put", url=record.url, stored=stored)
    return stored

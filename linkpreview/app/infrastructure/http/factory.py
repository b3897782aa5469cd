"""HTTP client and extractor factory: builds both from settings."""
from __future__ import annotations

import httpx

from linkpreview.app.config.settings import Settings
from linkpreview.app.domain.metadata_extractor import HtmlMetadataExtractor
from linkpreview.app.infrastructure.http.httpx_client import HttpxHttpClient
from linkpreview.app.ports.http_client import AbstractHttpClient


def create_http_client(settings: Settings) -> AbstractHttpClient:
    """Build an HTTP client. Timeouts are applied per-request by the adapter."""
    async_client = httpx.AsyncClient()
    return HttpxHttpClient(async_client)


def create_metadata_extractor(settings: Settings, client: AbstractHttpClient) -> HtmlMetadataExtractor:
    return HtmlMetadataExtractor(
        client,
        connect_timeout_seconds=settings.fetch_connect_timeout_seconds,
        read_timeout_seconds=settings.fetch_read_timeout_seconds,
        default_headers={"User-Agent": settings.user_agent},
    )

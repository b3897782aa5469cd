"""
Composition root: single place where concrete implementations are wired.

Builds settings, HTTP client, extractor, database and cache from config and
provides the connect/close lifecycle used by the lifespan. No DI container
library, explicit wiring only. The cache is advisory: a database that cannot
be reached at startup leaves the cache degraded instead of failing startup.
"""
from __future__ import annotations

from typing import Any

from loguru import logger

from linkpreview.app.config.settings import Settings
from linkpreview.app.core import SERVICE_NAME
from linkpreview.app.infrastructure.http.factory import create_http_client, create_metadata_extractor
from linkpreview.app.infrastructure.persistence.factory import (
    create_database_connection,
    create_metadata_cache,
)
from linkpreview.app.ports.database_connection import DatabaseConnection
from linkpreview.app.ports.http_client import AbstractHttpClient
from linkpreview.app.ports.metadata_cache import MetadataCache
from linkpreview.app.ports.metadata_extractor import MetadataExtractor


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class AppDependencies:
    """Holds wired dependencies and their lifecycle. Built only in composition root."""

    def __init__(
        self,
        *,
        settings: Settings,
        http_client: AbstractHttpClient,
        metadata_extractor: MetadataExtractor,
        database: DatabaseConnection | None,
        metadata_cache: MetadataCache,
    ) -> None:
        self._settings = settings
        self._http_client = http_client
        self._metadata_extractor = metadata_extractor
        self._database = database
        self._metadata_cache = metadata_cache

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def http_client(self) -> AbstractHttpClient:
        return self._http_client

    @property
    def metadata_extractor(self) -> MetadataExtractor:
        return self._metadata_extractor

    @property
    def database(self) -> DatabaseConnection | None:
        return self._database

    @property
    def metadata_cache(self) -> MetadataCache:
        return self._metadata_cache

    async def connect(self) -> None:
        if self._database is None:
            _log("cache_ready", backend=self._settings.cache_backend, enabled=self._metadata_cache.enabled)
            return
        try:
            await self._database.connect()
        except Exception as e:
            logger.bind(service_name=SERVICE_NAME, event="cache_degraded").warning(
                "database connect failed, continuing without cache guarantees: {}", e
            )
            return

        ensure_indexes = getattr(self._metadata_cache, "ensure_indexes", None)
        if ensure_indexes is not None:
            try:
                await ensure_indexes()
            except Exception as e:
                logger.bind(service_name=SERVICE_NAME, event="cache_index_failed").warning(
                    "could not ensure cache indexes: {}", e
                )

    async def close(self) -> None:
        await self._http_client.close()
        if self._database is not None:
            await self._database.close()


def create_app_dependencies(settings: Settings | None = None) -> AppDependencies:
    """
    Composition root: build all app dependencies in one place.
    Caller owns lifecycle (connect/close). The cache backend is selected from
    settings (cache_backend, database_uri).
    """
    _settings = settings or Settings()
    http_client = create_http_client(_settings)
    extractor = create_metadata_extractor(_settings, http_client)
    database = create_database_connection(_settings)
    cache = create_metadata_cache(_settings, database)

    return AppDependencies(
        settings=_settings,
        http_client=http_client,
        metadata_extractor=extractor,
        database=database,
        metadata_cache=cache,
    )

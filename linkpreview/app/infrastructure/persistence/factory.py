"""Cache factory: selects implementation from config. Only place that imports concrete caches."""
from __future__ import annotations

from loguru import logger

from linkpreview.app.config.settings import Settings
from linkpreview.app.constants import CacheBackend
from linkpreview.app.core import SERVICE_NAME
from linkpreview.app.infrastructure.persistence.inmemory.in_memory_metadata_cache import (
    InMemoryMetadataCache,
    NullMetadataCache,
)
from linkpreview.app.infrastructure.persistence.mongo.mongo_connection import MongoConnection
from linkpreview.app.infrastructure.persistence.mongo.mongo_metadata_cache import MongoMetadataCache
from linkpreview.app.ports.database_connection import DatabaseConnection
from linkpreview.app.ports.metadata_cache import MetadataCache


def _backend(settings: Settings) -> str:
    backend = settings.cache_backend.strip().lower()
    if backend == CacheBackend.MONGO and not settings.database_uri:
        return CacheBackend.NONE
    return backend


def create_database_connection(settings: Settings) -> DatabaseConnection | None:
    """Database connection for the configured backend, or None when the backend needs no database."""
    backend = _backend(settings)

    if backend == CacheBackend.MONGO:
        return MongoConnection(settings)

    if backend in (CacheBackend.INMEMORY, CacheBackend.NONE):
        return None

    raise ValueError(f"Unsupported cache backend: {backend}")


def create_metadata_cache(settings: Settings, database: DatabaseConnection | None) -> MetadataCache:
    """Build the MetadataCache. The Mongo cache shares the connection used by readiness."""
    backend = _backend(settings)

    if backend == CacheBackend.MONGO:
        if not isinstance(database, MongoConnection):
            raise ValueError(
                f"Metadata cache for backend 'mongo' requires MongoConnection, got {type(database).__name__}"
            )
        return MongoMetadataCache(database)

    if backend == CacheBackend.INMEMORY:
        return InMemoryMetadataCache()

    if backend == CacheBackend.NONE:
        if settings.cache_backend.strip().lower() == CacheBackend.MONGO:
            logger.bind(service_name=SERVICE_NAME, event="cache_disabled", reason="database_uri_missing").warning("")
        return NullMetadataCache()

    raise ValueError(f"Unsupported cache backend: {backend}")

"""MongoDB implementation of MetadataCache. One document per URL; never updated."""
from __future__ import annotations

from typing import Any

from loguru import logger
from pymongo.errors import DuplicateKeyError

from linkpreview.app.core import SERVICE_NAME
from linkpreview.app.domain.models import MetadataRecord
from linkpreview.app.infrastructure.persistence.mongo.constants import URL_INDEX_NAME
from linkpreview.app.infrastructure.persistence.mongo.mongo_connection import MongoConnection


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).warning("")


class MongoMetadataCache:
    def __init__(self, database: MongoConnection) -> None:
        self._database = database

    @property
    def enabled(self) -> bool:
        return True

    async def ensure_indexes(self) -> None:
        """Infrastructure bootstrap: unique url index so concurrent first requests cannot insert twice."""
        await self._database.metadata_collection.create_index("url", unique=True, name=URL_INDEX_NAME)

    async def get(self, url: str) -> MetadataRecord | None:
        try:
            doc = await self._database.metadata_collection.find_one({"url": url}, {"_id": 0})
        except Exception as e:
            _log("cache_get_failed", url=url, error=str(e))
            return None
        if not doc:
            return None
        try:
            return MetadataRecord.from_dict(doc)
        except (KeyError, TypeError) as e:
            _log("cache_record_malformed", url=url, error=str(e))
            return None

    async def put(self, record: MetadataRecord) -> bool:
        try:
            await self._database.metadata_collection.insert_one(record.to_dict())
            return True
        except DuplicateKeyError:
            logger.bind(service_name=SERVICE_NAME, event="cache_put_duplicate", url=record.url).info("")
            return False
        except Exception as e:
            _log("cache_put_failed", url=record.url, error=str(e))
            return False

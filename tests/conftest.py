from __future__ import annotations

from typing import Any, Mapping

import pytest
from fastapi import FastAPI

from linkpreview.app.domain.models import ExtractedMetadata, MetadataRecord
from linkpreview.app.ports.http_client import HttpClientError, RequestTimeout
from linkpreview.app.routers.health import health_router
from linkpreview.app.routers.metadata import metadata_router


class FakeExtractor:
    """Implements MetadataExtractor for tests; records every URL it was asked for."""

    def __init__(
        self,
        results_by_url: dict[str, ExtractedMetadata] | None = None,
        *,
        raise_on_extract: Exception | None = None,
    ) -> None:
        self._results_by_url = results_by_url or {}
        self._raise_on_extract = raise_on_extract
        self.calls: list[str] = []

    async def extract(self, url: str) -> ExtractedMetadata | None:
        self.calls.append(url)
        if self._raise_on_extract is not None:
            raise self._raise_on_extract
        return self._results_by_url.get(url)


class FakeMetadataCache:
    """Implements MetadataCache for tests. raise_on_* simulates a non-conforming backend."""

    def __init__(
        self,
        records_by_url: dict[str, MetadataRecord] | None = None,
        *,
        raise_on_get: Exception | None = None,
        raise_on_put: Exception | None = None,
    ) -> None:
        self.records_by_url = records_by_url or {}
        self.put_calls: list[MetadataRecord] = []
        self._raise_on_get = raise_on_get
        self._raise_on_put = raise_on_put

    @property
    def enabled(self) -> bool:
        return True

    async def get(self, url: str) -> MetadataRecord | None:
        if self._raise_on_get is not None:
            raise self._raise_on_get
        return self.records_by_url.get(url)

    async def put(self, record: MetadataRecord) -> bool:
        self.put_calls.append(record)
        if self._raise_on_put is not None:
            raise self._raise_on_put
        self.records_by_url.setdefault(record.url, record)
        return True


class FakeDatabase:
    """Implements DatabaseConnection for tests."""

    def __init__(self, ping_ok: bool = True, *, raise_on_connect: Exception | None = None) -> None:
        self._ping_ok = ping_ok
        self._ready = False
        self._raise_on_connect = raise_on_connect
        self.closed = False

    @property
    def ready(self) -> bool:
        return self._ready

    async def connect(self) -> None:
        if self._raise_on_connect is not None:
            raise self._raise_on_connect
        self._ready = True

    async def ping(self) -> bool:
        return self._ping_ok

    async def close(self) -> None:
        self._ready = False
        self.closed = True


class FakeResponse:
    """Implements HttpResponse for tests."""

    def __init__(
        self,
        text: str = "",
        *,
        status_code: int = 200,
        url: str = "http://example.com/",
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.text = text
        self.status_code = status_code
        self.url = url
        self.headers = dict(headers) if headers is not None else {"content-type": "text/html; charset=utf-8"}

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise HttpClientError(f"http status {self.status_code} for {self.url}")


class FakeHttpClient:
    """Implements AbstractHttpClient for tests: returns a canned response or raises."""

    def __init__(self, response: FakeResponse | None = None, *, raise_on_get: Exception | None = None) -> None:
        self._response = response or FakeResponse()
        self._raise_on_get = raise_on_get
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    async def get(
        self,
        url: str,
        *,
        timeout: RequestTimeout,
        follow_redirects: bool = True,
        headers: dict[str, str] | None = None,
    ) -> FakeResponse:
        self.requests.append(
            {"url": url, "timeout": timeout, "follow_redirects": follow_redirects, "headers": headers}
        )
        if self._raise_on_get is not None:
            raise self._raise_on_get
        return self._response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def test_app() -> FastAPI:
    app = FastAPI()
    app.state.metadata_extractor = FakeExtractor()
    app.state.metadata_cache = FakeMetadataCache()
    app.state.database = FakeDatabase()
    app.include_router(health_router)
    app.include_router(metadata_router)
    return app

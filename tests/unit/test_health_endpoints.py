from fastapi import FastAPI
from fastapi.testclient import TestClient

from linkpreview.app.infrastructure.persistence.inmemory.in_memory_metadata_cache import (
    InMemoryMetadataCache,
    NullMetadataCache,
)
from linkpreview.app.routers.health import health_router
from tests.conftest import FakeDatabase


def test_live_is_always_200(test_app):
    client = TestClient(test_app)
    r = client.get("/health/live")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_ready_503_when_components_missing():
    app = FastAPI()
    app.include_router(health_router)
    client = TestClient(app)
    r = client.get("/health/ready")
    assert r.status_code == 503


def test_ready_200_with_cache_ok(test_app):
    test_app.state.database = FakeDatabase(ping_ok=True)
    client = TestClient(test_app)
    r = client.get("/health/ready")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "cache": "ok"}


def test_ready_200_with_cache_degraded_when_db_ping_fails(test_app):
    test_app.state.database = FakeDatabase(ping_ok=False)
    client = TestClient(test_app)
    r = client.get("/health/ready")
    assert r.status_code == 200
    assert r.json()["cache"] == "degraded"


def test_ready_reports_disabled_cache(test_app):
    test_app.state.metadata_cache = NullMetadataCache()
    test_app.state.database = None
    client = TestClient(test_app)
    r = client.get("/health/ready")
    assert r.status_code == 200
    assert r.json()["cache"] == "disabled"


def test_ready_inmemory_cache_without_database_is_ok(test_app):
    test_app.state.metadata_cache = InMemoryMetadataCache()
    test_app.state.database = None
    client = TestClient(test_app)
    r = client.get("/health/ready")
    assert r.json() == {"status": "ok", "cache": "ok"}

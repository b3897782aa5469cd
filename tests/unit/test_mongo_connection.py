import pytest

from linkpreview.app.config.settings import Settings
from linkpreview.app.infrastructure.persistence.mongo.mongo_connection import MongoConnection


class FakeAdmin:
    def __init__(self, failures: int) -> None:
        self._failures = failures
        self.pings = 0

    async def command(self, name: str) -> dict:
        assert name == "ping"
        self.pings += 1
        if self.pings <= self._failures:
            raise ConnectionError("server selection timeout")
        return {"ok": 1}


class FakeMotorClient:
    def __init__(self, failures: int = 0) -> None:
        self.admin = FakeAdmin(failures)
        self.closed = False

    def close(self) -> None:
        self.closed = True


def _settings(attempts: int = 3) -> Settings:
    return Settings(
        CACHE_BACKEND="mongo",
        DATABASE_URI="mongodb://db:27017",
        INITIAL_BACKOFF_SECONDS=0.0,
        MAX_BACKOFF_SECONDS=0.0,
        MAX_CONNECTION_ATTEMPTS=attempts,
    )


def _connection(client: FakeMotorClient, attempts: int = 3) -> MongoConnection:
    connection = MongoConnection(_settings(attempts))
    connection._create_client = lambda: client
    return connection


@pytest.mark.asyncio
async def test_connect_retries_until_ping_succeeds():
    client = FakeMotorClient(failures=2)
    connection = _connection(client)

    await connection.connect()

    assert connection.ready
    assert client.admin.pings == 3
    assert await connection.ping() is True


@pytest.mark.asyncio
async def test_connect_raises_after_last_attempt_and_keeps_client():
    client = FakeMotorClient(failures=5)
    connection = _connection(client, attempts=2)

    with pytest.raises(ConnectionError):
        await connection.connect()

    assert not connection.ready
    assert connection.client is client


@pytest.mark.asyncio
async def test_ping_false_when_not_connected():
    connection = MongoConnection(_settings())
    assert await connection.ping() is False
    with pytest.raises(RuntimeError):
        connection.client


@pytest.mark.asyncio
async def test_close_closes_client():
    client = FakeMotorClient()
    connection = _connection(client)
    await connection.connect()

    await connection.close()

    assert client.closed
    assert not connection.ready
    assert await connection.ping() is False


def test_metadata_collection_uses_configured_names():
    class Indexable:
        def __init__(self) -> None:
            self.keys: list[str] = []

        def __getitem__(self, key: str) -> "Indexable":
            self.keys.append(key)
            return self

    client = Indexable()
    connection = MongoConnection(_settings())
    connection._client = client

    assert connection.metadata_collection is client
    assert client.keys == ["link_preview", "meta_cache"]

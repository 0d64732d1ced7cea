"""
Lazy, cached MongoDB connection tests
"""

import asyncio

import pytest

from database import mongo_connection as mongo_module
from database.mongo_connection import ConnectionState, MongoConnection


class FakeAdmin:
    def __init__(self, client):
        self.client = client

    async def command(self, name):
        assert name == "ping"
        # Yield so concurrent callers pile up on the lock
        await asyncio.sleep(0.01)
        if self.client.fail_ping:
            raise ConnectionError("server selection timeout")
        return {"ok": 1}


class FakeAsyncMongoClient:
    instances = []
    fail_next = False

    def __init__(self, uri, **options):
        self.uri = uri
        self.options = options
        self.closed = False
        self.fail_ping = FakeAsyncMongoClient.fail_next
        self.admin = FakeAdmin(self)
        FakeAsyncMongoClient.instances.append(self)

    def __getitem__(self, name):
        return ("database", name)

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_client(monkeypatch):
    FakeAsyncMongoClient.instances = []
    FakeAsyncMongoClient.fail_next = False
    monkeypatch.setattr(mongo_module, "AsyncMongoClient", FakeAsyncMongoClient)
    return FakeAsyncMongoClient


class TestMongoConnection:

    @pytest.mark.asyncio
    async def test_first_use_connects_with_pool_options(self, fake_client):
        connection = MongoConnection(uri="mongodb://example:27017", db_name="tutorial_db")
        assert connection.state == ConnectionState.UNINITIALIZED

        db = await connection.get_database()

        assert db == ("database", "tutorial_db")
        assert connection.state == ConnectionState.READY
        client = fake_client.instances[0]
        assert client.options == {
            "maxPoolSize": 10,
            "serverSelectionTimeoutMS": 5000,
            "socketTimeoutMS": 45000,
        }

    @pytest.mark.asyncio
    async def test_handle_is_cached(self, fake_client):
        connection = MongoConnection(uri="mongodb://example:27017", db_name="tutorial_db")

        first = await connection.get_database()
        second = await connection.get_database()

        assert first is second
        assert len(fake_client.instances) == 1

    @pytest.mark.asyncio
    async def test_concurrent_first_use_opens_one_connection(self, fake_client):
        connection = MongoConnection(uri="mongodb://example:27017", db_name="tutorial_db")

        handles = await asyncio.gather(*[connection.get_database() for _ in range(10)])

        assert len(fake_client.instances) == 1
        assert all(handle is handles[0] for handle in handles)

    @pytest.mark.asyncio
    async def test_failed_connect_resets_state_and_can_retry(self, fake_client):
        connection = MongoConnection(uri="mongodb://example:27017", db_name="tutorial_db")
        fake_client.fail_next = True

        with pytest.raises(ConnectionError):
            await connection.get_database()

        assert connection.state == ConnectionState.UNINITIALIZED
        assert fake_client.instances[0].closed

        fake_client.fail_next = False
        await connection.get_database()
        assert connection.state == ConnectionState.READY
        assert len(fake_client.instances) == 2

    @pytest.mark.asyncio
    async def test_missing_uri_is_a_configuration_error(self, fake_client, monkeypatch):
        monkeypatch.setattr(mongo_module.settings, "MONGODB_URI", None)
        connection = MongoConnection()

        with pytest.raises(ValueError):
            await connection.get_database()

        assert fake_client.instances == []
        assert connection.state == ConnectionState.UNINITIALIZED

    @pytest.mark.asyncio
    async def test_close_returns_to_uninitialized(self, fake_client):
        connection = MongoConnection(uri="mongodb://example:27017", db_name="tutorial_db")
        await connection.get_database()

        await connection.close()

        assert fake_client.instances[0].closed
        assert connection.state == ConnectionState.UNINITIALIZED

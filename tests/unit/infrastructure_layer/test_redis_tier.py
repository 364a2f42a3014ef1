"""
Unit Tests for RedisTier

Uses a mocked redis.asyncio client: tests cover command mapping, error
wrapping and the connect retry policy, not a live server.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from hotel_search.core.exceptions import CacheConnectionError, CacheKeyError
from hotel_search.infrastructure.cache.redis_tier import RedisTier, substring_glob


def make_client(keys=()):
    client = MagicMock()
    client.ping = AsyncMock(return_value=True)
    client.get = AsyncMock(return_value=None)
    client.setex = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=len(keys))
    client.flushdb = AsyncMock(return_value=True)
    client.aclose = AsyncMock()

    async def scan_iter(match=None, count=None):
        for key in keys:
            yield key

    client.scan_iter = MagicMock(side_effect=scan_iter)
    return client


@pytest.fixture
def client():
    return make_client()


@pytest.fixture
async def tier(client):
    tier = RedisTier("redis://localhost:6379/0", client=client, retry_max_delay=0.01)
    await tier.connect()
    return tier


@pytest.mark.unit
class TestSubstringGlob:
    def test_wraps_pattern(self):
        assert substring_glob("search") == "*search*"

    def test_escapes_glob_metacharacters(self):
        assert substring_glob("a*b?[c]") == r"*a\*b\?\[c\]*"


@pytest.mark.unit
class TestRedisTierConnection:
    @pytest.mark.asyncio
    async def test_connect_pings(self, tier, client):
        client.ping.assert_awaited_once()
        assert tier.is_connected()

    @pytest.mark.asyncio
    async def test_connect_retries_then_raises(self):
        client = make_client()
        client.ping = AsyncMock(side_effect=RedisConnectionError("refused"))
        tier = RedisTier("redis://localhost:6379/0", client=client, connect_retries=2, retry_max_delay=0.01)

        with pytest.raises(CacheConnectionError):
            await tier.connect()

        assert client.ping.await_count == 2
        assert not tier.is_connected()

    @pytest.mark.asyncio
    async def test_connect_recovers_on_second_attempt(self):
        client = make_client()
        client.ping = AsyncMock(side_effect=[RedisConnectionError("refused"), True])
        tier = RedisTier("redis://localhost:6379/0", client=client, connect_retries=3, retry_max_delay=0.01)

        await tier.connect()

        assert tier.is_connected()

    @pytest.mark.asyncio
    async def test_disconnect_closes_client(self, tier, client):
        await tier.disconnect()

        client.aclose.assert_awaited_once()
        assert not tier.is_connected()

    @pytest.mark.asyncio
    async def test_operations_before_connect_raise(self):
        tier = RedisTier("redis://localhost:6379/0")

        with pytest.raises(CacheConnectionError):
            await tier.get("k")


@pytest.mark.unit
class TestRedisTierOperations:
    @pytest.mark.asyncio
    async def test_get(self, tier, client):
        client.get.return_value = "payload"

        assert await tier.get("booking:details:1") == "payload"
        client.get.assert_awaited_once_with("booking:details:1")

    @pytest.mark.asyncio
    async def test_setex_passes_ttl(self, tier, client):
        await tier.setex("booking:details:1", 1800, "payload")

        client.setex.assert_awaited_once_with("booking:details:1", 1800, "payload")

    @pytest.mark.asyncio
    async def test_delete_without_keys_is_noop(self, tier, client):
        assert await tier.delete() == 0
        client.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_keys_scans_with_substring_glob(self):
        client = make_client(keys=["booking:search:a", "booking:search:b"])
        tier = RedisTier("redis://localhost:6379/0", client=client)
        await tier.connect()

        keys = await tier.keys("search")

        assert keys == ["booking:search:a", "booking:search:b"]
        client.scan_iter.assert_called_once_with(match="*search*", count=500)

    @pytest.mark.asyncio
    async def test_flush_uses_flushdb(self, tier, client):
        await tier.flush()

        client.flushdb.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_redis_errors_are_wrapped(self, tier, client):
        client.get.side_effect = RedisError("connection reset")
        client.setex.side_effect = RedisError("connection reset")

        with pytest.raises(CacheKeyError):
            await tier.get("k")
        with pytest.raises(CacheKeyError):
            await tier.setex("k", 60, "v")


@pytest.mark.unit
class TestRedisTierHealth:
    @pytest.mark.asyncio
    async def test_healthy(self, tier):
        health = await tier.health_check()

        assert health == {"status": "healthy", "connected": True, "ping": True}

    @pytest.mark.asyncio
    async def test_unhealthy_when_ping_fails(self, tier, client):
        client.ping.side_effect = RedisError("down")

        health = await tier.health_check()

        assert health["status"] == "unhealthy"
        assert health["ping"] is False

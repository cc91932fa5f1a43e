"""
Integration tests for Redis cache adapter.

Requires Redis running on localhost:6379
Skip tests if Redis is not available.
"""

import pytest

redis_asyncio = pytest.importorskip("redis.asyncio")

from pettime_client.adapters.redis_cache import RedisCacheAdapter  # noqa: E402

PREFIX = "test:pettime:"


async def _adapter():
    client = redis_asyncio.Redis(host="localhost", port=6379, decode_responses=True)
    try:
        await client.ping()
    except (OSError, redis_asyncio.ConnectionError):
        await client.aclose()
        pytest.skip("Redis not available")
    return client, RedisCacheAdapter(redis_client=client, prefix=PREFIX)


@pytest.mark.asyncio
async def test_set_get_remove():
    """Test cache round trip in Redis."""
    client, cache = await _adapter()
    try:
        await cache.set("access_token", "at-1")
        assert await cache.get("access_token") == "at-1"
        assert await client.get(f"{PREFIX}access_token") == "at-1"

        await cache.remove_many(["user", "access_token", "refresh_token"])
        assert await cache.get("access_token") is None
    finally:
        async for key in client.scan_iter(f"{PREFIX}*"):
            await client.delete(key)
        await cache.close()


@pytest.mark.asyncio
async def test_prefix_isolation():
    """Test two prefixes do not see each other's keys."""
    client, cache = await _adapter()
    other = RedisCacheAdapter(redis_client=client, prefix=f"{PREFIX}other:")
    try:
        await cache.set("user", "{}")
        assert await other.get("user") is None
    finally:
        async for key in client.scan_iter(f"{PREFIX}*"):
            await client.delete(key)
        await cache.close()

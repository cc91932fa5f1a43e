"""
Redis Cache Adapter - Redis-backed persistent session cache.
"""

from typing import Iterable, List, Optional

from pettime_client.ports.cache_port import KeyValueCachePort


class RedisCacheAdapter(KeyValueCachePort):
    """
    Redis-backed key-value cache.

    Values are stored as plain strings under a configurable prefix so several
    clients (or users) can share one Redis database.
    """

    def __init__(
        self,
        redis_client=None,
        redis_url: str = "redis://localhost:6379/0",
        prefix: str = "pettime:",
    ):
        """
        Initialize Redis cache adapter.

        Args:
            redis_client: redis.asyncio.Redis instance (created lazily if None)
            redis_url: URL used when no client is supplied
            prefix: Key prefix
        """
        self._redis = redis_client
        self._redis_url = redis_url
        self._prefix = prefix

    def _get_redis(self):
        """Lazy load Redis client."""
        if self._redis is None:
            try:
                import redis.asyncio as redis
            except ImportError:
                raise ImportError("redis package required: pip install redis")
            self._redis = redis.Redis.from_url(self._redis_url, decode_responses=True)
        return self._redis

    def _key(self, key: str) -> str:
        """Generate Redis key."""
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> Optional[str]:
        value = await self._get_redis().get(self._key(key))
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        await self._get_redis().set(self._key(key), value)

    async def remove_many(self, keys: Iterable[str]) -> None:
        redis_keys: List[str] = [self._key(key) for key in keys]
        if redis_keys:
            await self._get_redis().delete(*redis_keys)

    async def close(self) -> None:
        """Close the underlying connection pool, if one was opened."""
        if self._redis is not None:
            await self._redis.aclose()

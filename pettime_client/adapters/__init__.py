"""
Adapters - Implementations of ports.

Gateway:
- HTTPGatewayAdapter: httpx REST client for the PetTime API

Session cache:
- MemoryCacheAdapter: In-memory cache (testing, ephemeral sessions)
- RedisCacheAdapter: Redis-backed persistent cache
"""

from pettime_client.adapters.http_gateway import HTTPGatewayAdapter
from pettime_client.adapters.memory_cache import MemoryCacheAdapter
from pettime_client.adapters.redis_cache import RedisCacheAdapter

__all__ = [
    "HTTPGatewayAdapter",
    "MemoryCacheAdapter",
    "RedisCacheAdapter",
]

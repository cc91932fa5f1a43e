"""
PetTime Client - The application context holding both stores.

Built once at process start and passed to whatever needs session or pet
state, instead of reaching for module-level singletons.
"""

from typing import Optional

from pettime_client.adapters.http_gateway import HTTPGatewayAdapter
from pettime_client.adapters.memory_cache import MemoryCacheAdapter
from pettime_client.adapters.redis_cache import RedisCacheAdapter
from pettime_client.config import ClientConfig
from pettime_client.ports.cache_port import KeyValueCachePort
from pettime_client.ports.gateway_port import ApiGatewayPort
from pettime_client.store.pet_store import PetStore
from pettime_client.store.session_store import SessionStore


class PetTimeClient:
    """
    High-level client combining the session and pet stores.

    Example:
        from pettime_client import PetTimeClient, ClientConfig, LoginRequest

        async with PetTimeClient.from_config(ClientConfig.from_env()) as client:
            await client.start()
            if not client.session.state.is_authenticated:
                await client.session.login(LoginRequest("alice@example.com", "pw"))
            await client.pets.fetch_pets()
    """

    def __init__(self, gateway: ApiGatewayPort, cache: KeyValueCachePort):
        """
        Initialize client with adapters.

        Args:
            gateway: Remote API adapter
            cache: Persistent session cache adapter
        """
        self._gateway = gateway
        self._cache = cache
        self.session = SessionStore(gateway=gateway, cache=cache)
        self.pets = PetStore(gateway=gateway)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "PetTimeClient":
        """
        Build the default adapter stack for a config.

        Uses Redis for the session cache when redis_url is set, an in-memory
        cache otherwise.
        """
        if config.redis_url:
            cache: KeyValueCachePort = RedisCacheAdapter(
                redis_url=config.redis_url, prefix=config.cache_prefix
            )
        else:
            cache = MemoryCacheAdapter()
        gateway = HTTPGatewayAdapter(base_url=config.api_url, cache=cache, timeout=config.timeout)
        return cls(gateway=gateway, cache=cache)

    async def start(self) -> None:
        """Restore the cached session. Run once at process start."""
        await self.session.load_user()

    async def logout(self) -> None:
        """Log out and forget the previous user's pets."""
        await self.session.logout()
        self.pets.reset()

    async def aclose(self) -> None:
        """Release network resources held by the adapters."""
        close = getattr(self._gateway, "aclose", None)
        if close is not None:
            await close()
        close = getattr(self._cache, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "PetTimeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

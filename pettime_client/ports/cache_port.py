"""
Cache Port - Interface for the persistent key-value session cache.

Implementations:
- MemoryCacheAdapter: In-process dict (testing, ephemeral sessions)
- RedisCacheAdapter: Redis-backed cache
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

USER_KEY = "user"
ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"

SESSION_KEYS = (USER_KEY, ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY)


class KeyValueCachePort(ABC):
    """Port: Persist session artifacts as string values."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Cache key

        Returns:
            Stored string, None if absent
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Args:
            key: Cache key
            value: String to store
        """
        pass

    @abstractmethod
    async def remove_many(self, keys: Iterable[str]) -> None:
        """
        Remove several keys. Missing keys are ignored.

        Args:
            keys: Keys to remove
        """
        pass

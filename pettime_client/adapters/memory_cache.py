"""
Memory Cache Adapter - In-process key-value cache.
"""

from typing import Dict, Iterable, Optional

from pettime_client.ports.cache_port import KeyValueCachePort


class MemoryCacheAdapter(KeyValueCachePort):
    """
    Dict-backed cache.

    WARNING: Values are lost when the process exits, so sessions are not
    restored across restarts. Use RedisCacheAdapter for that.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        """
        Initialize in-memory storage.

        Args:
            initial: Optional pre-populated entries
        """
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def keys(self):
        """Currently stored keys (inspection helper)."""
        return set(self._data)

"""
Client Configuration - Settings read from the environment.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_URL = "http://localhost:8080/api/v1"


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection settings for PetTimeClient.

    Attributes:
        api_url: API root including the version prefix
        timeout: HTTP timeout in seconds
        cache_prefix: Key prefix for the persistent session cache
        redis_url: Redis URL; None keeps the session in memory only
    """
    api_url: str = DEFAULT_API_URL
    timeout: float = 10.0
    cache_prefix: str = "pettime:"
    redis_url: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        prefix: str = "PETTIME_",
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ClientConfig":
        """
        Build a config from environment variables.

        Reads {prefix}API_URL, {prefix}TIMEOUT, {prefix}CACHE_PREFIX and
        {prefix}REDIS_URL. Unset variables keep their defaults.

        Raises:
            ValueError: If TIMEOUT is not a positive number
        """
        env = os.environ if environ is None else environ
        timeout_raw = env.get(f"{prefix}TIMEOUT")
        timeout = cls.timeout
        if timeout_raw:
            timeout = float(timeout_raw)
            if timeout <= 0:
                raise ValueError(f"{prefix}TIMEOUT must be positive, got {timeout_raw!r}")

        return cls(
            api_url=env.get(f"{prefix}API_URL") or DEFAULT_API_URL,
            timeout=timeout,
            cache_prefix=env.get(f"{prefix}CACHE_PREFIX") or cls.cache_prefix,
            redis_url=env.get(f"{prefix}REDIS_URL") or None,
        )

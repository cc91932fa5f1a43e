"""
Ports - Interfaces for the remote API and the session cache.

Hexagonal architecture: These define WHAT the stores need, not HOW.
Adapters provide the HOW.
"""

from pettime_client.ports.gateway_port import ApiGatewayPort
from pettime_client.ports.cache_port import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    SESSION_KEYS,
    USER_KEY,
    KeyValueCachePort,
)

__all__ = [
    "ApiGatewayPort",
    "KeyValueCachePort",
    "ACCESS_TOKEN_KEY",
    "REFRESH_TOKEN_KEY",
    "SESSION_KEYS",
    "USER_KEY",
]

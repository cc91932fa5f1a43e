"""
Shared fixtures.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from pettime_client.adapters.memory_cache import MemoryCacheAdapter
from pettime_client.domain.pet import Pet
from pettime_client.domain.user import AuthResult, AuthTokens, Identity
from pettime_client.ports.gateway_port import ApiGatewayPort

CREATED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def gateway():
    """Gateway double; every port method is an AsyncMock."""
    return AsyncMock(spec=ApiGatewayPort)


@pytest.fixture
def cache():
    return MemoryCacheAdapter()


@pytest.fixture
def make_pet():
    """Factory for Pet instances."""
    def _make(pet_id: str = "p1", name: str = "Rex", **overrides) -> Pet:
        fields = dict(
            id=pet_id,
            user_id="u1",
            pet_type_id="dog",
            name=name,
            created_at=CREATED,
            updated_at=CREATED,
        )
        fields.update(overrides)
        return Pet(**fields)

    return _make


@pytest.fixture
def alice():
    return Identity(
        id="u1",
        email="alice@example.com",
        name="Alice",
        created_at=CREATED,
        updated_at=CREATED,
    )


@pytest.fixture
def auth_result(alice):
    return AuthResult(
        user=alice,
        tokens=AuthTokens(access_token="access-1", refresh_token="refresh-1", expires_in=900),
    )

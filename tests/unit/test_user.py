"""
Unit tests for Identity and token models.
"""

from datetime import datetime, timedelta, timezone

import pytest

from pettime_client.domain.user import AuthProvider, AuthResult, AuthTokens, Identity


def test_identity_json_roundtrip(alice):
    """Test the cached user record survives serialization."""
    restored = Identity.from_json(alice.to_json())
    assert restored == alice


def test_identity_unknown_provider_kept():
    """Test unknown auth providers are preserved verbatim."""
    user = Identity.from_dict({
        "id": "u2",
        "email": "bob@example.com",
        "name": "Bob",
        "auth_provider": "github",
    })
    assert user.auth_provider == "github"
    assert user.provider is None

    apple = Identity(id="u3", email="c@example.com", name="C", auth_provider="apple")
    assert apple.provider is AuthProvider.APPLE


@pytest.mark.parametrize("raw", ["not json", "[]", '{"id": "u1"}', '{"id": "u1", "email": "a", "name": "A", "created_at": "yesterday"}'])
def test_identity_from_json_rejects_corrupt_records(raw):
    """Test corrupt cache entries raise ValueError."""
    with pytest.raises(ValueError):
        Identity.from_json(raw)


def test_tokens_expires_at():
    """Test expiry horizon from expires_in."""
    issued = datetime(2024, 5, 1, tzinfo=timezone.utc)
    tokens = AuthTokens("a", "r", expires_in=900)
    assert tokens.expires_at(issued) == issued + timedelta(seconds=900)
    assert AuthTokens("a", "r").expires_at(issued) is None


def test_auth_result_from_dict():
    """Test parsing the login/register response."""
    result = AuthResult.from_dict({
        "user": {"id": "u1", "email": "a@example.com", "name": "A", "auth_provider": "email"},
        "tokens": {"access_token": "at", "refresh_token": "rt", "expires_in": 3600},
    })
    assert result.user.id == "u1"
    assert result.tokens.refresh_token == "rt"
    assert result.tokens.expires_in == 3600

"""
Unit tests for ClientConfig.
"""

import pytest

from pettime_client.config import DEFAULT_API_URL, ClientConfig


def test_defaults_from_empty_environment():
    """Test defaults apply when nothing is set."""
    config = ClientConfig.from_env(environ={})

    assert config.api_url == DEFAULT_API_URL
    assert config.timeout == 10.0
    assert config.cache_prefix == "pettime:"
    assert config.redis_url is None


def test_reads_prefixed_variables():
    """Test every setting is read from its prefixed variable."""
    config = ClientConfig.from_env(environ={
        "PETTIME_API_URL": "https://api.pettime.app/api/v1",
        "PETTIME_TIMEOUT": "2.5",
        "PETTIME_CACHE_PREFIX": "device42:",
        "PETTIME_REDIS_URL": "redis://cache:6379/1",
    })

    assert config.api_url == "https://api.pettime.app/api/v1"
    assert config.timeout == 2.5
    assert config.cache_prefix == "device42:"
    assert config.redis_url == "redis://cache:6379/1"


def test_custom_prefix():
    """Test a custom variable prefix."""
    config = ClientConfig.from_env(prefix="APP_", environ={"APP_API_URL": "http://x/api/v1"})
    assert config.api_url == "http://x/api/v1"


def test_invalid_timeout():
    """Test a non-positive timeout is rejected."""
    with pytest.raises(ValueError):
        ClientConfig.from_env(environ={"PETTIME_TIMEOUT": "0"})


def test_reads_os_environ(monkeypatch):
    """Test os.environ is used by default."""
    monkeypatch.setenv("PETTIME_API_URL", "http://env/api/v1")
    assert ClientConfig.from_env().api_url == "http://env/api/v1"

"""
Integration tests for HTTPGatewayAdapter against an in-process mock API.
"""

import json

import httpx
import pytest

from pettime_client.adapters.http_gateway import HTTPGatewayAdapter
from pettime_client.adapters.memory_cache import MemoryCacheAdapter
from pettime_client.domain.errors import (
    NotFoundError,
    RequestValidationError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from pettime_client.domain.pet import CreatePetRequest, UpdatePetRequest
from pettime_client.domain.user import LoginRequest
from pettime_client.ports.cache_port import ACCESS_TOKEN_KEY

BASE_URL = "http://api.test/api/v1"

PET = {
    "id": "p1",
    "user_id": "u1",
    "pet_type_id": "dog",
    "name": "Rex",
    "total_xp": 150,
    "level": 2,
    "mood": "happy",
    "streak_days": 1,
    "created_at": "2024-05-01T12:00:00Z",
    "updated_at": "2024-05-01T12:00:00Z",
}

AUTH = {
    "user": {
        "id": "u1",
        "email": "alice@example.com",
        "name": "Alice",
        "auth_provider": "email",
        "created_at": "2024-05-01T12:00:00Z",
        "updated_at": "2024-05-01T12:00:00Z",
    },
    "tokens": {"access_token": "at-1", "refresh_token": "rt-1", "expires_in": 900},
}


def _gateway(handler, cache=None):
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return HTTPGatewayAdapter(base_url=BASE_URL, cache=cache, client=client)


@pytest.mark.asyncio
async def test_login_posts_credentials():
    """Test login request shape and response parsing."""
    captured = {}

    def handler(request):
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        captured["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=AUTH)

    async with _gateway(handler) as gateway:
        result = await gateway.login(LoginRequest("alice@example.com", "secret"))

    assert captured["path"] == "/api/v1/auth/login"
    assert captured["body"] == {"email": "alice@example.com", "password": "secret"}
    assert captured["auth"] is None
    assert result.user.email == "alice@example.com"
    assert result.tokens.access_token == "at-1"


@pytest.mark.asyncio
async def test_authenticated_requests_send_bearer_token():
    """Test the cached access token is attached."""
    cache = MemoryCacheAdapter({ACCESS_TOKEN_KEY: "at-1"})
    seen = []

    def handler(request):
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json=[PET])

    async with _gateway(handler, cache) as gateway:
        pets = await gateway.list_pets()
        await cache.set(ACCESS_TOKEN_KEY, "at-2")
        await gateway.list_pets()

    assert seen == ["Bearer at-1", "Bearer at-2"]
    assert pets[0].id == "p1"
    assert pets[0].level == 2


@pytest.mark.asyncio
async def test_pet_crud_routes():
    """Test create, update, delete hit the expected routes."""
    calls = []

    def handler(request):
        body = json.loads(request.content) if request.content else None
        calls.append((request.method, request.url.path, body))
        if request.method == "DELETE":
            return httpx.Response(204)
        if request.method == "POST":
            return httpx.Response(201, json=PET)
        return httpx.Response(200, json={**PET, "name": "Max"})

    async with _gateway(handler) as gateway:
        created = await gateway.create_pet(CreatePetRequest("dog", "Rex", breed="Beagle"))
        updated = await gateway.update_pet("p1", UpdatePetRequest(name="Max"))
        deleted = await gateway.delete_pet("p1")

    assert calls == [
        ("POST", "/api/v1/pets", {"pet_type_id": "dog", "name": "Rex", "breed": "Beagle"}),
        ("PUT", "/api/v1/pets/p1", {"name": "Max"}),
        ("DELETE", "/api/v1/pets/p1", None),
    ]
    assert created.id == "p1"
    assert updated.name == "Max"
    assert deleted is None


@pytest.mark.asyncio
async def test_stats_unwraps_envelope():
    """Test the {pet, stats} response is reduced to stats."""
    def handler(request):
        assert request.url.path == "/api/v1/pets/p1/stats"
        return httpx.Response(200, json={
            "pet": PET,
            "stats": {"total_activities": 3, "level_progress": 0.25, "xp_to_next_level": 250},
        })

    async with _gateway(handler) as gateway:
        stats = await gateway.get_pet_stats("p1")

    assert stats.total_activities == 3
    assert stats.level_progress == 0.25


@pytest.mark.asyncio
async def test_catalogs():
    """Test pet type and game type catalogs."""
    def handler(request):
        if request.url.path.endswith("/pet-types"):
            return httpx.Response(200, json=[{"id": "dog", "name": "Dog", "config": {"a": 1}}])
        return httpx.Response(200, json=[{
            "id": "walk", "name": "Walk", "supported_pet_types": ["dog"], "enabled": True,
        }])

    async with _gateway(handler) as gateway:
        pet_types = await gateway.list_pet_types()
        game_types = await gateway.list_game_types()

    assert pet_types[0].config == {"a": 1}
    assert game_types[0].supports("dog")


@pytest.mark.asyncio
async def test_refresh_and_logout():
    """Test token refresh and logout bodies."""
    bodies = {}

    def handler(request):
        bodies[request.url.path] = json.loads(request.content)
        if request.url.path.endswith("/refresh"):
            return httpx.Response(200, json={"access_token": "at-2", "refresh_token": "rt-2", "expires_in": 900})
        return httpx.Response(204)

    async with _gateway(handler) as gateway:
        tokens = await gateway.refresh("rt-1")
        await gateway.logout("rt-2")

    assert tokens.refresh_token == "rt-2"
    assert bodies["/api/v1/auth/refresh"] == {"refresh_token": "rt-1"}
    assert bodies["/api/v1/auth/logout"] == {"refresh_token": "rt-2"}


@pytest.mark.asyncio
@pytest.mark.parametrize("status,message,cls", [
    (400, "Invalid pet type", RequestValidationError),
    (401, "Invalid email or password", UnauthorizedError),
    (404, "Pet not found", NotFoundError),
    (500, "Failed to get pet", ServerError),
])
async def test_error_responses_are_classified(status, message, cls):
    """Test status codes become classified errors carrying the server message."""
    def handler(request):
        return httpx.Response(status, json={"error": "whatever", "message": message})

    async with _gateway(handler) as gateway:
        with pytest.raises(cls) as excinfo:
            await gateway.get_pet("p1")

    assert excinfo.value.status_code == status
    assert excinfo.value.server_message == message


@pytest.mark.asyncio
async def test_error_without_json_body():
    """Test a plain-text error still classifies, without a server message."""
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    async with _gateway(handler) as gateway:
        with pytest.raises(ServerError) as excinfo:
            await gateway.list_pets()

    assert excinfo.value.server_message is None


@pytest.mark.asyncio
async def test_connection_failure_is_transport_error():
    """Test network errors become TransportError."""
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _gateway(handler) as gateway:
        with pytest.raises(TransportError):
            await gateway.list_pets()


@pytest.mark.asyncio
async def test_malformed_payload_is_transport_error():
    """Test a success response with the wrong shape."""
    def handler(request):
        return httpx.Response(200, json={"unexpected": True})

    async with _gateway(handler) as gateway:
        with pytest.raises(TransportError):
            await gateway.get_pet("p1")

"""
HTTP Gateway Adapter - Implements ApiGatewayPort over the PetTime REST API.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from pettime_client.domain.errors import TransportError, error_for_status
from pettime_client.domain.pet import (
    CreatePetRequest,
    GameType,
    Pet,
    PetStats,
    PetType,
    UpdatePetRequest,
)
from pettime_client.domain.user import AuthResult, AuthTokens, LoginRequest, RegisterRequest
from pettime_client.ports.cache_port import ACCESS_TOKEN_KEY, KeyValueCachePort
from pettime_client.ports.gateway_port import ApiGatewayPort

logger = logging.getLogger(__name__)


class HTTPGatewayAdapter(ApiGatewayPort):
    """
    httpx-based API client.

    Authenticated requests carry "Authorization: Bearer <access token>",
    read from the session cache on every call so a login, refresh or logout
    is picked up without rebuilding the adapter.

    Example:
        gateway = HTTPGatewayAdapter(
            base_url="http://localhost:8080/api/v1",
            cache=MemoryCacheAdapter(),
        )
        pets = await gateway.list_pets()
    """

    def __init__(
        self,
        base_url: str,
        cache: Optional[KeyValueCachePort] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize HTTP gateway.

        Args:
            base_url: API root, including the version prefix
            cache: Session cache holding the access token
            timeout: Request timeout in seconds
            client: Pre-built httpx.AsyncClient (tests inject a MockTransport)
        """
        self._cache = cache
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HTTPGatewayAdapter":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _headers(self, authenticated: bool) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if authenticated and self._cache is not None:
            token = await self._cache.get(ACCESS_TOKEN_KEY)
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> Any:
        """
        Send a request and decode the JSON response.

        Returns:
            Decoded body, None for empty responses

        Raises:
            TransportError: If no response was received or it was not JSON
            GatewayError: Subclass matching the response status
        """
        headers = await self._headers(authenticated)
        logger.debug("%s %s", method, path)

        try:
            response = await self._client.request(method, path, json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            payload = _decode_error_body(response)
            message = payload.get("message") or payload.get("error") or response.reason_phrase
            logger.debug("%s %s -> %d %s", method, path, response.status_code, message)
            raise error_for_status(response.status_code, message, payload)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"{method} {path} returned invalid JSON") from exc

    # Auth

    async def register(self, request: RegisterRequest) -> AuthResult:
        data = await self._request("POST", "/auth/register", request.to_dict(), authenticated=False)
        return _decode(AuthResult.from_dict, data)

    async def login(self, request: LoginRequest) -> AuthResult:
        data = await self._request("POST", "/auth/login", request.to_dict(), authenticated=False)
        return _decode(AuthResult.from_dict, data)

    async def refresh(self, refresh_token: str) -> AuthTokens:
        data = await self._request(
            "POST", "/auth/refresh", {"refresh_token": refresh_token}, authenticated=False
        )
        # Some deployments wrap the pair as {"tokens": {...}}
        if isinstance(data, dict) and "tokens" in data:
            data = data["tokens"]
        return _decode(AuthTokens.from_dict, data)

    async def logout(self, refresh_token: str) -> None:
        await self._request("POST", "/auth/logout", {"refresh_token": refresh_token})

    # Pets

    async def list_pets(self) -> List[Pet]:
        data = await self._request("GET", "/pets")
        return [_decode(Pet.from_dict, item) for item in data or []]

    async def get_pet(self, pet_id: str) -> Pet:
        data = await self._request("GET", f"/pets/{pet_id}")
        return _decode(Pet.from_dict, data)

    async def create_pet(self, request: CreatePetRequest) -> Pet:
        data = await self._request("POST", "/pets", request.to_dict())
        return _decode(Pet.from_dict, data)

    async def update_pet(self, pet_id: str, request: UpdatePetRequest) -> Pet:
        data = await self._request("PUT", f"/pets/{pet_id}", request.to_dict())
        return _decode(Pet.from_dict, data)

    async def delete_pet(self, pet_id: str) -> None:
        await self._request("DELETE", f"/pets/{pet_id}")

    async def get_pet_stats(self, pet_id: str) -> PetStats:
        data = await self._request("GET", f"/pets/{pet_id}/stats")
        # The endpoint answers {"pet": ..., "stats": ...}
        if isinstance(data, dict) and "stats" in data:
            data = data["stats"]
        return _decode(PetStats.from_dict, data)

    # Catalogs

    async def list_pet_types(self) -> List[PetType]:
        data = await self._request("GET", "/pet-types", authenticated=False)
        return [_decode(PetType.from_dict, item) for item in data or []]

    async def list_game_types(self) -> List[GameType]:
        data = await self._request("GET", "/game-types", authenticated=False)
        return [_decode(GameType.from_dict, item) for item in data or []]


def _decode_error_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _decode(parser, data: Any):
    """Apply a from_dict parser, turning shape errors into TransportError."""
    try:
        return parser(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise TransportError(f"Malformed response payload: {exc!r}") from exc

"""
Gateway Port - Interface for the remote PetTime API.

Implementations:
- HTTPGatewayAdapter: httpx-based REST client

Every method raises a GatewayError subclass on failure.
"""

from abc import ABC, abstractmethod
from typing import List

from pettime_client.domain.user import AuthResult, AuthTokens, LoginRequest, RegisterRequest
from pettime_client.domain.pet import (
    CreatePetRequest,
    GameType,
    Pet,
    PetStats,
    PetType,
    UpdatePetRequest,
)


class ApiGatewayPort(ABC):
    """Port: Request/response operations against the API."""

    # Auth

    @abstractmethod
    async def register(self, request: RegisterRequest) -> AuthResult:
        """
        Create an account.

        Args:
            request: Email, password and display name

        Returns:
            The new user and its tokens

        Raises:
            RequestValidationError: If the server rejects the input
            GatewayError: On any other failure
        """
        pass

    @abstractmethod
    async def login(self, request: LoginRequest) -> AuthResult:
        """
        Exchange credentials for tokens.

        Raises:
            UnauthorizedError: If the credentials are wrong
        """
        pass

    @abstractmethod
    async def refresh(self, refresh_token: str) -> AuthTokens:
        """Exchange a refresh token for a new token pair."""
        pass

    @abstractmethod
    async def logout(self, refresh_token: str) -> None:
        """Revoke a refresh token server-side."""
        pass

    # Pets

    @abstractmethod
    async def list_pets(self) -> List[Pet]:
        pass

    @abstractmethod
    async def get_pet(self, pet_id: str) -> Pet:
        """
        Raises:
            NotFoundError: If the pet does not exist
        """
        pass

    @abstractmethod
    async def create_pet(self, request: CreatePetRequest) -> Pet:
        """
        Create a pet. The returned pet carries its server-assigned id.

        Raises:
            RequestValidationError: If the pet type is invalid
        """
        pass

    @abstractmethod
    async def update_pet(self, pet_id: str, request: UpdatePetRequest) -> Pet:
        """
        Raises:
            NotFoundError: If the pet does not exist
        """
        pass

    @abstractmethod
    async def delete_pet(self, pet_id: str) -> None:
        """
        Raises:
            NotFoundError: If the pet does not exist
        """
        pass

    @abstractmethod
    async def get_pet_stats(self, pet_id: str) -> PetStats:
        pass

    # Catalogs

    @abstractmethod
    async def list_pet_types(self) -> List[PetType]:
        pass

    @abstractmethod
    async def list_game_types(self) -> List[GameType]:
        pass

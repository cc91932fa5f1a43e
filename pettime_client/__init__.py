"""
PetTime Client - Session and pet state for the PetTime API.

Hexagonal architecture: two observable stores talk to the API through a
gateway port and persist the session through a key-value cache port.

Usage:
    from pettime_client import PetTimeClient, ClientConfig
    from pettime_client.domain import LoginRequest, CreatePetRequest

    client = PetTimeClient.from_config(ClientConfig.from_env())
    await client.start()

    # Authenticate
    await client.session.login(LoginRequest("alice@example.com", "secret"))

    # Work with pets
    await client.pets.fetch_pets()
    pet = await client.pets.create_pet(CreatePetRequest("dog", "Rex"))
"""

__version__ = "0.1.0"

from pettime_client.sdk.client import PetTimeClient
from pettime_client.config import ClientConfig
from pettime_client.domain.user import Identity, LoginRequest, RegisterRequest
from pettime_client.domain.pet import CreatePetRequest, Pet, UpdatePetRequest

__all__ = [
    "PetTimeClient",
    "ClientConfig",
    "Identity",
    "LoginRequest",
    "RegisterRequest",
    "CreatePetRequest",
    "Pet",
    "UpdatePetRequest",
]

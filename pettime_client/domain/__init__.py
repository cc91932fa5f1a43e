"""
Domain Models - Pure client-side entities.

No infrastructure dependencies. Domain logic only.
"""

from pettime_client.domain.user import (
    AuthProvider,
    AuthResult,
    AuthTokens,
    Identity,
    LoginRequest,
    RegisterRequest,
)
from pettime_client.domain.pet import (
    CreatePetRequest,
    GameType,
    Mood,
    Pet,
    PetStats,
    PetType,
    UpdatePetRequest,
    calculate_level,
    level_progress,
    mood_for_inactivity,
    xp_for_level,
    xp_to_next_level,
)
from pettime_client.domain.errors import (
    ForbiddenError,
    GatewayError,
    InputValidationError,
    NotFoundError,
    PetTimeError,
    RequestValidationError,
    ServerError,
    TransportError,
    UnauthorizedError,
)

__all__ = [
    "AuthProvider",
    "AuthResult",
    "AuthTokens",
    "Identity",
    "LoginRequest",
    "RegisterRequest",
    "CreatePetRequest",
    "GameType",
    "Mood",
    "Pet",
    "PetStats",
    "PetType",
    "UpdatePetRequest",
    "calculate_level",
    "level_progress",
    "mood_for_inactivity",
    "xp_for_level",
    "xp_to_next_level",
    "ForbiddenError",
    "GatewayError",
    "InputValidationError",
    "NotFoundError",
    "PetTimeError",
    "RequestValidationError",
    "ServerError",
    "TransportError",
    "UnauthorizedError",
]

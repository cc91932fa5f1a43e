"""
User Domain Model - The authenticated actor and its credential tokens.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, Optional

from pettime_client.domain.timestamps import format_timestamp, parse_timestamp, utcnow


class AuthProvider(Enum):
    """Identity providers the API knows about."""
    EMAIL = "email"
    GOOGLE = "google"
    APPLE = "apple"


@dataclass(frozen=True)
class Identity:
    """
    User identity record as returned by the auth endpoints.

    Domain rules:
    - id is opaque and immutable
    - auth_provider is kept verbatim so unknown providers survive a round trip
      through the session cache
    """
    id: str
    email: str
    name: str
    auth_provider: str = AuthProvider.EMAIL.value
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def provider(self) -> Optional[AuthProvider]:
        """Known provider, or None for a provider this client predates."""
        try:
            return AuthProvider(self.auth_provider)
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "avatar_url": self.avatar_url,
            "auth_provider": self.auth_provider,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Identity":
        """
        Deserialize from dict.

        Raises:
            KeyError: If id, email or name is missing
            ValueError: If a timestamp is malformed
        """
        return cls(
            id=str(data["id"]),
            email=data["email"],
            name=data["name"],
            auth_provider=data.get("auth_provider") or AuthProvider.EMAIL.value,
            avatar_url=data.get("avatar_url"),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> "Identity":
        """
        Parse a cached user record.

        Raises:
            ValueError: If the record is not a JSON object with the required fields
        """
        try:
            data = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as exc:
            raise ValueError(f"Cached user record is not JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("Cached user record is not an object")
        try:
            return cls.from_dict(data)
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Cached user record is incomplete: {exc}") from exc


@dataclass(frozen=True)
class AuthTokens:
    """Access/refresh token pair issued on login, registration or refresh."""
    access_token: str
    refresh_token: str
    expires_in: int = 0

    def expires_at(self, issued_at: Optional[datetime] = None) -> Optional[datetime]:
        """
        Absolute expiry of the access token.

        Args:
            issued_at: When the tokens were received (default now)

        Returns:
            Expiry instant, None when the server did not send expires_in
        """
        if self.expires_in <= 0:
            return None
        return (issued_at or utcnow()) + timedelta(seconds=self.expires_in)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthTokens":
        """Deserialize from dict."""
        return cls(
            access_token=data["access_token"],
            refresh_token=data["refresh_token"],
            expires_in=int(data.get("expires_in") or 0),
        )


@dataclass(frozen=True)
class AuthResult:
    """Payload of a successful login or registration."""
    user: Identity
    tokens: AuthTokens

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthResult":
        return cls(
            user=Identity.from_dict(data["user"]),
            tokens=AuthTokens.from_dict(data["tokens"]),
        )


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str

    def to_dict(self) -> Dict[str, Any]:
        return {"email": self.email, "password": self.password}


@dataclass(frozen=True)
class RegisterRequest:
    email: str
    password: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"email": self.email, "password": self.password, "name": self.name}

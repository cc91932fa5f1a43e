"""
Session Store - Authentication state backed by the persistent session cache.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Optional

import jwt

from pettime_client.domain.errors import (
    InputValidationError,
    UnauthorizedError,
    describe_failure,
)
from pettime_client.domain.timestamps import utcnow
from pettime_client.domain.user import (
    AuthResult,
    AuthTokens,
    Identity,
    LoginRequest,
    RegisterRequest,
)
from pettime_client.ports.cache_port import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    SESSION_KEYS,
    USER_KEY,
    KeyValueCachePort,
)
from pettime_client.ports.gateway_port import ApiGatewayPort
from pettime_client.store.observable import ObservableStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    user: Optional[Identity] = None
    is_authenticated: bool = False
    is_loading: bool = False
    error: Optional[str] = None


class SessionStore(ObservableStore[SessionState]):
    """
    Owns the authenticated identity and its tokens.

    Domain rules:
    - is_authenticated is True only while both a user record and an access
      token are held
    - user record, access token and refresh token are persisted and cleared
      together; a partial cache restores as "no session"
    - logout always ends with the cache cleared and the state reset, whatever
      the remote call does

    Example:
        sessions = SessionStore(gateway=gateway, cache=cache)
        await sessions.load_user()
        if not sessions.state.is_authenticated:
            await sessions.login(LoginRequest("alice@example.com", "secret"))
    """

    def __init__(self, gateway: ApiGatewayPort, cache: KeyValueCachePort):
        """
        Initialize session store.

        Args:
            gateway: Remote API
            cache: Persistent key-value cache for session artifacts
        """
        super().__init__(SessionState())
        self._gateway = gateway
        self._cache = cache
        self._token_expires_at: Optional[datetime] = None

    @property
    def token_expires_at(self) -> Optional[datetime]:
        """Access token expiry, None when unknown."""
        return self._token_expires_at

    def is_token_expired(self, now: Optional[datetime] = None, leeway: int = 30) -> bool:
        """
        Check whether the access token is expired (or about to be).

        Args:
            now: Reference instant (default now)
            leeway: Seconds before expiry already counted as expired

        Returns:
            True if expired; False when the expiry is unknown
        """
        if self._token_expires_at is None:
            return False
        return (now or utcnow()) + timedelta(seconds=leeway) >= self._token_expires_at

    async def login(self, request: LoginRequest) -> Identity:
        """
        Log in with email and password.

        Args:
            request: Credentials

        Returns:
            The authenticated user

        Raises:
            InputValidationError: If email or password is empty
            GatewayError: If the API rejects the login
        """
        if not request.email.strip() or not request.password:
            self._reject("Email and password are required")
        return await self._authenticate(
            lambda: self._gateway.login(request), "Login failed"
        )

    async def register(self, request: RegisterRequest) -> Identity:
        """
        Create an account and log in as it.

        Raises:
            InputValidationError: If email, password or name is empty
            GatewayError: If the API rejects the registration
        """
        if not request.email.strip() or not request.password or not request.name.strip():
            self._reject("Email, password and name are required")
        return await self._authenticate(
            lambda: self._gateway.register(request), "Registration failed"
        )

    async def logout(self) -> None:
        """
        Revoke the refresh token (best effort) and destroy the local session.

        Never raises, whether the remote call or the cache fails.
        """
        try:
            refresh_token = await self._cache.get(REFRESH_TOKEN_KEY)
            if refresh_token:
                await self._gateway.logout(refresh_token)
        except Exception as exc:
            logger.warning("Remote logout failed, clearing local session anyway: %s", exc)
        finally:
            await self._clear_session()

    async def load_user(self) -> None:
        """
        Restore the session from the cache at process start.

        A missing or corrupt user record, a missing access token, or an
        unreachable cache restores as unauthenticated. Nothing is raised.
        """
        try:
            raw_user = await self._cache.get(USER_KEY)
            access_token = await self._cache.get(ACCESS_TOKEN_KEY)
        except Exception as exc:
            logger.warning("Session cache unavailable, starting logged out: %s", exc)
            self._commit(is_authenticated=False)
            return

        if not raw_user or not access_token:
            self._commit(is_authenticated=False)
            return

        try:
            user = Identity.from_json(raw_user)
        except ValueError as exc:
            logger.warning("Ignoring corrupt cached user record: %s", exc)
            self._commit(is_authenticated=False)
            return

        self._token_expires_at = _jwt_expiry(access_token)
        self._commit(user=user, is_authenticated=True)

    async def refresh_tokens(self) -> AuthTokens:
        """
        Exchange the cached refresh token for a new token pair.

        On failure the local session is destroyed, since a rejected refresh
        token cannot be used again.

        Returns:
            The new tokens

        Raises:
            UnauthorizedError: If no refresh token is cached
            GatewayError: If the API rejects the refresh
        """
        refresh_token = await self._cache.get(REFRESH_TOKEN_KEY)
        if not refresh_token:
            await self._clear_session()
            raise UnauthorizedError("No refresh token", status_code=None)

        try:
            tokens = await self._gateway.refresh(refresh_token)
        except Exception as exc:
            logger.warning("Token refresh failed, ending session: %s", exc)
            await self._clear_session()
            self._commit(error=describe_failure(exc, "Session expired"))
            raise

        try:
            await self._cache.set(ACCESS_TOKEN_KEY, tokens.access_token)
            await self._cache.set(REFRESH_TOKEN_KEY, tokens.refresh_token)
        except Exception as exc:
            # The old refresh token is already rotated out on the server
            logger.warning("Could not store refreshed tokens, ending session: %s", exc)
            await self._clear_session()
            self._commit(error=describe_failure(exc, "Session expired"))
            raise

        self._token_expires_at = tokens.expires_at() or _jwt_expiry(tokens.access_token)
        return tokens

    def clear_error(self) -> None:
        self._commit(error=None)

    async def _authenticate(
        self,
        call: Callable[[], Awaitable[AuthResult]],
        fallback: str,
    ) -> Identity:
        self._begin()
        try:
            result = await call()
            await self._persist(result)
        except Exception as exc:
            self._settle(error=describe_failure(exc, fallback))
            raise

        self._token_expires_at = (
            result.tokens.expires_at() or _jwt_expiry(result.tokens.access_token)
        )
        self._settle(user=result.user, is_authenticated=True)
        return result.user

    async def _persist(self, result: AuthResult) -> None:
        """Write all three session artifacts, or none of them."""
        try:
            await self._cache.set(USER_KEY, result.user.to_json())
            await self._cache.set(ACCESS_TOKEN_KEY, result.tokens.access_token)
            await self._cache.set(REFRESH_TOKEN_KEY, result.tokens.refresh_token)
        except Exception:
            logger.warning("Session cache write failed, rolling back")
            await self._cache.remove_many(SESSION_KEYS)
            raise

    async def _clear_session(self) -> None:
        """Reset the local session. Cache removal is best effort."""
        try:
            await self._cache.remove_many(SESSION_KEYS)
        except Exception as exc:
            logger.warning("Could not clear session cache: %s", exc)
        self._token_expires_at = None
        self._commit(user=None, is_authenticated=False)

    def _reject(self, message: str) -> None:
        self._commit(error=message)
        raise InputValidationError(message)


def _jwt_expiry(token: str) -> Optional[datetime]:
    """Read the exp claim of an access token without verifying it."""
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return None
    exp = claims.get("exp")
    if exp is None:
        return None
    return datetime.fromtimestamp(int(exp), tz=timezone.utc)

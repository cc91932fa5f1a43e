"""
Errors - Classified failures raised by the gateway and the stores.
"""

from typing import Any, Dict, Optional


class PetTimeError(Exception):
    """Base class for every failure raised by the client core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputValidationError(PetTimeError):
    """Caller input rejected before any gateway call was made."""


class GatewayError(PetTimeError):
    """
    Remote API call failed.

    Attributes:
        message: Human-readable message (server "message" field when present)
        status_code: HTTP status, None when no response was received
        payload: Decoded error body, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload or {}

    @property
    def server_message(self) -> Optional[str]:
        """Message supplied by the server body, None when the body lacks one."""
        message = self.payload.get("message")
        if isinstance(message, str) and message:
            return message
        return None


class TransportError(GatewayError):
    """No usable response (connection refused, timeout, bad JSON)."""


class UnauthorizedError(GatewayError):
    """401 - missing or expired access token."""


class ForbiddenError(GatewayError):
    """403 - resource belongs to another user."""


class NotFoundError(GatewayError):
    """404 - resource does not exist."""


class RequestValidationError(GatewayError):
    """400/422 - server rejected the request body."""


class ServerError(GatewayError):
    """5xx - server-side failure."""


def error_for_status(
    status_code: int,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
) -> GatewayError:
    """
    Build the GatewayError subclass matching an HTTP status.

    Args:
        status_code: HTTP status code
        message: Message to carry
        payload: Decoded error body

    Returns:
        Classified error instance
    """
    if status_code == 401:
        cls = UnauthorizedError
    elif status_code == 403:
        cls = ForbiddenError
    elif status_code == 404:
        cls = NotFoundError
    elif status_code in (400, 422):
        cls = RequestValidationError
    elif status_code >= 500:
        cls = ServerError
    else:
        cls = GatewayError
    return cls(message, status_code=status_code, payload=payload)


def describe_failure(error: Exception, fallback: str) -> str:
    """
    Extract the message a store should expose for a failed operation.

    Server-supplied messages win; input validation messages are used as-is;
    everything else falls back to the operation's generic message.
    """
    if isinstance(error, GatewayError):
        return error.server_message or fallback
    if isinstance(error, InputValidationError):
        return error.message or fallback
    return fallback

"""
Rocket.Chat Auth SDK Error Classes

A single closed error type for every classified failure of a login or
registration exchange, plus the errors that sit outside that taxonomy
(transport failures and bad configuration).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


UNAUTHORIZED_MESSAGE = "Unauthorized"
INVALID_RESPONSE_MESSAGE = "Invalid response: body is not well-formed JSON"


class ErrorKind(str, Enum):
    """Kinds of classified failures."""

    AUTH = "auth"                          # Credentials rejected (401)
    INVALID_RESPONSE = "invalid_response"  # Success status, undecodable body
    API = "api"                            # Server-side rejection


class RocketChatError(Exception):
    """
    Classified failure of an exchange.

    Build instances through the named constructors (``auth``,
    ``invalid_response``, ``api``); each one fills only the fields its kind
    needs. Branch on ``kind``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: int = 0,
        error_type: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def auth(cls) -> "RocketChatError":
        """Credentials were rejected."""
        return cls(ErrorKind.AUTH, UNAUTHORIZED_MESSAGE, status_code=401)

    @classmethod
    def invalid_response(
        cls, cause: BaseException, status_code: int = 200
    ) -> "RocketChatError":
        """The body could not be decoded; ``cause`` is the decoder error."""
        return cls(
            ErrorKind.INVALID_RESPONSE,
            INVALID_RESPONSE_MESSAGE,
            status_code=status_code,
            cause=cause,
        )

    @classmethod
    def api(
        cls,
        message: str,
        error_type: Optional[str] = None,
        status_code: int = 0,
    ) -> "RocketChatError":
        """The server rejected the request."""
        return cls(
            ErrorKind.API,
            message,
            status_code=status_code,
            error_type=error_type,
        )

    @property
    def is_auth(self) -> bool:
        return self.kind is ErrorKind.AUTH

    @property
    def is_invalid_response(self) -> bool:
        return self.kind is ErrorKind.INVALID_RESPONSE

    @property
    def is_api(self) -> bool:
        return self.kind is ErrorKind.API

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "name": self.__class__.__name__,
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "error_type": self.error_type,
            "cause": repr(self.cause) if self.cause is not None else None,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(kind={self.kind.value!r}, "
            f"message={self.message!r}, error_type={self.error_type!r})"
        )


class TransportError(Exception):
    """Network failure (connection refused, timeout) or no response at all."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ValueError):
    """Invalid client configuration."""


def is_rocketchat_error(error: Any) -> bool:
    """Check if error is a classified RocketChatError."""
    return isinstance(error, RocketChatError)


def is_auth_error(error: Any) -> bool:
    """Check if error means the credentials were rejected."""
    return isinstance(error, RocketChatError) and error.is_auth

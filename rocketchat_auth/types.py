"""
Rocket.Chat Auth SDK Type Definitions

Credential variants, the registration payload, the values returned by the
server and the narrow collaborator interfaces the client is built on.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable


def _require_str(data: Dict[str, Any], *keys: str) -> str:
    """Return the first present key of ``keys`` as a string, or raise."""
    for key in keys:
        if key in data:
            value = data[key]
            if not isinstance(value, str):
                raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
            return value
    raise KeyError(keys[0])


@dataclass(frozen=True)
class Token:
    """Access token returned by a successful login."""

    user_id: str
    auth_token: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Token":
        """Create from a login response body."""
        if not isinstance(data, dict):
            raise TypeError("login response must be an object")
        # Rocket.Chat wraps the token as {"status": "success", "data": {...}}
        payload = data.get("data", data)
        if not isinstance(payload, dict):
            raise TypeError("login payload must be an object")
        return cls(
            user_id=_require_str(payload, "userId"),
            auth_token=_require_str(payload, "authToken"),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"userId": self.user_id, "authToken": self.auth_token}

    def __repr__(self) -> str:
        return f"Token(user_id={self.user_id!r}, auth_token='***')"


@dataclass(frozen=True)
class UsernamePasswordCredentials:
    """Login with a username."""

    username: str
    password: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for API requests."""
        return {"user": self.username, "password": self.password}


@dataclass(frozen=True)
class EmailPasswordCredentials:
    """Login with an email address."""

    email: str
    password: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for API requests."""
        return {"user": self.email, "password": self.password}


Credentials = Union[UsernamePasswordCredentials, EmailPasswordCredentials]


@dataclass(frozen=True)
class RegistrationRequest:
    """User registration data."""

    email: str
    name: str
    username: str
    password: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for API requests."""
        return {
            "email": self.email,
            "name": self.name,
            "username": self.username,
            "pass": self.password,
        }


@dataclass
class User:
    """User returned by registration. Only ``id`` is guaranteed."""

    id: str
    username: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    active: Optional[bool] = None
    utc_offset: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create from a registration response body."""
        if not isinstance(data, dict):
            raise TypeError("registration response must be an object")
        # Unwrap {"user": {...}, "success": true}; a scalar "user" is a plain field
        payload = data["user"] if isinstance(data.get("user"), dict) else data
        known = {"id", "_id", "username", "name", "status", "active", "utcOffset"}
        return cls(
            id=_require_str(payload, "id", "_id"),
            username=payload.get("username"),
            name=payload.get("name"),
            status=payload.get("status"),
            active=payload.get("active"),
            utc_offset=payload.get("utcOffset"),
            extra={k: v for k, v in payload.items() if k not in known},
        )


@dataclass(frozen=True)
class HttpRequest:
    """A single request handed to the transport."""

    method: str
    path: str
    json: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class HttpResponse:
    """Raw status and body as received by the transport."""

    status_code: int
    body: bytes = b""


@runtime_checkable
class Transport(Protocol):
    """HTTP transport interface. No retries, no classification."""

    async def send(self, request: HttpRequest) -> HttpResponse:
        """Send the request; raise TransportError if no response arrives."""
        ...


@runtime_checkable
class TokenRepository(Protocol):
    """Token persistence interface for custom implementations."""

    def get(self) -> Optional[Token]:
        """Get the stored token, if any."""
        ...

    def save(self, token: Token) -> None:
        """Store the token."""
        ...


@dataclass
class ClientConfig:
    """Client configuration options."""

    # Server URL, e.g. https://open.rocket.chat
    base_url: str
    # Request timeout in seconds for the default transport (default: 30)
    timeout: float = 30.0
    # Custom headers for the default transport
    headers: Optional[Dict[str, str]] = None
    # Custom transport (default: HttpxTransport built from the fields above)
    transport: Optional[Transport] = None
    # Custom token storage (default: MemoryTokenRepository)
    token_repository: Optional[TokenRepository] = None
    # Logger for call tracing (default: the "rocketchat_auth" logger)
    logger: Optional[logging.Logger] = None
    # Enable debug logging (default: False)
    debug: bool = False

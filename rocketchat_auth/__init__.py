"""
Rocket.Chat Auth Python SDK

Login and registration against a Rocket.Chat REST API, with every server
response classified into a typed outcome and the access token persisted only
on confirmed success.
"""

from .client import RocketChatClient, create_rocketchat_client
from .types import (
    ClientConfig,
    Token,
    User,
    Credentials,
    UsernamePasswordCredentials,
    EmailPasswordCredentials,
    RegistrationRequest,
    HttpRequest,
    HttpResponse,
    Transport,
    TokenRepository,
)
from .envelope import (
    ResponseEnvelope,
    Success,
    ApiErrorEnvelope,
    DecodeFailure,
    parse_envelope,
)
from .classifier import classify
from .errors import (
    ErrorKind,
    RocketChatError,
    TransportError,
    ConfigurationError,
    is_rocketchat_error,
    is_auth_error,
)
from .storage import MemoryTokenRepository, FileTokenRepository
from .transport import HttpxTransport, InMemoryTransport

__version__ = "0.1.0"
__all__ = [
    # Client
    "RocketChatClient",
    "create_rocketchat_client",
    # Types
    "ClientConfig",
    "Token",
    "User",
    "Credentials",
    "UsernamePasswordCredentials",
    "EmailPasswordCredentials",
    "RegistrationRequest",
    "HttpRequest",
    "HttpResponse",
    "Transport",
    "TokenRepository",
    # Envelopes
    "ResponseEnvelope",
    "Success",
    "ApiErrorEnvelope",
    "DecodeFailure",
    "parse_envelope",
    "classify",
    # Errors
    "ErrorKind",
    "RocketChatError",
    "TransportError",
    "ConfigurationError",
    "is_rocketchat_error",
    "is_auth_error",
    # Storage
    "MemoryTokenRepository",
    "FileTokenRepository",
    # Transports
    "HttpxTransport",
    "InMemoryTransport",
]

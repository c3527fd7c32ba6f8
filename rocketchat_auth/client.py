"""
Rocket.Chat Auth SDK Client

Async client for the login and registration endpoints. Every exchange is a
single request: the response is parsed into an envelope, failures are
classified into a RocketChatError, and a token is persisted only after a
successful login.
"""

import logging
from typing import Any, Callable, Dict, Optional, TypeVar
from urllib.parse import urlparse

from .classifier import classify
from .envelope import Success, parse_envelope
from .errors import ConfigurationError, RocketChatError
from .storage import MemoryTokenRepository
from .transport import HttpxTransport
from .types import (
    ClientConfig,
    Credentials,
    EmailPasswordCredentials,
    HttpRequest,
    RegistrationRequest,
    Token,
    TokenRepository,
    Transport,
    User,
    UsernamePasswordCredentials,
)


logger = logging.getLogger("rocketchat_auth")

T = TypeVar("T")

LOGIN_PATH = "/api/v1/login"
REGISTER_PATH = "/api/v1/users.register"


class RocketChatClient:
    """
    Rocket.Chat Auth Client - asynchronous SDK entry point.

    Collaborators (transport, token repository, logger) come from the
    ClientConfig; anything left unset gets the package default.
    """

    def __init__(self, config: ClientConfig) -> None:
        """Initialize the client."""
        self._validate_config(config)

        self._base_url = config.base_url.rstrip("/")
        self._debug = config.debug
        self._logger = config.logger or logger
        self._token_repository = (
            config.token_repository
            if config.token_repository is not None
            else MemoryTokenRepository()
        )
        # Only the transport built here is closed by close()
        self._own_transport: Optional[HttpxTransport] = None
        self._transport: Transport
        if config.transport is not None:
            self._transport = config.transport
        else:
            self._own_transport = HttpxTransport(self._base_url, config.timeout, config.headers)
            self._transport = self._own_transport

        self._log(f"RocketChatClient initialized for {self._base_url}")

    def _validate_config(self, config: ClientConfig) -> None:
        """Validate configuration."""
        if not config.base_url:
            raise ConfigurationError("base_url is required")
        parsed = urlparse(config.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                "Invalid base_url. Expected an absolute http(s) URL"
            )
        if config.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    def _log(self, message: str, *args: Any) -> None:
        """Log debug message."""
        if self._debug:
            self._logger.debug(f"[RocketChat] {message}", *args)

    @property
    def token_repository(self) -> TokenRepository:
        return self._token_repository

    # =========================================================================
    # Authentication Methods
    # =========================================================================

    async def login(self, username: str, password: str) -> Token:
        """
        Login with username and password.

        Returns:
            The token, already saved to the token repository

        Raises:
            RocketChatError: If the server rejected or garbled the exchange
            TransportError: If no response was received
        """
        return await self._login(UsernamePasswordCredentials(username, password))

    async def login_with_email(self, email: str, password: str) -> Token:
        """Login with email and password. Same behavior as ``login``."""
        return await self._login(EmailPasswordCredentials(email, password))

    async def signup(self, email: str, name: str, username: str, password: str) -> User:
        """
        Register a new user.

        Nothing is persisted; call ``login`` afterwards to get a token.

        Raises:
            RocketChatError: API kind with the server's error type on conflicts
                such as an email or username already in use
        """
        self._log(f"Signup attempt for: {username}")

        payload = await self._exchange(
            REGISTER_PATH,
            RegistrationRequest(email, name, username, password).to_dict(),
        )
        user = self._decode(payload, User.from_dict)

        self._log(f"Signup successful: {user.id}")
        return user

    async def _login(self, credentials: Credentials) -> Token:
        identity = (
            credentials.username
            if isinstance(credentials, UsernamePasswordCredentials)
            else credentials.email
        )
        self._log(f"Login attempt for: {identity}")

        payload = await self._exchange(LOGIN_PATH, credentials.to_dict())
        token = self._decode(payload, Token.from_dict)

        self._token_repository.save(token)

        self._log(f"Login successful: {token.user_id}")
        return token

    # =========================================================================
    # Session State
    # =========================================================================

    def get_token(self) -> Optional[Token]:
        """Get the token currently held by the token repository."""
        return self._token_repository.get()

    def is_authenticated(self) -> bool:
        """Check if a token is stored."""
        return self.get_token() is not None

    # =========================================================================
    # Internal Methods
    # =========================================================================

    async def _exchange(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST ``body`` to ``path`` and return the decoded success payload."""
        response = await self._transport.send(HttpRequest("POST", path, body))

        # A 401 body is never read
        if response.status_code == 401:
            error = RocketChatError.auth()
        else:
            envelope = parse_envelope(response.status_code, response.body)
            if isinstance(envelope, Success):
                return envelope.payload
            error = classify(response.status_code, envelope)

        self._log(f"{path} failed ({error.kind.value}): {error.message}")
        raise error

    def _decode(self, payload: Dict[str, Any], factory: Callable[[Dict[str, Any]], T]) -> T:
        """Build a typed value, treating a wrong shape as an invalid response."""
        try:
            return factory(payload)
        except (KeyError, TypeError, ValueError) as e:
            self._log(f"Malformed success payload: {e!r}")
            raise RocketChatError.invalid_response(e)

    async def close(self) -> None:
        """
        Close the default transport.

        A transport passed in through ClientConfig belongs to the caller and
        is left open.
        """
        if self._own_transport is not None:
            await self._own_transport.aclose()

    async def __aenter__(self) -> "RocketChatClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


# =============================================================================
# Factory Functions
# =============================================================================

def create_rocketchat_client(config: ClientConfig) -> RocketChatClient:
    """Create a new Rocket.Chat auth client."""
    return RocketChatClient(config)

"""
Rocket.Chat Auth SDK Transports

``HttpxTransport`` talks to a real server. ``InMemoryTransport`` replays
scripted status/body pairs and records what was sent, for tests and demos.
"""

import json
import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple, Union

import httpx

from .errors import TransportError
from .types import HttpRequest, HttpResponse


logger = logging.getLogger("rocketchat_auth")


class HttpxTransport:
    """Transport backed by ``httpx.AsyncClient``. Never retries."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._custom_headers = headers or {}
        self._http_client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def send(self, request: HttpRequest) -> HttpResponse:
        """Execute a single HTTP request."""
        url = f"{self._base_url}{request.path}"
        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            **self._custom_headers,
        }

        try:
            response = await self._get_client().request(
                method=request.method,
                url=url,
                headers=headers,
                json=request.json,
            )
        except httpx.TimeoutException:
            raise TransportError("Request timeout", {"timeout": self._timeout, "url": url})
        except httpx.RequestError as e:
            raise TransportError(str(e) or type(e).__name__, {"url": url})

        return HttpResponse(response.status_code, response.content)

    async def aclose(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None


Body = Union[bytes, str, Dict[str, Any], None]


class InMemoryTransport:
    """
    Scripted transport.

    Each ``expect`` call queues one response for a method and path; a
    request consumes the oldest matching entry. A request with nothing
    queued raises TransportError, the same way a dead server would.
    """

    def __init__(self) -> None:
        self._expectations: Deque[Tuple[str, str, HttpResponse]] = deque()
        self.requests: List[HttpRequest] = []

    def expect(self, method: str, path: str, status_code: int, body: Body = None) -> None:
        """Queue a response for the next ``method`` request to ``path``."""
        if isinstance(body, dict):
            raw = json.dumps(body).encode("utf-8")
        elif isinstance(body, str):
            raw = body.encode("utf-8")
        else:
            raw = body or b""
        self._expectations.append((method.upper(), path, HttpResponse(status_code, raw)))

    @property
    def pending(self) -> int:
        """Number of scripted responses not yet consumed."""
        return len(self._expectations)

    async def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        for entry in self._expectations:
            method, path, response = entry
            if method == request.method.upper() and path == request.path:
                self._expectations.remove(entry)
                return response
        logger.debug("No scripted response for %s %s", request.method, request.path)
        raise TransportError(
            f"No response scripted for {request.method} {request.path}",
            {"path": request.path},
        )

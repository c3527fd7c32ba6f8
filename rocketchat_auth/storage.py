"""
Rocket.Chat Auth SDK Token Storage Implementations

Provides storage backends implementing the TokenRepository interface.
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Optional

from .types import Token


logger = logging.getLogger("rocketchat_auth")


class MemoryTokenRepository:
    """In-memory token storage (default, non-persistent)."""

    def __init__(self) -> None:
        self._token: Optional[Token] = None
        self._lock = threading.Lock()

    def get(self) -> Optional[Token]:
        """Get the stored token."""
        with self._lock:
            return self._token

    def save(self, token: Token) -> None:
        """Store the token, replacing any previous one."""
        with self._lock:
            self._token = token


class FileTokenRepository:
    """File-based token storage (persistent across restarts)."""

    def __init__(self, file_path: Optional[str] = None) -> None:
        """
        Initialize file storage.

        Args:
            file_path: Path to token file. Defaults to ~/.rocketchat/token.json
        """
        if file_path:
            self._file_path = Path(file_path)
        else:
            self._file_path = Path.home() / ".rocketchat" / "token.json"

        self._lock = threading.Lock()
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._file_path

    def get(self) -> Optional[Token]:
        """Get the stored token, or None if missing or unreadable."""
        with self._lock:
            if not self._file_path.exists():
                return None
            try:
                with open(self._file_path, "r", encoding="utf-8") as f:
                    return Token.from_dict(json.load(f))
            except (OSError, ValueError, KeyError, TypeError) as e:
                logger.warning("Ignoring unreadable token file %s: %s", self._file_path, e)
                return None

    def save(self, token: Token) -> None:
        """Write the token; the file is readable by the owner only."""
        with self._lock:
            with open(self._file_path, "w", encoding="utf-8") as f:
                json.dump(token.to_dict(), f)
            os.chmod(self._file_path, 0o600)

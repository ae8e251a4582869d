"""Client-side session state and its durable token storage."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_STORAGE_KEY = "authToken"


class TokenStore:
    """Durable key-value storage for the session token, kept in a JSON file."""

    def __init__(self, path: str | Path, key: str = TOKEN_STORAGE_KEY):
        self.path = Path(path)
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable token storage at %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get(self) -> str | None:
        value = self._read().get(self.key)
        return value if isinstance(value, str) and value else None

    def set(self, token: str) -> None:
        data = self._read()
        data[self.key] = token
        self._write(data)

    def remove(self) -> None:
        data = self._read()
        if data.pop(self.key, None) is not None:
            self._write(data)


class ClientSession:
    """Token and profile of the signed-in user.

    Passed explicitly to the API client and the page controller. When a
    store is given, the token survives restarts and is rehydrated here.
    """

    def __init__(self, store: TokenStore | None = None):
        self.store = store
        self.token: str | None = store.get() if store else None
        self.current_user: dict | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def sign_in(self, token: str, user: dict | None) -> None:
        self.token = token
        self.current_user = user
        if self.store:
            self.store.set(token)

    def clear(self) -> None:
        self.token = None
        self.current_user = None
        if self.store:
            self.store.remove()

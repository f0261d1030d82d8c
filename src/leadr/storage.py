"""
Credential store: device fingerprint plus the current access/refresh token pair.

Persists four string entries in a key/value store. The default store is a JSON
file under ``~/.leadr``; ``MemoryStore`` keeps everything in-process.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional, Protocol

from leadr.errors import StorageError

CREDENTIALS_FILE = Path.home() / ".leadr" / "credentials.json"

FINGERPRINT_KEY = "leadr_client_fingerprint"
ACCESS_TOKEN_KEY = "leadr_access_token"
REFRESH_TOKEN_KEY = "leadr_refresh_token"
EXPIRES_AT_KEY = "leadr_token_expires_at"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...
    def save(self) -> None: ...


class MemoryStore:
    """In-process store. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def save(self) -> None:
        pass


class JsonFileStore:
    """Store backed by a single JSON object on disk, rewritten on save()."""

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path else CREDENTIALS_FILE
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            raw = json.loads(self._path.read_text())
        except (OSError, json.JSONDecodeError):
            return {}
        if not isinstance(raw, dict):
            return {}
        return {k: v for k, v in raw.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def save(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(self._data, indent=2))
        except OSError as e:
            raise StorageError(f"Failed to write credentials to {self._path}: {e}") from e


class TokenStorage:
    def __init__(self, store: Optional[KeyValueStore] = None, clock: Callable[[], datetime] = utcnow):
        self._store: KeyValueStore = store if store is not None else JsonFileStore()
        self._clock = clock

    def get_or_create_fingerprint(self) -> str:
        fingerprint = self._store.get(FINGERPRINT_KEY)
        if not fingerprint:
            fingerprint = str(uuid.uuid4())
            self._store.set(FINGERPRINT_KEY, fingerprint)
            self._store.save()
        return fingerprint

    def save_tokens(self, access_token: str, refresh_token: str, expires_at: datetime) -> None:
        self._store.set(ACCESS_TOKEN_KEY, access_token)
        self._store.set(REFRESH_TOKEN_KEY, refresh_token)
        self._store.set(EXPIRES_AT_KEY, _as_utc(expires_at).isoformat())
        self._store.save()

    def get_access_token(self) -> Optional[str]:
        return self._store.get(ACCESS_TOKEN_KEY) or None

    def get_refresh_token(self) -> Optional[str]:
        return self._store.get(REFRESH_TOKEN_KEY) or None

    def get_expires_at(self) -> Optional[datetime]:
        raw = self._store.get(EXPIRES_AT_KEY)
        if not raw:
            return None
        try:
            return _as_utc(datetime.fromisoformat(raw))
        except ValueError:
            return None

    def has_valid_token(self) -> bool:
        access_token = self.get_access_token()
        expires_at = self.get_expires_at()
        if not access_token or expires_at is None:
            return False
        return self._clock() < expires_at

    def is_token_expiring_soon(self, threshold: timedelta) -> bool:
        """True when no expiry is known or it falls within ``threshold`` of now."""
        expires_at = self.get_expires_at()
        if expires_at is None:
            return True
        return self._clock() + threshold >= expires_at

    def clear_tokens(self) -> None:
        self._store.delete(ACCESS_TOKEN_KEY)
        self._store.delete(REFRESH_TOKEN_KEY)
        self._store.delete(EXPIRES_AT_KEY)
        self._store.save()

    def clear_all(self) -> None:
        self._store.delete(FINGERPRINT_KEY)
        self.clear_tokens()

    def now(self) -> datetime:
        return self._clock()


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

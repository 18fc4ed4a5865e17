"""Client-side credential storage.

Credentials live in a small key-value slot store. Two fixed keys are used:

- ``authToken``: the access token attached to every request as a bearer
  credential.
- ``refreshToken``: a mirror of the refresh cookie, so a new process (the
  CLI, for instance) can resume a session without logging in again.

`MemoryTokenStore` keeps slots for the lifetime of one client;
`FileTokenStore` persists them as JSON with owner-only permissions.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

import structlog

logger = structlog.get_logger(__name__)

AUTH_TOKEN_KEY = "authToken"
REFRESH_TOKEN_KEY = "refreshToken"


class TokenStore(ABC):
    """Abstract key-value slot store for client credentials."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove `key`; a missing key is not an error."""
        raise NotImplementedError

    def clear(self) -> None:
        """Drop every credential this client holds."""
        self.delete(AUTH_TOKEN_KEY)
        self.delete(REFRESH_TOKEN_KEY)


class MemoryTokenStore(TokenStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._slots: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value

    def delete(self, key: str) -> None:
        self._slots.pop(key, None)


class FileTokenStore(TokenStore):
    """Slots persisted in a JSON file.

    Every write replaces the file atomically (write to a temporary file in
    the same directory, then rename), and the file is readable by its owner
    only. An unreadable or corrupt file is treated as empty.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read(self) -> Dict[str, str]:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("token_store_unreadable", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("token_store_malformed", path=str(self.path))
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _write(self, slots: Dict[str, str]) -> None:
        self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".tokens-", suffix=".tmp")
        try:
            os.chmod(tmp_path, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(slots, fh)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        slots = self._read()
        slots[key] = value
        self._write(slots)

    def delete(self, key: str) -> None:
        slots = self._read()
        if key in slots:
            del slots[key]
            self._write(slots)

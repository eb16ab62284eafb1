"""
Durable session cache: a device-local key-value slot that survives restarts.

Why: The portal rehydrates the current identity at process start without
asking for credentials again. Only a PII-minimal identity snapshot is stored
(id, name, email, role), never the secret.

Two stores share one small interface (`get`, `set`, `delete`):
- `InMemorySessionCache` for tests and throwaway runs.
- `FileSessionCache` keeps all keys in one JSON object on disk. Each call is a
  single-shot open/read/write/close; an unreadable file counts as empty.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Protocol
import json
import logging
import os

logger = logging.getLogger("portal.identity_access")


class SessionCacheProtocol(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemorySessionCache:
    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileSessionCache:
    """JSON-file backed cache.

    Parameters
    ----------
    path:
        Location of the cache file. Parent directories are created on first write.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("session_cache.read_failed path=%s error=%s", self._path, exc.__class__.__name__)
            return {}
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("session_cache.unparsable path=%s", self._path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _store(self, data: Dict[str, str]) -> None:
        if not data:
            try:
                self._path.unlink()
            except FileNotFoundError:
                pass
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(json.dumps(data, sort_keys=True), encoding="utf-8")
        os.replace(tmp, self._path)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._store(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        data.pop(key)
        self._store(data)


__all__ = ["SessionCacheProtocol", "InMemorySessionCache", "FileSessionCache"]

"""Key-value storage backends shared by the Talea services."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import weakref
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional, Protocol, runtime_checkable

from talea.core.errors import StorageError

_LOGGER = logging.getLogger(__name__)

_REGISTRY_GUARD = threading.Lock()
_PATH_LOCKS: Dict[Path, threading.RLock] = {}
_STORE_LOCKS: "weakref.WeakKeyDictionary[Any, threading.RLock]" = weakref.WeakKeyDictionary()


def _path_lock(path: Path) -> threading.RLock:
    key = path.resolve()
    with _REGISTRY_GUARD:
        lock = _PATH_LOCKS.get(key)
        if lock is None:
            lock = _PATH_LOCKS[key] = threading.RLock()
        return lock


@runtime_checkable
class KeyValueStore(Protocol):
    """String key-value store in the shape of browser local storage."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Fallback store used when no durable path is configured.

    Pass ``backing`` to keep values inside an existing mapping such as
    Streamlit's session state.
    """

    def __init__(self, backing: Optional[MutableMapping[str, str]] = None) -> None:
        self._data: MutableMapping[str, str] = backing if backing is not None else {}

    def get(self, key: str) -> Optional[str]:
        value = self._data.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data.keys())


class JsonFileStore:
    """Durable store that keeps every key in a single JSON document.

    Every call re-reads the document under a lock shared by all stores on
    the same path.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._lock = _path_lock(self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            _LOGGER.warning("Ignoring unreadable store file %s: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            _LOGGER.warning("Ignoring store file %s: expected an object", self._path)
            return {}
        return {str(key): value for key, value in payload.items() if isinstance(value, str)}

    def _flush(self, data: Dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".talea-", dir=self._path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, sort_keys=True)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write {self._path}: {exc}") from exc

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._flush(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key not in data:
                return
            data.pop(key)
            self._flush(data)


def store_lock(store: KeyValueStore) -> threading.RLock:
    """Lock serialising read-modify-write sequences against ``store``.

    Stores exposing a ``lock`` attribute share it; any other store gets one
    lock per instance.
    """

    lock = getattr(store, "lock", None)
    if lock is not None:
        return lock
    with _REGISTRY_GUARD:
        lock = _STORE_LOCKS.get(store)
        if lock is None:
            lock = _STORE_LOCKS[store] = threading.RLock()
        return lock


def read_json(store: KeyValueStore, key: str, default: Any = None) -> Any:
    """Decode a JSON value, falling back to ``default`` when missing or corrupt."""

    raw = store.get(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        _LOGGER.warning("Corrupt persisted value under %r; using default", key)
        return default


def write_json(store: KeyValueStore, key: str, value: Any) -> None:
    store.set(key, json.dumps(value))


__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileStore",
    "KeyValueStore",
    "read_json",
    "store_lock",
    "write_json",
]

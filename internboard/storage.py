"""String-keyed persisted state with JSON-encoded values.

Mirrors browser localStorage: values are strings, callers encode/decode
JSON. Missing or malformed values read back as the caller's default and are
never raised.
"""
from __future__ import annotations

import fcntl
import json
import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from internboard.log import get_logger

log = get_logger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class MemoryStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        op = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(f.fileno(), op)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


class JsonFileStore(KeyValueStore):
    """All keys live in one JSON object on disk.

    Every operation holds a lock on a sidecar ``<name>.lock`` file: shared for
    reads, exclusive for the whole read-modify-write of ``set``/``delete``.
    The data file itself is only ever swapped in whole with ``os.replace``,
    so it is never observed half-written or truncated.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")

    @contextmanager
    def locked(self, exclusive: bool = True) -> Iterator[None]:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.lock_path, "a+", encoding="utf-8") as f:
            _lock(f, exclusive=exclusive)
            try:
                yield
            finally:
                _unlock(f)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        content = self.path.read_text(encoding="utf-8")
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            log.warning("State file %s is not valid JSON (%s) — starting empty", self.path.name, exc)
            return {}
        if not isinstance(data, dict):
            log.warning("State file %s is not an object — starting empty", self.path.name)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except Exception:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        with self.locked(exclusive=False):
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self.locked():
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def delete(self, key: str) -> None:
        with self.locked():
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)


def load_json(store: KeyValueStore, key: str, default: Any) -> Any:
    raw = store.get(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        log.debug("Ignoring malformed value under %r", key)
        return default


def save_json(store: KeyValueStore, key: str, value: Any) -> None:
    store.set(key, json.dumps(value))


def load_key_list(store: KeyValueStore, key: str) -> list[str]:
    """A persisted array of strings; anything else reads as empty."""
    value = load_json(store, key, [])
    if not isinstance(value, list):
        log.debug("Expected a list under %r, got %s", key, type(value).__name__)
        return []
    return list(dict.fromkeys(v for v in value if isinstance(v, str)))

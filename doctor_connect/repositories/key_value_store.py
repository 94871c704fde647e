"""
Key-Value Stores

Async string key-value storage used to persist the doctor session.
Backends raise on I/O failures; SessionStore decides how failures surface.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Minimal async key-value contract (device storage equivalent)."""

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        """Return the stored string for key, or None."""

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store value under key."""

    @abstractmethod
    async def multi_remove(self, keys: Iterable[str]) -> None:
        """Remove every key in keys. Missing keys are ignored."""

    async def remove_item(self, key: str) -> None:
        await self.multi_remove([key])

    async def close(self) -> None:
        """Release backend resources."""


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. Used in tests and as a non-persistent fallback."""

    def __init__(self) -> None:
        self.local_storage: dict[str, str] = {}

    async def get_item(self, key: str) -> str | None:
        logger.debug(f"InMemoryStore: get {key}")
        return self.local_storage.get(key)

    async def set_item(self, key: str, value: str) -> None:
        logger.debug(f"InMemoryStore: set {key}")
        self.local_storage[key] = value

    async def multi_remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            logger.debug(f"InMemoryStore: delete {key}")
            self.local_storage.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Store backed by a single JSON object on disk.

    Every write rewrites the whole file through a temporary sibling and
    an atomic rename, so a crash never leaves a half-written session.
    Reads of a corrupt file raise ValueError. Writes and removals replace it.

    Usage:
        store = JsonFileKeyValueStore(Path("~/.doctor_connect/session.json"))
        await store.set_item("authToken", "abc")
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        content = self.path.read_text(encoding="utf-8")
        if not content.strip():
            return {}
        data = json.loads(content)
        if not isinstance(data, dict):
            raise ValueError(f"Session file {self.path} does not contain a JSON object")
        return data

    def _read_for_update(self) -> dict[str, str] | None:
        """Current contents, or None when the file is unreadable and must be replaced."""
        try:
            return self._read()
        except ValueError as e:
            logger.warning(f"JsonFileStore: replacing unreadable session file {self.path}: {e}")
            return None

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

    def _set(self, key: str, value: str) -> None:
        data = self._read_for_update() or {}
        data[key] = value
        self._write(data)

    def _remove(self, keys: list[str]) -> None:
        data = self._read_for_update()
        if data is None:
            self._write({})
            return
        removed = [key for key in keys if data.pop(key, None) is not None]
        if removed:
            self._write(data)
        logger.debug(f"JsonFileStore: removed {removed} from {self.path}")

    async def get_item(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)

    async def multi_remove(self, keys: Iterable[str]) -> None:
        await asyncio.to_thread(self._remove, list(keys))

"""Key-value stores: an in-memory store and a write cache with ordered sync."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

_GREEN = "\x1b[32m"
_BLUE = "\x1b[34m"
_RESET = "\x1b[0m"


class KVStore(ABC):
    """A mapping from byte keys to byte values."""

    @abstractmethod
    def get(self, key: bytes) -> Optional[bytes]:
        """Return the value stored under key, or None if there is none."""

    @abstractmethod
    def set(self, key: bytes, value: Optional[bytes]) -> None:
        """Store value under key."""


class MemKVStore(KVStore):
    """A store held in a dictionary."""

    def __init__(self) -> None:
        self._items: dict[bytes, Optional[bytes]] = {}

    def get(self, key: bytes) -> Optional[bytes]:
        return self._items.get(bytes(key))

    def set(self, key: bytes, value: Optional[bytes]) -> None:
        self._items[bytes(key)] = value


def legible_bytes(data: Optional[bytes]) -> str:
    """Render bytes with printable characters in green and the rest as blue hex."""
    parts = []
    for b in data or b"":
        if 0x21 <= b < 0x7F:
            parts.append(f"{_GREEN}{chr(b)}{_RESET}")
        else:
            parts.append(f"{_BLUE}{b:02X}{_RESET}")
    return "".join(parts)


class KVCache(KVStore):
    """A cache in front of a store that writes back in a deterministic order.

    Keys are synced in the order they were last set, or first read.
    """

    def __init__(self, store: Optional[KVStore] = None) -> None:
        self._store: KVStore = store if store is not None else MemKVStore()
        self._cache: dict[bytes, Optional[bytes]] = {}
        self._logging = False
        self._log_lines: list[str] = []

    @property
    def store(self) -> KVStore:
        return self._store

    @property
    def log_lines(self) -> list[str]:
        return list(self._log_lines)

    def set_logging(self) -> None:
        self._logging = True

    def clear_log_lines(self) -> None:
        self._log_lines = []

    def reset(self) -> "KVCache":
        self._cache = {}
        return self

    def _log(self, line: str) -> None:
        if self._logging:
            self._log_lines.append(line)

    def set(self, key: bytes, value: Optional[bytes]) -> None:
        key = bytes(key)
        self._log(f"Set {legible_bytes(key)} = {legible_bytes(value)}")
        # Re-inserting moves the key to the back of the sync order.
        self._cache.pop(key, None)
        self._cache[key] = value

    def get(self, key: bytes) -> Optional[bytes]:
        key = bytes(key)
        if key in self._cache:
            value = self._cache[key]
            self._log(f"Get (hit) {legible_bytes(key)} = {legible_bytes(value)}")
            return value
        value = self._store.get(key)
        self._cache[key] = value
        self._log(f"Get (miss) {legible_bytes(key)} = {legible_bytes(value)}")
        return value

    def sync(self) -> None:
        """Write every cached entry to the underlying store, then empty the cache."""
        for key, value in self._cache.items():
            self._store.set(key, value)
        self.reset()
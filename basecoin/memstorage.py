"""In-memory key storage, useful to keep tests away from the filesystem."""

from __future__ import annotations

from .keyinfo import KeyInfo, Storage


class StorageError(Exception):
    """Raised when a key cannot be stored, found or removed."""


class MemStore(Storage):
    """Keys and their info held in a dictionary."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[bytes, KeyInfo]] = {}

    def put(self, name: str, key: bytes, info: KeyInfo) -> None:
        if name in self._entries:
            raise StorageError(f"Key named '{name}' already exists")
        self._entries[name] = (bytes(key), info)

    def get(self, name: str) -> tuple[bytes, KeyInfo]:
        try:
            key, info = self._entries[name]
        except KeyError:
            raise StorageError(f"Key named '{name}' doesn't exist") from None
        return key, info.format()

    def list(self) -> list[KeyInfo]:
        """Info of all keys, in no particular order."""
        return [info.format() for _, info in self._entries.values()]

    def delete(self, name: str) -> None:
        if self._entries.pop(name, None) is None:
            raise StorageError(f"Key named '{name}' doesn't exist")
"""Public information about stored keys, and the storage interface for them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from .keys import PubKey


@dataclass(frozen=True)
class KeyInfo:
    """The public side of a stored key."""

    name: str
    address: bytes = b""
    pub_key: Optional[PubKey] = None

    def format(self) -> "KeyInfo":
        """This info with the address derived from the public key, if known."""
        if self.pub_key is None:
            return self
        return replace(self, address=self.pub_key.address())


def sort_infos(infos: Iterable[KeyInfo]) -> list[KeyInfo]:
    """Infos in alphabetical order of name."""
    return sorted(infos, key=lambda info: info.name)


class Storage(ABC):
    """Where encoded private keys and their public info are kept."""

    @abstractmethod
    def put(self, name: str, key: bytes, info: KeyInfo) -> None:
        """Store a key under name; fails if the name is taken."""

    @abstractmethod
    def get(self, name: str) -> tuple[bytes, KeyInfo]:
        """Return the key and its info stored under name."""

    @abstractmethod
    def list(self) -> list[KeyInfo]:
        """Return the info of every stored key."""

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove the key stored under name."""
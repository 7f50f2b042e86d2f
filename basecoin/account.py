"""Accounts and a write-back cache of accounts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Optional

from .coins import Coins
from .keys import PubKey, read_pub_key
from .wire import Reader, WireError, encode_varint


@dataclass
class Account:
    """A ledger account. The public key may be unknown."""

    pub_key: Optional[PubKey] = None
    sequence: int = 0
    balance: Coins = field(default_factory=Coins)

    def copy(self) -> "Account":
        return replace(self)

    def to_bytes(self) -> bytes:
        pub_key = self.pub_key.to_bytes() if self.pub_key is not None else b"\x00"
        return b"\x01" + pub_key + encode_varint(self.sequence) + Coins(self.balance).to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> Optional["Account"]:
        """Decode an account; an encoded nil account decodes to None."""
        reader = Reader(data)
        marker = reader.read_byte()
        if marker == 0:
            reader.expect_end()
            return None
        if marker != 1:
            raise WireError(f"invalid account marker {marker:#04x}")
        pub_key = read_pub_key(reader)
        sequence = reader.read_varint()
        balance = Coins.read(reader)
        reader.expect_end()
        return cls(pub_key, sequence, balance)

    def __str__(self) -> str:
        return f"Account{{{self.pub_key} {self.sequence} {self.balance}}}"


class AccountGetterSetter(ABC):
    """Anything accounts can be read from and written to by address."""

    @abstractmethod
    def get_account(self, addr: bytes) -> Optional[Account]:
        """Return the account at addr, or None if there is none."""

    @abstractmethod
    def set_account(self, addr: bytes, acc: Optional[Account]) -> None:
        """Store acc at addr."""


class AccountCache(AccountGetterSetter):
    """Caches accounts in front of a state and writes them back in address order."""

    def __init__(self, state: AccountGetterSetter) -> None:
        self._state = state
        self._accounts: dict[bytes, Optional[Account]] = {}

    def get_account(self, addr: bytes) -> Optional[Account]:
        addr = bytes(addr)
        if addr not in self._accounts:
            self._accounts[addr] = self._state.get_account(addr)
        return self._accounts[addr]

    def set_account(self, addr: bytes, acc: Optional[Account]) -> None:
        self._accounts[bytes(addr)] = acc

    def sync(self) -> None:
        """Write all cached accounts, sorted by address, then empty the cache."""
        for addr in sorted(self._accounts):
            self._state.set_account(addr, self._accounts[addr])
        self._accounts = {}
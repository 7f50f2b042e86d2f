"""Coin amounts and sorted multi-denomination coin sets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .wire import Reader, encode_int64, encode_string, encode_varint


@dataclass(frozen=True)
class Coin:
    """An amount of a single denomination."""

    denom: str = ""
    amount: int = 0

    def __str__(self) -> str:
        return f"({self.denom} {self.amount})"

    def to_bytes(self) -> bytes:
        return encode_string(self.denom) + encode_int64(self.amount)

    @classmethod
    def read(cls, reader: Reader) -> "Coin":
        denom = reader.read_string()
        return cls(denom, reader.read_int64())


class Coins(tuple):
    """An immutable list of coins, expected sorted by denomination."""

    def __new__(cls, coins: Iterable[Coin] = ()) -> "Coins":
        return super().__new__(cls, coins)

    def __str__(self) -> str:
        return "[" + " ".join(str(c) for c in self) + "]"

    def is_valid(self) -> bool:
        """True if sorted and free of zero amounts."""
        if not self:
            return True
        if len(self) == 1:
            return self[0].amount != 0
        low_denom = self[0].denom
        return all(c.denom > low_denom and c.amount != 0 for c in self[1:])

    def plus(self, other: Iterable[Coin]) -> "Coins":
        """Merge two sorted coin sets, dropping denominations that sum to zero."""
        a, b = list(self), list(other)
        result: list[Coin] = []
        i = j = 0
        while i < len(a) and j < len(b):
            coin_a, coin_b = a[i], b[j]
            if coin_a.denom < coin_b.denom:
                result.append(coin_a)
                i += 1
            elif coin_a.denom > coin_b.denom:
                result.append(coin_b)
                j += 1
            else:
                total = coin_a.amount + coin_b.amount
                if total != 0:
                    result.append(Coin(coin_a.denom, total))
                i += 1
                j += 1
        result.extend(a[i:])
        result.extend(b[j:])
        return Coins(result)

    def negative(self) -> "Coins":
        return Coins(Coin(c.denom, -c.amount) for c in self)

    def minus(self, other: Iterable[Coin]) -> "Coins":
        return self.plus(Coins(other).negative())

    def is_gte(self, other: Iterable[Coin]) -> bool:
        diff = self.minus(other)
        return not diff or diff.is_positive()

    def is_zero(self) -> bool:
        return len(self) == 0

    def is_equal(self, other: Iterable[Coin]) -> bool:
        return tuple(self) == tuple(other)

    def is_positive(self) -> bool:
        return bool(self) and all(c.amount > 0 for c in self)

    def is_nonnegative(self) -> bool:
        return all(c.amount >= 0 for c in self)

    def to_bytes(self) -> bytes:
        return encode_varint(len(self)) + b"".join(c.to_bytes() for c in self)

    @classmethod
    def read(cls, reader: Reader) -> "Coins":
        count = reader.read_varint()
        if count < 0:
            from .wire import WireError

            raise WireError(f"invalid coin count {count}")
        return cls(Coin.read(reader) for _ in range(count))
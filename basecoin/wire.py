"""Binary encoding primitives for the ledger's wire format.

Variable-length integers are written as a length byte followed by the
big-endian magnitude; a negative value sets the high nibble of the
length byte. Byte strings and text are prefixed by their varint length.
"""

from __future__ import annotations

import struct

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class WireError(ValueError):
    """Raised when data cannot be encoded or decoded."""


def _check_int64(value: int) -> None:
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise WireError(f"value {value} does not fit in 64 bits")


def encode_varint(value: int) -> bytes:
    """Encode an integer as a length-prefixed big-endian varint."""
    _check_int64(value)
    if value == 0:
        return b"\x00"
    magnitude = abs(value)
    body = magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big")
    size = len(body)
    if value < 0:
        size |= 0xF0
    return bytes([size]) + body


def encode_int64(value: int) -> bytes:
    """Encode a signed 64-bit integer as eight big-endian bytes."""
    _check_int64(value)
    return struct.pack(">q", value)


def encode_bytes(data: bytes) -> bytes:
    """Encode a byte string with its varint length prefix."""
    data = bytes(data)
    return encode_varint(len(data)) + data


def encode_string(text: str) -> bytes:
    """Encode text as UTF-8 with its varint length prefix."""
    return encode_bytes(text.encode("utf-8"))


def encode_bool(value: bool) -> bytes:
    """Encode a boolean as a single byte."""
    return b"\x01" if value else b"\x00"


class Reader:
    """Sequential decoder over a byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def _take(self, size: int) -> bytes:
        if size < 0:
            raise WireError(f"invalid length {size}")
        end = self._pos + size
        if end > len(self._data):
            raise WireError("unexpected end of data")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def read_byte(self) -> int:
        return self._take(1)[0]

    def read_bool(self) -> bool:
        value = self.read_byte()
        if value not in (0, 1):
            raise WireError(f"invalid boolean byte {value:#04x}")
        return value == 1

    def read_varint(self) -> int:
        size = self.read_byte()
        negative = bool(size & 0xF0)
        size &= 0x0F
        if size > 8:
            raise WireError("varint is more than 8 bytes long")
        if size == 0:
            if negative:
                raise WireError("varint has negative sign with no value")
            return 0
        magnitude = int.from_bytes(self._take(size), "big")
        return -magnitude if negative else magnitude

    def read_int64(self) -> int:
        return struct.unpack(">q", self._take(8))[0]

    def read_bytes(self) -> bytes:
        return self._take(self.read_varint())

    def read_string(self) -> str:
        raw = self.read_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise WireError("string is not valid UTF-8") from exc

    def read_fixed(self, size: int) -> bytes:
        return self._take(size)

    def expect_end(self) -> None:
        remaining = len(self._data) - self._pos
        if remaining:
            raise WireError(f"{remaining} trailing bytes")
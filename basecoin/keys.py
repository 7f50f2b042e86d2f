"""Public keys and signatures for Ed25519 and secp256k1, with their encodings."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, ClassVar, Optional

from Crypto.Hash import RIPEMD160
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, utils
from nacl import bindings
from nacl.exceptions import BadSignatureError, CryptoError
from nacl.signing import VerifyKey

from .wire import Reader, WireError, encode_bytes

FINGERPRINT_SIZE = 6


class KeyType(IntEnum):
    ED25519 = 0x01
    SECP256K1 = 0x02

    @property
    def label(self) -> str:
        return self.name.lower()


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def _ripemd160(data: bytes) -> bytes:
    return RIPEMD160.new(data).digest()


def fingerprint(data: bytes) -> bytes:
    """First six bytes of data, zero-padded."""
    return bytes(data[:FINGERPRINT_SIZE]).ljust(FINGERPRINT_SIZE, b"\x00")


def _type_from_label(label: Any) -> KeyType:
    for key_type in KeyType:
        if key_type.label == label:
            return key_type
    raise WireError(f"unknown key type {label!r}")


def _hex_from_json(obj: Any) -> tuple[KeyType, bytes]:
    if not isinstance(obj, dict) or "type" not in obj or "data" not in obj:
        raise WireError("expected an object with type and data")
    try:
        raw = bytes.fromhex(obj["data"])
    except (TypeError, ValueError) as exc:
        raise WireError("data is not hex") from exc
    return _type_from_label(obj["type"]), raw


# ---------------------------------------------------------------- signatures


@dataclass(frozen=True)
class Signature:
    """A signature; concrete kinds are the subclasses."""

    data: bytes
    KEY_TYPE: ClassVar[KeyType]

    def _body(self) -> bytes:
        raise NotImplementedError

    def to_bytes(self) -> bytes:
        return bytes([self.KEY_TYPE]) + self._body()

    def is_zero(self) -> bool:
        return len(self.data) == 0

    def to_json(self) -> dict:
        return {"type": self.KEY_TYPE.label, "data": self.data.hex().upper()}

    def __str__(self) -> str:
        return f"/{fingerprint(self.data).hex().upper()}.../"


@dataclass(frozen=True)
class SignatureEd25519(Signature):
    KEY_TYPE: ClassVar[KeyType] = KeyType.ED25519
    SIZE: ClassVar[int] = 64

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) != self.SIZE:
            raise ValueError(f"Ed25519 signature must be {self.SIZE} bytes")

    def _body(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class SignatureSecp256k1(Signature):
    KEY_TYPE: ClassVar[KeyType] = KeyType.SECP256K1

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    def _body(self) -> bytes:
        return encode_bytes(self.data)


def read_signature(reader: Reader) -> Optional[Signature]:
    """Read a type-prefixed signature; a zero type byte means none."""
    tag = reader.read_byte()
    if tag == 0:
        return None
    if tag == KeyType.ED25519:
        return SignatureEd25519(reader.read_fixed(SignatureEd25519.SIZE))
    if tag == KeyType.SECP256K1:
        return SignatureSecp256k1(reader.read_bytes())
    raise WireError(f"unknown signature type {tag:#04x}")


def signature_from_bytes(data: bytes) -> Optional[Signature]:
    reader = Reader(data)
    sig = read_signature(reader)
    reader.expect_end()
    return sig


def signature_from_json(obj: Any) -> Optional[Signature]:
    if obj is None:
        return None
    key_type, raw = _hex_from_json(obj)
    if key_type is KeyType.ED25519:
        return SignatureEd25519(raw)
    return SignatureSecp256k1(raw)


# ---------------------------------------------------------------- public keys


@dataclass(frozen=True)
class PubKey:
    """A public key; concrete kinds are the subclasses."""

    data: bytes
    KEY_TYPE: ClassVar[KeyType]
    SIZE: ClassVar[int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) != self.SIZE:
            raise ValueError(f"{type(self).__name__} must be {self.SIZE} bytes")

    def address(self) -> bytes:
        raise NotImplementedError

    def verify_bytes(self, msg: bytes, sig: Optional[Signature]) -> bool:
        raise NotImplementedError

    def to_bytes(self) -> bytes:
        return bytes([self.KEY_TYPE]) + self.data

    def key_string(self) -> str:
        """Full key bytes in upper-case hex, usable as a map key."""
        return self.data.hex().upper()

    def to_json(self) -> dict:
        return {"type": self.KEY_TYPE.label, "data": self.key_string()}

    def __str__(self) -> str:
        return f"{type(self).__name__}{{{self.key_string()}}}"


@dataclass(frozen=True)
class PubKeyEd25519(PubKey):
    KEY_TYPE: ClassVar[KeyType] = KeyType.ED25519
    SIZE: ClassVar[int] = 32

    def address(self) -> bytes:
        return _ripemd160(bytes([self.KEY_TYPE]) + encode_bytes(self.data))

    def verify_bytes(self, msg: bytes, sig: Optional[Signature]) -> bool:
        if not isinstance(sig, SignatureEd25519):
            return False
        try:
            VerifyKey(self.data).verify(bytes(msg), sig.data)
        except (BadSignatureError, CryptoError, ValueError):
            return False
        return True

    def to_curve25519(self) -> Optional[bytes]:
        """The matching Curve25519 public key, or None if conversion fails."""
        try:
            return bindings.crypto_sign_ed25519_pk_to_curve25519(self.data)
        except (CryptoError, ValueError):
            return None


@dataclass(frozen=True)
class PubKeySecp256k1(PubKey):
    """Compressed secp256k1 point, prefixed with 0x02 or 0x03."""

    KEY_TYPE: ClassVar[KeyType] = KeyType.SECP256K1
    SIZE: ClassVar[int] = 33

    def address(self) -> bytes:
        return _ripemd160(sha256(self.data))

    def verify_bytes(self, msg: bytes, sig: Optional[Signature]) -> bool:
        if not isinstance(sig, SignatureSecp256k1):
            return False
        try:
            key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), self.data)
            key.verify(
                sig.data,
                sha256(bytes(msg)),
                ec.ECDSA(utils.Prehashed(hashes.SHA256())),
            )
        except (InvalidSignature, ValueError):
            return False
        return True


def read_pub_key(reader: Reader) -> Optional[PubKey]:
    """Read a type-prefixed public key; a zero type byte means none."""
    tag = reader.read_byte()
    if tag == 0:
        return None
    if tag == KeyType.ED25519:
        return PubKeyEd25519(reader.read_fixed(PubKeyEd25519.SIZE))
    if tag == KeyType.SECP256K1:
        return PubKeySecp256k1(reader.read_fixed(PubKeySecp256k1.SIZE))
    raise WireError(f"unknown public key type {tag:#04x}")


def pub_key_from_bytes(data: bytes) -> Optional[PubKey]:
    reader = Reader(data)
    key = read_pub_key(reader)
    reader.expect_end()
    return key


def pub_key_from_json(obj: Any) -> Optional[PubKey]:
    if obj is None:
        return None
    key_type, raw = _hex_from_json(obj)
    try:
        if key_type is KeyType.ED25519:
            return PubKeyEd25519(raw)
        return PubKeySecp256k1(raw)
    except ValueError as exc:
        raise WireError(str(exc)) from exc
"""Opaque byte payloads carrying one or several signatures.

Single- and multi-signature payloads share a wire and JSON envelope
that records which kind they are, so either can be read back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .keys import (
    PubKey,
    Signature,
    pub_key_from_json,
    read_pub_key,
    read_signature,
    signature_from_json,
)
from .wire import Reader, WireError, encode_bytes, encode_varint

TYPE_ONE_SIG = 0x01
TYPE_MULTI_SIG = 0x02
NAME_ONE_SIG = "sig"
NAME_MULTI_SIG = "multi"


class SigningError(Exception):
    """Raised when a payload cannot be signed or its signatures do not check out."""


@dataclass(frozen=True)
class Signed:
    """A signature together with the key that made it."""

    sig: Signature
    pub_key: PubKey


def _from_hex(value: Any) -> bytes:
    try:
        return bytes.fromhex(value)
    except (TypeError, ValueError) as exc:
        raise WireError("data is not hex") from exc


def _signed_bytes(signed: Optional[Signed]) -> bytes:
    if signed is None:
        return b"\x00\x00"
    return signed.sig.to_bytes() + signed.pub_key.to_bytes()


def _read_signed(reader: Reader) -> Optional[Signed]:
    sig = read_signature(reader)
    pub_key = read_pub_key(reader)
    if sig is None and pub_key is None:
        return None
    if sig is None or pub_key is None:
        raise WireError("Signature or Key missing")
    return Signed(sig, pub_key)


def _signed_json(signed: Optional[Signed]) -> dict:
    if signed is None:
        return {"Sig": None, "Pubkey": None}
    return {"Sig": signed.sig.to_json(), "Pubkey": signed.pub_key.to_json()}


def _signed_from_json(obj: Any) -> Optional[Signed]:
    if not isinstance(obj, dict):
        raise WireError("expected an object with Sig and Pubkey")
    sig = signature_from_json(obj.get("Sig"))
    pub_key = pub_key_from_json(obj.get("Pubkey"))
    if sig is None and pub_key is None:
        return None
    if sig is None or pub_key is None:
        raise WireError("Signature or Key missing")
    return Signed(sig, pub_key)


@dataclass
class OneSig:
    """Data that may be signed exactly once."""

    data: bytes
    signed: Optional[Signed] = None

    def __post_init__(self) -> None:
        self.data = bytes(self.data)

    def sign_bytes(self) -> bytes:
        return self.data

    def sign(self, pub_key: PubKey, sig: Signature) -> None:
        if pub_key is None or sig is None:
            raise SigningError("Signature or Key missing")
        if self.signed is not None:
            raise SigningError("Transaction can only be signed once")
        self.signed = Signed(sig, pub_key)

    def signers(self) -> list[PubKey]:
        """The signing key, once its signature has been checked."""
        if self.signed is None:
            raise SigningError("Never signed")
        if not self.signed.pub_key.verify_bytes(self.data, self.signed.sig):
            raise SigningError("Signature doesn't match")
        return [self.signed.pub_key]

    def tx_bytes(self) -> bytes:
        return bytes([TYPE_ONE_SIG]) + encode_bytes(self.data) + _signed_bytes(self.signed)

    def to_json(self) -> dict:
        body = {"Data": self.data.hex().upper(), **_signed_json(self.signed)}
        return {"type": NAME_ONE_SIG, "data": body}


@dataclass
class MultiSig:
    """Data that collects any number of signatures."""

    data: bytes
    sigs: list[Signed] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.data = bytes(self.data)

    def sign_bytes(self) -> bytes:
        return self.data

    def sign(self, pub_key: PubKey, sig: Signature) -> None:
        if pub_key is None or sig is None:
            raise SigningError("Signature or Key missing")
        self.sigs.append(Signed(sig, pub_key))

    def signers(self) -> list[PubKey]:
        """All signing keys, in signing order, after checking every signature."""
        if not self.sigs:
            raise SigningError("Never signed")
        for index, signed in enumerate(self.sigs):
            if not signed.pub_key.verify_bytes(self.data, signed.sig):
                raise SigningError(
                    f"Signature {index} doesn't match "
                    f"(key: {signed.pub_key.to_bytes().hex().upper()})"
                )
        return [signed.pub_key for signed in self.sigs]

    def tx_bytes(self) -> bytes:
        return (
            bytes([TYPE_MULTI_SIG])
            + encode_bytes(self.data)
            + encode_varint(len(self.sigs))
            + b"".join(_signed_bytes(signed) for signed in self.sigs)
        )

    def to_json(self) -> dict:
        body = {
            "Data": self.data.hex().upper(),
            "Sigs": [_signed_json(signed) for signed in self.sigs],
        }
        return {"type": NAME_MULTI_SIG, "data": body}


SigTx = Union[OneSig, MultiSig]


def sig_from_bytes(data: bytes) -> SigTx:
    """Decode bytes made by tx_bytes; raises WireError on bad input."""
    reader = Reader(data)
    tag = reader.read_byte()
    if tag == TYPE_ONE_SIG:
        result: SigTx = OneSig(reader.read_bytes(), _read_signed(reader))
    elif tag == TYPE_MULTI_SIG:
        payload = reader.read_bytes()
        count = reader.read_varint()
        if count < 0:
            raise WireError(f"invalid signature count {count}")
        sigs = []
        for _ in range(count):
            signed = _read_signed(reader)
            if signed is None:
                raise WireError("Signature or Key missing")
            sigs.append(signed)
        result = MultiSig(payload, sigs)
    else:
        raise WireError(f"unknown signed payload type {tag:#04x}")
    reader.expect_end()
    return result


def sig_from_json(obj: Any) -> SigTx:
    """Decode the object made by to_json; raises WireError on bad input."""
    if not isinstance(obj, dict) or not isinstance(obj.get("data"), dict):
        raise WireError("expected an object with type and data")
    kind, body = obj.get("type"), obj["data"]
    payload = _from_hex(body.get("Data"))
    if kind == NAME_ONE_SIG:
        return OneSig(payload, _signed_from_json(body))
    if kind == NAME_MULTI_SIG:
        sigs = []
        for item in body.get("Sigs") or []:
            signed = _signed_from_json(item)
            if signed is None:
                raise WireError("Signature or Key missing")
            sigs.append(signed)
        return MultiSig(payload, sigs)
    raise WireError(f"unknown signed payload type {kind!r}")
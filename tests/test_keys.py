import hashlib
import os

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, utils
from nacl.signing import SigningKey

from basecoin.keys import (
    KeyType,
    PubKeyEd25519,
    PubKeySecp256k1,
    SignatureEd25519,
    SignatureSecp256k1,
    fingerprint,
    pub_key_from_bytes,
    pub_key_from_json,
    signature_from_bytes,
    signature_from_json,
)
from basecoin.wire import WireError

_B58 = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def _b58check_payload(text):
    num = 0
    for ch in text:
        num = num * 58 + _B58.index(ch)
    raw = num.to_bytes((num.bit_length() + 7) // 8, "big")
    raw = b"\x00" * (len(text) - len(text.lstrip("1"))) + raw
    return raw[1:-4]


def _ed25519_pair(msg):
    sk = SigningKey.generate()
    return PubKeyEd25519(bytes(sk.verify_key)), SignatureEd25519(sk.sign(msg).signature)


def _secp_pair(msg):
    priv = ec.generate_private_key(ec.SECP256K1())
    pub = priv.public_key().public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
    )
    der = priv.sign(hashlib.sha256(msg).digest(), ec.ECDSA(utils.Prehashed(hashes.SHA256())))
    return PubKeySecp256k1(pub), SignatureSecp256k1(der)


def test_sign_and_validate_ed25519():
    msg = os.urandom(128)
    pub, sig = _ed25519_pair(msg)
    assert pub.verify_bytes(msg, sig)
    mutated = bytearray(sig.data)
    mutated[7] ^= 0x01
    assert not pub.verify_bytes(msg, SignatureEd25519(bytes(mutated)))


def test_sign_and_validate_secp256k1():
    msg = os.urandom(128)
    pub, sig = _secp_pair(msg)
    assert pub.verify_bytes(msg, sig)
    mutated = bytearray(sig.data)
    mutated[3] ^= 0x01
    assert not pub.verify_bytes(msg, SignatureSecp256k1(bytes(mutated)))


def test_cross_algorithm_signature_rejected():
    msg = b"message"
    ed_pub, ed_sig = _ed25519_pair(msg)
    secp_pub, secp_sig = _secp_pair(msg)
    assert not ed_pub.verify_bytes(msg, secp_sig)
    assert not secp_pub.verify_bytes(msg, ed_sig)
    assert not ed_pub.verify_bytes(msg, None)


def test_pub_key_secp256k1_address():
    priv = ec.derive_private_key(
        int("a96e62ed3955e65be32703f12d87b6b5cf26039ecfa948dc5107a495418e5330", 16),
        ec.SECP256K1(),
    )
    pub_bytes = priv.public_key().public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
    )
    assert pub_bytes == bytes.fromhex(
        "02950e1cdfcb133d6024109fd489f734eeb4502418e538c28481f22bce276f248c"
    )
    addr = PubKeySecp256k1(pub_bytes).address()
    assert addr == _b58check_payload("1CKZ9Nx4zgds8tU7nJHotKSDr4a9bYJCa3")


def test_pub_key_ed25519_address():
    pub = pub_key_from_bytes(
        bytes.fromhex("0167D3B5EAF0C0BF6B5A602D359DAECC86A7A74053490EC37AE08E71360587C870")
    )
    assert isinstance(pub, PubKeyEd25519)
    assert pub.address().hex().upper() == "D9B727742AA29FA638DC63D70813C976014C4CE0"


@pytest.mark.parametrize(
    "make, key_type", [(_ed25519_pair, KeyType.ED25519), (_secp_pair, KeyType.SECP256K1)]
)
def test_key_encodings(make, key_type):
    pub, _ = make(b"x")
    binary = pub.to_bytes()
    assert binary[0] == key_type
    assert pub_key_from_bytes(binary) == pub
    js = pub.to_json()
    assert js["type"] == key_type.label
    assert pub_key_from_json(js) == pub


@pytest.mark.parametrize(
    "make, key_type, size",
    [(_ed25519_pair, KeyType.ED25519, 64), (_secp_pair, KeyType.SECP256K1, 0)],
)
def test_signature_encodings(make, key_type, size):
    msg = os.urandom(128)
    pub, sig = make(msg)
    binary = sig.to_bytes()
    if size:
        assert len(binary) == size + 1
    assert binary[0] == key_type
    sig2 = signature_from_bytes(binary)
    assert sig2 == sig
    assert pub.verify_bytes(msg, sig2)
    js = sig.to_json()
    assert js["type"] == key_type.label
    sig3 = signature_from_json(js)
    assert sig3 == sig
    assert pub.verify_bytes(msg, sig3)


def test_nil_encodings():
    assert signature_from_json(None) is None
    assert pub_key_from_json(None) is None
    assert pub_key_from_bytes(b"\x00") is None
    assert signature_from_bytes(b"\x00") is None


def test_equality_depends_on_type():
    data = bytes(33)
    assert PubKeySecp256k1(data) == PubKeySecp256k1(data)
    assert PubKeyEd25519(bytes(32)) != PubKeySecp256k1(data)


def test_bad_inputs_raise():
    with pytest.raises(WireError):
        pub_key_from_bytes(b"\x07" + bytes(32))
    with pytest.raises(WireError):
        pub_key_from_json({"type": "rsa", "data": "00"})
    with pytest.raises(ValueError):
        PubKeyEd25519(bytes(5))


def test_key_string_and_signature_text():
    pub = PubKeyEd25519(bytes(range(32)))
    assert pub.key_string() == bytes(range(32)).hex().upper()
    sig = SignatureSecp256k1(b"\xab\xcd")
    assert fingerprint(sig.data) == b"\xab\xcd" + bytes(4)
    assert str(sig).startswith("/ABCD")
    assert not sig.is_zero()
    assert SignatureSecp256k1(b"").is_zero()


def test_to_curve25519():
    pub, _ = _ed25519_pair(b"x")
    curve = pub.to_curve25519()
    assert len(curve) == 32
    assert curve != pub.data
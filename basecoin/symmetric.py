"""Entropy-mixed random bytes and secret-key symmetric encryption."""

from __future__ import annotations

import hashlib
import os
import threading

from Crypto.Cipher import AES
from nacl.exceptions import CryptoError
from nacl.secret import SecretBox

NONCE_LEN = 24
SECRET_LEN = 32
_OVERHEAD = SecretBox.MACBYTES


class DecryptionError(ValueError):
    """Raised when a ciphertext cannot be decrypted."""


class _RandInfo:
    """OS randomness XORed with an AES-256-CTR stream keyed by mixed seeds."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._seed = bytes(32)
        self._stream = None
        self.mix_entropy(os.urandom(32))

    def mix_entropy(self, seed_bytes: bytes) -> None:
        digest = hashlib.sha256(bytes(seed_bytes)).digest()
        with self._lock:
            self._seed = bytes(a ^ b for a, b in zip(self._seed, digest))
            self._stream = AES.new(
                self._seed,
                AES.MODE_CTR,
                nonce=b"",
                initial_value=os.urandom(AES.block_size),
            )

    def read(self, num_bytes: int) -> bytes:
        with self._lock:
            return self._stream.encrypt(os.urandom(num_bytes))


_rand_info = _RandInfo()


def mix_entropy(seed_bytes: bytes) -> None:
    """Mix extra randomness into the generator; safe to call repeatedly."""
    _rand_info.mix_entropy(seed_bytes)


def crand_bytes(num_bytes: int) -> bytes:
    """Random bytes drawn from the OS and the mixed-in seeds."""
    if num_bytes < 0:
        raise ValueError("num_bytes must not be negative")
    return _rand_info.read(num_bytes)


def crand_hex(num_digits: int) -> str:
    """Lower-case hex string from num_digits // 2 random bytes."""
    return crand_bytes(num_digits // 2).hex()


def _check_secret(secret: bytes) -> bytes:
    secret = bytes(secret)
    if len(secret) != SECRET_LEN:
        raise ValueError(f"Secret must be 32 bytes long, got len {len(secret)}")
    return secret


def encrypt_symmetric(plaintext: bytes, secret: bytes) -> bytes:
    """Encrypt with a 32-byte secret; the output is the nonce then the sealed box."""
    box = SecretBox(_check_secret(secret))
    nonce = crand_bytes(NONCE_LEN)
    return bytes(box.encrypt(bytes(plaintext), nonce))


def decrypt_symmetric(ciphertext: bytes, secret: bytes) -> bytes:
    """Reverse encrypt_symmetric; raises DecryptionError on bad input."""
    box = SecretBox(_check_secret(secret))
    ciphertext = bytes(ciphertext)
    if len(ciphertext) <= _OVERHEAD + NONCE_LEN:
        raise DecryptionError("Ciphertext is too short")
    nonce, sealed = ciphertext[:NONCE_LEN], ciphertext[NONCE_LEN:]
    try:
        return bytes(box.decrypt(sealed, nonce))
    except CryptoError as exc:
        raise DecryptionError("Ciphertext decryption failed") from exc
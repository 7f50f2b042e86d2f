# basecoin

Building blocks for an account-based coin ledger. Accounts hold sorted,
multi-denomination coin balances and Ed25519 or secp256k1 public keys.
Everything has a compact, deterministic binary encoding, so the same value
always produces the same bytes.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `basecoin.wire`: the binary encoding primitives. `encode_varint`,
  `encode_int64`, `encode_bytes`, `encode_string` and `encode_bool` write
  values. `Reader` reads them back with `read_byte`, `read_bool`,
  `read_varint`, `read_int64`, `read_bytes`, `read_string`, `read_fixed` and
  `expect_end`. Malformed data raises `WireError`, which is a subclass of
  `ValueError`.
- `basecoin.coins`: `Coin(denom, amount)` and `Coins`, an immutable tuple of
  coins kept sorted by denomination. It offers `plus`, `minus`, `negative`,
  `is_gte`, `is_equal`, `is_valid`, `is_zero`, `is_positive` and
  `is_nonnegative`, along with `to_bytes` and `read`. `plus` merges two
  sorted sets and drops any denomination whose amounts sum to zero.
- `basecoin.keys`: public keys and signatures.
  - `PubKeyEd25519` (32 bytes) and `PubKeySecp256k1` (33 bytes, compressed)
    provide `address()`, `verify_bytes(msg, sig)`, `key_string()`,
    `to_bytes()` and `to_json()`. `PubKeyEd25519` also provides
    `to_curve25519()`.
  - `SignatureEd25519` and `SignatureSecp256k1` (a DER-encoded signature)
    provide `to_bytes()`, `to_json()` and `is_zero()`.
  - `pub_key_from_bytes`, `pub_key_from_json`, `read_pub_key`,
    `signature_from_bytes`, `signature_from_json` and `read_signature` decode
    keys and signatures. A zero type byte, or JSON `null`, decodes to `None`.
  - `sha256` and `fingerprint` are hash helpers. `fingerprint` returns the
    first six bytes of its input.
- `basecoin.kvstore`: the `KVStore` interface and `MemKVStore`, a store backed
  by a dict. `KVCache` sits in front of another store. Its `sync()` writes
  entries back in the order each key was last set or first read, then empties
  the cache. It can record its reads and writes (`set_logging()`,
  `log_lines`, `clear_log_lines()`) using `legible_bytes`.
- `basecoin.account`: `Account(pub_key, sequence, balance)` provides
  `copy()`, `to_bytes()` and `from_bytes()`. An encoded nil account decodes
  to `None`. `AccountCache` wraps any `AccountGetterSetter`, and its `sync()`
  writes the cached accounts back in sorted address order.
- `basecoin.symmetric`: `encrypt_symmetric(plaintext, secret)` and
  `decrypt_symmetric(ciphertext, secret)` use an XSalsa20-Poly1305 secret box
  with a 32-byte secret. The ciphertext is the 24-byte nonce followed by the
  sealed box. Decryption failures raise `DecryptionError`, and a secret of the
  wrong length raises `ValueError`. Random bytes come from `crand_bytes` and
  `crand_hex`, which mix OS randomness with seeds added through
  `mix_entropy`.
- `basecoin.keyinfo`: `KeyInfo(name, address, pub_key)`. Its `format()` fills
  in the address from the public key. `sort_infos` sorts infos by name, and
  `Storage` is the abstract key-storage interface.
- `basecoin.memstorage`: `MemStore`, an in-memory `Storage`. Its methods are
  `put`, `get`, `list` and `delete`. It raises `StorageError` on a duplicate
  name or a missing name.
- `basecoin.sigtx`: signable wrappers around opaque bytes.
  - `OneSig` accepts exactly one signature. `MultiSig` collects any number.
  - Both provide `sign_bytes()`, `sign(pub_key, sig)`, `signers()` (which
    verifies every signature), `tx_bytes()` and `to_json()`.
  - `sig_from_bytes` and `sig_from_json` read either kind back.
  - Signing problems raise `SigningError`.

## Examples

Coin arithmetic:

```python
from basecoin.coins import Coin, Coins

balance = Coins([Coin("", 1000), Coin("gold", 5)])
fee = Coins([Coin("", 2)])

assert balance.is_valid()
assert balance.is_gte(fee)
print(balance.minus(fee))   # [( 998) (gold 5)]
```

Signing with Ed25519 and wrapping the result:

```python
from nacl.signing import SigningKey

from basecoin.keys import PubKeyEd25519, SignatureEd25519
from basecoin.sigtx import OneSig, sig_from_bytes

signing_key = SigningKey.generate()
pub_key = PubKeyEd25519(bytes(signing_key.verify_key))

payload = OneSig(b"hello")
sig = SignatureEd25519(signing_key.sign(payload.sign_bytes()).signature)
payload.sign(pub_key, sig)

assert payload.signers() == [pub_key]
assert sig_from_bytes(payload.tx_bytes()) == payload
print(pub_key.address().hex())
```

A write cache over an in-memory store:

```python
from basecoin.kvstore import KVCache, MemKVStore

store = MemKVStore()
cache = KVCache(store)
cache.set(b"a", b"1")
assert store.get(b"a") is None
cache.sync()
assert store.get(b"a") == b"1"
```

Encrypting with a shared secret:

```python
from basecoin.keys import sha256
from basecoin.symmetric import decrypt_symmetric, encrypt_symmetric

secret = sha256(b"secret")            # any 32 bytes
ciphertext = encrypt_symmetric(b"sometext", secret)
assert decrypt_symmetric(ciphertext, secret) == b"sometext"
```

## What this package does not do

The package provides the data types and encodings a ledger is built from. It
does not include the ledger itself. In particular, it lacks:

- transaction types;
- rules for applying transactions to account state;
- a plugin system;
- a persistent or Merkle-backed store;
- a network server or command-line program.

It cannot create secp256k1 signatures, only verify them. `MemStore` is the
only key storage provided, and nothing is written to disk.
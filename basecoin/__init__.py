"""Coins, keys, signatures, wire encoding, key-value caches and key storage for a coin ledger."""

__version__ = "0.1.0"
[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "basecoin"
version = "0.1.0"
description = "Building blocks for an account-based coin ledger: coins, keys, signatures, wire encoding, key-value caches and key storage"
requires-python = ">=3.10"
keywords = ["ledger", "coins", "ed25519", "secp256k1", "signatures", "secretbox"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial :: Accounting",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "pynacl",
    "pycryptodome",
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["basecoin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

"""
Shared fixtures:
- put tests/ on sys.path so the helpers package is importable
- deterministic keys, block hash and signers
"""
import pathlib
import sys

import pytest

TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from near_client.crypto.ed25519 import KeyPair
from near_client.signers.in_memory import InMemorySigner
from near_client.types import KeyType, PublicKey


@pytest.fixture
def public_key():
    """ed25519 public key with data 00 01 .. 1f."""
    return PublicKey(key_type=KeyType.ED25519, data=bytes(range(32)))


@pytest.fixture
def block_hash():
    """32-byte block hash 20 21 .. 3f."""
    return bytes(range(32, 64))


@pytest.fixture
def key_pair():
    """Deterministic Ed25519 key pair."""
    return KeyPair.from_seed(b"near_client deterministic test seed")


@pytest.fixture
def in_memory_signer(key_pair):
    """InMemorySigner holding key_pair for alice.test on testnet."""
    return InMemorySigner.from_key_pair("alice.test", key_pair, network_id="testnet")

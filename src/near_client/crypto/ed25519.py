r"""
Ed25519 key pairs.

Key generation, signing and verification backed by the ``cryptography``
package. Secret keys are exchanged as ``ed25519:<base58>`` strings holding
either the 32-byte seed or the 64-byte seed||public key form.
"""

from __future__ import annotations
import hashlib
from typing import Union

import base58
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

from ..runtime.errors import NearError
from ..types import KeyType, PublicKey


class Ed25519Error(NearError):
    """Base exception for Ed25519 operations."""
    pass


def verify_signature(public_key: PublicKey, message: bytes, signature: bytes) -> bool:
    """
    Verify an Ed25519 signature.

    Returns:
        True if ``signature`` is valid for ``message`` under ``public_key``
    """
    if public_key.key_type != KeyType.ED25519 or len(public_key.data) != 32 or len(signature) != 64:
        return False
    try:
        CryptoEd25519PublicKey.from_public_bytes(public_key.data).verify(signature, message)
    except InvalidSignature:
        return False
    return True


class KeyPair:
    """
    Ed25519 key pair.
    """

    def __init__(self, seed: bytes):
        """
        Initialize from a 32-byte private key seed.

        Raises:
            Ed25519Error: If the seed is not 32 bytes
        """
        if len(seed) != 32:
            raise Ed25519Error(f"Ed25519 private key must be 32 bytes, got {len(seed)}")
        self._seed = bytes(seed)
        self._crypto_key = CryptoEd25519PrivateKey.from_private_bytes(self._seed)
        public_bytes = self._crypto_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        self._public_key = PublicKey(key_type=KeyType.ED25519, data=public_bytes)

    @classmethod
    def generate(cls) -> KeyPair:
        """Generate a new random key pair."""
        crypto_key = CryptoEd25519PrivateKey.generate()
        seed = crypto_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return cls(seed)

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> KeyPair:
        """
        Derive a deterministic key pair.

        A 32-byte seed is used as-is; any other input is hashed with SHA-256.
        """
        if isinstance(seed, str):
            seed = seed.encode('utf-8')
        if len(seed) != 32:
            seed = hashlib.sha256(seed).digest()
        return cls(seed)

    @classmethod
    def from_string(cls, encoded_key: str) -> KeyPair:
        """
        Parse ``ed25519:<base58 secret key>``.

        Raises:
            Ed25519Error: Unsupported curve or malformed key
        """
        parts = encoded_key.split(":")
        if len(parts) == 1:
            encoded = parts[0]
        elif len(parts) == 2 and parts[0].lower() == "ed25519":
            encoded = parts[1]
        else:
            raise Ed25519Error(f"Unknown curve or key format: {encoded_key.split(':')[0]}")
        try:
            secret = base58.b58decode(encoded)
        except ValueError as e:
            raise Ed25519Error(f"Invalid base58 secret key: {e}", cause=e) from e
        if len(secret) == 64:
            key_pair = cls(secret[:32])
            if key_pair.public_key.data != secret[32:]:
                raise Ed25519Error("Secret key does not match its embedded public key")
            return key_pair
        return cls(secret)

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    def get_public_key(self) -> PublicKey:
        return self._public_key

    @property
    def secret_key(self) -> str:
        """Base58 of the 64-byte seed||public key form."""
        return base58.b58encode(self._seed + self._public_key.data).decode('ascii')

    def to_string(self) -> str:
        return f"ed25519:{self.secret_key}"

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Returns:
            64-byte Ed25519 signature
        """
        return self._crypto_key.sign(message)

    def verify(self, message: bytes, signature: bytes) -> bool:
        return verify_signature(self._public_key, message, signature)

    def __repr__(self) -> str:
        return f"KeyPair(public_key={self._public_key.to_string()!r})"

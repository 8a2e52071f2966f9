"""Cryptographic primitives."""

from .ed25519 import Ed25519Error, KeyPair, verify_signature

__all__ = ["Ed25519Error", "KeyPair", "verify_signature"]

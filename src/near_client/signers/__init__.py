"""
Signers.

The Signer interface consumed by the signing protocol and an in-memory
Ed25519 implementation.
"""

from ..runtime.errors import SignerError
from .signer import SignedMessage, Signer
from .in_memory import InMemorySigner

__all__ = [
    "Signer",
    "SignedMessage",
    "SignerError",
    "InMemorySigner",
]

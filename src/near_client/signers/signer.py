"""
Base signer interface.

A signer owns key material and performs key retrieval and message signing on
request. Both operations are coroutines: implementations may wait on a
network service, a hardware token or a user confirmation.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..types import PublicKey


@dataclass(frozen=True)
class SignedMessage:
    """Result of a signing request."""

    signature: bytes
    public_key: PublicKey


class Signer(ABC):
    """
    Signer interface consumed by the signing protocol.

    Errors raised by an implementation are propagated to the caller
    unchanged.
    """

    @abstractmethod
    async def get_public_key(self, account_id: Optional[str] = None,
                             network_id: Optional[str] = None) -> PublicKey:
        """
        Get the public key for an account.

        Args:
            account_id: Account the key belongs to
            network_id: Network the account lives on

        Returns:
            Public key used to sign for this account
        """

    @abstractmethod
    async def sign_message(self, message: bytes, account_id: Optional[str] = None,
                           network_id: Optional[str] = None) -> SignedMessage:
        """
        Sign a message.

        Args:
            message: Bytes to sign
            account_id: Account whose key signs
            network_id: Network the account lives on

        Returns:
            Signature and the public key that produced it
        """

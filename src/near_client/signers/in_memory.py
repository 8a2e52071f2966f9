"""
In-memory signer.

Signs with Ed25519 key pairs held in a KeyStore.
"""

from __future__ import annotations
import logging
from typing import Optional

from ..config import DEFAULT_NETWORK_ID
from ..crypto.ed25519 import KeyPair
from ..keys.keystore import InMemoryKeyStore, KeyStore
from ..runtime.errors import ErrorCode, SignerError
from ..types import PublicKey
from .signer import SignedMessage, Signer

logger = logging.getLogger(__name__)


class InMemorySigner(Signer):
    """Signer backed by a key store."""

    def __init__(self, key_store: Optional[KeyStore] = None,
                 default_network_id: str = DEFAULT_NETWORK_ID):
        """
        Args:
            key_store: Where key pairs are looked up; a fresh InMemoryKeyStore if omitted
            default_network_id: Network used when a call passes no network id
        """
        self.key_store = key_store if key_store is not None else InMemoryKeyStore()
        self.default_network_id = default_network_id

    @classmethod
    def from_key_pair(cls, account_id: str, key_pair: KeyPair,
                      network_id: str = DEFAULT_NETWORK_ID) -> InMemorySigner:
        """Signer holding a single key pair for ``account_id``."""
        signer = cls(default_network_id=network_id)
        signer.key_store.set_key(network_id, account_id, key_pair)
        return signer

    def _key_pair(self, account_id: Optional[str], network_id: Optional[str]) -> KeyPair:
        if not account_id:
            raise SignerError("An account id is required to look up a signing key")
        network = network_id or self.default_network_id
        key_pair = self.key_store.get_key(network, account_id)
        if key_pair is None:
            raise SignerError(
                f"Key for {account_id} not found in {network}",
                code=ErrorCode.KEY_NOT_FOUND,
                details={"accountId": account_id, "networkId": network},
            )
        return key_pair

    async def create_key(self, account_id: str, network_id: Optional[str] = None) -> PublicKey:
        key_pair = KeyPair.generate()
        self.key_store.set_key(network_id or self.default_network_id, account_id, key_pair)
        return key_pair.public_key

    async def get_public_key(self, account_id: Optional[str] = None,
                             network_id: Optional[str] = None) -> PublicKey:
        return self._key_pair(account_id, network_id).public_key

    async def sign_message(self, message: bytes, account_id: Optional[str] = None,
                           network_id: Optional[str] = None) -> SignedMessage:
        key_pair = self._key_pair(account_id, network_id)
        logger.debug(f"Signing {len(message)} bytes for {account_id}")
        return SignedMessage(signature=key_pair.sign(message), public_key=key_pair.public_key)

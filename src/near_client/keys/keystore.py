r"""
Key storage.

Key pairs are stored per (network id, account id).
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple
import logging

from ..crypto.ed25519 import KeyPair
from ..runtime.errors import SignerError

logger = logging.getLogger(__name__)


class KeyStoreError(SignerError):
    """Key store specific errors."""
    pass


class KeyStore(ABC):
    """
    Abstract key store interface.
    """

    @abstractmethod
    def set_key(self, network_id: str, account_id: str, key_pair: KeyPair) -> None:
        """
        Store a key pair for an account, replacing any previous one.

        Args:
            network_id: Network identifier
            account_id: Account identifier
            key_pair: Key pair to store

        Raises:
            KeyStoreError: Empty network or account id, or not a KeyPair
        """
        pass

    @abstractmethod
    def get_key(self, network_id: str, account_id: str) -> Optional[KeyPair]:
        """
        Retrieve the key pair of an account.

        Returns:
            Key pair or None if not found
        """
        pass

    @abstractmethod
    def remove_key(self, network_id: str, account_id: str) -> bool:
        """
        Remove the key pair of an account.

        Returns:
            True if a key was removed
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all keys."""
        pass

    @abstractmethod
    def get_networks(self) -> List[str]:
        """List networks that have at least one key."""
        pass

    @abstractmethod
    def get_accounts(self, network_id: str) -> List[str]:
        """List accounts with a key on ``network_id``."""
        pass

    def has_key(self, network_id: str, account_id: str) -> bool:
        return self.get_key(network_id, account_id) is not None


class InMemoryKeyStore(KeyStore):
    """
    In-memory key store.

    Keys are held only for the lifetime of the process.
    """

    def __init__(self):
        self._keys: Dict[Tuple[str, str], KeyPair] = {}

    def set_key(self, network_id: str, account_id: str, key_pair: KeyPair) -> None:
        if not network_id or not account_id:
            raise KeyStoreError("Network id and account id are required to store a key")
        if not isinstance(key_pair, KeyPair):
            raise KeyStoreError(f"Expected KeyPair, got {type(key_pair).__name__}")
        self._keys[(network_id, account_id)] = key_pair
        logger.debug(f"Stored key {key_pair.public_key} for {account_id} on {network_id}")

    def get_key(self, network_id: str, account_id: str) -> Optional[KeyPair]:
        return self._keys.get((network_id, account_id))

    def remove_key(self, network_id: str, account_id: str) -> bool:
        removed = self._keys.pop((network_id, account_id), None) is not None
        if removed:
            logger.debug(f"Removed key for {account_id} on {network_id}")
        return removed

    def clear(self) -> None:
        self._keys.clear()

    def get_networks(self) -> List[str]:
        return sorted({network_id for network_id, _ in self._keys})

    def get_accounts(self, network_id: str) -> List[str]:
        return sorted(account_id for net, account_id in self._keys if net == network_id)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"InMemoryKeyStore(keys={len(self._keys)})"

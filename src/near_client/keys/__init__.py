"""Key storage."""

from .keystore import InMemoryKeyStore, KeyStore, KeyStoreError

__all__ = ["KeyStore", "InMemoryKeyStore", "KeyStoreError"]

"""
Transaction assembly and signing.

The bytes handed to the signer are the canonical encoding of the very
Transaction instance embedded in the returned SignedTransaction. Transactions
are frozen, so nothing can change between encoding and packaging.
"""

from __future__ import annotations
import logging
from typing import Optional, Sequence, Tuple

from pydantic import ValidationError

from ..codec.hashes import sha256_bytes
from ..codec.serializer import serialize
from ..config import SigningConfig
from ..crypto.ed25519 import verify_signature
from ..runtime.errors import SchemaError
from ..signers.signer import Signer
from ..transactions import SCHEMA, Action, SignedTransaction, Transaction
from ..types import PublicKey, Signature

logger = logging.getLogger(__name__)


def create_transaction(signer_id: str, public_key: PublicKey, receiver_id: str, nonce: int,
                       actions: Sequence[Action], block_hash: bytes) -> Transaction:
    """
    Assemble an unsigned transaction.

    Args:
        signer_id: Account that signs and pays
        public_key: Key the transaction is signed with
        receiver_id: Account the actions apply to
        nonce: Access key nonce
        actions: Actions to execute, in order
        block_hash: Hash of a recent block (32 bytes)

    Raises:
        SchemaError: Arguments do not form a valid transaction
    """
    try:
        return Transaction(
            signer_id=signer_id,
            public_key=public_key,
            nonce=nonce,
            receiver_id=receiver_id,
            actions=actions,
            block_hash=block_hash,
        )
    except ValidationError as e:
        raise SchemaError("Arguments do not form a valid Transaction", cause=e) from e


async def sign_transaction(receiver_id: str, nonce: int, actions: Sequence[Action], block_hash: bytes,
                           signer: Signer, account_id: Optional[str] = None,
                           network_id: Optional[str] = None, *,
                           config: Optional[SigningConfig] = None) -> Tuple[bytes, SignedTransaction]:
    """
    Build, hash and sign a transaction.

    Args:
        receiver_id: Account the actions apply to
        nonce: Access key nonce
        actions: Actions to execute
        block_hash: Hash of a recent block (32 bytes)
        signer: Signer holding the key of ``account_id``
        account_id: Signing account; falls back to ``config.account_id``
        network_id: Network of the account; falls back to ``config.network_id``
        config: Defaults for account and network

    Returns:
        (SHA-256 of the encoded transaction, signed transaction)

    Raises:
        SchemaError: No signing account, or the assembled transaction or
            returned signature does not fit its layout
        Exception: Whatever the signer raises, unchanged
    """
    if config is not None:
        account_id = account_id if account_id is not None else config.account_id
        network_id = network_id if network_id is not None else config.network_id
    if account_id is None:
        raise SchemaError("An account id is required to sign a transaction")

    public_key = await signer.get_public_key(account_id, network_id)
    transaction = create_transaction(account_id, public_key, receiver_id, nonce, actions, block_hash)
    message = transaction.encode()
    tx_hash = sha256_bytes(message)
    logger.debug(
        f"Signing transaction {tx_hash.hex()} from {account_id} to {receiver_id} "
        f"with {len(transaction.actions)} action(s)"
    )

    signed = await signer.sign_message(message, account_id, network_id)
    try:
        signature = Signature(key_type=public_key.key_type, data=signed.signature)
    except ValidationError as e:
        raise SchemaError("Signer returned an invalid signature", cause=e) from e
    # A signature that cannot be encoded is never packaged.
    serialize(SCHEMA, signature)
    return tx_hash, SignedTransaction(transaction=transaction, signature=signature)


def verify_signed_transaction(signed_tx: SignedTransaction) -> bool:
    """
    Check the signature of ``signed_tx`` against its own public key.

    Returns:
        True if the signature covers the canonical encoding of the embedded
        transaction; False for invalid signatures or unsupported key types
    """
    transaction = signed_tx.transaction
    if signed_tx.signature.key_type != transaction.public_key.key_type:
        return False
    return verify_signature(transaction.public_key, transaction.encode(), signed_tx.signature.data)


__all__ = [
    "create_transaction",
    "sign_transaction",
    "verify_signed_transaction",
]

"""
NEAR Python Client - Transactions

Builds, canonically encodes, hashes and signs NEAR transactions.
"""

from .runtime.errors import *
from .types import KeyType, PublicKey, Signature
from .transactions import *
from .tx import *
from .signers import InMemorySigner, SignedMessage, Signer
from .keys import InMemoryKeyStore, KeyStore
from .crypto import KeyPair
from .config import SigningConfig

__version__ = "0.1.0"
__all__ = [
    # Errors
    "ErrorCode",
    "NearError",
    "EncodingError",
    "SchemaError",
    "VariantError",
    "ArityError",
    "SignerError",

    # Value types
    "KeyType",
    "PublicKey",
    "Signature",

    # Transaction model
    "FunctionCallPermission",
    "FullAccessPermission",
    "AccessKeyPermission",
    "AccessKey",
    "CreateAccount",
    "DeployContract",
    "FunctionCall",
    "Transfer",
    "Stake",
    "AddKey",
    "DeleteKey",
    "DeleteAccount",
    "Action",
    "Transaction",
    "SignedTransaction",
    "SCHEMA",

    # Builders and signing
    "full_access_key",
    "function_call_access_key",
    "create_account",
    "deploy_contract",
    "function_call",
    "transfer",
    "stake",
    "add_key",
    "delete_key",
    "delete_account",
    "create_transaction",
    "sign_transaction",
    "verify_signed_transaction",

    # Signers and keys
    "Signer",
    "SignedMessage",
    "InMemorySigner",
    "KeyStore",
    "InMemoryKeyStore",
    "KeyPair",
    "SigningConfig",
]

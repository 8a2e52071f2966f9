# Transaction type definitions and the binary schema they are encoded with.
# Field and variant order below is the wire order.

from __future__ import annotations
from typing import Optional, Tuple

from pydantic import Field

from .codec.hashes import sha256_bytes
from .codec.schema import FixedArray, OptionOf, Schema, VarArray, record, tagged_union
from .codec.serializer import deserialize, serialize
from .types import Assignable, PublicKey, Signature, TaggedUnion


# =============================================================================
# Access Keys
# =============================================================================

class FunctionCallPermission(Assignable):
    """Permission limited to calling methods of one receiver."""
    allowance: Optional[int] = None
    receiver_id: str = Field(..., alias="receiverId")
    method_names: Tuple[str, ...] = Field(default_factory=tuple, alias="methodNames")


class FullAccessPermission(Assignable):
    """Unrestricted permission."""


class AccessKeyPermission(TaggedUnion):
    """Permission attached to an access key."""
    function_call: Optional[FunctionCallPermission] = Field(None, alias="functionCall")
    full_access: Optional[FullAccessPermission] = Field(None, alias="fullAccess")


class AccessKey(Assignable):
    """Access key: nonce and permission."""
    nonce: int = 0
    permission: AccessKeyPermission


# =============================================================================
# Actions
# =============================================================================

class CreateAccount(Assignable):
    """Create the receiver account."""


class DeployContract(Assignable):
    """Deploy contract code to the receiver account."""
    code: bytes


class FunctionCall(Assignable):
    """Call a contract method."""
    method_name: str = Field(..., alias="methodName")
    args: bytes
    gas: int
    deposit: int


class Transfer(Assignable):
    """Transfer tokens to the receiver."""
    deposit: int


class Stake(Assignable):
    """Stake tokens with a validator key."""
    stake: int
    public_key: PublicKey = Field(..., alias="publicKey")


class AddKey(Assignable):
    """Add an access key to the receiver account."""
    public_key: PublicKey = Field(..., alias="publicKey")
    access_key: AccessKey = Field(..., alias="accessKey")


class DeleteKey(Assignable):
    """Remove an access key from the receiver account."""
    public_key: PublicKey = Field(..., alias="publicKey")


class DeleteAccount(Assignable):
    """Delete the receiver account, sending the balance to the beneficiary."""
    beneficiary_id: str = Field(..., alias="beneficiaryId")


class Action(TaggedUnion):
    """One of the eight transaction actions."""
    create_account: Optional[CreateAccount] = Field(None, alias="createAccount")
    deploy_contract: Optional[DeployContract] = Field(None, alias="deployContract")
    function_call: Optional[FunctionCall] = Field(None, alias="functionCall")
    transfer: Optional[Transfer] = None
    stake: Optional[Stake] = None
    add_key: Optional[AddKey] = Field(None, alias="addKey")
    delete_key: Optional[DeleteKey] = Field(None, alias="deleteKey")
    delete_account: Optional[DeleteAccount] = Field(None, alias="deleteAccount")


# =============================================================================
# Transactions
# =============================================================================

class Transaction(Assignable):
    """Unsigned transaction."""
    signer_id: str = Field(..., alias="signerId")
    public_key: PublicKey = Field(..., alias="publicKey")
    nonce: int
    receiver_id: str = Field(..., alias="receiverId")
    block_hash: bytes = Field(..., alias="blockHash")
    actions: Tuple[Action, ...] = ()

    def encode(self) -> bytes:
        """Canonical binary encoding; this is the message that gets signed."""
        return serialize(SCHEMA, self)

    @classmethod
    def decode(cls, data: bytes) -> Transaction:
        return deserialize(SCHEMA, cls, data)

    def hash(self) -> bytes:
        """SHA-256 of the canonical encoding."""
        return sha256_bytes(self.encode())


class SignedTransaction(Assignable):
    """Transaction together with the signature over its encoding."""
    transaction: Transaction
    signature: Signature

    def encode(self) -> bytes:
        return serialize(SCHEMA, self)

    @classmethod
    def decode(cls, data: bytes) -> SignedTransaction:
        return deserialize(SCHEMA, cls, data)


# =============================================================================
# Schema
# =============================================================================

SCHEMA = Schema({
    Signature: record(
        ("key_type", "u8"),
        ("data", FixedArray(64)),
    ),
    SignedTransaction: record(
        ("transaction", Transaction),
        ("signature", Signature),
    ),
    Transaction: record(
        ("signer_id", "string"),
        ("public_key", PublicKey),
        ("nonce", "u64"),
        ("receiver_id", "string"),
        ("block_hash", FixedArray(32)),
        ("actions", VarArray(Action)),
    ),
    PublicKey: record(
        ("key_type", "u8"),
        ("data", FixedArray(32)),
    ),
    AccessKey: record(
        ("nonce", "u64"),
        ("permission", AccessKeyPermission),
    ),
    AccessKeyPermission: tagged_union(
        ("function_call", FunctionCallPermission),
        ("full_access", FullAccessPermission),
    ),
    FunctionCallPermission: record(
        ("allowance", OptionOf("u128")),
        ("receiver_id", "string"),
        ("method_names", VarArray("string")),
    ),
    FullAccessPermission: record(),
    Action: tagged_union(
        ("create_account", CreateAccount),
        ("deploy_contract", DeployContract),
        ("function_call", FunctionCall),
        ("transfer", Transfer),
        ("stake", Stake),
        ("add_key", AddKey),
        ("delete_key", DeleteKey),
        ("delete_account", DeleteAccount),
    ),
    CreateAccount: record(),
    DeployContract: record(
        ("code", VarArray("u8")),
    ),
    FunctionCall: record(
        ("method_name", "string"),
        ("args", VarArray("u8")),
        ("gas", "u64"),
        ("deposit", "u128"),
    ),
    Transfer: record(
        ("deposit", "u128"),
    ),
    Stake: record(
        ("stake", "u128"),
        ("public_key", PublicKey),
    ),
    AddKey: record(
        ("public_key", PublicKey),
        ("access_key", AccessKey),
    ),
    DeleteKey: record(
        ("public_key", PublicKey),
    ),
    DeleteAccount: record(
        ("beneficiary_id", "string"),
    ),
})


__all__ = [
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
]

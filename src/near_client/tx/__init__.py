"""
Transaction builders and the signing protocol.
"""

from .builders import (
    add_key,
    create_account,
    delete_account,
    delete_key,
    deploy_contract,
    fixed_arity,
    full_access_key,
    function_call,
    function_call_access_key,
    stake,
    transfer,
)
from .signing import create_transaction, sign_transaction, verify_signed_transaction

__all__ = [
    "fixed_arity",
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
]

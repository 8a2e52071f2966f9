"""
Action and access key builders.

Each builder takes a fixed set of arguments and returns a tagged union with
exactly one populated variant. A call with too many, too few or unknown
arguments raises ArityError before anything is built; payloads of the wrong
shape raise SchemaError.
"""

from __future__ import annotations
import functools
import inspect
from typing import Any, Callable, Optional, Sequence, TypeVar

from pydantic import ValidationError

from ..runtime.errors import ArityError, SchemaError
from ..transactions import (
    AccessKey,
    AccessKeyPermission,
    Action,
    AddKey,
    CreateAccount,
    DeleteAccount,
    DeleteKey,
    DeployContract,
    FullAccessPermission,
    FunctionCall,
    FunctionCallPermission,
    Stake,
    Transfer,
)
from ..types import PublicKey

F = TypeVar("F", bound=Callable[..., Any])


def fixed_arity(expected: str) -> Callable[[F], F]:
    """
    Reject calls whose arguments do not bind to the builder's signature.

    Arguments that bind but fail model validation raise SchemaError.

    Args:
        expected: Human readable description of the expected arguments
    """
    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                signature.bind(*args, **kwargs)
            except TypeError as e:
                count = len(args) + len(kwargs)
                raise ArityError(
                    f"Wrong number of arguments {count}: expected {expected}",
                    details={"builder": func.__name__, "given": count},
                    cause=e,
                ) from None
            try:
                return func(*args, **kwargs)
            except ValidationError as e:
                raise SchemaError(
                    f"Invalid arguments for {func.__name__}",
                    details={"builder": func.__name__},
                    cause=e,
                ) from e

        return wrapper  # type: ignore[return-value]
    return decorator


# =============================================================================
# Access keys
# =============================================================================

@fixed_arity("none")
def full_access_key() -> AccessKey:
    """Access key with full access permission and nonce 0."""
    return AccessKey(nonce=0, permission=AccessKeyPermission(full_access=FullAccessPermission()))


@fixed_arity("receiver_id, method_names and optional allowance")
def function_call_access_key(receiver_id: str, method_names: Sequence[str],
                             allowance: Optional[int] = None) -> AccessKey:
    """Access key restricted to calling ``method_names`` on ``receiver_id``."""
    permission = FunctionCallPermission(
        receiver_id=receiver_id,
        method_names=method_names,
        allowance=allowance,
    )
    return AccessKey(nonce=0, permission=AccessKeyPermission(function_call=permission))


# =============================================================================
# Actions
# =============================================================================

@fixed_arity("none")
def create_account() -> Action:
    return Action(create_account=CreateAccount())


@fixed_arity("code")
def deploy_contract(code: bytes) -> Action:
    return Action(deploy_contract=DeployContract(code=code))


@fixed_arity("method_name, args, gas, deposit")
def function_call(method_name: str, args: bytes, gas: int, deposit: int) -> Action:
    return Action(function_call=FunctionCall(method_name=method_name, args=args, gas=gas, deposit=deposit))


@fixed_arity("deposit")
def transfer(deposit: int) -> Action:
    return Action(transfer=Transfer(deposit=deposit))


@fixed_arity("stake and public_key")
def stake(stake: int, public_key: PublicKey) -> Action:
    return Action(stake=Stake(stake=stake, public_key=public_key))


@fixed_arity("public_key and access_key")
def add_key(public_key: PublicKey, access_key: AccessKey) -> Action:
    return Action(add_key=AddKey(public_key=public_key, access_key=access_key))


@fixed_arity("public_key")
def delete_key(public_key: PublicKey) -> Action:
    return Action(delete_key=DeleteKey(public_key=public_key))


@fixed_arity("beneficiary_id")
def delete_account(beneficiary_id: str) -> Action:
    return Action(delete_account=DeleteAccount(beneficiary_id=beneficiary_id))


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
]

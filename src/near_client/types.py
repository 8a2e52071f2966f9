# Core value types shared by the transaction model: key types, the frozen
# model bases, public keys and signatures.

from __future__ import annotations
from enum import IntEnum
from typing import Any, Tuple

import base58
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .runtime.errors import SchemaError, VariantError


class KeyType(IntEnum):
    """Key algorithms, numbered as on the wire."""
    ED25519 = 0

    @classmethod
    def from_name(cls, name: str) -> KeyType:
        try:
            return cls[name.upper()]
        except KeyError:
            raise SchemaError(f"Unknown key type {name}") from None

    def to_name(self) -> str:
        return self.name.lower()


class Assignable(BaseModel):
    """Base for immutable record values."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TaggedUnion(Assignable):
    """
    Base for tagged unions.

    Every field is an optional variant slot; exactly one must be populated.
    The check runs on construction, so a validated instance is always
    encodable.
    """

    @model_validator(mode="after")
    def _exactly_one_variant(self) -> TaggedUnion:
        populated = self._populated()
        if len(populated) != 1:
            raise VariantError(
                f"{type(self).__name__} must have exactly one populated variant, found {len(populated)}",
                details={"populated": list(populated)},
            )
        return self

    def _populated(self) -> Tuple[str, ...]:
        return tuple(name for name in type(self).model_fields if getattr(self, name) is not None)

    @property
    def enum(self) -> str:
        """Name of the populated variant."""
        populated = self._populated()
        if len(populated) != 1:
            raise VariantError(f"{type(self).__name__} has {len(populated)} populated variants")
        return populated[0]

    @property
    def value(self) -> Any:
        """Payload of the populated variant."""
        return getattr(self, self.enum)


class PublicKey(Assignable):
    """
    Public key: key type tag plus 32 raw bytes.

    Textual form is ``<key type>:<base58 data>``.
    """

    key_type: KeyType = Field(KeyType.ED25519, alias="keyType")
    data: bytes

    @classmethod
    def from_raw_bytes(cls, data: bytes, key_type: KeyType = KeyType.ED25519) -> PublicKey:
        return cls(key_type=key_type, data=data)

    @classmethod
    def from_string(cls, encoded_key: str) -> PublicKey:
        """
        Parse ``ed25519:<base58>``; a bare base58 string is read as ed25519.

        Raises:
            SchemaError: Unknown key type or invalid base58
        """
        parts = encoded_key.split(":")
        if len(parts) == 1:
            key_type, encoded = KeyType.ED25519, parts[0]
        elif len(parts) == 2:
            key_type, encoded = KeyType.from_name(parts[0]), parts[1]
        else:
            raise SchemaError("Invalid encoded key format, must be <curve>:<encoded key>")
        try:
            data = base58.b58decode(encoded)
        except ValueError as e:
            raise SchemaError(f"Invalid base58 key data: {e}", cause=e) from e
        return cls(key_type=key_type, data=data)

    def to_string(self) -> str:
        return f"{self.key_type.to_name()}:{base58.b58encode(self.data).decode('ascii')}"

    def __str__(self) -> str:
        return self.to_string()


class Signature(Assignable):
    """Signature: key type tag plus 64 raw bytes."""

    key_type: KeyType = Field(KeyType.ED25519, alias="keyType")
    data: bytes


__all__ = [
    "KeyType",
    "Assignable",
    "TaggedUnion",
    "PublicKey",
    "Signature",
]

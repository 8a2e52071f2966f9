"""
NEAR Binary Codec Module

Canonical binary encoding/decoding for transactions and their parts.

Key components:
- writer.py / reader.py: fixed-width little-endian primitives
- schema.py: layout descriptors and the read-only schema registry
- serializer.py: composite encoder/decoder for records and tagged unions
- hashes.py: SHA-256 hashing helpers
"""

from .hashes import sha256_bytes
from .reader import BinaryReader
from .schema import (
    EnumLayout,
    FixedArray,
    OptionOf,
    Schema,
    StructLayout,
    VarArray,
    record,
    tagged_union,
)
from .serializer import BinaryDeserializer, BinarySerializer, deserialize, serialize
from .writer import BinaryWriter

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "BinarySerializer",
    "BinaryDeserializer",
    "Schema",
    "StructLayout",
    "EnumLayout",
    "FixedArray",
    "VarArray",
    "OptionOf",
    "record",
    "tagged_union",
    "serialize",
    "deserialize",
    "sha256_bytes",
]

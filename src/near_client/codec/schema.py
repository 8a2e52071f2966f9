"""
Schema Registry

Layout descriptors for the binary codec and the read-only registry mapping
each model class to its layout.

A field type is one of:

- a primitive name: ``"u8"``, ``"u16"``, ``"u32"``, ``"u64"``, ``"u128"``,
  ``"string"``
- ``FixedArray(n)`` for exactly ``n`` raw bytes, or ``FixedArray(n, element)``
  for exactly ``n`` elements
- ``VarArray(element)`` for a u32 count followed by the elements
  (``VarArray("u8")`` is carried as ``bytes``)
- ``OptionOf(element)`` for a presence byte followed by the element
- a registered model class
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Tuple, Type, Union

from ..runtime.errors import SchemaError


PRIMITIVES = frozenset({"u8", "u16", "u32", "u64", "u128", "string"})


@dataclass(frozen=True)
class FixedArray:
    """Fixed-length array with no length prefix."""

    length: int
    element: Optional["FieldType"] = None

    @property
    def is_bytes(self) -> bool:
        return self.element is None or self.element == "u8"


@dataclass(frozen=True)
class VarArray:
    """Variable-length array with a u32 element-count prefix."""

    element: "FieldType"

    @property
    def is_bytes(self) -> bool:
        return self.element == "u8"


@dataclass(frozen=True)
class OptionOf:
    """Optional value: presence byte 0/1 followed by the element if present."""

    element: "FieldType"


FieldType = Union[str, FixedArray, VarArray, OptionOf, type]


@dataclass(frozen=True)
class StructLayout:
    """Record layout: fields encoded in declared order."""

    fields: Tuple[Tuple[str, FieldType], ...]

    kind = "struct"


@dataclass(frozen=True)
class EnumLayout:
    """
    Tagged union layout.

    The discriminant written on the wire is the zero-based index of the
    populated variant in ``variants``.
    """

    variants: Tuple[Tuple[str, FieldType], ...]

    kind = "enum"

    def index_of(self, name: str) -> int:
        for index, (variant, _) in enumerate(self.variants):
            if variant == name:
                return index
        raise SchemaError(f"Unknown variant '{name}'")


Layout = Union[StructLayout, EnumLayout]


def record(*fields: Tuple[str, FieldType]) -> StructLayout:
    """Declare a record layout from (name, type) pairs."""
    return StructLayout(tuple(fields))


def tagged_union(*variants: Tuple[str, FieldType]) -> EnumLayout:
    """Declare a tagged union layout from (variant name, payload type) pairs."""
    return EnumLayout(tuple(variants))


class Schema(Mapping):
    """
    Immutable class -> layout table.

    Built once and never mutated afterwards, so concurrent encode/decode calls
    may share it freely.
    """

    def __init__(self, layouts: Dict[Type[Any], Layout]):
        for cls, layout in layouts.items():
            if not isinstance(layout, (StructLayout, EnumLayout)):
                raise SchemaError(f"Invalid layout for {cls.__name__}: {layout!r}")
        self._layouts: Mapping[Type[Any], Layout] = MappingProxyType(dict(layouts))
        for layout in self._layouts.values():
            entries = layout.fields if isinstance(layout, StructLayout) else layout.variants
            for _, field_type in entries:
                self._check_field_type(field_type)

    def _check_field_type(self, field_type: FieldType) -> None:
        if isinstance(field_type, str):
            if field_type not in PRIMITIVES:
                raise SchemaError(f"Unknown primitive type '{field_type}'")
        elif isinstance(field_type, FixedArray):
            if field_type.length < 0:
                raise SchemaError(f"Negative fixed array length {field_type.length}")
            if field_type.element is not None:
                self._check_field_type(field_type.element)
        elif isinstance(field_type, (VarArray, OptionOf)):
            self._check_field_type(field_type.element)
        elif isinstance(field_type, type):
            if field_type not in self._layouts:
                raise SchemaError(f"Type {field_type.__name__} is referenced but not registered")
        else:
            raise SchemaError(f"Unsupported field type {field_type!r}")

    def __getitem__(self, cls: Type[Any]) -> Layout:
        return self._layouts[cls]

    def __iter__(self) -> Iterator[Type[Any]]:
        return iter(self._layouts)

    def __len__(self) -> int:
        return len(self._layouts)

    def layout_for(self, cls: Type[Any]) -> Layout:
        """
        Look up the layout registered for ``cls``.

        Raises:
            SchemaError: If ``cls`` is not registered
        """
        try:
            return self._layouts[cls]
        except KeyError:
            raise SchemaError(f"Class {getattr(cls, '__name__', cls)} is missing in schema") from None


__all__ = [
    "PRIMITIVES",
    "FixedArray",
    "VarArray",
    "OptionOf",
    "FieldType",
    "StructLayout",
    "EnumLayout",
    "Layout",
    "record",
    "tagged_union",
    "Schema",
]

"""
Composite Binary Serializer

Recursively encodes and decodes registered records and tagged unions using the
primitive BinaryWriter/BinaryReader and a Schema. The encoding is canonical:
fields are emitted in declared order and every length or discriminant is
checked, so equal values always produce identical bytes.
"""

from __future__ import annotations
from typing import Any, Dict, List, Type, TypeVar

from pydantic import ValidationError

from ..runtime.errors import SchemaError, VariantError
from .reader import BinaryReader
from .schema import EnumLayout, FieldType, FixedArray, OptionOf, Schema, StructLayout, VarArray
from .writer import BinaryWriter

T = TypeVar("T")

_INT_WRITERS = {
    "u8": BinaryWriter.u8,
    "u16": BinaryWriter.u16le,
    "u32": BinaryWriter.u32le,
    "u64": BinaryWriter.u64le,
    "u128": BinaryWriter.u128le,
}

_INT_READERS = {
    "u8": BinaryReader.u8,
    "u16": BinaryReader.u16le,
    "u32": BinaryReader.u32le,
    "u64": BinaryReader.u64le,
    "u128": BinaryReader.u128le,
}


def populated_variants(value: Any, layout: EnumLayout) -> List[int]:
    """Indices of the variant slots of ``value`` that hold a payload."""
    return [
        index for index, (name, _) in enumerate(layout.variants)
        if getattr(value, name, None) is not None
    ]


class BinarySerializer:
    """
    Encoder for values whose classes are registered in a Schema.
    """

    def __init__(self, schema: Schema):
        self.schema = schema

    def serialize(self, value: Any) -> bytes:
        """
        Encode a registered value.

        Args:
            value: Instance of a class registered in the schema

        Returns:
            Canonical encoding

        Raises:
            SchemaError: Value does not fit its layout
            VariantError: Tagged union without exactly one populated variant
        """
        writer = BinaryWriter()
        self._write_object(writer, value, type(value))
        return writer.to_bytes()

    def _write_object(self, writer: BinaryWriter, value: Any, cls: Type[Any]) -> None:
        layout = self.schema.layout_for(cls)
        if not isinstance(value, cls):
            raise SchemaError(f"Expected {cls.__name__}, got {type(value).__name__}")

        if isinstance(layout, StructLayout):
            for name, field_type in layout.fields:
                self._write_value(writer, getattr(value, name), field_type, f"{cls.__name__}.{name}")
            return

        populated = populated_variants(value, layout)
        if len(populated) != 1:
            names = [layout.variants[i][0] for i in populated]
            raise VariantError(
                f"{cls.__name__} must have exactly one populated variant, found {len(populated)}",
                details={"populated": names},
            )
        index = populated[0]
        name, payload_type = layout.variants[index]
        writer.u8(index)
        self._write_value(writer, getattr(value, name), payload_type, f"{cls.__name__}.{name}")

    def _write_value(self, writer: BinaryWriter, value: Any, field_type: FieldType, path: str) -> None:
        if isinstance(field_type, str):
            if field_type == "string":
                if not isinstance(value, str):
                    raise SchemaError(f"{path}: expected str, got {type(value).__name__}")
                writer.string(value)
            else:
                try:
                    _INT_WRITERS[field_type](writer, value)
                except SchemaError as e:
                    raise SchemaError(f"{path}: {e.message}", cause=e.cause) from e

        elif isinstance(field_type, FixedArray):
            if field_type.is_bytes:
                if not isinstance(value, (bytes, bytearray, memoryview)):
                    raise SchemaError(f"{path}: expected bytes, got {type(value).__name__}")
                if len(value) != field_type.length:
                    raise SchemaError(
                        f"{path}: expected {field_type.length} bytes, got {len(value)}",
                        details={"expected": field_type.length, "actual": len(value)},
                    )
                writer.bytes(bytes(value))
            else:
                if len(value) != field_type.length:
                    raise SchemaError(
                        f"{path}: expected {field_type.length} elements, got {len(value)}",
                        details={"expected": field_type.length, "actual": len(value)},
                    )
                for i, item in enumerate(value):
                    self._write_value(writer, item, field_type.element, f"{path}[{i}]")

        elif isinstance(field_type, VarArray):
            if field_type.is_bytes:
                if not isinstance(value, (bytes, bytearray, memoryview)):
                    raise SchemaError(f"{path}: expected bytes, got {type(value).__name__}")
                writer.len_prefixed_bytes(bytes(value))
            else:
                if isinstance(value, (str, bytes)) or not hasattr(value, "__len__"):
                    raise SchemaError(f"{path}: expected a sequence, got {type(value).__name__}")
                writer.u32le(len(value))
                for i, item in enumerate(value):
                    self._write_value(writer, item, field_type.element, f"{path}[{i}]")

        elif isinstance(field_type, OptionOf):
            if value is None:
                writer.u8(0)
            else:
                writer.u8(1)
                self._write_value(writer, value, field_type.element, path)

        else:
            if value is None:
                raise SchemaError(f"{path}: missing value for {field_type.__name__}")
            self._write_object(writer, value, field_type)


class BinaryDeserializer:
    """
    Decoder for byte streams produced by BinarySerializer.
    """

    def __init__(self, schema: Schema):
        self.schema = schema

    def deserialize(self, cls: Type[T], data: bytes) -> T:
        """
        Decode a value of ``cls`` from ``data``.

        The whole buffer must be consumed.

        Raises:
            SchemaError: Truncated input, trailing bytes, bad lengths,
                discriminants, option flags or UTF-8
        """
        reader = BinaryReader(data)
        result = self._read_object(reader, cls)
        if not reader.eof:
            raise SchemaError(
                f"Unexpected {reader.remaining} bytes after deserialized {cls.__name__}",
                details={"offset": reader.offset},
            )
        return result

    def _read_object(self, reader: BinaryReader, cls: Type[T]) -> T:
        layout = self.schema.layout_for(cls)

        if isinstance(layout, StructLayout):
            values: Dict[str, Any] = {}
            for name, field_type in layout.fields:
                values[name] = self._read_value(reader, field_type)
            return self._build(cls, values)

        index = reader.u8()
        if index >= len(layout.variants):
            raise SchemaError(
                f"Enum index {index} is out of range for {cls.__name__} "
                f"({len(layout.variants)} variants)"
            )
        name, payload_type = layout.variants[index]
        return self._build(cls, {name: self._read_value(reader, payload_type)})

    @staticmethod
    def _build(cls: Type[T], values: Dict[str, Any]) -> T:
        try:
            return cls(**values)
        except ValidationError as e:
            raise SchemaError(f"Decoded data does not form a valid {cls.__name__}", cause=e) from e

    def _read_value(self, reader: BinaryReader, field_type: FieldType) -> Any:
        if isinstance(field_type, str):
            if field_type == "string":
                return reader.string()
            return _INT_READERS[field_type](reader)

        if isinstance(field_type, FixedArray):
            if field_type.is_bytes:
                return reader.bytes(field_type.length)
            return tuple(self._read_value(reader, field_type.element) for _ in range(field_type.length))

        if isinstance(field_type, VarArray):
            if field_type.is_bytes:
                return reader.len_prefixed_bytes()
            count = reader.u32le()
            return tuple(self._read_value(reader, field_type.element) for _ in range(count))

        if isinstance(field_type, OptionOf):
            flag = reader.u8()
            if flag == 0:
                return None
            if flag != 1:
                raise SchemaError(f"Invalid option flag {flag}, expected 0 or 1")
            return self._read_value(reader, field_type.element)

        return self._read_object(reader, field_type)


def serialize(schema: Schema, value: Any) -> bytes:
    """Encode ``value`` with ``schema``."""
    return BinarySerializer(schema).serialize(value)


def deserialize(schema: Schema, cls: Type[T], data: bytes) -> T:
    """Decode an instance of ``cls`` from ``data`` with ``schema``."""
    return BinaryDeserializer(schema).deserialize(cls, data)


__all__ = [
    "BinarySerializer",
    "BinaryDeserializer",
    "populated_variants",
    "serialize",
    "deserialize",
]

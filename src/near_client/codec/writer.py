"""
Binary Writer

Primitive little-endian encoder used by the composite serializer.
Integers are fixed width with no padding, strings and arrays carry a u32
length prefix.
"""

from typing import List

from ..runtime.errors import SchemaError


class BinaryWriter:
    """
    Append-only binary writer.

    All multi-byte integers are written little-endian. Values that do not fit
    the requested width are rejected rather than masked.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def _uint(self, v: int, width: int) -> None:
        if isinstance(v, bool) or not isinstance(v, int):
            raise SchemaError(f"Expected unsigned integer for u{width * 8}, got {type(v).__name__}")
        try:
            self._bb.extend(v.to_bytes(width, "little", signed=False))
        except OverflowError as e:
            raise SchemaError(f"Value {v} does not fit in u{width * 8}", cause=e)

    def u8(self, v: int) -> None:
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)
        """
        self._uint(v, 1)

    def u16le(self, v: int) -> None:
        """Write unsigned 16-bit integer in little-endian format."""
        self._uint(v, 2)

    def u32le(self, v: int) -> None:
        """
        Write unsigned 32-bit integer in little-endian format.

        Args:
            v: Integer value to write as 32-bit little-endian
        """
        self._uint(v, 4)

    def u64le(self, v: int) -> None:
        """
        Write unsigned 64-bit integer in little-endian format.

        Args:
            v: Integer value to write as 64-bit little-endian
        """
        self._uint(v, 8)

    def u128le(self, v: int) -> None:
        """
        Write unsigned 128-bit integer in little-endian format.

        Args:
            v: Integer value to write as 128-bit little-endian
        """
        self._uint(v, 16)

    def bytes(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)

    def len_prefixed_bytes(self, v: bytes) -> None:
        """
        Write bytes with a u32 length prefix.

        Args:
            v: Bytes to write with length prefix
        """
        self.u32le(len(v))
        self.bytes(v)

    def string(self, s: str) -> None:
        """
        Write UTF-8 string with a u32 byte-length prefix.

        Args:
            s: String to write
        """
        if not isinstance(s, str):
            raise SchemaError(f"Expected str, got {type(s).__name__}")
        try:
            encoded = s.encode('utf-8')
        except UnicodeEncodeError as e:
            raise SchemaError(f"String is not encodable as UTF-8: {e}", cause=e)
        self.len_prefixed_bytes(encoded)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)

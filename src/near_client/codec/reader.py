"""
Binary Reader

Primitive little-endian decoder used by the composite deserializer.
Every read is bounds-checked against the supplied buffer; running past the
end raises SchemaError instead of returning a short value.
"""

import builtins
import struct

from ..runtime.errors import SchemaError


class BinaryReader:
    """
    Binary reader over an immutable byte buffer.

    Mirrors BinaryWriter: fixed-width little-endian integers, u32-prefixed
    strings and byte sequences.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = builtins.bytes(buf)
        self._off = 0

    @property
    def eof(self) -> bool:
        """True if the whole buffer has been consumed."""
        return self._off >= len(self._buf)

    @property
    def offset(self) -> int:
        """Current read position."""
        return self._off

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._buf) - self._off

    def _take(self, n: int, what: str) -> builtins.bytes:
        if n < 0 or self._off + n > len(self._buf):
            raise SchemaError(
                f"Unexpected end of input reading {what}: need {n} bytes at offset {self._off}, "
                f"have {len(self._buf) - self._off}"
            )
        out = self._buf[self._off : self._off + n]
        self._off += n
        return out

    def u8(self) -> int:
        """
        Read unsigned 8-bit integer.

        Returns:
            Unsigned 8-bit integer value
        """
        return self._take(1, "u8")[0]

    def u16le(self) -> int:
        """Read unsigned 16-bit integer in little-endian format."""
        return struct.unpack("<H", self._take(2, "u16"))[0]

    def u32le(self) -> int:
        """
        Read unsigned 32-bit integer in little-endian format.

        Returns:
            Unsigned 32-bit integer value
        """
        return struct.unpack("<I", self._take(4, "u32"))[0]

    def u64le(self) -> int:
        """
        Read unsigned 64-bit integer in little-endian format.

        Returns:
            Unsigned 64-bit integer value
        """
        return struct.unpack("<Q", self._take(8, "u64"))[0]

    def u128le(self) -> int:
        """
        Read unsigned 128-bit integer in little-endian format.

        Returns:
            Unsigned 128-bit integer value
        """
        return int.from_bytes(self._take(16, "u128"), "little", signed=False)

    def bytes(self, n: int) -> builtins.bytes:
        """
        Read n bytes from buffer.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes of specified length
        """
        return self._take(n, f"{n} bytes")

    def len_prefixed_bytes(self) -> builtins.bytes:
        """
        Read bytes with a u32 length prefix.

        Returns:
            Bytes with length read from the prefix
        """
        n = self.u32le()
        return self._take(n, "length-prefixed bytes")

    def string(self) -> str:
        """
        Read UTF-8 string with a u32 byte-length prefix.

        Returns:
            Decoded string
        """
        b = self.len_prefixed_bytes()
        try:
            return b.decode('utf-8')
        except UnicodeDecodeError as e:
            raise SchemaError(f"Invalid UTF-8 in string: {e}", cause=e)

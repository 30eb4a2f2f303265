"""Cursor over a byte buffer for fixed-layout binary decoding."""

from __future__ import annotations

import struct

from rigolwfm.errors import TruncatedError

# All multi-byte fields in the format are little-endian
_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_I16 = struct.Struct("<h")
_I32 = struct.Struct("<i")
_I64 = struct.Struct("<q")
_F32 = struct.Struct("<f")


class ByteReader:
    """Sequential little-endian reader that tracks its position in a buffer.

    Every read names the field being decoded so that a short buffer raises a
    TruncatedError pointing at the exact field and byte offset.
    """

    def __init__(self, buffer: bytes | bytearray | memoryview, offset: int = 0) -> None:
        """Initialize the reader.

        Args:
            buffer: Bytes to decode (not modified)
            offset: Starting byte position
        """
        self._buffer = memoryview(buffer).cast("B")
        self._offset = offset

    def __enter__(self) -> ByteReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def release(self) -> None:
        """Release the view of the buffer so the caller can resize it again.

        No reads are possible afterwards.
        """
        self._buffer.release()

    @property
    def offset(self) -> int:
        """Current read position in bytes."""
        return self._offset

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return max(0, len(self._buffer) - self._offset)

    def _require(self, size: int, field: str) -> int:
        """Check that size bytes are available and advance past them."""
        if size < 0:
            raise ValueError(f"Cannot read a negative number of bytes: {size}")
        if size > self.remaining:
            raise TruncatedError(
                f"Buffer ended: need {size} bytes, {self.remaining} left",
                field,
                self._offset,
            )
        start = self._offset
        self._offset += size
        return start

    def take(self, size: int, field: str) -> bytes:
        """Return the next size bytes as a new bytes object."""
        start = self._require(size, field)
        return bytes(self._buffer[start : start + size])

    def skip(self, size: int, field: str) -> None:
        """Advance past size bytes without decoding them."""
        self._require(size, field)

    def _unpack(self, fmt: struct.Struct, field: str) -> int | float:
        start = self._require(fmt.size, field)
        return fmt.unpack_from(self._buffer, start)[0]

    def u8(self, field: str) -> int:
        return int(self._unpack(_U8, field))

    def u16(self, field: str) -> int:
        return int(self._unpack(_U16, field))

    def u32(self, field: str) -> int:
        return int(self._unpack(_U32, field))

    def i16(self, field: str) -> int:
        return int(self._unpack(_I16, field))

    def i32(self, field: str) -> int:
        return int(self._unpack(_I32, field))

    def i64(self, field: str) -> int:
        return int(self._unpack(_I64, field))

    def f32(self, field: str) -> float:
        return float(self._unpack(_F32, field))

    def u16_array(self, count: int, field: str) -> tuple[int, ...]:
        """Read count consecutive little-endian 16-bit words.

        Args:
            count: Number of words to read
            field: Field name used in error messages

        Returns:
            Tuple of unsigned word values
        """
        if count < 0:
            raise ValueError(f"Cannot read a negative number of words: {count}")
        start = self._require(count * 2, field)
        return struct.unpack_from(f"<{count}H", self._buffer, start)

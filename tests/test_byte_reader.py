"""Tests for the little-endian byte cursor."""

import struct

import pytest

from rigolwfm.byte_reader import ByteReader
from rigolwfm.errors import TruncatedError


def test_reads_little_endian_integers_in_sequence() -> None:
    """Verify typed reads decode little-endian values and advance the cursor."""
    buffer = struct.pack("<BHIhiq", 0xAB, 0x1234, 0xDEADBEEF, -2, -70000, -(2**40))
    reader = ByteReader(buffer)

    assert reader.u8("a") == 0xAB
    assert reader.u16("b") == 0x1234
    assert reader.u32("c") == 0xDEADBEEF
    assert reader.i16("d") == -2
    assert reader.i32("e") == -70000
    assert reader.i64("f") == -(2**40)
    assert reader.offset == len(buffer)
    assert reader.remaining == 0


def test_reads_float() -> None:
    """Verify f32 decodes an IEEE single-precision value."""
    reader = ByteReader(struct.pack("<f", 2.5))

    assert reader.f32("probe") == 2.5


def test_take_returns_copy_and_skip_advances() -> None:
    """Verify take() copies bytes out of the buffer and skip() moves past bytes."""
    buffer = bytearray(b"\x01\x02\x03\x04\x05")
    reader = ByteReader(buffer, offset=1)

    reader.skip(1, "padding")
    taken = reader.take(2, "payload")
    buffer[2] = 0xFF

    assert taken == b"\x03\x04"
    assert isinstance(taken, bytes)
    assert reader.offset == 4
    assert reader.remaining == 1


def test_u16_array() -> None:
    """Verify u16_array reads consecutive little-endian words."""
    reader = ByteReader(struct.pack("<3H", 1, 0x8000, 0xFFFF))

    assert reader.u16_array(3, "logic") == (1, 0x8000, 0xFFFF)


def test_zero_length_reads() -> None:
    """Verify zero-length take/skip/array succeed on an exhausted buffer."""
    reader = ByteReader(b"")

    assert reader.take(0, "empty") == b""
    reader.skip(0, "empty")
    assert reader.u16_array(0, "empty") == ()


def test_truncated_read_reports_field_and_offset() -> None:
    """Verify a short buffer raises TruncatedError naming the field."""
    reader = ByteReader(b"\x00\x01\x02")
    reader.skip(2, "padding")

    with pytest.raises(TruncatedError, match="roll_stop") as exc_info:
        reader.u32("roll_stop")

    assert exc_info.value.field == "roll_stop"
    assert exc_info.value.offset == 2
    # Failed reads do not move the cursor
    assert reader.offset == 2


def test_truncated_take_and_skip() -> None:
    """Verify take and skip beyond the end raise TruncatedError."""
    reader = ByteReader(b"\x00" * 4)

    with pytest.raises(TruncatedError):
        reader.take(5, "samples")
    with pytest.raises(TruncatedError):
        reader.skip(5, "padding")
    with pytest.raises(TruncatedError):
        reader.u16_array(3, "logic")


def test_offset_beyond_end_is_truncated() -> None:
    """Verify a reader started past the end has nothing remaining."""
    reader = ByteReader(b"\x00\x00", offset=10)

    assert reader.remaining == 0
    with pytest.raises(TruncatedError):
        reader.u8("byte")


def test_negative_length_is_rejected() -> None:
    """Verify negative sizes are a programming error, not truncation."""
    reader = ByteReader(b"\x00" * 4)

    with pytest.raises(ValueError, match="negative"):
        reader.take(-1, "samples")


def test_context_manager_releases_buffer() -> None:
    """Verify leaving the with block lets the caller resize a bytearray."""
    buffer = bytearray(b"\x01\x02")

    with pytest.raises(TruncatedError):
        with ByteReader(buffer) as reader:
            reader.u32("count")

    buffer.extend(b"\x03")
    assert len(buffer) == 3

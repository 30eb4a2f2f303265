"""Coded settings stored in Rigol DS1000E waveform files."""

from __future__ import annotations

from enum import IntEnum
from typing import TypeVar

from rigolwfm.errors import InvalidEnumCodeError


class Bandwidth(IntEnum):
    """Channel bandwidth limit."""

    NO_LIMIT = 0
    MHZ_20 = 1
    MHZ_100 = 2
    MHZ_200 = 3
    MHZ_250 = 4


class Coupling(IntEnum):
    """Input or trigger coupling."""

    DC = 0
    AC = 1
    GND = 2


class Filter(IntEnum):
    """Digital filter type."""

    LOW_PASS = 0
    HIGH_PASS = 1
    BAND_PASS = 2
    BAND_REJECT = 3


class Source(IntEnum):
    """Trigger source."""

    CH1 = 0
    CH2 = 1
    EXT = 2
    EXT5 = 3
    AC_LINE = 4
    DIG_CH = 5


class TriggerMode(IntEnum):
    """Trigger mode. ALT triggers each channel on alternating sweeps."""

    EDGE = 0
    PULSE = 1
    SLOPE = 2
    VIDEO = 3
    ALT = 4
    PATTERN = 5
    DURATION = 6


class Unit(IntEnum):
    """Channel unit. Only V is produced by the DS1000E format."""

    W = 0
    A = 1
    V = 2
    U = 3


E = TypeVar("E", bound=IntEnum)


def max_code(enum_type: type[IntEnum]) -> int:
    """Return the highest valid code of an enum family."""
    return max(member.value for member in enum_type)


def decode_enum(
    enum_type: type[E], code: int, field: str, offset: int | None = None
) -> E:
    """Convert a raw byte code into an enum member.

    Codes are contiguous from 0, so anything above the family's maximum is
    rejected instead of being mapped to a default.

    Args:
        enum_type: Enum family to decode into
        code: Raw code read from the file
        field: Field name used in error messages
        offset: Byte offset of the code, if known

    Returns:
        The matching enum member

    Raises:
        InvalidEnumCodeError: If code is outside 0..max
    """
    highest = max_code(enum_type)
    if not 0 <= code <= highest:
        raise InvalidEnumCodeError(
            f"Invalid {enum_type.__name__} code {code} (max {highest})",
            field,
            offset,
        )
    return enum_type(code)

"""Decode errors for Rigol waveform files."""

from __future__ import annotations


class WfmParseError(Exception):
    """Raised when a waveform buffer cannot be decoded.

    Attributes:
        field: Name of the field or stage that failed (e.g. "ch1.probe_value")
        offset: Byte offset into the buffer where the failure occurred
    """

    def __init__(self, message: str, field: str, offset: int | None = None) -> None:
        self.field = field
        self.offset = offset
        if offset is not None:
            message = f"{message} (field {field!r} at byte {offset})"
        else:
            message = f"{message} (field {field!r})"
        super().__init__(message)


class MagicMismatchError(WfmParseError):
    """Raised when the buffer does not start with the waveform file tag."""


class TruncatedError(WfmParseError):
    """Raised when the buffer ends before a field can be read."""


class InvalidEnumCodeError(WfmParseError):
    """Raised when an enum field holds a code above its maximum."""


class ArithmeticUnderflowError(WfmParseError):
    """Raised when a derived point count would be negative."""

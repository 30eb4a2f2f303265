"""Waveform file module for rigolwfm.

Re-exports the decoding API and its data and error types.
"""

from rigolwfm.ds1000e import HEADER_SIZE, decode_header, decode_raw_data, parse
from rigolwfm.errors import (
    ArithmeticUnderflowError,
    InvalidEnumCodeError,
    MagicMismatchError,
    TruncatedError,
    WfmParseError,
)
from rigolwfm.headers import WaveformHeader
from rigolwfm.trace import Trace
from rigolwfm.waveform_data import RawData, WaveformData

__all__ = [
    "HEADER_SIZE",
    "ArithmeticUnderflowError",
    "InvalidEnumCodeError",
    "MagicMismatchError",
    "RawData",
    "Trace",
    "TruncatedError",
    "WaveformData",
    "WaveformHeader",
    "WfmParseError",
    "decode_header",
    "decode_raw_data",
    "parse",
]

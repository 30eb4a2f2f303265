"""Decoder for Rigol DS1000E/DS1000D series waveform (.wfm) files.

File layout (all multi-byte fields little-endian):

    Bytes 0-3:     magic            A5 A5 00 00
    Bytes 4-15:    padding
    Byte 16:       ADC mode
    Bytes 20-23:   roll_stop        u32, non-zero in rolling mode
    Bytes 28-31:   ch1 points       u32, raw count
    Byte 32:       active channel
    Bytes 34-81:   channel 1 and channel 2 headers (24 bytes each)
    Byte 82:       time offset (unused)
    Bytes 84-119:  timebase header (36 bytes)
    Bytes 120-141: logic analyzer header (22 bytes)
    Byte 142:      trigger mode
    Bytes 143-222: trigger 1 and trigger 2 headers (40 bytes each)
    Bytes 229-232: ch2 points       u32, raw count (0 if not written)
    Bytes 233-268: second timebase header, used in ALT trigger mode
    Bytes 269-272: logic sample rate f32 (not retained)
    Bytes 273-275: reserved

Sample data starts at byte 276: channel 1 bytes, rolling-mode padding and a
4-byte sentinel, then the same for channel 2, then 16-bit logic words.
"""

from __future__ import annotations

import logging
import math

from rigolwfm.byte_reader import ByteReader
from rigolwfm.enums import Coupling, Source, TriggerMode, Unit, decode_enum
from rigolwfm.errors import ArithmeticUnderflowError, MagicMismatchError
from rigolwfm.headers import (
    ChannelHeader,
    LogicAnalyzerHeader,
    TimeHeader,
    TriggerHeader,
    WaveformHeader,
)
from rigolwfm.waveform_data import RawData, WaveformData

logger = logging.getLogger(__name__)

MAGIC = bytes([0xA5, 0xA5, 0x00, 0x00])
# Sample data starts at this offset
HEADER_SIZE = 276
# Marker between one channel's samples and the next
SENTINEL_SIZE = 4
# ADC codes per vertical division, used to get volts per code
CODES_PER_DIVISION = 25.0


def parse(buffer: bytes | bytearray | memoryview) -> WaveformData:
    """Decode a complete waveform file held in memory.

    Args:
        buffer: Contents of a .wfm file

    Returns:
        WaveformData with the decoded header and the raw samples of every
        enabled channel

    Raises:
        WfmParseError: If any part of the buffer cannot be decoded
    """
    header = decode_header(buffer)
    data = decode_raw_data(buffer, header)
    return WaveformData(header=header, data=data)


def decode_header(buffer: bytes | bytearray | memoryview) -> WaveformHeader:
    """Decode the fixed-size file header.

    Args:
        buffer: Contents of a .wfm file (at least HEADER_SIZE bytes)

    Returns:
        WaveformHeader with derived point counts

    Raises:
        MagicMismatchError: If the file tag is wrong
        TruncatedError: If the buffer is shorter than the header
        InvalidEnumCodeError: If a coded setting is out of range
        ArithmeticUnderflowError: If the point counts are inconsistent
            with roll_stop
    """
    with ByteReader(buffer) as reader:
        magic = reader.take(len(MAGIC), "magic")
        if magic != MAGIC:
            raise MagicMismatchError(
                f"Not a DS1000E waveform file: tag {magic.hex(' ')} "
                f"!= {MAGIC.hex(' ')}",
                "magic",
                0,
            )
        reader.skip(12, "padding")
        adc_mode = reader.u8("adc_mode")
        reader.skip(3, "padding")
        roll_stop = reader.u32("roll_stop")
        reader.skip(4, "unused")
        raw_ch1_points = reader.u32("ch1_points")
        active_channel = reader.u8("active_channel")
        reader.skip(1, "padding")

        ch1 = _decode_channel_header(reader, "ch1")
        ch2 = _decode_channel_header(reader, "ch2")

        reader.u8("time_offset")
        reader.skip(1, "padding")
        time = _decode_time_header(reader, "time")
        logic = _decode_logic_analyzer_header(reader, "logic")

        trigger_mode = decode_enum(
            TriggerMode, reader.u8("trigger_mode"), "trigger_mode", reader.offset - 1
        )
        trigger1 = _decode_trigger_header(reader, "trigger1")
        trigger2 = _decode_trigger_header(reader, "trigger2")
        reader.skip(6, "padding")

        raw_ch2_points = reader.u32("ch2_points")
        time2 = _decode_time_header(reader, "time2")
        reader.f32("logic_sample_rate")
        reader.skip(HEADER_SIZE - reader.offset, "reserved")

    ch1_points, ch1_skip = _derive_ch1_points(raw_ch1_points, roll_stop)

    # ch2 points are not always written; fall back to channel 1
    if ch1.enabled and raw_ch2_points == 0:
        ch2_points = ch1_points
    else:
        ch2_points = raw_ch2_points

    logger.debug(
        "Decoded header: roll_stop=%d ch1_points=%d ch1_skip=%d ch2_points=%d "
        "trigger_mode=%s",
        roll_stop,
        ch1_points,
        ch1_skip,
        ch2_points,
        trigger_mode.name,
    )

    return WaveformHeader(
        adc_mode=adc_mode,
        roll_stop=roll_stop,
        active_channel=active_channel,
        ch1=ch1,
        ch2=ch2,
        time=time,
        time2=time2,
        trigger1=trigger1,
        trigger2=trigger2,
        logic=logic,
        ch1_points=ch1_points,
        ch1_skip=ch1_skip,
        ch2_points=ch2_points,
        trigger_mode=trigger_mode,
    )


def _derive_ch1_points(raw_points: int, roll_stop: int) -> tuple[int, int]:
    """Return (valid point count, leading points to skip) for channel 1.

    In rolling mode the record wraps at roll_stop and the samples before
    the wrap are invalid.
    """
    if roll_stop == 0:
        points = raw_points - 4
        skip = 0
    else:
        points = raw_points - roll_stop - 6
        skip = roll_stop + 2

    if points < 0:
        raise ArithmeticUnderflowError(
            f"Point count {raw_points} is too small for roll_stop {roll_stop}",
            "ch1_points",
            28,
        )
    return points, skip


def _decode_channel_header(reader: ByteReader, name: str) -> ChannelHeader:
    reader.skip(2, f"{name}.unknown")
    scale_display = reader.i32(f"{name}.scale_display")
    shift_display = reader.i16(f"{name}.shift_display")
    reader.skip(2, f"{name}.unknown")
    probe_value = reader.f32(f"{name}.probe_value")
    invert_display = reader.u8(f"{name}.invert_display")
    enabled = reader.u8(f"{name}.enabled") != 0
    inverted = reader.u8(f"{name}.inverted") != 0
    reader.skip(1, f"{name}.unknown")
    scale_measured = reader.i32(f"{name}.scale_measured")
    shift_measured = reader.i16(f"{name}.shift_measured")

    volt_per_division = math.copysign(
        scale_measured * probe_value, -1.0 if inverted else 1.0
    )
    # scale_measured is in microvolts per division
    volt_scale = 1e-6 * scale_measured * probe_value / CODES_PER_DIVISION
    volt_offset = shift_measured * volt_scale

    return ChannelHeader(
        scale_display=scale_display,
        shift_display=shift_display,
        probe_value=probe_value,
        invert_display=invert_display,
        scale_measured=scale_measured,
        shift_measured=shift_measured,
        inverted=inverted,
        enabled=enabled,
        volt_per_division=volt_per_division,
        volt_scale=volt_scale,
        volt_offset=volt_offset,
        unit=Unit.V,
    )


def _decode_time_header(reader: ByteReader, name: str) -> TimeHeader:
    return TimeHeader(
        scale_display=reader.i64(f"{name}.scale_display"),
        offset_display=reader.i64(f"{name}.offset_display"),
        sample_rate_hz=reader.f32(f"{name}.sample_rate_hz"),
        scale_measured=reader.i64(f"{name}.scale_measured"),
        offset_measured=reader.i64(f"{name}.offset_measured"),
    )


def _decode_trigger_header(reader: ByteReader, name: str) -> TriggerHeader:
    offset = reader.offset
    mode = decode_enum(TriggerMode, reader.u8(f"{name}.mode"), f"{name}.mode", offset)
    source = decode_enum(
        Source, reader.u8(f"{name}.source"), f"{name}.source", offset + 1
    )
    coupling = decode_enum(
        Coupling, reader.u8(f"{name}.coupling"), f"{name}.coupling", offset + 2
    )
    sweep = reader.u8(f"{name}.sweep")
    reader.skip(1, f"{name}.padding")
    sens = reader.f32(f"{name}.sens")
    holdoff = reader.f32(f"{name}.holdoff")
    level = reader.f32(f"{name}.level")
    direct = reader.u8(f"{name}.direct") != 0
    pulse_type = reader.u8(f"{name}.pulse_type")
    reader.skip(2, f"{name}.padding")
    pulse_width = reader.f32(f"{name}.pulse_width")
    slope_type = reader.u8(f"{name}.slope_type")
    reader.skip(3, f"{name}.padding")
    lower = reader.f32(f"{name}.lower")
    slope_width = reader.f32(f"{name}.slope_width")
    video_pol = reader.u8(f"{name}.video_pol")
    video_sync = reader.u8(f"{name}.video_sync")
    video_std = reader.u8(f"{name}.video_std")

    return TriggerHeader(
        mode=mode,
        source=source,
        coupling=coupling,
        sweep=sweep,
        sens=sens,
        holdoff=holdoff,
        level=level,
        direct=direct,
        pulse_type=pulse_type,
        pulse_width=pulse_width,
        slope_type=slope_type,
        lower=lower,
        slope_width=slope_width,
        video_pol=video_pol,
        video_sync=video_sync,
        video_std=video_std,
    )


def _decode_logic_analyzer_header(
    reader: ByteReader, name: str
) -> LogicAnalyzerHeader:
    # Only bit 0 of the enabled byte is meaningful
    enabled = reader.u8(f"{name}.enabled") & 0b1 != 0
    active_channel = reader.u8(f"{name}.active_channel")
    enabled_channels = reader.u16(f"{name}.enabled_channels")
    position = tuple(reader.take(16, f"{name}.position"))
    group8to15size = reader.u8(f"{name}.group8to15size")
    group0to7size = reader.u8(f"{name}.group0to7size")

    return LogicAnalyzerHeader(
        enabled=enabled,
        active_channel=active_channel,
        enabled_channels=enabled_channels,
        position=position,
        group8to15size=group8to15size,
        group0to7size=group0to7size,
    )


def decode_raw_data(
    buffer: bytes | bytearray | memoryview,
    header: WaveformHeader,
    offset: int = HEADER_SIZE,
) -> RawData:
    """Extract the raw samples of every enabled channel.

    Channel 2 uses the channel 1 skip length. The logic analyzer has no
    stored sample count, so ch1_points words are read.

    Args:
        buffer: Contents of a .wfm file
        header: Header decoded from the same buffer
        offset: Byte offset where sample data starts

    Returns:
        RawData with empty containers for disabled channels

    Raises:
        TruncatedError: If the buffer ends before a channel's data
    """
    with ByteReader(buffer, offset) as reader:
        ch1 = b""
        if header.ch1.enabled:
            ch1 = reader.take(header.ch1_points, "ch1 samples")
            reader.skip(header.ch1_skip, "ch1 roll padding")
            reader.skip(SENTINEL_SIZE, "ch1 sentinel")

        ch2 = b""
        if header.ch2.enabled:
            ch2 = reader.take(header.ch2_points, "ch2 samples")
            reader.skip(header.ch1_skip, "ch2 roll padding")
            reader.skip(SENTINEL_SIZE, "ch2 sentinel")

        logic: tuple[int, ...] = ()
        if header.logic.enabled:
            logic = reader.u16_array(header.ch1_points, "logic samples")
        unread = reader.remaining

    logger.debug(
        "Extracted samples: ch1=%d ch2=%d logic=%d (%d bytes unread)",
        len(ch1),
        len(ch2),
        len(logic),
        unread,
    )

    return RawData(ch1=ch1, ch2=ch2, logic=logic)

"""Shared test fixtures for rigolwfm tests."""

from __future__ import annotations

import struct
from typing import Any

import pytest

from rigolwfm.ds1000e import HEADER_SIZE, MAGIC

SENTINEL = b"\xff\xff\xff\xff"


def channel_block(
    scale_display: int = 1000000,
    shift_display: int = 0,
    probe_value: float = 1.0,
    invert_display: int = 0,
    enabled: bool = True,
    inverted: bool = False,
    scale_measured: int = 1000000,
    shift_measured: int = 0,
) -> bytes:
    """Build a 24-byte channel header."""
    return struct.pack(
        "<HihBBfBBBBih",
        0,
        scale_display,
        shift_display,
        0,
        0,
        probe_value,
        invert_display,
        int(enabled),
        int(inverted),
        0,
        scale_measured,
        shift_measured,
    )


def time_block(
    scale_display: int = 1000000,
    offset_display: int = 0,
    sample_rate_hz: float = 1e6,
    scale_measured: int = 1000000,
    offset_measured: int = 0,
) -> bytes:
    """Build a 36-byte timebase header."""
    return struct.pack(
        "<qqfqq",
        scale_display,
        offset_display,
        sample_rate_hz,
        scale_measured,
        offset_measured,
    )


def logic_block(
    enabled: int = 0,
    active_channel: int = 0,
    enabled_channels: int = 0,
    position: bytes = bytes(16),
    group8to15size: int = 0,
    group0to7size: int = 0,
) -> bytes:
    """Build a 22-byte logic analyzer header."""
    return struct.pack(
        "<BBH16sBB",
        enabled,
        active_channel,
        enabled_channels,
        position,
        group8to15size,
        group0to7size,
    )


def trigger_block(
    mode: int = 0,
    source: int = 0,
    coupling: int = 0,
    sweep: int = 0,
    sens: float = 0.5,
    holdoff: float = 0.0,
    level: float = 1.5,
    direct: int = 0,
    pulse_type: int = 0,
    pulse_width: float = 0.0,
    slope_type: int = 0,
    lower: float = 0.0,
    slope_width: float = 0.0,
    video_pol: int = 0,
    video_sync: int = 0,
    video_std: int = 0,
) -> bytes:
    """Build a 40-byte trigger header."""
    return struct.pack(
        "<BBBBxfffBB2xfB3xffBBB",
        mode,
        source,
        coupling,
        sweep,
        sens,
        holdoff,
        level,
        direct,
        pulse_type,
        pulse_width,
        slope_type,
        lower,
        slope_width,
        video_pol,
        video_sync,
        video_std,
    )


class WfmBuilder:
    """Synthesises .wfm file contents for decoder tests.

    Sub-header attributes hold keyword overrides for the block builders
    above. Defaults describe a non-rolling capture with channel 1 enabled
    and 1000 valid points.
    """

    def __init__(self) -> None:
        self.adc_mode = 0
        self.roll_stop = 0
        self.ch1_points = 1004
        self.active_channel = 1
        self.ch1: dict[str, Any] = {}
        self.ch2: dict[str, Any] = {"enabled": False}
        self.time_offset = 0
        self.time: dict[str, Any] = {}
        self.logic: dict[str, Any] = {}
        self.trigger_mode = 0
        self.trigger1: dict[str, Any] = {}
        self.trigger2: dict[str, Any] = {}
        self.ch2_points = 0
        self.time2: dict[str, Any] = {}
        self.logic_sample_rate = 0.0

    def header(self) -> bytes:
        """Return the HEADER_SIZE bytes of the file header."""
        data = b"".join(
            [
                struct.pack(
                    "<4s12xB3xI4xIBx",
                    MAGIC,
                    self.adc_mode,
                    self.roll_stop,
                    self.ch1_points,
                    self.active_channel,
                ),
                channel_block(**self.ch1),
                channel_block(**self.ch2),
                struct.pack("<Bx", self.time_offset),
                time_block(**self.time),
                logic_block(**self.logic),
                struct.pack("<B", self.trigger_mode),
                trigger_block(**self.trigger1),
                trigger_block(**self.trigger2),
                struct.pack("<6xI", self.ch2_points),
                time_block(**self.time2),
                struct.pack("<f", self.logic_sample_rate),
                bytes(3),
            ]
        )
        assert len(data) == HEADER_SIZE
        return data

    def build(self, payload: bytes = b"") -> bytes:
        """Return the header followed by the given sample payload."""
        return self.header() + payload

    @staticmethod
    def channel_payload(samples: bytes, skip: int = 0) -> bytes:
        """Build one analog channel's data block: samples, roll padding, sentinel."""
        return samples + bytes(skip) + SENTINEL

    @staticmethod
    def logic_payload(words: list[int]) -> bytes:
        """Build a logic analyzer data block of 16-bit words."""
        return struct.pack(f"<{len(words)}H", *words)


@pytest.fixture
def wfm_builder() -> WfmBuilder:
    """Provide a builder for synthetic waveform files."""
    return WfmBuilder()


@pytest.fixture
def ch1_samples() -> bytes:
    """Provide 1000 channel 1 samples matching the builder defaults."""
    return bytes(i % 256 for i in range(1000))

"""Decoded waveform file: header plus raw sample payload."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from rigolwfm.enums import TriggerMode
from rigolwfm.headers import ChannelHeader, WaveformHeader
from rigolwfm.trace import Trace

# Raw ADC code at the vertical centre of the screen (25 codes per division)
ADC_CENTER = 125


@dataclass(frozen=True)
class RawData:
    """Raw samples. A disabled channel has an empty container."""

    ch1: bytes = b""
    ch2: bytes = b""
    logic: tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ch1": list(self.ch1),
            "ch2": list(self.ch2),
            "logic": list(self.logic),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RawData:
        return cls(
            ch1=bytes(data["ch1"]),
            ch2=bytes(data["ch2"]),
            logic=tuple(data["logic"]),
        )


@dataclass(frozen=True)
class WaveformData:
    """A fully decoded waveform file."""

    header: WaveformHeader
    data: RawData

    def _channel(self, channel: int) -> tuple[ChannelHeader, bytes]:
        if channel == 1:
            return self.header.ch1, self.data.ch1
        if channel == 2:
            return self.header.ch2, self.data.ch2
        raise ValueError(f"Analog channel must be 1 or 2, got {channel}")

    def trace(self, channel: int) -> Trace:
        """Convert an analog channel's raw ADC codes to a voltage trace.

        The trigger sits at the centre of the record, shifted by the channel's
        horizontal offset.

        Args:
            channel: Analog channel number (1 or 2)

        Returns:
            Trace with voltages in volts and times in seconds

        Raises:
            ValueError: If the channel number is invalid, the channel is
                disabled in this capture, or its sample rate is not a
                positive number
        """
        channel_header, samples = self._channel(channel)
        if not channel_header.enabled:
            raise ValueError(f"Channel {channel} is not enabled in this capture")

        # Channel 2 runs on its own timebase only in ALT trigger mode
        if channel == 2 and self.header.trigger_mode == TriggerMode.ALT:
            sample_rate = self.header.time2.sample_rate_hz
            time_offset = self.header.ch2_time_offset
        else:
            sample_rate = self.header.time.sample_rate_hz
            time_offset = self.header.ch1_time_offset

        if not math.isfinite(sample_rate) or sample_rate <= 0:
            raise ValueError(
                f"Channel {channel} has no valid sample rate: {sample_rate}"
            )

        volt_scale = channel_header.volt_scale
        volt_offset = channel_header.volt_offset
        voltages = [(ADC_CENTER - raw) * volt_scale - volt_offset for raw in samples]

        return Trace(
            channel=channel,
            voltages=voltages,
            sample_rate=sample_rate,
            start_time=time_offset - len(samples) / (2 * sample_rate),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"header": self.header.to_dict(), "data": self.data.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WaveformData:
        return cls(
            header=WaveformHeader.from_dict(data["header"]),
            data=RawData.from_dict(data["data"]),
        )

"""Header records decoded from Rigol DS1000E waveform files."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from rigolwfm.enums import Coupling, Source, TriggerMode, Unit

# Measured time values are stored in picoseconds
TIME_SCALE = 1e-12


@dataclass(frozen=True)
class ChannelHeader:
    """Vertical settings of one analog channel.

    The display values are what the scope showed on screen. The measured
    values are the calibrated settings used to derive physical units:
    volt_scale is volts per ADC count and volt_offset is the vertical shift
    in volts.
    """

    scale_display: int
    shift_display: int
    probe_value: float
    invert_display: int
    scale_measured: int
    shift_measured: int
    inverted: bool
    enabled: bool
    volt_per_division: float
    volt_scale: float
    volt_offset: float
    unit: Unit = Unit.V

    def to_dict(self) -> dict[str, Any]:
        return {
            "scale_display": self.scale_display,
            "shift_display": self.shift_display,
            "probe_value": self.probe_value,
            "invert_display": self.invert_display,
            "scale_measured": self.scale_measured,
            "shift_measured": self.shift_measured,
            "inverted": self.inverted,
            "enabled": self.enabled,
            "volt_per_division": self.volt_per_division,
            "volt_scale": self.volt_scale,
            "volt_offset": self.volt_offset,
            "unit": self.unit.name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChannelHeader:
        return cls(
            scale_display=data["scale_display"],
            shift_display=data["shift_display"],
            probe_value=data["probe_value"],
            invert_display=data["invert_display"],
            scale_measured=data["scale_measured"],
            shift_measured=data["shift_measured"],
            inverted=data["inverted"],
            enabled=data["enabled"],
            volt_per_division=data["volt_per_division"],
            volt_scale=data["volt_scale"],
            volt_offset=data["volt_offset"],
            unit=Unit[data["unit"]],
        )


@dataclass(frozen=True)
class TimeHeader:
    """Timebase settings. Scales and offsets are raw picosecond integers."""

    scale_display: int
    offset_display: int
    sample_rate_hz: float
    scale_measured: int
    offset_measured: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "scale_display": self.scale_display,
            "offset_display": self.offset_display,
            "sample_rate_hz": self.sample_rate_hz,
            "scale_measured": self.scale_measured,
            "offset_measured": self.offset_measured,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TimeHeader:
        return cls(
            scale_display=data["scale_display"],
            offset_display=data["offset_display"],
            sample_rate_hz=data["sample_rate_hz"],
            scale_measured=data["scale_measured"],
            offset_measured=data["offset_measured"],
        )


@dataclass(frozen=True)
class TriggerHeader:
    """Trigger configuration.

    sweep, pulse_type, slope_type and the video_* fields are raw codes whose
    meaning is not known yet.
    """

    mode: TriggerMode
    source: Source
    coupling: Coupling
    sweep: int
    sens: float
    holdoff: float
    level: float
    direct: bool
    pulse_type: int
    pulse_width: float
    slope_type: int
    lower: float
    slope_width: float
    video_pol: int
    video_sync: int
    video_std: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.name,
            "source": self.source.name,
            "coupling": self.coupling.name,
            "sweep": self.sweep,
            "sens": self.sens,
            "holdoff": self.holdoff,
            "level": self.level,
            "direct": self.direct,
            "pulse_type": self.pulse_type,
            "pulse_width": self.pulse_width,
            "slope_type": self.slope_type,
            "lower": self.lower,
            "slope_width": self.slope_width,
            "video_pol": self.video_pol,
            "video_sync": self.video_sync,
            "video_std": self.video_std,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TriggerHeader:
        return cls(
            mode=TriggerMode[data["mode"]],
            source=Source[data["source"]],
            coupling=Coupling[data["coupling"]],
            sweep=data["sweep"],
            sens=data["sens"],
            holdoff=data["holdoff"],
            level=data["level"],
            direct=data["direct"],
            pulse_type=data["pulse_type"],
            pulse_width=data["pulse_width"],
            slope_type=data["slope_type"],
            lower=data["lower"],
            slope_width=data["slope_width"],
            video_pol=data["video_pol"],
            video_sync=data["video_sync"],
            video_std=data["video_std"],
        )


@dataclass(frozen=True)
class LogicAnalyzerHeader:
    """Logic analyzer (digital channels D0-D15) settings.

    position and the two group sizes are passed through undecoded.
    """

    enabled: bool
    active_channel: int
    enabled_channels: int
    position: tuple[int, ...]
    group8to15size: int
    group0to7size: int

    def channel_enabled(self, channel: int) -> bool:
        """Check whether digital channel D<channel> is enabled in the bitmask."""
        if not 0 <= channel < 16:
            raise ValueError(f"Digital channel must be 0-15, got {channel}")
        return bool(self.enabled_channels >> channel & 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "active_channel": self.active_channel,
            "enabled_channels": self.enabled_channels,
            "position": list(self.position),
            "group8to15size": self.group8to15size,
            "group0to7size": self.group0to7size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LogicAnalyzerHeader:
        return cls(
            enabled=data["enabled"],
            active_channel=data["active_channel"],
            enabled_channels=data["enabled_channels"],
            position=tuple(data["position"]),
            group8to15size=data["group8to15size"],
            group0to7size=data["group0to7size"],
        )


@dataclass(frozen=True)
class WaveformHeader:
    """Complete file header.

    ch1_points, ch1_skip and ch2_points are derived from the raw point counts
    and roll_stop: in rolling mode the first roll_stop + 2 samples of each
    analog record are invalid and are skipped.
    """

    adc_mode: int
    roll_stop: int
    active_channel: int
    ch1: ChannelHeader
    ch2: ChannelHeader
    time: TimeHeader
    time2: TimeHeader
    trigger1: TriggerHeader
    trigger2: TriggerHeader
    logic: LogicAnalyzerHeader
    ch1_points: int
    ch1_skip: int
    ch2_points: int
    trigger_mode: TriggerMode

    @property
    def ch1_time_scale(self) -> float:
        """Channel 1 time per division in seconds."""
        return TIME_SCALE * self.time.scale_measured

    @property
    def ch1_time_offset(self) -> float:
        """Channel 1 horizontal offset in seconds."""
        return TIME_SCALE * self.time.offset_measured

    @property
    def ch2_time_scale(self) -> float:
        """Channel 2 time per division in seconds (own timebase in ALT mode)."""
        if self.trigger_mode == TriggerMode.ALT:
            return TIME_SCALE * self.time2.scale_measured
        return self.ch1_time_scale

    @property
    def ch2_time_offset(self) -> float:
        """Channel 2 horizontal offset in seconds (own timebase in ALT mode)."""
        if self.trigger_mode == TriggerMode.ALT:
            return TIME_SCALE * self.time2.offset_measured
        return self.ch1_time_offset

    @property
    def seconds_per_point(self) -> float:
        """Sample interval of the main timebase (inf if no rate was recorded)."""
        if self.time.sample_rate_hz == 0:
            return math.inf
        return 1.0 / self.time.sample_rate_hz

    def to_dict(self) -> dict[str, Any]:
        return {
            "adc_mode": self.adc_mode,
            "roll_stop": self.roll_stop,
            "active_channel": self.active_channel,
            "ch1": self.ch1.to_dict(),
            "ch2": self.ch2.to_dict(),
            "time": self.time.to_dict(),
            "time2": self.time2.to_dict(),
            "trigger1": self.trigger1.to_dict(),
            "trigger2": self.trigger2.to_dict(),
            "logic": self.logic.to_dict(),
            "ch1_points": self.ch1_points,
            "ch1_skip": self.ch1_skip,
            "ch2_points": self.ch2_points,
            "trigger_mode": self.trigger_mode.name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WaveformHeader:
        return cls(
            adc_mode=data["adc_mode"],
            roll_stop=data["roll_stop"],
            active_channel=data["active_channel"],
            ch1=ChannelHeader.from_dict(data["ch1"]),
            ch2=ChannelHeader.from_dict(data["ch2"]),
            time=TimeHeader.from_dict(data["time"]),
            time2=TimeHeader.from_dict(data["time2"]),
            trigger1=TriggerHeader.from_dict(data["trigger1"]),
            trigger2=TriggerHeader.from_dict(data["trigger2"]),
            logic=LogicAnalyzerHeader.from_dict(data["logic"]),
            ch1_points=data["ch1_points"],
            ch1_skip=data["ch1_skip"],
            ch2_points=data["ch2_points"],
            trigger_mode=TriggerMode[data["trigger_mode"]],
        )

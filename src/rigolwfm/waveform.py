"""Reading waveform files and exporting decoded data."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import matplotlib.pyplot as plt

from rigolwfm.ds1000e import parse
from rigolwfm.trace import Trace
from rigolwfm.waveform_data import WaveformData

# Current JSON schema version
WAVEFORM_JSON_VERSION = 1

# DS1000E screen colours, darkened for visibility on white
CHANNEL_COLORS = {1: "#D4AA00", 2: "#00CCCC"}


def read_wfm(filename: str | Path) -> WaveformData:
    """Read and decode a .wfm file.

    Args:
        filename: Path to the waveform file

    Returns:
        Decoded WaveformData

    Raises:
        OSError: If the file cannot be read
        WfmParseError: If the file contents cannot be decoded
    """
    return parse(Path(filename).read_bytes())


def save_waveform_json(data: WaveformData, filename: str) -> None:
    """Save a decoded waveform file to JSON.

    Args:
        data: WaveformData to save
        filename: Path to the output JSON file
    """
    output: dict[str, object] = {
        "version": WAVEFORM_JSON_VERSION,
        "export_time": datetime.now(UTC).isoformat(),
        **data.to_dict(),
    }

    with open(filename, "w") as f:
        json.dump(output, f)


def load_waveform_json(filename: str) -> WaveformData:
    """Load a decoded waveform file from JSON.

    Args:
        filename: Path to the input JSON file

    Returns:
        WaveformData reconstructed from the file
    """
    with open(filename) as f:
        data = json.load(f)

    if data.get("version") != WAVEFORM_JSON_VERSION:
        raise ValueError(f"Unsupported waveform file version: {data.get('version')}")

    return WaveformData.from_dict(data)


def save_trace_csv(trace: Trace, filename: str) -> None:
    """Save a voltage trace to a CSV file.

    Args:
        trace: Trace to save
        filename: Path to the output CSV file
    """
    times = trace.get_times()
    with open(filename, "w") as f:
        f.write("time_s,voltage_v\n")
        for t, v in zip(times, trace.voltages, strict=True):
            f.write(f"{t:.9g},{v:.6g}\n")


def save_trace_plot(
    traces: list[Trace], filename: str, title: str = "Rigol DS1000E Capture"
) -> None:
    """Save a plot of one or more channel traces to an image file.

    Args:
        traces: Traces to draw, one line per channel
        filename: Path to the output image file (e.g., .png)
        title: Plot title
    """
    fig, ax = plt.subplots(figsize=(12, 5))

    for trace in sorted(traces, key=lambda t: t.channel):
        # Convert times to milliseconds for readability
        times_ms = [t * 1000 for t in trace.get_times()]
        ax.plot(
            times_ms,
            trace.voltages,
            linewidth=0.8,
            label=f"CH{trace.channel}",
            color=CHANNEL_COLORS.get(trace.channel),
        )

    ax.set_xlabel("Time (ms)")
    ax.set_ylabel("Voltage (V)")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.axhline(y=0, color="k", linewidth=0.5)
    ax.axvline(x=0, color="r", linewidth=0.5, linestyle="--", label="Trigger")
    ax.legend(loc="upper right")

    fig.tight_layout()
    fig.savefig(filename, dpi=150)
    plt.close(fig)

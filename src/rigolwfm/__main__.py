"""CLI entry point for rigolwfm."""

import argparse
import logging
import sys
from pathlib import Path

from rigolwfm.ds1000e import CODES_PER_DIVISION
from rigolwfm.trace import Trace
from rigolwfm.waveform import (
    read_wfm,
    save_trace_csv,
    save_trace_plot,
    save_waveform_json,
)
from rigolwfm.waveform_data import WaveformData
from rigolwfm.wfm import WfmParseError

# Directory for exported files
DEFAULT_OUTPUT_DIR = Path("exports")


def _print_summary(wfm: WaveformData) -> None:
    """Print the decoded header settings."""
    header = wfm.header
    print(f"Active channel: {header.active_channel}")
    print(f"Trigger mode:   {header.trigger_mode.name}")
    if header.roll_stop:
        print(f"Rolling mode:   stop at {header.roll_stop}")
    print(
        f"Timebase:       {header.ch1_time_scale:.6g} s/div, "
        f"offset {header.ch1_time_offset:.6g} s, "
        f"{header.time.sample_rate_hz:.6g} Sa/s"
    )

    for channel, channel_header, samples in (
        (1, header.ch1, wfm.data.ch1),
        (2, header.ch2, wfm.data.ch2),
    ):
        if not channel_header.enabled:
            print(f"CH{channel}:            off")
            continue
        print(
            f"CH{channel}:            {len(samples)} points, "
            f"{channel_header.volt_scale * CODES_PER_DIVISION:.6g} V/div, "
            f"offset {channel_header.volt_offset:.6g} V, "
            f"probe {channel_header.probe_value:g}x"
            + (", inverted" if channel_header.inverted else "")
        )

    if header.logic.enabled:
        print(
            f"Logic:          {len(wfm.data.logic)} points, "
            f"channels 0x{header.logic.enabled_channels:04X}"
        )
    else:
        print("Logic:          off")


def _export(wfm: WaveformData, args: argparse.Namespace) -> None:
    """Write the requested export files."""
    output_dir: Path = args.output_dir
    stem = args.file.stem

    if args.json:
        filename = output_dir / f"{stem}.json"
        save_waveform_json(wfm, str(filename))
        print(f"Saved decoded waveform to {filename}")

    if not (args.csv or args.plot):
        return

    traces: list[Trace] = []
    for channel, channel_header in ((1, wfm.header.ch1), (2, wfm.header.ch2)):
        if not channel_header.enabled:
            continue
        trace = wfm.trace(channel)
        if args.start is not None or args.end is not None:
            start = trace.start_time if args.start is None else args.start
            end = trace.start_time + trace.duration if args.end is None else args.end
            trace = trace.trim(start, end)
        traces.append(trace)

    if args.csv:
        for trace in traces:
            filename = output_dir / f"{stem}_ch{trace.channel}.csv"
            save_trace_csv(trace, str(filename))
            print(f"Saved {len(trace.voltages)} samples to {filename}")

    if args.plot:
        filename = output_dir / f"{stem}.png"
        save_trace_plot(traces, str(filename), title=args.file.name)
        print(f"Saved plot to {filename}")


def main() -> None:
    """Main entry point for rigolwfm CLI."""
    parser = argparse.ArgumentParser(
        description="Decode a Rigol DS1000E waveform (.wfm) file"
    )
    parser.add_argument("file", type=Path, help="Path to the .wfm file")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Save the decoded header and raw samples as JSON",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Save each enabled analog channel as a time/voltage CSV",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Save a plot of the enabled analog channels",
    )
    # Negative times need the --start=-1e-6 form
    parser.add_argument(
        "--start",
        type=float,
        help="Only export samples from START seconds (relative to the trigger)",
    )
    parser.add_argument(
        "--end",
        type=float,
        help="Only export samples before END seconds (relative to the trigger)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for exported files (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log decoding details",
    )
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        wfm = read_wfm(args.file)
    except (OSError, WfmParseError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Decoded {args.file}")
    _print_summary(wfm)

    if args.json or args.csv or args.plot:
        try:
            args.output_dir.mkdir(parents=True, exist_ok=True)
            _export(wfm, args)
        except (OSError, ValueError) as e:
            print(f"Error: {e}")
            sys.exit(1)


if __name__ == "__main__":
    main()

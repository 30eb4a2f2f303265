"""Calibrated voltage trace for one analog channel."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass
class Trace:
    """Voltages of one analog channel, sampled at a fixed rate.

    Time values are relative to the trigger and can be reconstructed as:
    time[i] = start_time + i / sample_rate
    """

    channel: int
    voltages: list[float]
    sample_rate: float
    start_time: float

    @property
    def duration(self) -> float:
        """Length of the record in seconds."""
        return len(self.voltages) / self.sample_rate

    def get_times(self) -> list[float]:
        """Generate time values for each sample."""
        return [
            self.start_time + i / self.sample_rate for i in range(len(self.voltages))
        ]

    def index_at(self, time: float) -> int:
        """Return the index of the sample at time, clamped to the record."""
        index = int((time - self.start_time) * self.sample_rate)
        return min(max(index, 0), len(self.voltages))

    def trim(self, start_time: float, end_time: float) -> Trace:
        """Return a new Trace limited to a time window.

        Args:
            start_time: Start of the window in seconds
            end_time: End of the window in seconds

        Returns:
            New Trace for the same channel with only the samples in the window
        """
        start_idx = self.index_at(start_time)
        end_idx = max(start_idx, self.index_at(end_time))

        return replace(
            self,
            voltages=self.voltages[start_idx:end_idx],
            start_time=self.start_time + start_idx / self.sample_rate,
        )

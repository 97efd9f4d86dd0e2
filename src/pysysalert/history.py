"""Bounded in-memory history of snapshot headline values."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from pysysalert.exceptions import SysAlertConfigError
from pysysalert.models.snapshot import Snapshot

TREND_WINDOW = 5


def _trend(values: deque[float] | deque[int]) -> float | None:
    """Mean of the newest window minus mean of the oldest window.

    Both sums are divided by :data:`TREND_WINDOW` even when fewer samples
    exist, which damps trends computed from very short histories.
    """
    if len(values) < 2:
        return None
    ordered = list(values)
    recent = sum(ordered[-TREND_WINDOW:]) / TREND_WINDOW
    older = sum(ordered[:TREND_WINDOW]) / TREND_WINDOW
    return recent - older


class SnapshotHistory:
    """Ring buffers of CPU, memory, network and temperature readings.

    Parameters
    ----------
    max_size : int
        Samples kept per series; the oldest is dropped first.
    """

    def __init__(self, max_size: int = 60) -> None:
        if max_size < 1:
            raise SysAlertConfigError("history max_size must be >= 1")
        self.max_size = max_size
        self.cpu: deque[float] = deque(maxlen=max_size)
        self.memory: deque[int] = deque(maxlen=max_size)
        self.network_rx: deque[int] = deque(maxlen=max_size)
        self.network_tx: deque[int] = deque(maxlen=max_size)
        self.temperature: deque[float] = deque(maxlen=max_size)

    def __len__(self) -> int:
        return len(self.cpu)

    def ingest(self, snapshot: Snapshot) -> None:
        self.cpu.append(snapshot.cpu.average_usage)
        self.memory.append(snapshot.memory.usage_percentage)
        self.network_rx.append(snapshot.total_bytes_received)
        self.network_tx.append(snapshot.total_bytes_transmitted)
        # Only recorded when at least one sensor reported.
        average_temperature = snapshot.average_temperature
        if average_temperature is not None:
            self.temperature.append(average_temperature)

    def extend(self, snapshots: Iterable[Snapshot]) -> None:
        for snapshot in snapshots:
            self.ingest(snapshot)

    def cpu_trend(self) -> float | None:
        return _trend(self.cpu)

    def memory_trend(self) -> float | None:
        return _trend(self.memory)

"""Per-cycle snapshot of every telemetry domain."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from pysysalert.models._base import TelemetryRecord
from pysysalert.models.battery import BatteryInfo
from pysysalert.models.cpu import CpuInfo
from pysysalert.models.health import SystemHealthInfo
from pysysalert.models.performance import PerformanceMetrics
from pysysalert.models.system import MemoryInfo, NetworkInterface, ProcessInfo, SystemInfo, TemperatureInfo
from pysysalert.models.thermal import ThermalInfo


class Snapshot(TelemetryRecord):
    """Complete, immutable aggregation of one polling cycle.

    All domains share the single ``captured_at`` timestamp even when
    some of them were served from cache.
    """

    captured_at: datetime
    system: SystemInfo = Field(default_factory=SystemInfo)
    cpu: CpuInfo = Field(default_factory=CpuInfo)
    memory: MemoryInfo = Field(default_factory=MemoryInfo)
    networks: tuple[NetworkInterface, ...] = ()
    temperatures: tuple[TemperatureInfo, ...] = ()
    processes: tuple[ProcessInfo, ...] = ()
    battery: BatteryInfo = Field(default_factory=BatteryInfo)
    thermal: ThermalInfo = Field(default_factory=ThermalInfo)
    performance: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
    health: SystemHealthInfo = Field(default_factory=SystemHealthInfo)

    @property
    def total_bytes_received(self) -> int:
        return sum(iface.bytes_received for iface in self.networks)

    @property
    def total_bytes_transmitted(self) -> int:
        return sum(iface.bytes_transmitted for iface in self.networks)

    @property
    def average_temperature(self) -> float | None:
        if not self.temperatures:
            return None
        return sum(t.temperature for t in self.temperatures) / len(self.temperatures)

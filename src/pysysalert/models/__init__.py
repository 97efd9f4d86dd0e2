"""Data models for telemetry records."""

from pysysalert.models._base import PartialFacts, TelemetryRecord
from pysysalert.models.battery import BatteryFacts, BatteryInfo
from pysysalert.models.cpu import CpuInfo, CpuPowerFacts, CpuPowerMetrics
from pysysalert.models.health import HealthFacts, SystemHealthInfo
from pysysalert.models.performance import PerformanceMetrics, WorkloadType
from pysysalert.models.probe import RawProbeOutput
from pysysalert.models.snapshot import Snapshot
from pysysalert.models.system import MemoryInfo, NetworkInterface, ProcessInfo, SystemInfo, TemperatureInfo
from pysysalert.models.thermal import ThermalFacts, ThermalInfo

__all__ = [
    "BatteryFacts",
    "BatteryInfo",
    "CpuInfo",
    "CpuPowerFacts",
    "CpuPowerMetrics",
    "HealthFacts",
    "MemoryInfo",
    "NetworkInterface",
    "PartialFacts",
    "PerformanceMetrics",
    "ProcessInfo",
    "RawProbeOutput",
    "Snapshot",
    "SystemHealthInfo",
    "SystemInfo",
    "TelemetryRecord",
    "TemperatureInfo",
    "ThermalFacts",
    "ThermalInfo",
    "WorkloadType",
]

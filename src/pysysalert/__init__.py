"""pysysalert - Async telemetry probe for macOS power, battery and CPU metrics."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysysalert")
except PackageNotFoundError:
    __version__ = "0+local"
from pysysalert._probe import CommandSpec, ProbeRunner, SubprocessRunner
from pysysalert.alerts import Alert, AlertEvaluator, AlertLevel
from pysysalert.collector import TelemetryCollector
from pysysalert.config import NotificationConfig, SysAlertConfig, ThresholdConfig
from pysysalert.exceptions import (
    CollectorBusyError,
    ParseMismatchError,
    ProbeError,
    ProbeExitError,
    ProbeFailureKind,
    ProbeLaunchError,
    ProbeTimeoutError,
    SysAlertConfigError,
    SysAlertError,
)
from pysysalert.history import SnapshotHistory
from pysysalert.introspection import LocalIntrospector, LocalSample, PsutilIntrospector
from pysysalert.models import (
    BatteryInfo,
    CpuInfo,
    CpuPowerMetrics,
    MemoryInfo,
    NetworkInterface,
    PerformanceMetrics,
    ProcessInfo,
    RawProbeOutput,
    Snapshot,
    SystemHealthInfo,
    SystemInfo,
    TemperatureInfo,
    ThermalInfo,
    WorkloadType,
)

__all__ = [
    "__version__",
    "Alert",
    "AlertEvaluator",
    "AlertLevel",
    "BatteryInfo",
    "CollectorBusyError",
    "CommandSpec",
    "CpuInfo",
    "CpuPowerMetrics",
    "LocalIntrospector",
    "LocalSample",
    "MemoryInfo",
    "NetworkInterface",
    "NotificationConfig",
    "ParseMismatchError",
    "PerformanceMetrics",
    "ProbeError",
    "ProbeExitError",
    "ProbeFailureKind",
    "ProbeLaunchError",
    "ProbeRunner",
    "ProbeTimeoutError",
    "ProcessInfo",
    "PsutilIntrospector",
    "RawProbeOutput",
    "Snapshot",
    "SnapshotHistory",
    "SubprocessRunner",
    "SysAlertConfig",
    "SysAlertConfigError",
    "SysAlertError",
    "SystemHealthInfo",
    "SystemInfo",
    "TelemetryCollector",
    "TemperatureInfo",
    "ThermalInfo",
    "ThresholdConfig",
    "WorkloadType",
]

"""Derived performance metrics."""

from __future__ import annotations

from enum import StrEnum

from pysysalert.models._base import TelemetryRecord


class WorkloadType(StrEnum):
    IDLE = "idle"
    GRAPHICS = "graphics"
    COMPUTE = "compute"
    MIXED = "mixed"


class PerformanceMetrics(TelemetryRecord):
    """Efficiency proxies computed from CPU usage and package power.

    ``instructions_per_watt`` is a utilisation-scaled proxy, not a
    hardware counter reading.
    """

    instructions_per_watt: float = 0.0
    performance_per_watt: float = 0.0
    frequency_efficiency: float = 0.0
    workload_type: WorkloadType = WorkloadType.IDLE

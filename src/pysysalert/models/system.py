"""Locally introspected system models.

These are refreshed every cycle directly from the OS and never cached.
"""

from __future__ import annotations

from pydantic import Field

from pysysalert.models._base import TelemetryRecord


class SystemInfo(TelemetryRecord):
    name: str = "Unknown"
    kernel_version: str = "Unknown"
    os_version: str = "Unknown"
    host_name: str = "Unknown"
    cpu_arch: str = "Unknown"
    cpu_brand: str = "Unknown"


class MemoryInfo(TelemetryRecord):
    """Memory and swap totals in bytes."""

    total_memory: int = 0
    used_memory: int = 0
    available_memory: int = 0
    total_swap: int = 0
    used_swap: int = 0
    usage_percentage: int = Field(default=0, ge=0, le=100)


class NetworkInterface(TelemetryRecord):
    name: str
    bytes_received: int = 0
    bytes_transmitted: int = 0
    packets_received: int = 0
    packets_transmitted: int = 0


class TemperatureInfo(TelemetryRecord):
    label: str
    temperature: float
    critical_temperature: float = 100.0


class ProcessInfo(TelemetryRecord):
    pid: int
    name: str = ""
    cpu_usage: float = 0.0
    memory_usage: int = 0
    disk_read_bytes: int = 0
    disk_write_bytes: int = 0

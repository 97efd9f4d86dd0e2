"""Telemetry domains and the diagnostic sources that feed them."""

from __future__ import annotations

from enum import StrEnum


class Domain(StrEnum):
    BATTERY = "battery"
    CPU_POWER = "cpu_power"
    THERMAL = "thermal"
    HEALTH = "health"


class ProbeSource(StrEnum):
    """One external diagnostic command and its output stream."""

    PMSET = "pmset"
    SYSTEM_PROFILER = "system_profiler"
    IOREG = "ioreg"
    POWERMETRICS = "powermetrics"
    POWERMETRICS_SMC = "powermetrics_smc"
    SYSCTL_THERMAL = "sysctl_thermal"
    SYSCTL_BOOTTIME = "sysctl_boottime"
    SYSCTL_LOADAVG = "sysctl_loadavg"

"""CPU utilisation and cluster power models."""

from __future__ import annotations

from pydantic import Field

from pysysalert.models._base import PartialFacts, TelemetryRecord


class CpuPowerFacts(PartialFacts):
    """Cluster activity and power draw recognised in a powermetrics sample."""

    e_cluster_active: float | None = None
    p_cluster_active: float | None = None
    e_cluster_freq_mhz: int | None = None
    p_cluster_freq_mhz: int | None = None
    cpu_w: float | None = None
    gpu_w: float | None = None
    ane_w: float | None = None
    package_w: float | None = None


class CpuPowerMetrics(TelemetryRecord):
    """Per-cluster activity/frequency and per-unit power in watts."""

    e_cluster_active: float = 0.0
    p_cluster_active: float = 0.0
    e_cluster_freq_mhz: int = 0
    p_cluster_freq_mhz: int = 0
    cpu_w: float = 0.0
    gpu_w: float = 0.0
    ane_w: float = 0.0
    package_w: float = 0.0
    estimated: bool = False
    """``True`` when synthesised from utilisation instead of measured."""


class CpuInfo(TelemetryRecord):
    core_usages: tuple[float, ...] = ()
    average_usage: float = 0.0
    power: CpuPowerMetrics = Field(default_factory=CpuPowerMetrics)

"""Values derived from measured telemetry.

Everything here is a deterministic function of already-reconciled
records; nothing probes the system.
"""

from __future__ import annotations

from collections.abc import Sequence

from pysysalert import _constants as const
from pysysalert.models.cpu import CpuInfo, CpuPowerMetrics
from pysysalert.models.health import HealthFacts, SystemHealthInfo
from pysysalert.models.performance import PerformanceMetrics, WorkloadType
from pysysalert.models.thermal import ThermalInfo


def capacity_health(current_capacity: int, design_capacity: int) -> float | None:
    """Health estimate from full-charge vs design capacity, or ``None``."""
    if design_capacity <= 0 or current_capacity <= 0:
        return None
    return round(current_capacity / design_capacity * 100.0, 2)


def thermal_from_pressure(pressure: int, fan_speeds: Sequence[int] | None = None) -> ThermalInfo:
    dissipation = const.MAX_DISSIPATION_WATTS
    for upper, watts in const.DISSIPATION_BANDS:
        if pressure <= upper:
            dissipation = watts
            break
    return ThermalInfo(
        fan_speeds=tuple(fan_speeds or ()),
        thermal_throttling=pressure > const.THROTTLING_PRESSURE,
        thermal_pressure=pressure,
        heat_dissipation_rate=dissipation,
    )


def health_from_facts(facts: HealthFacts) -> SystemHealthInfo:
    """Fill in the quality score and sleep/wake estimate from load averages."""
    load_1 = facts.system_load_1min or 0.0
    load_5 = facts.system_load_5min or 0.0
    load_15 = facts.system_load_15min or 0.0
    avg_load = (load_1 + load_5 + load_15) / 3.0

    if avg_load < 1.0:
        score = 95
    elif avg_load < 2.0:
        score = 85
    elif avg_load < 3.0:
        score = 75
    else:
        score = 65

    return SystemHealthInfo(
        uptime_seconds=facts.uptime_seconds or 0,
        system_load_1min=load_1,
        system_load_5min=load_5,
        system_load_15min=load_15,
        power_quality_score=score,
        sleep_wake_efficiency=95.0 if avg_load < 1.5 else 85.0,
    )


def estimate_cpu_power(average_usage: float) -> CpuPowerMetrics:
    """Plausible cluster/power values scaled from observed CPU utilisation.

    Used to seed the CPU-power cache when ``powermetrics`` is unavailable
    (typically when not running as root).
    """
    usage = max(0.0, min(100.0, average_usage))
    power = usage / 100.0 * const.FALLBACK_FULL_LOAD_WATTS
    return CpuPowerMetrics(
        e_cluster_active=round(usage * const.FALLBACK_E_CLUSTER_SHARE, 2),
        p_cluster_active=round(usage * const.FALLBACK_P_CLUSTER_SHARE, 2),
        e_cluster_freq_mhz=2400 if usage > 50.0 else 1800,
        p_cluster_freq_mhz=3200 if usage > 70.0 else 2400,
        ane_w=power * const.FALLBACK_ANE_SHARE,
        cpu_w=power * const.FALLBACK_CPU_SHARE,
        gpu_w=power * const.FALLBACK_GPU_SHARE,
        package_w=power,
        estimated=True,
    )


def classify_workload(cpu: CpuInfo) -> WorkloadType:
    if cpu.average_usage < const.IDLE_USAGE_PERCENT:
        return WorkloadType.IDLE
    if cpu.power.gpu_w > cpu.power.cpu_w:
        return WorkloadType.GRAPHICS
    if cpu.average_usage > const.COMPUTE_USAGE_PERCENT:
        return WorkloadType.COMPUTE
    return WorkloadType.MIXED


def performance_metrics(cpu: CpuInfo) -> PerformanceMetrics:
    total_power = cpu.power.package_w
    instructions_per_watt = 0.0
    performance_per_watt = 0.0
    if total_power > 0:
        instructions_per_watt = cpu.average_usage * const.INSTRUCTIONS_PER_USAGE_PERCENT / total_power
        performance_per_watt = cpu.average_usage / total_power

    frequency_efficiency = 0.0
    avg_freq = (cpu.power.e_cluster_freq_mhz + cpu.power.p_cluster_freq_mhz) / 2.0
    if avg_freq > 0:
        frequency_efficiency = cpu.average_usage / avg_freq * 1000.0

    return PerformanceMetrics(
        instructions_per_watt=instructions_per_watt,
        performance_per_watt=performance_per_watt,
        frequency_efficiency=frequency_efficiency,
        workload_type=classify_workload(cpu),
    )

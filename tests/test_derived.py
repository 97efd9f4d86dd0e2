from __future__ import annotations

import pytest

from pysysalert.derived import (
    capacity_health,
    classify_workload,
    estimate_cpu_power,
    health_from_facts,
    performance_metrics,
    thermal_from_pressure,
)
from pysysalert.models.cpu import CpuInfo, CpuPowerMetrics
from pysysalert.models.health import HealthFacts
from pysysalert.models.performance import WorkloadType


def test_capacity_health_requires_both_capacities() -> None:
    assert capacity_health(4230, 0) is None
    assert capacity_health(0, 4700) is None
    assert capacity_health(4230, 4700) == pytest.approx(89.99, abs=0.02)


@pytest.mark.parametrize(
    ("pressure", "watts", "throttling"),
    [(0, 5.0, False), (20, 5.0, False), (40, 10.0, False), (50, 15.0, False), (60, 15.0, True), (80, 20.0, True), (100, 25.0, True)],
)
def test_thermal_bands(pressure: int, watts: float, throttling: bool) -> None:
    thermal = thermal_from_pressure(pressure)

    assert thermal.heat_dissipation_rate == watts
    assert thermal.thermal_throttling is throttling
    assert thermal.fan_speeds == ()


@pytest.mark.parametrize(
    ("load", "score", "sleep_wake"),
    [(0.5, 95, 95.0), (1.4, 85, 95.0), (1.6, 85, 85.0), (2.5, 75, 85.0), (4.0, 65, 85.0)],
)
def test_health_scores(load: float, score: int, sleep_wake: float) -> None:
    health = health_from_facts(
        HealthFacts(uptime_seconds=10, system_load_1min=load, system_load_5min=load, system_load_15min=load)
    )

    assert health.power_quality_score == score
    assert health.sleep_wake_efficiency == sleep_wake


def test_health_without_readings_is_default_but_scored() -> None:
    health = health_from_facts(HealthFacts())

    assert health.uptime_seconds == 0
    assert health.power_quality_score == 95


def test_cpu_power_estimate_scales_with_usage() -> None:
    estimate = estimate_cpu_power(80.0)

    assert estimate.estimated is True
    assert estimate.package_w == pytest.approx(12.0)
    assert estimate.cpu_w == pytest.approx(7.2)
    assert estimate.gpu_w == pytest.approx(2.4)
    assert estimate.ane_w == pytest.approx(0.6)
    assert estimate.e_cluster_active == 48.0
    assert estimate.p_cluster_active == 32.0
    assert estimate.e_cluster_freq_mhz == 2400
    assert estimate.p_cluster_freq_mhz == 3200


def test_cpu_power_estimate_when_idle() -> None:
    estimate = estimate_cpu_power(0.0)

    assert estimate.package_w == 0.0
    assert estimate.e_cluster_freq_mhz == 1800
    assert estimate.p_cluster_freq_mhz == 2400


@pytest.mark.parametrize(
    ("usage", "cpu_w", "gpu_w", "expected"),
    [
        (5.0, 1.0, 0.0, WorkloadType.IDLE),
        (50.0, 1.0, 2.0, WorkloadType.GRAPHICS),
        (85.0, 3.0, 1.0, WorkloadType.COMPUTE),
        (40.0, 3.0, 1.0, WorkloadType.MIXED),
    ],
)
def test_workload_classification(usage: float, cpu_w: float, gpu_w: float, expected: WorkloadType) -> None:
    cpu = CpuInfo(average_usage=usage, power=CpuPowerMetrics(cpu_w=cpu_w, gpu_w=gpu_w))

    assert classify_workload(cpu) == expected


def test_performance_metrics_without_power_are_zero() -> None:
    metrics = performance_metrics(CpuInfo(average_usage=50.0))

    assert metrics.instructions_per_watt == 0.0
    assert metrics.performance_per_watt == 0.0
    assert metrics.frequency_efficiency == 0.0


def test_performance_metrics() -> None:
    cpu = CpuInfo(
        average_usage=50.0,
        power=CpuPowerMetrics(package_w=2.0, cpu_w=1.5, e_cluster_freq_mhz=1000, p_cluster_freq_mhz=3000),
    )

    metrics = performance_metrics(cpu)

    assert metrics.instructions_per_watt == pytest.approx(25_000_000.0)
    assert metrics.performance_per_watt == pytest.approx(25.0)
    assert metrics.frequency_efficiency == pytest.approx(25.0)
    assert metrics.workload_type == WorkloadType.MIXED

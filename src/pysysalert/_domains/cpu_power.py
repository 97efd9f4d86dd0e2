"""CPU-power domain (``powermetrics``, requires root)."""

from __future__ import annotations

import functools
from typing import cast

from pysysalert._domains._common import SourceStep, command, refresh_domain
from pysysalert._probe import ProbeRunner
from pysysalert.config import SysAlertConfig
from pysysalert.ingestion.powermetrics import parse_cpu_power
from pysysalert.models.cpu import CpuPowerMetrics
from pysysalert.state.policy import CPU_POWER_POLICY
from pysysalert.state.sources import ProbeSource


def cpu_power_steps(config: SysAlertConfig) -> list[SourceStep]:
    spec = command(
        ProbeSource.POWERMETRICS,
        "powermetrics",
        "--samplers",
        "cpu_power,gpu_power",
        "-n",
        1,
        "-i",
        config.powermetrics_sample_ms,
        timeout=config.powermetrics_timeout,
    )
    extract = functools.partial(parse_cpu_power, efficiency_core_max_index=config.efficiency_core_max_index)
    return [(spec, extract)]


async def refresh_cpu_power(runner: ProbeRunner, config: SysAlertConfig) -> CpuPowerMetrics:
    return cast(CpuPowerMetrics, await refresh_domain(CPU_POWER_POLICY, runner, cpu_power_steps(config)))

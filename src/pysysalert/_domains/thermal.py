"""Thermal domain: kernel thermal level plus SMC fan speeds."""

from __future__ import annotations

from typing import cast

from pysysalert._domains._common import SourceStep, command, refresh_domain
from pysysalert._probe import ProbeRunner
from pysysalert.config import SysAlertConfig
from pysysalert.ingestion.powermetrics import parse_smc_fans
from pysysalert.ingestion.sysctl import parse_thermal_level
from pysysalert.models.thermal import ThermalInfo
from pysysalert.state.policy import THERMAL_POLICY
from pysysalert.state.sources import ProbeSource


def thermal_steps(config: SysAlertConfig) -> list[SourceStep]:
    return [
        (
            command(
                ProbeSource.SYSCTL_THERMAL,
                "sysctl",
                "-n",
                "machdep.xcpm.cpu_thermal_level",
                timeout=config.sysctl_timeout,
            ),
            parse_thermal_level,
        ),
        (
            command(
                ProbeSource.POWERMETRICS_SMC,
                "powermetrics",
                "--samplers",
                "smc",
                "-n",
                1,
                "-i",
                config.powermetrics_sample_ms,
                timeout=config.powermetrics_timeout,
            ),
            parse_smc_fans,
        ),
    ]


async def refresh_thermal(runner: ProbeRunner, config: SysAlertConfig) -> ThermalInfo:
    return cast(ThermalInfo, await refresh_domain(THERMAL_POLICY, runner, thermal_steps(config)))

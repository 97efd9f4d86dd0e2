"""System health domain: uptime and load averages from ``sysctl``."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import cast

from pysysalert._domains._common import SourceStep, command, refresh_domain
from pysysalert._probe import ProbeRunner
from pysysalert.config import SysAlertConfig
from pysysalert.ingestion.sysctl import parse_boottime, parse_loadavg
from pysysalert.models.health import SystemHealthInfo
from pysysalert.state.policy import HEALTH_POLICY
from pysysalert.state.sources import ProbeSource


def health_steps(config: SysAlertConfig, *, now: float) -> list[SourceStep]:
    return [
        (
            command(ProbeSource.SYSCTL_BOOTTIME, "sysctl", "-n", "kern.boottime", timeout=config.sysctl_timeout),
            functools.partial(parse_boottime, now=now),
        ),
        (
            command(ProbeSource.SYSCTL_LOADAVG, "sysctl", "-n", "vm.loadavg", timeout=config.sysctl_timeout),
            parse_loadavg,
        ),
    ]


async def refresh_health(
    runner: ProbeRunner,
    config: SysAlertConfig,
    *,
    wall_clock: Callable[[], float] = time.time,
) -> SystemHealthInfo:
    steps = health_steps(config, now=wall_clock())
    return cast(SystemHealthInfo, await refresh_domain(HEALTH_POLICY, runner, steps))

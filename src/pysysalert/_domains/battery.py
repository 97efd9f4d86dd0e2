"""Battery domain.

Sources (ascending priority):
  - ``pmset -g batt``                  charge state and time remaining
  - ``ioreg -rn AppleSmartBattery``    capacities, cycles, electrical readings
  - ``system_profiler SPPowerDataType`` health, condition, adapter wattage
"""

from __future__ import annotations

from typing import cast

from pysysalert._domains._common import SourceStep, command, refresh_domain
from pysysalert._probe import ProbeRunner
from pysysalert.config import SysAlertConfig
from pysysalert.ingestion.battery import parse_ioreg_battery, parse_pmset_batt, parse_system_profiler_power
from pysysalert.models.battery import BatteryInfo
from pysysalert.state.policy import BATTERY_POLICY
from pysysalert.state.sources import ProbeSource


def battery_steps(config: SysAlertConfig) -> list[SourceStep]:
    return [
        (command(ProbeSource.PMSET, "pmset", "-g", "batt", timeout=config.pmset_timeout), parse_pmset_batt),
        (
            command(ProbeSource.IOREG, "ioreg", "-rn", "AppleSmartBattery", timeout=config.ioreg_timeout),
            parse_ioreg_battery,
        ),
        (
            command(
                ProbeSource.SYSTEM_PROFILER,
                "system_profiler",
                "SPPowerDataType",
                timeout=config.system_profiler_timeout,
            ),
            parse_system_profiler_power,
        ),
    ]


async def refresh_battery(runner: ProbeRunner, config: SysAlertConfig) -> BatteryInfo:
    return cast(BatteryInfo, await refresh_domain(BATTERY_POLICY, runner, battery_steps(config)))

"""Per-domain source priority and fallback policy.

This module intentionally contains *no* text parsing.  It only declares,
for each domain, which source may contribute which fields, in which
order, and which derived values may fill gaps afterwards.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any

from pysysalert.derived import capacity_health, health_from_facts, thermal_from_pressure
from pysysalert.exceptions import SysAlertConfigError
from pysysalert.models._base import TelemetryRecord
from pysysalert.models.battery import BatteryInfo
from pysysalert.models.cpu import CpuPowerMetrics
from pysysalert.models.health import HealthFacts
from pysysalert.state.sources import Domain, ProbeSource

Derivation = Callable[[Mapping[str, Any]], Any]


@dataclasses.dataclass(frozen=True)
class SourceRule:
    """One source's contribution to a domain.

    Higher ``priority`` is applied later and therefore wins for any
    field both sources produced.
    """

    source: ProbeSource
    priority: int
    fields: frozenset[str]


@dataclasses.dataclass(frozen=True)
class DomainPolicy:
    """Merge rules for one domain.

    Parameters
    ----------
    domain : Domain
        Domain the rules apply to.
    sources : tuple of SourceRule
        Contributing sources; applied in ascending priority.
    derivations : tuple of (field, callable)
        Lower-confidence estimates.  Each runs after all sources and
        only when its field is still unset, so it can never replace a
        value a source actually produced.
    build : callable
        Turns the merged field mapping into the complete record, filling
        defaults for anything still unset.
    """

    domain: Domain
    sources: tuple[SourceRule, ...]
    build: Callable[[dict[str, Any]], TelemetryRecord]
    derivations: tuple[tuple[str, Derivation], ...] = ()

    def __post_init__(self) -> None:
        seen: set[ProbeSource] = set()
        priorities: set[int] = set()
        for rule in self.sources:
            if rule.source in seen:
                raise SysAlertConfigError(f"{self.domain}: source {rule.source} declared twice")
            if rule.priority in priorities:
                raise SysAlertConfigError(f"{self.domain}: priority {rule.priority} is ambiguous")
            seen.add(rule.source)
            priorities.add(rule.priority)

    def ordered(self) -> list[SourceRule]:
        return sorted(self.sources, key=lambda rule: rule.priority)

    def rule_for(self, source: str) -> SourceRule:
        for rule in self.sources:
            if rule.source == source:
                return rule
        raise SysAlertConfigError(f"{self.domain}: {source!r} is not a declared source")


def _battery_capacity_health(merged: Mapping[str, Any]) -> float | None:
    return capacity_health(merged.get("current_capacity", 0), merged.get("design_capacity", 0))


BATTERY_POLICY = DomainPolicy(
    domain=Domain.BATTERY,
    sources=(
        SourceRule(
            source=ProbeSource.PMSET,
            priority=10,
            fields=frozenset({"percentage", "is_charging", "is_plugged", "time_remaining"}),
        ),
        SourceRule(
            source=ProbeSource.IOREG,
            priority=20,
            fields=frozenset(
                {"current_capacity", "design_capacity", "cycle_count", "voltage", "amperage", "temperature"}
            ),
        ),
        SourceRule(
            source=ProbeSource.SYSTEM_PROFILER,
            priority=30,
            fields=frozenset({"health_percentage", "condition", "cycle_count", "power_adapter_wattage"}),
        ),
    ),
    derivations=(("health_percentage", _battery_capacity_health),),
    build=lambda merged: BatteryInfo(**merged),
)

CPU_POWER_POLICY = DomainPolicy(
    domain=Domain.CPU_POWER,
    sources=(
        SourceRule(
            source=ProbeSource.POWERMETRICS,
            priority=10,
            fields=frozenset(
                {
                    "e_cluster_active",
                    "p_cluster_active",
                    "e_cluster_freq_mhz",
                    "p_cluster_freq_mhz",
                    "cpu_w",
                    "gpu_w",
                    "ane_w",
                    "package_w",
                }
            ),
        ),
    ),
    build=lambda merged: CpuPowerMetrics(**merged),
)

THERMAL_POLICY = DomainPolicy(
    domain=Domain.THERMAL,
    sources=(
        SourceRule(source=ProbeSource.SYSCTL_THERMAL, priority=10, fields=frozenset({"thermal_pressure"})),
        SourceRule(source=ProbeSource.POWERMETRICS_SMC, priority=20, fields=frozenset({"fan_speeds"})),
    ),
    build=lambda merged: thermal_from_pressure(merged.get("thermal_pressure", 0), merged.get("fan_speeds")),
)

HEALTH_POLICY = DomainPolicy(
    domain=Domain.HEALTH,
    sources=(
        SourceRule(source=ProbeSource.SYSCTL_BOOTTIME, priority=10, fields=frozenset({"uptime_seconds"})),
        SourceRule(
            source=ProbeSource.SYSCTL_LOADAVG,
            priority=20,
            fields=frozenset({"system_load_1min", "system_load_5min", "system_load_15min"}),
        ),
    ),
    build=lambda merged: health_from_facts(HealthFacts(**merged)),
)

POLICIES: dict[Domain, DomainPolicy] = {
    policy.domain: policy for policy in (BATTERY_POLICY, CPU_POWER_POLICY, THERMAL_POLICY, HEALTH_POLICY)
}

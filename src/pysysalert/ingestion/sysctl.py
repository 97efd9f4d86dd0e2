"""``sysctl -n`` value extractors."""

from __future__ import annotations

import re

from pysysalert._constants import THERMAL_LEVEL_SCALE
from pysysalert.exceptions import ParseMismatchError
from pysysalert.ingestion.normalize import clamp, safe_float, safe_int
from pysysalert.models.health import HealthFacts
from pysysalert.models.thermal import ThermalFacts
from pysysalert.state.sources import ProbeSource

# kern.boottime: "{ sec = 1700000000, usec = 123456 } Tue Nov 14 22:13:20 2023"
_BOOTTIME_RE = re.compile(r"\bsec\s*=\s*(\d+)")
# vm.loadavg: "{ 2.66 2.75 2.97 }"
_LOADAVG_RE = re.compile(r"\{\s*([\d.]+)\s+([\d.]+)\s+([\d.]+)\s*\}")


def parse_thermal_level(text: str) -> ThermalFacts:
    """``machdep.xcpm.cpu_thermal_level`` → pressure on a 0-100 scale."""
    level = safe_int(text.strip())
    if level is None:
        raise ParseMismatchError(f"thermal level is not an integer: {text.strip()[:40]!r}", source=ProbeSource.SYSCTL_THERMAL)
    return ThermalFacts(thermal_pressure=int(clamp(level * THERMAL_LEVEL_SCALE, 0, 100)))


def parse_boottime(text: str, *, now: float) -> HealthFacts:
    """``kern.boottime`` → uptime in seconds relative to *now* (epoch seconds)."""
    match = _BOOTTIME_RE.search(text)
    if not match:
        raise ParseMismatchError("kern.boottime has no sec field", source=ProbeSource.SYSCTL_BOOTTIME)
    boot = int(match.group(1))
    return HealthFacts(uptime_seconds=max(int(now) - boot, 0))


def parse_loadavg(text: str) -> HealthFacts:
    match = _LOADAVG_RE.search(text)
    if not match:
        raise ParseMismatchError("vm.loadavg is not a load triple", source=ProbeSource.SYSCTL_LOADAVG)
    loads = [safe_float(group) for group in match.groups()]
    return HealthFacts(
        system_load_1min=loads[0],
        system_load_5min=loads[1],
        system_load_15min=loads[2],
    )

"""powermetrics extractors.

Sample lines (``--samplers cpu_power,gpu_power``)::

    CPU 0 frequency: 1283 MHz
    CPU 0 active residency:  33.19% (600 MHz:  .00% 972 MHz:  21% ...)
    CPU Power: 1234 mW
    GPU Power: 56 mW
    ANE Power: 0 mW
    Combined Power (CPU + GPU + ANE): 1290 mW

and from the ``smc`` sampler on machines with fans::

    Fan: 1834.23 rpm
"""

from __future__ import annotations

import re
from typing import Any

from pysysalert.exceptions import ParseMismatchError
from pysysalert.ingestion.normalize import mean, safe_float, safe_int
from pysysalert.models.cpu import CpuPowerFacts
from pysysalert.models.thermal import ThermalFacts
from pysysalert.state.sources import ProbeSource

DEFAULT_EFFICIENCY_CORE_MAX_INDEX = 3

_ACTIVE_RESIDENCY_RE = re.compile(r"^CPU\s+(\d+)\s+active residency:\s+(\d+(?:\.\d+)?)%")
_FREQUENCY_RE = re.compile(r"^CPU\s+(\d+)\s+frequency:\s+(\d+)\s+MHz$")
_UNIT_POWER_RE = re.compile(r"^(ANE|CPU|GPU) Power:\s*(\d+(?:\.\d+)?)\s*mW")
_COMBINED_POWER_RE = re.compile(r"^Combined Power \(CPU \+ GPU \+ ANE\):\s*(\d+(?:\.\d+)?)\s*mW")
_FAN_RE = re.compile(r"^Fan\b[^:]*:\s*(\d+(?:\.\d+)?)\s*rpm", re.IGNORECASE)
_SAMPLE_HEADER = "Sampled system activity"

_UNIT_FIELDS = {"ANE": "ane_w", "CPU": "cpu_w", "GPU": "gpu_w"}


def parse_cpu_power(text: str, *, efficiency_core_max_index: int = DEFAULT_EFFICIENCY_CORE_MAX_INDEX) -> CpuPowerFacts:
    """Extract cluster activity, frequency and power draw.

    Cores with index ``<= efficiency_core_max_index`` are counted as the
    efficiency cluster, all others as the performance cluster.  Cluster
    values are arithmetic means over the cores that reported a line.

    Raises
    ------
    ParseMismatchError
        If no residency, frequency or power line is present.
    """
    e_active: list[float] = []
    p_active: list[float] = []
    e_freq: list[float] = []
    p_freq: list[float] = []
    values: dict[str, Any] = {}
    recognised = False

    for raw_line in text.splitlines():
        line = raw_line.strip()

        match = _ACTIVE_RESIDENCY_RE.match(line)
        if match:
            recognised = True
            core = safe_int(match.group(1))
            residency = safe_float(match.group(2))
            if core is not None and residency is not None:
                (e_active if core <= efficiency_core_max_index else p_active).append(residency)
            continue

        match = _FREQUENCY_RE.match(line)
        if match:
            recognised = True
            core = safe_int(match.group(1))
            freq = safe_float(match.group(2))
            if core is not None and freq is not None:
                (e_freq if core <= efficiency_core_max_index else p_freq).append(freq)
            continue

        match = _COMBINED_POWER_RE.match(line)
        if match:
            recognised = True
            milliwatts = safe_float(match.group(1))
            if milliwatts is not None:
                values["package_w"] = milliwatts / 1000.0
            continue

        match = _UNIT_POWER_RE.match(line)
        if match:
            recognised = True
            milliwatts = safe_float(match.group(2))
            if milliwatts is not None:
                values[_UNIT_FIELDS[match.group(1)]] = milliwatts / 1000.0

    if not recognised:
        raise ParseMismatchError("powermetrics output has no CPU power lines", source=ProbeSource.POWERMETRICS)

    e_active_mean = mean(e_active)
    if e_active_mean is not None:
        values["e_cluster_active"] = round(e_active_mean, 2)
    p_active_mean = mean(p_active)
    if p_active_mean is not None:
        values["p_cluster_active"] = round(p_active_mean, 2)
    e_freq_mean = mean(e_freq)
    if e_freq_mean is not None:
        values["e_cluster_freq_mhz"] = int(e_freq_mean)
    p_freq_mean = mean(p_freq)
    if p_freq_mean is not None:
        values["p_cluster_freq_mhz"] = int(p_freq_mean)

    return CpuPowerFacts(**values)


def parse_smc_fans(text: str) -> ThermalFacts:
    """Extract fan speeds from the ``smc`` sampler.

    A fanless machine produces a valid sample with no fan lines; that
    yields an empty record rather than an error.
    """
    speeds: list[int] = []
    for raw_line in text.splitlines():
        match = _FAN_RE.match(raw_line.strip())
        if match:
            rpm = safe_float(match.group(1))
            if rpm is not None:
                speeds.append(int(rpm))

    if speeds:
        return ThermalFacts(fan_speeds=tuple(speeds))
    if _SAMPLE_HEADER not in text:
        raise ParseMismatchError("powermetrics smc output has no sample", source=ProbeSource.POWERMETRICS_SMC)
    return ThermalFacts()

"""Battery report extractors.

One function per diagnostic source; each takes raw text and returns a
:class:`BatteryFacts` holding only what was recognised.  Line shapes
that are not recognised are ignored so minor format drift between OS
releases does not break extraction.

Sample captures these rules were written against::

    $ pmset -g batt
    Now drawing from 'AC Power'
     -InternalBattery-0 (id=20775011)	98%; charging; 0:13 remaining present: true

    $ system_profiler SPPowerDataType
    Power:
        Battery Information:
          Health Information:
              Cycle Count: 342
              Condition: Normal
              Maximum Capacity: 87%
        AC Charger Information:
          Wattage (W): 96

    $ ioreg -rn AppleSmartBattery
      | "AppleRawCurrentCapacity" = 4230
      | "DesignCapacity" = 4700
      | "CycleCount" = 342
"""

from __future__ import annotations

import re
from typing import Any

from pysysalert._constants import condition_to_health
from pysysalert.exceptions import ParseMismatchError
from pysysalert.ingestion.normalize import safe_float, safe_int, signed_int64
from pysysalert.models.battery import BatteryFacts
from pysysalert.state.sources import ProbeSource

# pmset -g batt
_BATTERY_LINE_TOKEN = "InternalBattery"
_PERCENT_RE = re.compile(r"(\d+)%")
_REMAINING_RE = re.compile(r"(\d+):(\d+) remaining")
_DRAWING_RE = re.compile(r"Now drawing from '([^']+)'")

# system_profiler SPPowerDataType
_MAXIMUM_CAPACITY_RE = re.compile(r"Maximum Capacity:\s*(\d+)%")
_CYCLE_COUNT_RE = re.compile(r"Cycle Count:\s*(\d+)")
_CONDITION_RE = re.compile(r"Condition:\s*(\w+(?:\s+\w+)*)")
_WATTAGE_RE = re.compile(r"Wattage \(W\):\s*(\d+)")
_PROFILER_HEADER = "Power:"

# ioreg -rn AppleSmartBattery
_IOREG_PAIR_RE = re.compile(r'"(\w+)"\s*=\s*(-?\d+)')
# Primary keys win over their alternates regardless of line order.
_IOREG_CURRENT_KEYS = ("AppleRawCurrentCapacity", "CurrentCapacity")
_IOREG_DESIGN_KEYS = ("DesignCapacity", "MaxCapacity")


def parse_pmset_batt(text: str) -> BatteryFacts:
    """Extract charge state from ``pmset -g batt``.

    Raises
    ------
    ParseMismatchError
        If neither a battery line nor a power-source line is present.
    """
    values: dict[str, Any] = {}
    power_source: str | None = None
    recognised = False

    for line in text.splitlines():
        drawing = _DRAWING_RE.search(line)
        if drawing:
            recognised = True
            power_source = drawing.group(1)
            continue

        if _BATTERY_LINE_TOKEN not in line:
            continue
        recognised = True

        match = _PERCENT_RE.search(line)
        if match:
            percentage = safe_float(match.group(1))
            if percentage is not None:
                values["percentage"] = percentage

        # Substring match: "discharging" also counts as charging.
        values["is_charging"] = "charging" in line
        values["is_plugged"] = "Battery Power" not in line

        remaining = _REMAINING_RE.search(line)
        if remaining:
            hours = safe_int(remaining.group(1))
            minutes = safe_int(remaining.group(2))
            if hours is not None and minutes is not None:
                values["time_remaining"] = hours * 3600 + minutes * 60
        if "no estimate" in line:
            values.pop("time_remaining", None)

    if not recognised:
        raise ParseMismatchError("pmset output has no battery or power source line", source=ProbeSource.PMSET)

    # The power-source header is more reliable than the battery line.
    if power_source is not None:
        values["is_plugged"] = power_source == "AC Power"

    return BatteryFacts(**values)


def parse_system_profiler_power(text: str) -> BatteryFacts:
    """Extract health, cycle count and adapter wattage from ``system_profiler``.

    ``Maximum Capacity`` is a direct health reading.  ``Condition`` is
    only used as a lookup-table estimate when no direct reading exists.

    Raises
    ------
    ParseMismatchError
        If the text is not a ``SPPowerDataType`` report.
    """
    values: dict[str, Any] = {}
    condition: str | None = None
    recognised = False

    for raw_line in text.splitlines():
        line = raw_line.strip()

        match = _MAXIMUM_CAPACITY_RE.search(line)
        if match:
            recognised = True
            health = safe_float(match.group(1))
            if health is not None:
                values["health_percentage"] = health
            continue

        match = _CYCLE_COUNT_RE.search(line)
        if match:
            recognised = True
            cycles = safe_int(match.group(1))
            if cycles is not None:
                values["cycle_count"] = cycles
            continue

        match = _CONDITION_RE.search(line)
        if match:
            recognised = True
            condition = match.group(1).strip()
            continue

        match = _WATTAGE_RE.search(line)
        if match:
            recognised = True
            wattage = safe_float(match.group(1))
            if wattage is not None:
                values["power_adapter_wattage"] = wattage

    if not recognised and _PROFILER_HEADER not in text:
        raise ParseMismatchError(
            "system_profiler output is not a power report",
            source=ProbeSource.SYSTEM_PROFILER,
        )

    if condition is not None:
        values["condition"] = condition
        if "health_percentage" not in values:
            values["health_percentage"] = condition_to_health(condition)

    return BatteryFacts(**values)


def parse_ioreg_battery(text: str) -> BatteryFacts:
    """Extract capacities and electrical readings from the battery registry dump.

    Health is deliberately *not* computed here; the capacity ratio is
    the lowest-confidence health source and is derived during
    reconciliation only when nothing better exists.

    Raises
    ------
    ParseMismatchError
        If no ``"Key" = value`` pairs are present.
    """
    registry: dict[str, int] = {}
    for line in text.splitlines():
        for key, raw_value in _IOREG_PAIR_RE.findall(line):
            # Nested dictionaries may repeat a key; first occurrence wins.
            registry.setdefault(key, int(raw_value))

    if not registry:
        raise ParseMismatchError("ioreg output has no registry values", source=ProbeSource.IOREG)

    values: dict[str, Any] = {}
    current = _first_present(registry, _IOREG_CURRENT_KEYS)
    if current is not None and current >= 0:
        values["current_capacity"] = current
    design = _first_present(registry, _IOREG_DESIGN_KEYS)
    if design is not None and design >= 0:
        values["design_capacity"] = design
    cycles = registry.get("CycleCount")
    if cycles is not None and cycles >= 0:
        values["cycle_count"] = cycles

    if "Voltage" in registry:
        values["voltage"] = registry["Voltage"] / 1000.0
    if "InstantAmperage" in registry:
        values["amperage"] = signed_int64(registry["InstantAmperage"]) / 1000.0
    if "Temperature" in registry:
        values["temperature"] = registry["Temperature"] / 100.0

    return BatteryFacts(**values)


def _first_present(registry: dict[str, int], keys: tuple[str, ...]) -> int | None:
    for key in keys:
        if key in registry:
            return registry[key]
    return None

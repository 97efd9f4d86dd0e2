"""Thermal state models."""

from __future__ import annotations

from pydantic import Field

from pysysalert.models._base import PartialFacts, TelemetryRecord


class ThermalFacts(PartialFacts):
    thermal_pressure: int | None = None
    fan_speeds: tuple[int, ...] | None = None


class ThermalInfo(TelemetryRecord):
    """Fan speeds, thermal pressure and the values derived from it.

    ``thermal_pressure`` is a 0-100 scale derived from the kernel's
    CPU thermal level; ``heat_dissipation_rate`` is a coarse watt
    estimate by pressure band, not a measurement.
    """

    fan_speeds: tuple[int, ...] = ()
    thermal_throttling: bool = False
    thermal_pressure: int = Field(default=0, ge=0, le=100)
    heat_dissipation_rate: float = 0.0

"""Battery facts and the merged battery record."""

from __future__ import annotations

from pydantic import Field

from pysysalert.models._base import PartialFacts, TelemetryRecord


class BatteryFacts(PartialFacts):
    """Battery fields recognised in one diagnostic report.

    Parameters
    ----------
    percentage : float or None
        State of charge (0-100).
    is_charging : bool or None
        Whether the battery is actively charging.
    is_plugged : bool or None
        Whether external power is connected.
    time_remaining : int or None
        Seconds until empty/full.  ``None`` also covers the
        ``(no estimate)`` case.
    health_percentage : float or None
        Maximum capacity relative to design, either read directly or
        looked up from the reported condition.
    condition : str or None
        Raw condition string (``"Normal"``, ``"Replace Soon"``...).
    cycle_count : int or None
        Charge cycle count.
    current_capacity : int or None
        Current full-charge capacity in mAh.
    design_capacity : int or None
        Factory design capacity in mAh.
    power_adapter_wattage : float or None
        Connected adapter rating in watts.
    voltage : float or None
        Pack voltage in volts.
    amperage : float or None
        Instantaneous current in amps (negative while discharging).
    temperature : float or None
        Pack temperature in °C.
    """

    percentage: float | None = None
    is_charging: bool | None = None
    is_plugged: bool | None = None
    time_remaining: int | None = None
    health_percentage: float | None = None
    condition: str | None = None
    cycle_count: int | None = None
    current_capacity: int | None = None
    design_capacity: int | None = None
    power_adapter_wattage: float | None = None
    voltage: float | None = None
    amperage: float | None = None
    temperature: float | None = None


class BatteryInfo(TelemetryRecord):
    """Reconciled battery state for one polling cycle."""

    percentage: float = 0.0
    is_charging: bool = False
    is_plugged: bool = False
    time_remaining: int | None = None
    """Seconds remaining; ``None`` when the OS has no estimate."""
    health_percentage: float = 0.0
    condition: str | None = None
    cycle_count: int = Field(default=0, ge=0)
    current_capacity: int = Field(default=0, ge=0)
    design_capacity: int = Field(default=0, ge=0)
    power_adapter_wattage: float = 0.0
    voltage: float = 0.0
    amperage: float = 0.0
    temperature: float = 0.0

    @property
    def time_remaining_available(self) -> bool:
        return self.time_remaining is not None

    @property
    def has_capacity_data(self) -> bool:
        return self.design_capacity > 0 and self.current_capacity > 0

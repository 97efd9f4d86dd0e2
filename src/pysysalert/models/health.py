"""System health models."""

from __future__ import annotations

from pydantic import Field

from pysysalert.models._base import PartialFacts, TelemetryRecord


class HealthFacts(PartialFacts):
    uptime_seconds: int | None = None
    system_load_1min: float | None = None
    system_load_5min: float | None = None
    system_load_15min: float | None = None


class SystemHealthInfo(TelemetryRecord):
    uptime_seconds: int = Field(default=0, ge=0)
    system_load_1min: float = 0.0
    system_load_5min: float = 0.0
    system_load_15min: float = 0.0
    power_quality_score: int = Field(default=0, ge=0, le=100)
    sleep_wake_efficiency: float = 0.0

    @property
    def average_load(self) -> float:
        return (self.system_load_1min + self.system_load_5min + self.system_load_15min) / 3.0

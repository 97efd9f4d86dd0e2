"""Threshold alerts over collected snapshots.

Delivery (desktop notifications, logging, webhooks) is left to the
caller; this module only decides *what* to raise and *when*.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable
from enum import StrEnum

from pysysalert.config import NotificationConfig, ThresholdConfig
from pysysalert.models.snapshot import Snapshot

_logger = logging.getLogger(__name__)


class AlertLevel(StrEnum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class AlertKey(StrEnum):
    """Cooldown bucket; at most one alert per key per cooldown window."""

    CPU = "cpu"
    MEMORY = "memory"
    TEMPERATURE = "temperature"


@dataclasses.dataclass(frozen=True)
class Alert:
    key: AlertKey
    level: AlertLevel
    title: str
    message: str

    @property
    def subtitle(self) -> str:
        return {
            AlertLevel.INFO: "Information",
            AlertLevel.WARNING: "Warning",
            AlertLevel.CRITICAL: "Critical Alert",
        }[self.level]


def check_cpu(usage: float, thresholds: ThresholdConfig) -> Alert | None:
    if usage > thresholds.cpu_critical:
        return Alert(AlertKey.CPU, AlertLevel.CRITICAL, "CPU Alert", f"CPU usage is critically high: {usage:.1f}%")
    if usage > thresholds.cpu_warning:
        return Alert(AlertKey.CPU, AlertLevel.WARNING, "CPU Alert", f"CPU usage is high: {usage:.1f}%")
    return None


def check_memory(percentage: int, thresholds: ThresholdConfig) -> Alert | None:
    if percentage > thresholds.memory_critical:
        return Alert(
            AlertKey.MEMORY,
            AlertLevel.CRITICAL,
            "Memory Alert",
            f"Memory usage is critically high: {percentage}%",
        )
    if percentage > thresholds.memory_warning:
        return Alert(AlertKey.MEMORY, AlertLevel.WARNING, "Memory Alert", f"Memory usage is high: {percentage}%")
    return None


def check_temperatures(snapshot: Snapshot, thresholds: ThresholdConfig) -> Alert | None:
    """Alert for the first sensor, in reported order, above a threshold."""
    for sensor in snapshot.temperatures:
        if sensor.temperature > thresholds.temperature_critical:
            return Alert(
                AlertKey.TEMPERATURE,
                AlertLevel.CRITICAL,
                "Temperature Alert",
                f"{sensor.label} temperature is critically high: {sensor.temperature:.1f}°C",
            )
        if sensor.temperature > thresholds.temperature_warning:
            return Alert(
                AlertKey.TEMPERATURE,
                AlertLevel.WARNING,
                "Temperature Alert",
                f"{sensor.label} temperature is high: {sensor.temperature:.1f}°C",
            )
    return None


class AlertEvaluator:
    """Evaluate thresholds with a per-key cooldown.

    Parameters
    ----------
    thresholds : ThresholdConfig
        Warning/critical levels.
    notifications : NotificationConfig
        Enable flag and cooldown in seconds.
    clock : callable
        Monotonic seconds; injectable for tests.
    """

    def __init__(
        self,
        thresholds: ThresholdConfig | None = None,
        notifications: NotificationConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.thresholds = thresholds or ThresholdConfig()
        self.notifications = notifications or NotificationConfig()
        self._clock = clock
        self._last_sent: dict[AlertKey, float] = {}

    def _cooled_down(self, key: AlertKey, now: float) -> bool:
        last = self._last_sent.get(key)
        return last is None or now - last >= self.notifications.cooldown_seconds

    def evaluate(self, snapshot: Snapshot) -> list[Alert]:
        """Return the alerts due for *snapshot* and start their cooldowns."""
        if not self.notifications.enabled:
            return []

        candidates = (
            check_cpu(snapshot.cpu.average_usage, self.thresholds),
            check_memory(snapshot.memory.usage_percentage, self.thresholds),
            check_temperatures(snapshot, self.thresholds),
        )
        now = self._clock()
        due: list[Alert] = []
        for alert in candidates:
            if alert is None:
                continue
            if not self._cooled_down(alert.key, now):
                _logger.debug("Suppressing %s alert during cooldown", alert.key)
                continue
            self._last_sent[alert.key] = now
            due.append(alert)
        return due

    def reset(self) -> None:
        self._last_sent.clear()

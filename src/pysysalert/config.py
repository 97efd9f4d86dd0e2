"""Collector configuration for pysysalert."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pysysalert.exceptions import SysAlertConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value)
    except ValueError as exc:
        raise SysAlertConfigError(f"{env_key} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class ThresholdConfig:
    """Warning/critical levels used by :class:`pysysalert.alerts.AlertEvaluator`."""

    cpu_warning: float = 75.0
    cpu_critical: float = 90.0
    memory_warning: int = 75
    memory_critical: int = 90
    temperature_warning: float = 70.0
    temperature_critical: float = 85.0

    def __post_init__(self) -> None:
        for name in ("cpu", "memory", "temperature"):
            warning = getattr(self, f"{name}_warning")
            critical = getattr(self, f"{name}_critical")
            if warning > critical:
                raise SysAlertConfigError(f"{name}_warning ({warning}) must not exceed {name}_critical ({critical})")


@dataclasses.dataclass(frozen=True)
class NotificationConfig:
    enabled: bool = True
    cooldown_seconds: float = 30.0


@dataclasses.dataclass(frozen=True)
class SysAlertConfig:
    """Collector configuration.

    Parameters
    ----------
    refresh_rate : float
        Seconds between polling cycles in :meth:`TelemetryCollector.run`.
    battery_ttl : float
        Seconds a reconciled battery record is served without re-probing.
    cpu_power_ttl : float
        Same for ``powermetrics`` cluster/power data.
    thermal_ttl : float
        Same for thermal level and fan speeds.
    health_ttl : float
        Same for uptime and load averages.
    pmset_timeout, ioreg_timeout, system_profiler_timeout,
    powermetrics_timeout, sysctl_timeout : float
        Per-command wait bounds in seconds.  A command exceeding its
        bound is killed and treated as failed for this cycle.
    powermetrics_sample_ms : int
        Sampling window passed to ``powermetrics -i``.  Must stay well
        below ``powermetrics_timeout``.
    efficiency_core_max_index : int
        Highest core index counted as part of the efficiency cluster.
        The default of ``3`` matches first-generation Apple Silicon.
    history_size : int
        Samples kept by :class:`pysysalert.history.SnapshotHistory`.
    thresholds : ThresholdConfig
        Alert thresholds.
    notifications : NotificationConfig
        Alert enable flag and per-key cooldown.
    """

    refresh_rate: float = 1.0
    battery_ttl: float = 5.0
    cpu_power_ttl: float = 2.0
    thermal_ttl: float = 2.0
    health_ttl: float = 5.0
    pmset_timeout: float = 1.0
    ioreg_timeout: float = 2.0
    system_profiler_timeout: float = 3.0
    powermetrics_timeout: float = 3.0
    sysctl_timeout: float = 1.0
    powermetrics_sample_ms: int = 500
    efficiency_core_max_index: int = 3
    history_size: int = 60
    thresholds: ThresholdConfig = dataclasses.field(default_factory=ThresholdConfig)
    notifications: NotificationConfig = dataclasses.field(default_factory=NotificationConfig)

    def __post_init__(self) -> None:
        for name in ("battery_ttl", "cpu_power_ttl", "thermal_ttl", "health_ttl"):
            if getattr(self, name) < 0:
                raise SysAlertConfigError(f"{name} must be >= 0")
        for name in (
            "pmset_timeout",
            "ioreg_timeout",
            "system_profiler_timeout",
            "powermetrics_timeout",
            "sysctl_timeout",
        ):
            if getattr(self, name) <= 0:
                raise SysAlertConfigError(f"{name} must be > 0")
        if self.refresh_rate <= 0:
            raise SysAlertConfigError("refresh_rate must be > 0")
        if self.efficiency_core_max_index < -1:
            raise SysAlertConfigError("efficiency_core_max_index must be >= -1")
        if self.history_size < 1:
            raise SysAlertConfigError("history_size must be >= 1")
        if self.powermetrics_sample_ms <= 0 or self.powermetrics_sample_ms / 1000.0 >= self.powermetrics_timeout:
            raise SysAlertConfigError("powermetrics_sample_ms must be positive and shorter than powermetrics_timeout")

    @classmethod
    def from_env(cls, **overrides: Any) -> SysAlertConfig:
        """Create configuration from ``SYSALERT_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        SysAlertConfigError
            If a numeric variable cannot be parsed or a value is out of range.
        """
        env = os.environ

        _ENV_FLOAT_MAP = {
            "SYSALERT_REFRESH_RATE": "refresh_rate",
            "SYSALERT_BATTERY_TTL": "battery_ttl",
            "SYSALERT_CPU_POWER_TTL": "cpu_power_ttl",
            "SYSALERT_THERMAL_TTL": "thermal_ttl",
            "SYSALERT_HEALTH_TTL": "health_ttl",
            "SYSALERT_PMSET_TIMEOUT": "pmset_timeout",
            "SYSALERT_IOREG_TIMEOUT": "ioreg_timeout",
            "SYSALERT_SYSTEM_PROFILER_TIMEOUT": "system_profiler_timeout",
            "SYSALERT_POWERMETRICS_TIMEOUT": "powermetrics_timeout",
            "SYSALERT_SYSCTL_TIMEOUT": "sysctl_timeout",
        }
        _ENV_INT_MAP = {
            "SYSALERT_POWERMETRICS_SAMPLE_MS": "powermetrics_sample_ms",
            "SYSALERT_EFFICIENCY_CORE_MAX_INDEX": "efficiency_core_max_index",
            "SYSALERT_HISTORY_SIZE": "history_size",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, float)
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, int)

        if "notifications" not in overrides:
            notify_kwargs: dict[str, Any] = {
                "enabled": _env_bool(env.get("SYSALERT_NOTIFICATIONS_ENABLED"), True),
            }
            cooldown_env = env.get("SYSALERT_NOTIFICATION_COOLDOWN")
            if cooldown_env is not None:
                notify_kwargs["cooldown_seconds"] = _env_number("SYSALERT_NOTIFICATION_COOLDOWN", cooldown_env, float)
            config_kwargs["notifications"] = NotificationConfig(**notify_kwargs)

        # Allow overriding thresholds via a nested dict
        threshold_overrides = overrides.pop("thresholds", None)
        if isinstance(threshold_overrides, dict):
            config_kwargs["thresholds"] = ThresholdConfig(**threshold_overrides)
        elif isinstance(threshold_overrides, ThresholdConfig):
            config_kwargs["thresholds"] = threshold_overrides

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

"""High-level async telemetry collector."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any

from pysysalert._domains import battery as _battery_domain
from pysysalert._domains import cpu_power as _cpu_power_domain
from pysysalert._domains import health as _health_domain
from pysysalert._domains import thermal as _thermal_domain
from pysysalert._probe import ProbeRunner, SubprocessRunner
from pysysalert.config import SysAlertConfig
from pysysalert.derived import estimate_cpu_power, health_from_facts, performance_metrics
from pysysalert.exceptions import CollectorBusyError
from pysysalert.introspection import LocalIntrospector, LocalSample, PsutilIntrospector
from pysysalert.models.battery import BatteryInfo
from pysysalert.models.cpu import CpuInfo, CpuPowerMetrics
from pysysalert.models.health import HealthFacts, SystemHealthInfo
from pysysalert.models.snapshot import Snapshot
from pysysalert.models.thermal import ThermalInfo
from pysysalert.state.cache import DomainCache
from pysysalert.state.sources import Domain

_logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[Snapshot], Awaitable[None] | None]


class TelemetryCollector:
    """Collect one :class:`Snapshot` per polling cycle.

    Cheap local counters are read fresh every cycle.  Battery, CPU power,
    thermal and health data come from slow diagnostic commands and are
    served through per-domain TTL caches owned by this instance.

    Usage::

        collector = TelemetryCollector(SysAlertConfig.from_env())
        snapshot = await collector.collect()

    Parameters
    ----------
    config : SysAlertConfig, optional
        Defaults to ``SysAlertConfig()``.
    runner : ProbeRunner, optional
        Executes diagnostic commands; defaults to :class:`SubprocessRunner`.
    introspector : LocalIntrospector, optional
        Local counter source; defaults to :class:`PsutilIntrospector`.
    clock : callable
        Monotonic seconds used for cache ages.
    wall_clock : callable
        Epoch seconds used for the snapshot timestamp and uptime.
    """

    def __init__(
        self,
        config: SysAlertConfig | None = None,
        *,
        runner: ProbeRunner | None = None,
        introspector: LocalIntrospector | None = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or SysAlertConfig()
        self._runner: ProbeRunner = runner or SubprocessRunner()
        self._introspector: LocalIntrospector = introspector or PsutilIntrospector()
        self._wall_clock = wall_clock
        self._local = LocalSample()
        self._busy = False

        cfg = self._config
        self._battery = DomainCache[BatteryInfo](
            Domain.BATTERY,
            ttl=cfg.battery_ttl,
            refresh=lambda: _battery_domain.refresh_battery(self._runner, cfg),
            fallback=BatteryInfo,
            clock=clock,
        )
        self._cpu_power = DomainCache[CpuPowerMetrics](
            Domain.CPU_POWER,
            ttl=cfg.cpu_power_ttl,
            refresh=lambda: _cpu_power_domain.refresh_cpu_power(self._runner, cfg),
            fallback=lambda: estimate_cpu_power(self._local.average_usage),
            clock=clock,
        )
        self._thermal = DomainCache[ThermalInfo](
            Domain.THERMAL,
            ttl=cfg.thermal_ttl,
            refresh=lambda: _thermal_domain.refresh_thermal(self._runner, cfg),
            fallback=ThermalInfo,
            clock=clock,
        )
        self._health = DomainCache[SystemHealthInfo](
            Domain.HEALTH,
            ttl=cfg.health_ttl,
            refresh=lambda: _health_domain.refresh_health(self._runner, cfg, wall_clock=self._wall_clock),
            fallback=self._local_health,
            clock=clock,
        )

    @property
    def config(self) -> SysAlertConfig:
        return self._config

    @property
    def caches(self) -> dict[Domain, DomainCache[Any]]:
        return {
            Domain.BATTERY: self._battery,
            Domain.CPU_POWER: self._cpu_power,
            Domain.THERMAL: self._thermal,
            Domain.HEALTH: self._health,
        }

    def _local_health(self) -> SystemHealthInfo:
        """Health estimate from locally observed boot time and load."""
        local = self._local
        uptime = None
        if local.boot_time is not None:
            uptime = max(int(self._wall_clock() - local.boot_time), 0)
        loads: tuple[float | None, ...] = local.load_average or (None, None, None)
        return health_from_facts(
            HealthFacts(
                uptime_seconds=uptime,
                system_load_1min=loads[0],
                system_load_5min=loads[1],
                system_load_15min=loads[2],
            )
        )

    async def collect(self) -> Snapshot:
        """Run one polling cycle.

        Data-source failures never propagate: each domain degrades to its
        last good value or a fallback estimate.

        Raises
        ------
        CollectorBusyError
            If called while a previous ``collect()`` on this instance is
            still running.
        """
        if self._busy:
            raise CollectorBusyError("collect() is already running on this collector")
        self._busy = True
        try:
            captured_at = datetime.fromtimestamp(self._wall_clock(), UTC)
            # The CPU-power fallback reads this sample, so it must be taken first.
            self._local = self._introspector.sample()
            tasks = [
                asyncio.ensure_future(cache.get_or_refresh())
                for cache in (self._battery, self._cpu_power, self._thermal, self._health)
            ]
            try:
                battery, power, thermal, health = await asyncio.gather(*tasks)
            except BaseException:
                # No refresh may outlive a failed or cancelled cycle.
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
        finally:
            self._busy = False

        local = self._local
        cpu = CpuInfo(core_usages=local.core_usages, average_usage=local.average_usage, power=power)
        return Snapshot(
            captured_at=captured_at,
            system=local.system,
            cpu=cpu,
            memory=local.memory,
            networks=local.networks,
            temperatures=local.temperatures,
            processes=local.processes,
            battery=battery,
            thermal=thermal,
            performance=performance_metrics(cpu),
            health=health,
        )

    async def collect_series(self, samples: int, interval: float | None = None) -> list[Snapshot]:
        """Collect *samples* snapshots spaced *interval* seconds apart."""
        if samples < 1:
            return []
        delay = self._config.refresh_rate if interval is None else interval
        series: list[Snapshot] = []
        for index in range(samples):
            if index:
                await asyncio.sleep(delay)
            series.append(await self.collect())
        return series

    async def run(self, on_snapshot: SnapshotCallback, *, interval: float | None = None) -> None:
        """Poll until cancelled, handing each snapshot to *on_snapshot*.

        The callback may be a plain function or a coroutine function.
        """
        delay = self._config.refresh_rate if interval is None else interval
        _logger.debug("Polling every %.2fs", delay)
        while True:
            snapshot = await self.collect()
            result = on_snapshot(snapshot)
            if inspect.isawaitable(result):
                await result
            await asyncio.sleep(delay)

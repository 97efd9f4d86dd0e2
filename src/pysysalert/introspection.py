"""Cheap local introspection backed by psutil.

Everything here is synchronous and refreshed every cycle; nothing is
cached.  Each section degrades independently: a failure reading one
counter family leaves that section empty and is logged, it never
aborts the sample.
"""

from __future__ import annotations

import logging
import platform
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

import psutil
from pydantic import Field

from pysysalert.models._base import TelemetryRecord
from pysysalert.models.system import MemoryInfo, NetworkInterface, ProcessInfo, SystemInfo, TemperatureInfo

_logger = logging.getLogger(__name__)

T = TypeVar("T")

_PROCESS_ATTRS = ["pid", "name", "cpu_percent", "memory_info"]
_DEFAULT_CRITICAL_TEMPERATURE = 100.0


class LocalSample(TelemetryRecord):
    """One pass over the locally introspectable counters."""

    system: SystemInfo = Field(default_factory=SystemInfo)
    core_usages: tuple[float, ...] = ()
    memory: MemoryInfo = Field(default_factory=MemoryInfo)
    networks: tuple[NetworkInterface, ...] = ()
    temperatures: tuple[TemperatureInfo, ...] = ()
    processes: tuple[ProcessInfo, ...] = ()
    boot_time: float | None = None
    """Boot time as epoch seconds, if known."""
    load_average: tuple[float, float, float] | None = None

    @property
    def average_usage(self) -> float:
        if not self.core_usages:
            return 0.0
        return sum(self.core_usages) / len(self.core_usages)


class LocalIntrospector(Protocol):
    """Structural interface for the local introspection service."""

    def sample(self) -> LocalSample:
        ...


class PsutilIntrospector:
    """Samples CPU, memory, network, sensors and processes via psutil.

    Parameters
    ----------
    psutil_module : module, optional
        Injected for tests; defaults to the real :mod:`psutil`.
    """

    def __init__(self, *, psutil_module: Any = None) -> None:
        self._psutil = psutil_module if psutil_module is not None else psutil
        # The first cpu_percent(interval=None) call always reports 0.0.
        try:
            self._psutil.cpu_percent(interval=None, percpu=True)
        except (psutil.Error, OSError) as exc:
            _logger.debug("Could not prime cpu_percent: %s", exc)

    def sample(self) -> LocalSample:
        return LocalSample(
            system=self._system(),
            core_usages=self._section("cpu", self._core_usages, ()),
            memory=self._section("memory", self._memory, MemoryInfo()),
            networks=self._section("network", self._networks, ()),
            temperatures=self._section("sensors", self._temperatures, ()),
            processes=self._section("processes", self._processes, ()),
            boot_time=self._section("boot_time", self._boot_time, None),
            load_average=self._section("load_average", self._load_average, None),
        )

    def _section(self, name: str, read: Callable[[], T], default: T) -> T:
        try:
            return read()
        except (psutil.Error, OSError) as exc:
            _logger.debug("Local %s introspection failed: %s", name, exc)
            return default

    def _system(self) -> SystemInfo:
        uname = platform.uname()
        mac_version = platform.mac_ver()[0]
        return SystemInfo(
            name=uname.system or "Unknown",
            kernel_version=uname.release or "Unknown",
            os_version=mac_version or uname.version or "Unknown",
            host_name=uname.node or "Unknown",
            cpu_arch=uname.machine or "Unknown",
            cpu_brand=platform.processor() or "Unknown",
        )

    def _core_usages(self) -> tuple[float, ...]:
        return tuple(float(value) for value in self._psutil.cpu_percent(interval=None, percpu=True))

    def _memory(self) -> MemoryInfo:
        virtual = self._psutil.virtual_memory()
        swap = self._psutil.swap_memory()
        usage = 0
        if virtual.total > 0:
            usage = min(100, int(virtual.used / virtual.total * 100))
        return MemoryInfo(
            total_memory=int(virtual.total),
            used_memory=int(virtual.used),
            available_memory=int(virtual.available),
            total_swap=int(swap.total),
            used_swap=int(swap.used),
            usage_percentage=usage,
        )

    def _networks(self) -> tuple[NetworkInterface, ...]:
        counters = self._psutil.net_io_counters(pernic=True) or {}
        return tuple(
            NetworkInterface(
                name=name,
                bytes_received=stats.bytes_recv,
                bytes_transmitted=stats.bytes_sent,
                packets_received=stats.packets_recv,
                packets_transmitted=stats.packets_sent,
            )
            for name, stats in sorted(counters.items())
        )

    def _temperatures(self) -> tuple[TemperatureInfo, ...]:
        # Not provided on every platform (notably macOS).
        reader = getattr(self._psutil, "sensors_temperatures", None)
        if reader is None:
            return ()
        readings: list[TemperatureInfo] = []
        for chip, entries in (reader() or {}).items():
            for index, entry in enumerate(entries):
                if entry.current is None:
                    continue
                readings.append(
                    TemperatureInfo(
                        label=entry.label or f"{chip} {index}",
                        temperature=float(entry.current),
                        critical_temperature=float(entry.critical or _DEFAULT_CRITICAL_TEMPERATURE),
                    )
                )
        return tuple(readings)

    def _processes(self) -> tuple[ProcessInfo, ...]:
        attrs = list(_PROCESS_ATTRS)
        # Per-process I/O counters are unavailable on macOS.
        if hasattr(self._psutil.Process, "io_counters"):
            attrs.append("io_counters")
        processes: list[ProcessInfo] = []
        for proc in self._psutil.process_iter(attrs, ad_value=None):
            info = proc.info
            memory = info.get("memory_info")
            io = info.get("io_counters")
            processes.append(
                ProcessInfo(
                    pid=info["pid"],
                    name=info.get("name") or "",
                    cpu_usage=float(info.get("cpu_percent") or 0.0),
                    memory_usage=int(memory.rss) if memory is not None else 0,
                    disk_read_bytes=int(io.read_bytes) if io is not None else 0,
                    disk_write_bytes=int(io.write_bytes) if io is not None else 0,
                )
            )
        return tuple(processes)

    def _boot_time(self) -> float:
        return float(self._psutil.boot_time())

    def _load_average(self) -> tuple[float, float, float]:
        one, five, fifteen = self._psutil.getloadavg()
        return (float(one), float(five), float(fifteen))

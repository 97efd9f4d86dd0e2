from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import psutil

from pysysalert.introspection import LocalSample, PsutilIntrospector


class _FakePsutil:
    """Just enough of the psutil module surface for the introspector."""

    Process = SimpleNamespace()

    def __init__(self) -> None:
        self.cpu_calls = 0

    def cpu_percent(self, interval: Any = None, percpu: bool = False) -> list[float]:
        self.cpu_calls += 1
        return [10.0, 30.0]

    def virtual_memory(self) -> SimpleNamespace:
        return SimpleNamespace(total=1000, used=250, available=750)

    def swap_memory(self) -> SimpleNamespace:
        return SimpleNamespace(total=500, used=100)

    def net_io_counters(self, pernic: bool = False) -> dict[str, SimpleNamespace]:
        return {
            "lo0": SimpleNamespace(bytes_recv=5, bytes_sent=5, packets_recv=1, packets_sent=1),
            "en0": SimpleNamespace(bytes_recv=100, bytes_sent=40, packets_recv=10, packets_sent=4),
        }

    def process_iter(self, attrs: list[str], ad_value: Any = None) -> list[SimpleNamespace]:
        assert "io_counters" not in attrs
        return [
            SimpleNamespace(
                info={"pid": 1, "name": "launchd", "cpu_percent": 0.5, "memory_info": SimpleNamespace(rss=2048)}
            ),
            SimpleNamespace(info={"pid": 99, "name": None, "cpu_percent": None, "memory_info": None}),
        ]

    def boot_time(self) -> float:
        raise psutil.AccessDenied()

    def getloadavg(self) -> tuple[float, float, float]:
        return (1.0, 2.0, 3.0)


def test_sample_reads_every_section() -> None:
    fake = _FakePsutil()
    sample = PsutilIntrospector(psutil_module=fake).sample()

    assert fake.cpu_calls == 2
    assert sample.core_usages == (10.0, 30.0)
    assert sample.average_usage == 20.0
    assert sample.memory.total_memory == 1000
    assert sample.memory.usage_percentage == 25
    assert sample.memory.used_swap == 100
    assert [iface.name for iface in sample.networks] == ["en0", "lo0"]
    assert sample.networks[0].bytes_received == 100
    assert sample.load_average == (1.0, 2.0, 3.0)
    assert sample.system.name != ""


def test_missing_sensor_support_yields_no_temperatures() -> None:
    sample = PsutilIntrospector(psutil_module=_FakePsutil()).sample()

    assert sample.temperatures == ()


def test_processes_tolerate_denied_attributes() -> None:
    sample = PsutilIntrospector(psutil_module=_FakePsutil()).sample()

    assert [proc.pid for proc in sample.processes] == [1, 99]
    assert sample.processes[0].memory_usage == 2048
    assert sample.processes[1].name == ""
    assert sample.processes[1].cpu_usage == 0.0


def test_failed_section_degrades_to_default() -> None:
    sample = PsutilIntrospector(psutil_module=_FakePsutil()).sample()

    assert sample.boot_time is None


def test_sensor_readings_are_labelled() -> None:
    fake = _FakePsutil()
    fake.sensors_temperatures = lambda: {  # type: ignore[attr-defined]
        "coretemp": [
            SimpleNamespace(label="Package id 0", current=55.0, high=80.0, critical=100.0),
            SimpleNamespace(label="", current=50.0, high=None, critical=None),
        ]
    }

    sample = PsutilIntrospector(psutil_module=fake).sample()

    assert [t.label for t in sample.temperatures] == ["Package id 0", "coretemp 1"]
    assert sample.temperatures[1].critical_temperature == 100.0


def test_empty_sample_average() -> None:
    assert LocalSample().average_usage == 0.0

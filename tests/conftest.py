from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from pysysalert._probe import CommandSpec
from pysysalert.exceptions import ProbeLaunchError
from pysysalert.introspection import LocalSample
from pysysalert.models.probe import RawProbeOutput
from pysysalert.models.system import MemoryInfo, NetworkInterface, TemperatureInfo

PMSET_AC = (
    "Now drawing from 'AC Power'\n"
    " -InternalBattery-0 (id=20775011)\t98%; charging; 0:13 remaining present: true\n"
)

SYSTEM_PROFILER_POWER = """\
Power:

    Battery Information:

      Model Information:
          Manufacturer: SMP
          Device Name: bq40z651
      Charge Information:
          The battery's charge is below warning level: No
          Fully Charged: No
          Charging: Yes
          State of Charge (%): 98
      Health Information:
          Cycle Count: 342
          Condition: Normal
          Maximum Capacity: 87%

    AC Charger Information:

      Connected: Yes
      ID: 0x7019
      Wattage (W): 96
      Family: 0xe000400a
"""

IOREG_BATTERY = """\
+-o AppleSmartBattery  <class AppleSmartBattery, id 0x100000b1d, registered, matched, active, busy 0 (0 ms), retain 7>
    {
      "AppleRawCurrentCapacity" = 4230
      "CurrentCapacity" = 98
      "DesignCapacity" = 4700
      "MaxCapacity" = 100
      "CycleCount" = 342
      "Voltage" = 12850
      "InstantAmperage" = 18446744073709550616
      "Temperature" = 3055
      "ExternalConnected" = Yes
    }
"""

POWERMETRICS_CPU = """\
Machine model: MacBookPro17,1
OS version: 23A344

*** Sampled system activity (Wed Oct 16 10:00:00 2026 +0000) (503.12ms elapsed) ***

**** Processor usage ****

E-Cluster HW active frequency: 1200 MHz
E-Cluster HW active residency:  40.00% (600 MHz:   0% 972 MHz:  55%)
CPU 0 frequency: 1000 MHz
CPU 0 active residency:  30.00% (600 MHz:   0% 972 MHz:  30%)
CPU 1 frequency: 1200 MHz
CPU 1 active residency:  40.00% (600 MHz:   0% 972 MHz:  40%)
CPU 2 frequency: 1400 MHz
CPU 2 active residency:  50.00% (600 MHz:   0% 972 MHz:  50%)
CPU 3 frequency: 1200 MHz
CPU 3 active residency:  40.00% (600 MHz:   0% 972 MHz:  40%)

P-Cluster HW active frequency: 3200 MHz
CPU 4 frequency: 3000 MHz
CPU 4 active residency:  60.00% (600 MHz:   0% 3204 MHz:  60%)
CPU 5 frequency: 3200 MHz
CPU 5 active residency:  80.00% (600 MHz:   0% 3204 MHz:  80%)
CPU 6 frequency: 3400 MHz
CPU 6 active residency:  70.00% (600 MHz:   0% 3204 MHz:  70%)
CPU 7 frequency: 3200 MHz
CPU 7 active residency:  70.00% (600 MHz:   0% 3204 MHz:  70%)

CPU Power: 1234 mW
GPU Power: 56 mW
ANE Power: 0 mW
Combined Power (CPU + GPU + ANE): 1290 mW

**** GPU usage ****

GPU HW active frequency: 389 MHz
GPU HW active residency:   3.58% (389 MHz: 3.58%)
"""

POWERMETRICS_SMC = """\
*** Sampled system activity (Wed Oct 16 10:00:00 2026 +0000) (502.51ms elapsed) ***

**** SMC sensors ****

Fan: 1834.23 rpm
CPU die temperature: 45.20 C
"""

SYSCTL_THERMAL = "2\n"
SYSCTL_BOOTTIME = "{ sec = 1700000000, usec = 123456 } Tue Nov 14 22:13:20 2023\n"
SYSCTL_LOADAVG = "{ 2.66 2.75 2.97 }\n"

# Epoch seconds one hour after the boot time above.
WALL_NOW = 1_700_003_600.0


@dataclass
class FakeRunner:
    """Serves canned text per source; unknown sources fail to launch."""

    outputs: dict[str, str | BaseException] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def run(self, spec: CommandSpec) -> RawProbeOutput:
        self.calls.append(spec.source)
        result = self.outputs.get(spec.source)
        if result is None:
            raise ProbeLaunchError(f"{spec.program} not available", source=spec.source)
        if isinstance(result, BaseException):
            raise result
        return RawProbeOutput(source=spec.source, text=result)


@dataclass
class BlockingRunner:
    """Parks every probe until ``release`` is set."""

    entered: asyncio.Event = field(default_factory=asyncio.Event)
    release: asyncio.Event = field(default_factory=asyncio.Event)

    async def run(self, spec: CommandSpec) -> RawProbeOutput:
        self.entered.set()
        await self.release.wait()
        raise ProbeLaunchError("released", source=spec.source)


@dataclass
class FakeIntrospector:
    sample_value: LocalSample = field(
        default_factory=lambda: LocalSample(
            core_usages=[40.0, 60.0],
            memory=MemoryInfo(total_memory=16, used_memory=8, available_memory=8, usage_percentage=50),
            networks=[
                NetworkInterface(name="en0", bytes_received=100, bytes_transmitted=10),
                NetworkInterface(name="lo0", bytes_received=5, bytes_transmitted=5),
            ],
            temperatures=[TemperatureInfo(label="CPU", temperature=50.0)],
            boot_time=WALL_NOW - 7200,
            load_average=(0.5, 0.5, 0.5),
        )
    )
    samples: int = 0

    def sample(self) -> LocalSample:
        self.samples += 1
        return self.sample_value


@pytest.fixture
def sample_outputs() -> dict[str, str | BaseException]:
    return {
        "pmset": PMSET_AC,
        "system_profiler": SYSTEM_PROFILER_POWER,
        "ioreg": IOREG_BATTERY,
        "powermetrics": POWERMETRICS_CPU,
        "powermetrics_smc": POWERMETRICS_SMC,
        "sysctl_thermal": SYSCTL_THERMAL,
        "sysctl_boottime": SYSCTL_BOOTTIME,
        "sysctl_loadavg": SYSCTL_LOADAVG,
    }


@pytest.fixture
def runner(sample_outputs: dict[str, str | BaseException]) -> FakeRunner:
    return FakeRunner(outputs=dict(sample_outputs))


@pytest.fixture
def failing_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def introspector() -> FakeIntrospector:
    return FakeIntrospector()


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def blocking_runner() -> BlockingRunner:
    return BlockingRunner()

"""Ingestion layer.

Pure extractors that turn raw diagnostic text into partial-fact
records.  Every extractor has the same narrow shape (text in, partial
record out) so a parser can be swapped without touching reconciliation.
"""

from pysysalert.ingestion.battery import parse_ioreg_battery, parse_pmset_batt, parse_system_profiler_power
from pysysalert.ingestion.powermetrics import parse_cpu_power, parse_smc_fans
from pysysalert.ingestion.sysctl import parse_boottime, parse_loadavg, parse_thermal_level

__all__ = [
    "parse_boottime",
    "parse_cpu_power",
    "parse_ioreg_battery",
    "parse_loadavg",
    "parse_pmset_batt",
    "parse_smc_fans",
    "parse_system_profiler_power",
    "parse_thermal_level",
]

from __future__ import annotations

import pytest

from pysysalert.exceptions import ParseMismatchError
from pysysalert.ingestion.battery import parse_ioreg_battery, parse_pmset_batt, parse_system_profiler_power


def test_pmset_battery_line() -> None:
    facts = parse_pmset_batt(" -InternalBattery-0 (id=20775011)\t98%; charging; 0:13 remaining present: true")

    assert facts.percentage == 98.0
    assert facts.is_charging is True
    assert facts.is_plugged is True
    assert facts.time_remaining == 780


def test_pmset_on_battery_power() -> None:
    text = (
        "Now drawing from 'Battery Power'\n"
        " -InternalBattery-0 (id=20775011)\t57%; discharging; 3:25 remaining present: true\n"
    )

    facts = parse_pmset_batt(text)

    assert facts.percentage == 57.0
    assert facts.is_plugged is False
    assert facts.time_remaining == 3 * 3600 + 25 * 60


def test_pmset_charging_is_a_substring_match() -> None:
    facts = parse_pmset_batt(" -InternalBattery-0 (id=1)\t57%; discharging; 3:25 remaining present: true")

    assert facts.is_charging is True


def test_pmset_no_estimate_leaves_time_remaining_unknown() -> None:
    facts = parse_pmset_batt(" -InternalBattery-0 (id=1)\t100%; charged; (no estimate) present: true")

    assert facts.time_remaining is None
    assert "time_remaining" not in facts.produced()


def test_pmset_without_battery_line_is_mismatch() -> None:
    with pytest.raises(ParseMismatchError):
        parse_pmset_batt("pmset: command not supported on this machine")


def test_system_profiler_direct_health_wins(sample_outputs: dict[str, str]) -> None:
    facts = parse_system_profiler_power(sample_outputs["system_profiler"])

    assert facts.health_percentage == 87.0
    assert facts.cycle_count == 342
    assert facts.condition == "Normal"
    assert facts.power_adapter_wattage == 96.0


def test_system_profiler_max_capacity_without_condition() -> None:
    facts = parse_system_profiler_power("Maximum Capacity: 87%\nCycle Count: 342\n")

    assert facts.health_percentage == 87.0
    assert facts.cycle_count == 342
    assert facts.condition is None


@pytest.mark.parametrize(
    ("condition", "expected"),
    [("Replace Soon", 75.0), ("Normal", 95.0), ("Replace Now", 50.0), ("Service Battery", 30.0), ("Odd", 85.0)],
)
def test_system_profiler_condition_table(condition: str, expected: float) -> None:
    facts = parse_system_profiler_power(f"Power:\n    Condition: {condition}\n")

    assert facts.health_percentage == expected
    assert facts.condition == condition


def test_system_profiler_unrelated_text_is_mismatch() -> None:
    with pytest.raises(ParseMismatchError):
        parse_system_profiler_power("Bluetooth:\n    Version: 9.0\n")


def test_system_profiler_empty_power_section_is_not_an_error() -> None:
    facts = parse_system_profiler_power("Power:\n\n    System Power Settings:\n")

    assert facts.is_empty


def test_ioreg_capacities_and_electrical(sample_outputs: dict[str, str]) -> None:
    facts = parse_ioreg_battery(sample_outputs["ioreg"])

    assert facts.current_capacity == 4230
    assert facts.design_capacity == 4700
    assert facts.cycle_count == 342
    assert facts.voltage == pytest.approx(12.85)
    assert facts.amperage == pytest.approx(-1.0)
    assert facts.temperature == pytest.approx(30.55)
    # Health is left to reconciliation.
    assert facts.health_percentage is None


def test_ioreg_alternate_keys() -> None:
    facts = parse_ioreg_battery('"CurrentCapacity" = 3900\n"MaxCapacity" = 4400\n')

    assert facts.current_capacity == 3900
    assert facts.design_capacity == 4400


def test_ioreg_primary_key_wins_regardless_of_order() -> None:
    facts = parse_ioreg_battery('"MaxCapacity" = 100\n"DesignCapacity" = 4700\n')

    assert facts.design_capacity == 4700


def test_ioreg_without_values_is_mismatch() -> None:
    with pytest.raises(ParseMismatchError):
        parse_ioreg_battery("")

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from pysysalert.models import BatteryFacts, BatteryInfo, RawProbeOutput, Snapshot, TemperatureInfo


def test_records_are_frozen() -> None:
    battery = BatteryInfo(percentage=50.0)

    with pytest.raises(ValidationError):
        battery.percentage = 10.0  # type: ignore[misc]


def test_unknown_fields_rejected() -> None:
    with pytest.raises(ValidationError):
        BatteryFacts(percent=50)  # type: ignore[call-arg]


def test_partial_facts_report_only_produced_fields() -> None:
    facts = BatteryFacts(percentage=50.0, is_charging=False)

    assert facts.produced() == {"percentage": 50.0, "is_charging": False}
    assert not facts.is_empty
    assert BatteryFacts().is_empty


def test_battery_helpers() -> None:
    assert BatteryInfo().time_remaining_available is False
    assert BatteryInfo(time_remaining=60).time_remaining_available is True
    assert BatteryInfo(current_capacity=1, design_capacity=2).has_capacity_data is True


def test_raw_output_timestamp_made_tz_aware() -> None:
    output = RawProbeOutput(source="pmset", text="x", captured_at=datetime(2026, 1, 1))

    assert output.captured_at.tzinfo is UTC


def test_snapshot_serializes_to_json() -> None:
    snapshot = Snapshot(
        captured_at=datetime(2026, 1, 1, tzinfo=UTC),
        temperatures=[TemperatureInfo(label="CPU", temperature=40.0), TemperatureInfo(label="GPU", temperature=50.0)],
    )

    payload = json.loads(json.dumps(snapshot.model_dump(mode="json")))

    assert payload["battery"]["time_remaining"] is None
    assert payload["performance"]["workload_type"] == "idle"
    assert snapshot.average_temperature == 45.0
    assert Snapshot(captured_at=datetime(2026, 1, 1, tzinfo=UTC)).average_temperature is None

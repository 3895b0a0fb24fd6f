"""
Tests for the ReadingSnapshot model.

Verifies immutability, CSV column names and order, and locale-independent
row rendering.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError
from sofarlogger.src.models import ReadingSnapshot

_TS = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)

_EXPECTED_HEADER = [
    "TimestampUtc",
    "running_state",
    "batterySOC",
    "battery_cycles",
    "battery_power",
    "battery_voltage",
    "battery_current",
    "battery_temp",
    "gridPower",
    "grid_voltage",
    "grid_freq",
    "consumptionWatts",
    "solarPVWatts",
    "solarPVAmps",
    "today_generation",
    "today_exported",
    "today_purchase",
    "today_consumption",
    "inverter_temp",
    "inverterHS_temp",
]


class TestReadingSnapshot:
    def test_construct_by_field_name(self) -> None:
        snap = ReadingSnapshot(timestamp_utc=_TS, battery_soc=80, grid_power=-250)
        assert snap.battery_soc == 80
        assert snap.grid_power == -250

    def test_construct_by_column_alias(self) -> None:
        snap = ReadingSnapshot(TimestampUtc=_TS, batterySOC=55)
        assert snap.timestamp_utc == _TS
        assert snap.battery_soc == 55

    def test_unread_fields_default_to_zero(self) -> None:
        snap = ReadingSnapshot(timestamp_utc=_TS)
        assert snap.battery_voltage == 0
        assert snap.battery_temp == 0

    def test_is_frozen(self) -> None:
        snap = ReadingSnapshot(timestamp_utc=_TS)
        with pytest.raises(ValidationError):
            snap.running_state = 2  # type: ignore[misc]

    def test_timestamp_is_required(self) -> None:
        with pytest.raises(ValidationError):
            ReadingSnapshot()  # type: ignore[call-arg]


class TestCsvRendering:
    def test_header_names_and_order(self) -> None:
        assert ReadingSnapshot.csv_header() == _EXPECTED_HEADER

    def test_row_has_one_value_per_header_column(self) -> None:
        snap = ReadingSnapshot(timestamp_utc=_TS)
        assert len(snap.csv_row()) == len(ReadingSnapshot.csv_header())

    def test_row_values_in_header_order(self) -> None:
        snap = ReadingSnapshot(
            timestamp_utc=_TS,
            running_state=2,
            battery_soc=91,
            grid_power=54350,
            grid_freq=50.01,
            inverter_hs_temp=39,
        )
        row = dict(zip(ReadingSnapshot.csv_header(), snap.csv_row(), strict=True))
        assert row["running_state"] == "2"
        assert row["batterySOC"] == "91"
        assert row["gridPower"] == "54350"
        assert row["grid_freq"] == "50.01"
        assert row["inverterHS_temp"] == "39"

    def test_timestamp_is_iso8601_utc(self) -> None:
        snap = ReadingSnapshot(timestamp_utc=_TS)
        assert snap.csv_row()[0] == "2026-10-19T12:00:00+00:00"

    def test_decimal_point_is_always_a_dot(self) -> None:
        snap = ReadingSnapshot(timestamp_utc=_TS, today_generation=123.45)
        row = dict(zip(ReadingSnapshot.csv_header(), snap.csv_row(), strict=True))
        assert row["today_generation"] == "123.45"

    def test_whole_float_keeps_trailing_zero(self) -> None:
        snap = ReadingSnapshot(timestamp_utc=_TS, today_purchase=12.0)
        row = dict(zip(ReadingSnapshot.csv_header(), snap.csv_row(), strict=True))
        assert row["today_purchase"] == "12.0"
        assert float(row["today_purchase"]) == 12

"""
Pydantic model for one decoded inverter reading.

Defines the immutable ReadingSnapshot built once per successful poll cycle.
Field declaration order is the CSV column order. Aliases carry the column
names used by existing ``log.csv`` files so new rows line up with old ones.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReadingSnapshot(BaseModel):
    """A single decoded reading from the inverter.

    Values are in engineering units after decoding. The timestamp is injected
    by the caller, not derived from register data.

    Attributes:
        timestamp_utc: Capture time (timezone-aware, UTC).
        running_state: Inverter running state code.
        battery_soc: Battery state of charge in percent.
        battery_cycles: Battery cycle count.
        battery_power: Battery power in watts (Sofar signed encoding).
        battery_voltage: Not read from the device; always 0.
        battery_current: Battery current in amps.
        battery_temp: Not read from the device; always 0.
        grid_power: Grid power in watts (Sofar signed encoding).
        grid_voltage: Grid voltage in volts.
        grid_freq: Grid frequency in hertz.
        consumption_watts: House consumption in watts.
        solar_pv_watts: PV power in watts.
        solar_pv_amps: PV current in amps.
        today_generation: Energy generated today in kWh.
        today_exported: Energy exported today in kWh.
        today_purchase: Energy purchased today in kWh.
        today_consumption: Energy consumed today in kWh.
        inverter_temp: Inverter temperature in degrees Celsius.
        inverter_hs_temp: Inverter heatsink temperature in degrees Celsius.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp_utc: datetime = Field(alias="TimestampUtc")
    running_state: int = 0
    battery_soc: int = Field(default=0, alias="batterySOC")
    battery_cycles: int = 0
    battery_power: int = 0
    battery_voltage: int = 0
    battery_current: float = 0.0
    battery_temp: int = 0
    grid_power: int = Field(default=0, alias="gridPower")
    grid_voltage: float = 0.0
    grid_freq: float = 0.0
    consumption_watts: int = Field(default=0, alias="consumptionWatts")
    solar_pv_watts: int = Field(default=0, alias="solarPVWatts")
    solar_pv_amps: float = Field(default=0.0, alias="solarPVAmps")
    today_generation: float = 0.0
    today_exported: float = 0.0
    today_purchase: float = 0.0
    today_consumption: float = 0.0
    inverter_temp: int = 0
    inverter_hs_temp: int = Field(default=0, alias="inverterHS_temp")

    @classmethod
    def csv_header(cls) -> list[str]:
        """Return the CSV column names in field order."""
        return [field.alias or name for name, field in cls.model_fields.items()]

    def csv_row(self) -> list[str]:
        """Return the row values as text, in the same order as :meth:`csv_header`.

        Numbers go through ``str()``, which is locale-independent. The
        timestamp is ISO 8601 with its UTC offset so rows sort as text.
        """
        row: list[str] = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, datetime):
                row.append(value.isoformat())
            else:
                row.append(str(value))
        return row

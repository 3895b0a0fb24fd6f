"""
Sofar hybrid inverter Modbus RTU register map -- single source of truth.

Defines every holding register read per poll cycle, the snapshot field it
feeds, and the decode rule that turns the raw 16-bit word into an engineering
value. The list order is the read order; it also matches the field layout of
:class:`~sofarlogger.src.models.ReadingSnapshot`.

All registers are read one at a time with function code 0x03
(read holding registers), count=1, unit id 1.

Known quirks kept for compatibility with existing logs:
    - ``battery_current``, ``grid_freq`` and ``grid_voltage`` all read 0x20C.
      A dedicated frequency register almost certainly exists; do not move the
      address until it is confirmed against the device's register map.
    - ``inverter_temp`` and ``inverter_hs_temp`` both read 0x238.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- Confirm the real grid frequency / grid voltage addresses on a live unit
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Decode rules
# ---------------------------------------------------------------------------

RAW = "raw"
"""Value used as-is."""

DIVIDE = "divide"
"""Value divided by ``factor`` (floating-point division)."""

MULTIPLY = "multiply"
"""Value multiplied by ``factor``."""

SIGNED_WATTS = "signed_watts"
"""Sofar bidirectional power encoding, see :func:`decoder.to_signed_watts`."""

_DECODE_RULES: frozenset[str] = frozenset({RAW, DIVIDE, MULTIPLY, SIGNED_WATTS})


# ---------------------------------------------------------------------------
# Data definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RegisterDef:
    """Definition of a single holding register read.

    Attributes:
        address: Modbus holding register address (0..0xFFFF).
        name: Snapshot field fed by this register.
        rule: Decode rule, one of :data:`RAW`, :data:`DIVIDE`,
            :data:`MULTIPLY`, :data:`SIGNED_WATTS`.
        factor: Divisor or multiplier for the scaled rules; ignored otherwise.
        unit: Engineering unit string (e.g. ``"W"``, ``"kWh"``).
    """

    address: int
    name: str
    rule: str = RAW
    factor: int = 1
    unit: str = ""

    def __post_init__(self) -> None:  # noqa: D105
        if not 0 <= self.address <= 0xFFFF:
            msg = f"Register '{self.name}': address {self.address:#x} out of range"
            raise ValueError(msg)
        if self.rule not in _DECODE_RULES:
            msg = f"Register '{self.name}': unknown decode rule '{self.rule}'"
            raise ValueError(msg)
        if self.factor == 0:
            msg = f"Register '{self.name}': factor must be non-zero"
            raise ValueError(msg)


# ---------------------------------------------------------------------------
# Register map (read order)
# ---------------------------------------------------------------------------

REGISTER_MAP: tuple[RegisterDef, ...] = (
    RegisterDef(0x200, "running_state"),
    RegisterDef(0x210, "battery_soc", unit="%"),
    RegisterDef(0x20D, "battery_power", SIGNED_WATTS, unit="W"),
    RegisterDef(0x20C, "battery_current", DIVIDE, 100, unit="A"),
    RegisterDef(0x22C, "battery_cycles"),
    RegisterDef(0x212, "grid_power", SIGNED_WATTS, unit="W"),
    # Same address as battery_current, see module docstring.
    RegisterDef(0x20C, "grid_freq", DIVIDE, 100, unit="Hz"),
    RegisterDef(0x20C, "grid_voltage", DIVIDE, 10, unit="V"),
    RegisterDef(0x213, "consumption_watts", MULTIPLY, 10, unit="W"),
    RegisterDef(0x215, "solar_pv_watts", MULTIPLY, 10, unit="W"),
    RegisterDef(0x236, "solar_pv_amps", DIVIDE, 100, unit="A"),
    RegisterDef(0x218, "today_generation", DIVIDE, 100, unit="kWh"),
    RegisterDef(0x219, "today_exported", DIVIDE, 100, unit="kWh"),
    RegisterDef(0x21A, "today_purchase", DIVIDE, 100, unit="kWh"),
    RegisterDef(0x21B, "today_consumption", DIVIDE, 100, unit="kWh"),
    RegisterDef(0x238, "inverter_temp", unit="C"),
    RegisterDef(0x238, "inverter_hs_temp", unit="C"),
)
"""Every register read in one poll cycle, in read order."""

UNREAD_FIELDS: tuple[str, ...] = ("battery_voltage", "battery_temp")
"""Snapshot fields with no register behind them; every cycle records them as 0."""

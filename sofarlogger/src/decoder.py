"""
Pure decoders that turn raw 16-bit holding register words into values.

No I/O, no clock, no state. Every function takes the raw unsigned word as
returned by the register client and returns the engineering value.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from sofarlogger.src.registers import (
    DIVIDE,
    MULTIPLY,
    RAW,
    SIGNED_WATTS,
    RegisterDef,
)

SIGNED_WATTS_THRESHOLD: int = 60000
"""Raw values above this are in the negative-magnitude band."""

_U16_MAX: int = 65535


def passthrough(raw: int) -> int:
    """Return the raw value unchanged."""
    return raw


def divide(raw: int, divisor: int) -> float:
    """Reconstruct a fixed-point value, e.g. ``divide(12345, 100) == 123.45``."""
    return raw / divisor


def multiply(raw: int, factor: int) -> int:
    """Expand a deci-unit register into base units."""
    return raw * factor


def to_signed_watts(raw: int) -> int:
    """Decode the Sofar bidirectional power encoding.

    Raw values above 60000 encode ``(65535 - raw) * 10``; everything else is
    the negated raw value. This is a device quirk, not two's complement, and
    no range validation is applied (0 -> 0, 65535 -> 0).

    Args:
        raw: Unsigned 16-bit register word.

    Returns:
        Power in watts.
    """
    if raw > SIGNED_WATTS_THRESHOLD:
        return (_U16_MAX - raw) * 10
    return raw * -1


def decode(reg_def: RegisterDef, raw: int) -> int | float:
    """Apply the register's decode rule to a raw word."""
    rule = reg_def.rule
    if rule == RAW:
        return passthrough(raw)
    if rule == DIVIDE:
        return divide(raw, reg_def.factor)
    if rule == MULTIPLY:
        return multiply(raw, reg_def.factor)
    if rule == SIGNED_WATTS:
        return to_signed_watts(raw)
    # RegisterDef validates the rule, so this only trips on a new rule
    # that was added to the map without a decoder.
    msg = f"Register '{reg_def.name}': no decoder for rule '{rule}'"
    raise ValueError(msg)

"""
Sofar inverter logger package.

Polls a Sofar hybrid inverter over Modbus RTU (serial), decodes the register
values into engineering units and appends one CSV row per poll cycle.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

"""
Logger daemon configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
Every value has a default matching the deployed inverter, so the daemon
runs with no environment at all. Values come from the process environment
only; no configuration file is read.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings


class LoggerSettings(BaseSettings):
    """Logger daemon configuration.

    Attributes:
        serial_port: Serial device path of the RS485 adapter.
        baudrate: Line speed (default 9600).
        parity: ``N``, ``E`` or ``O`` (default ``N``).
        stopbits: 1 or 2 (default 1).
        bytesize: Data bits, 5-8 (default 8).
        unit_id: Modbus slave / unit ID of the inverter (default 1).
        modbus_timeout_s: Per-request response timeout in seconds.
        poll_interval_s: Seconds to wait after a cycle before the next.
        log_path: CSV log file path.
        health_path: Health JSON file path; unset disables it.
        log_level: Console log level name.
    """

    serial_port: str = "/dev/ttyUSB0"
    baudrate: int = 9600
    parity: str = "N"
    stopbits: int = 1
    bytesize: int = 8
    unit_id: int = 1
    modbus_timeout_s: float = 3.0
    poll_interval_s: float = 10.0
    log_path: str = "log.csv"
    health_path: str | None = None
    log_level: str = "INFO"

    @field_validator("parity")
    @classmethod
    def parity_must_be_valid(cls, v: str) -> str:
        """Validate parity is one of N/E/O (case-insensitive)."""
        v = v.upper()
        if v not in ("N", "E", "O"):
            raise ValueError("PARITY must be one of N, E, O")
        return v

    @field_validator("stopbits")
    @classmethod
    def stopbits_must_be_valid(cls, v: int) -> int:
        if v not in (1, 2):
            raise ValueError("STOPBITS must be 1 or 2")
        return v

    @field_validator("bytesize")
    @classmethod
    def bytesize_must_be_valid(cls, v: int) -> int:
        if v < 5 or v > 8:
            raise ValueError("BYTESIZE must be between 5 and 8")
        return v

    @field_validator("unit_id")
    @classmethod
    def unit_id_must_be_valid(cls, v: int) -> int:
        """Validate Modbus unit ID is in valid range (1-247)."""
        if v < 1 or v > 247:
            raise ValueError("UNIT_ID must be between 1 and 247")
        return v

    @field_validator("baudrate", "modbus_timeout_s", "poll_interval_s")
    @classmethod
    def must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"LOG_LEVEL '{v}' is not a logging level")
        return v

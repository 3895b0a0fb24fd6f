"""
Unit tests for logger daemon configuration (LoggerSettings).

Tests verify:
- Defaults match the deployed inverter's serial line and cadence.
- Values load from environment variables.
- Numeric and enum constraints are enforced.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from pathlib import Path

import pytest
from pydantic import ValidationError
from sofarlogger.src.config import LoggerSettings


class TestLoggerSettingsDefaults:
    def test_defaults_without_env(self) -> None:
        settings = LoggerSettings()

        assert settings.serial_port == "/dev/ttyUSB0"
        assert settings.baudrate == 9600
        assert settings.parity == "N"
        assert settings.stopbits == 1
        assert settings.bytesize == 8
        assert settings.unit_id == 1
        assert settings.poll_interval_s == 10.0
        assert settings.log_path == "log.csv"
        assert settings.health_path is None
        assert settings.log_level == "INFO"


class TestLoggerSettingsLoadsFromEnv:
    def test_loads_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SERIAL_PORT", "/dev/ttyAMA0")
        monkeypatch.setenv("BAUDRATE", "19200")
        monkeypatch.setenv("PARITY", "e")
        monkeypatch.setenv("STOPBITS", "2")
        monkeypatch.setenv("UNIT_ID", "3")
        monkeypatch.setenv("POLL_INTERVAL_S", "30")
        monkeypatch.setenv("LOG_PATH", "/var/lib/sofar/log.csv")
        monkeypatch.setenv("HEALTH_PATH", "/run/sofar/health.json")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = LoggerSettings()

        assert settings.serial_port == "/dev/ttyAMA0"
        assert settings.baudrate == 19200
        assert settings.parity == "E"
        assert settings.stopbits == 2
        assert settings.unit_id == 3
        assert settings.poll_interval_s == 30.0
        assert settings.log_path == "/var/lib/sofar/log.csv"
        assert settings.health_path == "/run/sofar/health.json"
        assert settings.log_level == "DEBUG"

    def test_dotenv_file_is_ignored(self, tmp_path: Path) -> None:
        """Configuration comes from the environment only."""
        (tmp_path / ".env").write_text("SERIAL_PORT=/dev/from-dotenv\n")

        settings = LoggerSettings()

        assert settings.serial_port == "/dev/ttyUSB0"


class TestLoggerSettingsValidation:
    @pytest.mark.parametrize(
        ("var", "value"),
        [
            ("PARITY", "X"),
            ("STOPBITS", "3"),
            ("BYTESIZE", "9"),
            ("UNIT_ID", "0"),
            ("UNIT_ID", "248"),
            ("BAUDRATE", "0"),
            ("MODBUS_TIMEOUT_S", "-1"),
            ("POLL_INTERVAL_S", "0"),
            ("LOG_LEVEL", "LOUD"),
        ],
    )
    def test_rejects_invalid_value(
        self, monkeypatch: pytest.MonkeyPatch, var: str, value: str
    ) -> None:
        monkeypatch.setenv(var, value)

        with pytest.raises(ValidationError) as exc_info:
            LoggerSettings()
        assert var.lower() in str(exc_info.value).lower()

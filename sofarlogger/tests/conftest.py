"""
Shared test fixtures for logger daemon tests.

Cleans every LoggerSettings environment variable before each test and
provides a fake register client that serves fixed raw values.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from pathlib import Path

import pytest
from sofarlogger.src.errors import TransportError

# All LoggerSettings environment variable names, used for cleanup.
_ALL_LOGGER_ENV_VARS = (
    "SERIAL_PORT",
    "BAUDRATE",
    "PARITY",
    "STOPBITS",
    "BYTESIZE",
    "UNIT_ID",
    "MODBUS_TIMEOUT_S",
    "POLL_INTERVAL_S",
    "LOG_PATH",
    "HEALTH_PATH",
    "LOG_LEVEL",
)

# Raw words for every address in the register map.
RAW_VALUES: dict[int, int] = {
    0x200: 1,
    0x210: 87,
    0x20D: 100,
    0x20C: 2345,
    0x22C: 312,
    0x212: 60100,
    0x213: 45,
    0x215: 230,
    0x236: 812,
    0x218: 1234,
    0x219: 505,
    0x21A: 12,
    0x21B: 741,
    0x238: 41,
}


class FakeRegisterClient:
    """In-memory stand-in for RegisterClient.

    Serves values from a dict keyed by address, records every read, and can
    fail on a given address or on connect.
    """

    def __init__(
        self,
        values: dict[int, int] | None = None,
        *,
        fail_address: int | None = None,
        fail_connect: bool = False,
        error: Exception | None = None,
    ) -> None:
        self.values = dict(RAW_VALUES if values is None else values)
        self.fail_address = fail_address
        self.fail_connect = fail_connect
        self.error = error or TransportError("Simulated timeout")
        self.reads: list[tuple[int, int]] = []
        self.entered = False
        self.closed = False

    async def __aenter__(self) -> FakeRegisterClient:
        if self.fail_connect:
            raise self.error
        self.entered = True
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.closed = True

    async def read_register(self, unit_id: int, address: int) -> int:
        self.reads.append((unit_id, address))
        if address == self.fail_address:
            raise self.error
        return self.values[address]


@pytest.fixture(autouse=True)
def _clean_logger_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove all logger env vars and run each test inside tmp_path."""
    for var in _ALL_LOGGER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def fake_client() -> FakeRegisterClient:
    """A fake client serving :data:`RAW_VALUES`."""
    return FakeRegisterClient()


@pytest.fixture()
def fake_client_cls() -> type[FakeRegisterClient]:
    """The fake client class, for tests that need custom failure modes."""
    return FakeRegisterClient


@pytest.fixture()
def raw_values() -> dict[int, int]:
    """A copy of the raw words served by the default fake client."""
    return dict(RAW_VALUES)

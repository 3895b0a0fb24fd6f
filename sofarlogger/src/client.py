"""
Async Modbus RTU register client for the Sofar inverter serial link.

Wraps pymodbus's AsyncModbusSerialClient and exposes a single primitive:
read exactly one holding register. Designed for scoped use -- one client per
poll cycle, opened on ``async with`` entry and always closed on exit -- so a
failed cycle never leaks the serial handle into the next one.

Errors are translated at this boundary and propagated, never retried:

- TransportError: port cannot be opened, timeouts, CRC/framing/IO failures.
- ProtocolError: Modbus exception responses, wrong unit id, wrong count.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging

from pymodbus import FramerType
from pymodbus.client import AsyncModbusSerialClient
from pymodbus.exceptions import ModbusException

from sofarlogger.src.errors import ProtocolError, TransportError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_BAUDRATE: int = 9600
DEFAULT_PARITY: str = "N"
DEFAULT_STOPBITS: int = 1
DEFAULT_BYTESIZE: int = 8

MODBUS_TIMEOUT_S: float = 3.0
"""Timeout per Modbus RTU request in seconds."""


class RegisterClient:
    """Single-register reader over a Modbus RTU serial line.

    Calls are strictly sequential; the bus is half-duplex and this is the
    only master on it.

    Args:
        port: Serial device path (e.g. ``/dev/ttyUSB0``).
        baudrate: Line speed (default 9600).
        parity: ``"N"``, ``"E"`` or ``"O"`` (default ``"N"``).
        stopbits: 1 or 2 (default 1).
        bytesize: Data bits (default 8).
        timeout_s: Per-request response timeout in seconds.

    Usage::

        async with RegisterClient("/dev/ttyUSB0") as client:
            state = await client.read_register(1, 0x200)
    """

    def __init__(
        self,
        port: str,
        *,
        baudrate: int = DEFAULT_BAUDRATE,
        parity: str = DEFAULT_PARITY,
        stopbits: int = DEFAULT_STOPBITS,
        bytesize: int = DEFAULT_BYTESIZE,
        timeout_s: float = MODBUS_TIMEOUT_S,
    ) -> None:
        self._port = port
        self._baudrate = baudrate
        self._parity = parity
        self._stopbits = stopbits
        self._bytesize = bytesize
        self._timeout_s = timeout_s
        self._client: AsyncModbusSerialClient | None = None

    @property
    def port(self) -> str:
        return self._port

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Open the serial line and configure it.

        Raises:
            TransportError: If the device path is unavailable or the line
                cannot be configured.
        """
        if self._client is not None:
            return

        # retries=0: a failed read surfaces immediately and the whole cycle
        # is abandoned by the poll loop.
        client = AsyncModbusSerialClient(
            self._port,
            framer=FramerType.RTU,
            baudrate=self._baudrate,
            bytesize=self._bytesize,
            parity=self._parity,
            stopbits=self._stopbits,
            timeout=self._timeout_s,
            retries=0,
        )
        try:
            ok = await client.connect()
        except (ModbusException, OSError) as exc:
            client.close()
            raise TransportError(f"Failed to open serial port {self._port}") from exc

        if not ok:
            client.close()
            raise TransportError(
                f"Failed to open serial port {self._port} (connect returned False)"
            )

        logger.debug(
            "Opened %s (%d baud, %d%s%d)",
            self._port,
            self._baudrate,
            self._bytesize,
            self._parity,
            self._stopbits,
        )
        self._client = client

    def close(self) -> None:
        """Release the serial handle. Safe to call more than once."""
        if self._client is None:
            return
        client, self._client = self._client, None
        client.close()
        logger.debug("Closed %s", self._port)

    async def __aenter__(self) -> RegisterClient:
        """Enter async context manager: open the serial line."""
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager: always release the serial line."""
        self.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def read_register(self, unit_id: int, address: int) -> int:
        """Read exactly one holding register (function code 0x03).

        Args:
            unit_id: Modbus slave / unit identifier.
            address: Holding register address.

        Returns:
            The unsigned 16-bit register value (big-endian word).

        Raises:
            TransportError: On timeout, CRC/framing failure, IO failure or
                if the client is not connected.
            ProtocolError: On an exception response, a reply from another
                unit, or a register count other than 1.
        """
        if self._client is None:
            raise TransportError(f"Read of {address:#06x} on closed port {self._port}")

        try:
            response = await self._client.read_holding_registers(
                address,
                count=1,
                device_id=unit_id,
            )
        except (ModbusException, OSError) as exc:
            raise TransportError(
                f"Read of {address:#06x} from unit {unit_id} failed: {exc}"
            ) from exc

        if response.isError():
            raise ProtocolError(
                f"Unit {unit_id} returned an exception response for "
                f"{address:#06x}: {response}"
            )

        if response.dev_id != unit_id:
            raise ProtocolError(
                f"Expected a reply from unit {unit_id} for {address:#06x}, "
                f"got unit {response.dev_id}"
            )

        registers = response.registers
        if len(registers) != 1:
            raise ProtocolError(
                f"Expected 1 register at {address:#06x}, got {len(registers)}"
            )

        return registers[0]

"""
Reading assembler: one poll cycle of register reads into a ReadingSnapshot.

Issues the fixed, ordered sequence of single-register reads from
:data:`~sofarlogger.src.registers.REGISTER_MAP`, decodes each value and builds
the immutable snapshot. Reads are sequential; the bus carries one request at
a time. The first failed read propagates and nothing from the partial cycle
is kept.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Protocol

from sofarlogger.src.decoder import decode
from sofarlogger.src.models import ReadingSnapshot
from sofarlogger.src.registers import REGISTER_MAP, UNREAD_FIELDS

logger = logging.getLogger(__name__)

DEFAULT_UNIT_ID: int = 1


class RegisterReader(Protocol):
    """Anything that can read one holding register."""

    async def read_register(self, unit_id: int, address: int) -> int: ...


async def assemble_reading(
    client: RegisterReader,
    *,
    unit_id: int = DEFAULT_UNIT_ID,
    ts: datetime | None = None,
) -> ReadingSnapshot:
    """Read every mapped register and build a ReadingSnapshot.

    Args:
        client: A connected register client.
        unit_id: Modbus unit identifier of the inverter.
        ts: Capture timestamp. Defaults to the current UTC time, taken
            before the first read.

    Returns:
        A fully populated :class:`ReadingSnapshot`.

    Raises:
        TransportError: Propagated from the first failing read.
        ProtocolError: Propagated from the first failing read.
    """
    if ts is None:
        ts = datetime.now(tz=UTC)

    raw: dict[str, int] = {}
    fields: dict[str, int | float] = dict.fromkeys(UNREAD_FIELDS, 0)

    for reg in REGISTER_MAP:
        value = await client.read_register(unit_id, reg.address)
        raw[reg.name] = value
        fields[reg.name] = decode(reg, value)

    logger.debug("Raw registers: %s", raw)

    return ReadingSnapshot(timestamp_utc=ts, **fields)

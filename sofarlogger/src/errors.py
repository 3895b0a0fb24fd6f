"""
Error taxonomy for the logger pipeline.

Every failure a poll cycle can hit is one of three kinds. None of them is
handled where it is raised; the poll loop catches them, logs them and moves
on to the next cycle.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations


class SofarLoggerError(Exception):
    """Base class for all errors raised by the logger pipeline."""


class TransportError(SofarLoggerError):
    """Serial port could not be opened, or a read failed at the framing level.

    Covers missing device paths, line configuration failures, response
    timeouts, CRC errors and reads attempted on a closed connection.
    """


class ProtocolError(SofarLoggerError):
    """A response arrived but violates the expected Modbus contract.

    Covers Modbus exception responses, replies from an unexpected unit id and
    a register count other than the one requested.
    """


class PersistenceError(SofarLoggerError):
    """The CSV log could not be created, opened or written."""

"""
Logger daemon main loop for the Sofar inverter CSV logger.

Runs a single asyncio poll loop. Each cycle opens a fresh serial client,
reads and decodes the register map into a ReadingSnapshot, releases the
serial port and appends the snapshot to the CSV log. The loop then waits
``poll_interval_s`` (measured from the end of the cycle) and repeats.

The loop is resilient: any exception in a cycle is logged and the next
cycle starts from a clean connection attempt. There is no backoff and no
retry within a cycle. SIGTERM/SIGINT set a shared asyncio.Event; the
current cycle finishes and the loop exits.

Structured JSON logging is used for all events. An optional HealthWriter
records the outcome of each cycle in a JSON health file.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import signal
import sys
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sofarlogger.src.assembler import assemble_reading
from sofarlogger.src.errors import SofarLoggerError

if TYPE_CHECKING:
    from sofarlogger.src.client import RegisterClient
    from sofarlogger.src.config import LoggerSettings
    from sofarlogger.src.csvlog import CsvLog
    from sofarlogger.src.health import HealthWriter

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


class JsonFormatter(logging.Formatter):
    """Minimal JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging for the logger daemon.

    Sets up the root logger with a JSON-formatted handler writing to stderr.

    Args:
        level: Root log level name (e.g. ``"INFO"``, ``"DEBUG"``).
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


# ---------------------------------------------------------------------------
# Startup config logging
# ---------------------------------------------------------------------------


def log_config_summary(settings: LoggerSettings) -> None:
    """Log a config summary at startup."""
    logger.info(
        "Sofar logger starting with config: "
        "serial_port=%s, baudrate=%s, parity=%s, stopbits=%s, bytesize=%s, "
        "unit_id=%s, modbus_timeout_s=%s, poll_interval_s=%s, "
        "log_path=%s, health_path=%s",
        settings.serial_port,
        settings.baudrate,
        settings.parity,
        settings.stopbits,
        settings.bytesize,
        settings.unit_id,
        settings.modbus_timeout_s,
        settings.poll_interval_s,
        settings.log_path,
        settings.health_path,
    )


# ---------------------------------------------------------------------------
# Single-iteration function (easily testable)
# ---------------------------------------------------------------------------


async def _poll_once(
    *,
    client_factory: Callable[[], RegisterClient],
    csv_log: CsvLog,
    unit_id: int,
    health: HealthWriter | None,
) -> bool:
    """Execute a single read-assemble-append cycle.

    Catches all exceptions so that the caller's loop is never broken. The
    serial client is released before the row is written, on every path.

    Args:
        client_factory: Returns a new, unconnected register client.
        csv_log: The CSV log to append to.
        unit_id: Modbus unit ID of the inverter.
        health: HealthWriter instance, or None to skip health writes.

    Returns:
        True if a row was written, False otherwise.
    """
    ok = False
    try:
        async with client_factory() as client:
            snapshot = await assemble_reading(client, unit_id=unit_id)
        csv_log.append(snapshot)
        ok = True
        logger.info("Poll success: appended reading to %s", csv_log.path)
    except SofarLoggerError as exc:
        logger.warning("Poll cycle failed (%s): %s", type(exc).__name__, exc)
    except Exception:
        logger.error("Poll cycle error", exc_info=True)

    if health is not None:
        try:
            if ok:
                health.record_success()
            else:
                health.record_failure()
        except OSError:
            logger.warning("Failed to write health file", exc_info=True)

    return ok


# ---------------------------------------------------------------------------
# Loop runner
# ---------------------------------------------------------------------------


async def _poll_loop(
    *,
    client_factory: Callable[[], RegisterClient],
    csv_log: CsvLog,
    unit_id: int,
    poll_interval_s: float,
    shutdown_event: asyncio.Event,
    health: HealthWriter | None = None,
) -> None:
    """Run the poll loop until shutdown_event is set.

    Executes _poll_once, then sleeps for poll_interval_s, checking the
    shutdown event between iterations.

    Args:
        client_factory: Returns a new, unconnected register client.
        csv_log: The CSV log to append to.
        unit_id: Modbus unit ID of the inverter.
        poll_interval_s: Seconds between the end of one cycle and the
            start of the next.
        shutdown_event: Event to signal graceful shutdown.
        health: HealthWriter instance, or None to skip health writes.
    """
    logger.info("Poll loop started (interval=%ss)", poll_interval_s)
    while not shutdown_event.is_set():
        await _poll_once(
            client_factory=client_factory,
            csv_log=csv_log,
            unit_id=unit_id,
            health=health,
        )
        # Use wait with timeout so we can check shutdown between sleeps
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(
                shutdown_event.wait(),
                timeout=poll_interval_s,
            )
    logger.info("Poll loop stopped")


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


async def async_main() -> None:
    """Async entrypoint: load config, build components, run the loop.

    Sets up SIGTERM/SIGINT handlers to trigger graceful shutdown.
    """
    from sofarlogger.src.client import RegisterClient
    from sofarlogger.src.config import LoggerSettings
    from sofarlogger.src.csvlog import CsvLog
    from sofarlogger.src.health import HealthWriter

    settings = LoggerSettings()
    configure_logging(settings.log_level)
    log_config_summary(settings)

    shutdown_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(
            sig,
            lambda: _handle_signal(shutdown_event),
        )

    def client_factory() -> RegisterClient:
        return RegisterClient(
            settings.serial_port,
            baudrate=settings.baudrate,
            parity=settings.parity,
            stopbits=settings.stopbits,
            bytesize=settings.bytesize,
            timeout_s=settings.modbus_timeout_s,
        )

    health = HealthWriter(settings.health_path) if settings.health_path else None

    await _poll_loop(
        client_factory=client_factory,
        csv_log=CsvLog(settings.log_path),
        unit_id=settings.unit_id,
        poll_interval_s=settings.poll_interval_s,
        shutdown_event=shutdown_event,
        health=health,
    )


def _handle_signal(shutdown_event: asyncio.Event) -> None:
    """Handle SIGTERM/SIGINT by setting the shutdown event.

    Args:
        shutdown_event: The event to set for graceful shutdown.
    """
    logger.info("Received shutdown signal, initiating graceful shutdown")
    shutdown_event.set()


def main() -> None:
    """Synchronous entrypoint for the logger daemon."""
    asyncio.run(async_main())


if __name__ == "__main__":
    main()

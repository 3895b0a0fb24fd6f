"""
Health file writer for the logger daemon.

Writes a JSON health file at a configurable path with four fields:
- last_poll_ts: ISO timestamp of the most recent poll attempt.
- last_success_ts: ISO timestamp of the most recent row written.
- consecutive_failures: Failed cycles since the last success.
- rows_written: Rows appended by this process since start.

The file is rewritten after every poll cycle, providing a simple liveness
signal that a service manager or monitoring can inspect.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path


class HealthWriter:
    """Writes logger health status to a JSON file.

    Args:
        path: Filesystem path for the health JSON file. Accepts str or Path.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._last_poll_ts: str | None = None
        self._last_success_ts: str | None = None
        self._consecutive_failures: int = 0
        self._rows_written: int = 0

    def record_success(self) -> None:
        """Record a cycle that wrote a row and write health file."""
        now = datetime.now(tz=UTC).isoformat()
        self._last_poll_ts = now
        self._last_success_ts = now
        self._consecutive_failures = 0
        self._rows_written += 1
        self._write()

    def record_failure(self) -> None:
        """Record a failed cycle and write health file."""
        self._last_poll_ts = datetime.now(tz=UTC).isoformat()
        self._consecutive_failures += 1
        self._write()

    def _write(self) -> None:
        data = {
            "last_poll_ts": self._last_poll_ts,
            "last_success_ts": self._last_success_ts,
            "consecutive_failures": self._consecutive_failures,
            "rows_written": self._rows_written,
        }
        self.path.write_text(json.dumps(data))

"""
Append-only CSV log for inverter readings.

Every successful poll cycle appends exactly one row. The header row is
written once, when the file does not exist yet (or exists but is empty).
Rows are never rewritten, truncated or deleted.
A last line left unterminated by an interrupted write is closed off before
the next row, so the new row always starts on a line of its own.

Operations:
- append(snapshot): write header if needed, then the data row.
- row_count(): number of data rows currently in the file.

Filesystem failures surface as PersistenceError; the reading is dropped,
not buffered or retried.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from sofarlogger.src.errors import PersistenceError
from sofarlogger.src.models import ReadingSnapshot

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH: str = "log.csv"
_LINE_TERMINATOR: str = "\r\n"


class CsvLog:
    """Append-only CSV store of :class:`ReadingSnapshot` rows.

    The first append against a pre-existing file compares its header line
    with :meth:`ReadingSnapshot.csv_header`. A mismatch raises
    PersistenceError rather than appending rows whose columns would not line
    up with the header.

    Args:
        path: Filesystem path for the CSV file. Accepts ``str`` or
              ``pathlib.Path``. The parent directory must exist.

    Usage::

        log = CsvLog("log.csv")
        log.append(snapshot)
    """

    def __init__(self, path: str | Path = DEFAULT_LOG_PATH) -> None:
        self.path = Path(path)
        self._header = ReadingSnapshot.csv_header()
        self._header_verified = False

    def append(self, snapshot: ReadingSnapshot) -> None:
        """Append one snapshot, writing the header first on a fresh file.

        Args:
            snapshot: The reading to persist.

        Raises:
            PersistenceError: On any filesystem error, or when an existing
                file carries a different header.
        """
        try:
            write_header = self._needs_header()
            if not write_header and not self._header_verified:
                self._verify_header()

            buf = io.StringIO()
            if not write_header and not self._ends_with_newline():
                # A crash mid-write left the last row unterminated.
                logger.warning(
                    "%s does not end with a newline; terminating it", self.path
                )
                buf.write(_LINE_TERMINATOR)
            writer = csv.writer(buf, lineterminator=_LINE_TERMINATOR)
            if write_header:
                writer.writerow(self._header)
            writer.writerow(snapshot.csv_row())

            with self.path.open("a", newline="", encoding="utf-8") as fh:
                fh.write(buf.getvalue())
        except OSError as exc:
            raise PersistenceError(f"Failed to append to {self.path}: {exc}") from exc

        if write_header:
            logger.info("Created %s with header row", self.path)
        self._header_verified = True

    def row_count(self) -> int:
        """Return the number of data rows (header excluded).

        A missing file has zero rows.
        """
        if not self.path.exists():
            return 0
        try:
            with self.path.open(newline="", encoding="utf-8") as fh:
                lines = sum(1 for _ in csv.reader(fh))
        except OSError as exc:
            raise PersistenceError(f"Failed to read {self.path}: {exc}") from exc
        return max(lines - 1, 0)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _needs_header(self) -> bool:
        return not self.path.exists() or self.path.stat().st_size == 0

    def _ends_with_newline(self) -> bool:
        with self.path.open("rb") as fh:
            fh.seek(-1, io.SEEK_END)
            return fh.read(1) == b"\n"

    def _verify_header(self) -> None:
        with self.path.open(newline="", encoding="utf-8") as fh:
            existing = next(csv.reader(fh), [])
        if existing != self._header:
            raise PersistenceError(
                f"{self.path} has header {existing}, expected {self._header}; "
                "refusing to append misaligned rows"
            )
        self._header_verified = True

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from dlc_import.models.error_record import ErrorRecord

"""Per-run error log.

Failed files are collected while the directory pass runs and written once at
the end, one JSON object per line (see ErrorRecord for the key set). The log
file name carries the UTC start time of the run, so repeated flushes from the
same run land in the same file. A run without failures leaves no file behind.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    def __init__(self, logs_dir: Path | None = None, started_at: datetime | None = None) -> None:
        self.logs_dir = logs_dir or LOGS_DIR
        self.started_at = started_at or datetime.now(UTC)
        self._pending: list[ErrorRecord] = []

    @property
    def file_path(self) -> Path:
        return self.logs_dir / f"errors-{self.started_at.strftime(TIMESTAMP_FMT)}.log"

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    def extend(self, records: Iterable[ErrorRecord]) -> None:
        self._pending.extend(records)

    def __len__(self) -> int:
        return len(self._pending)

    def counts(self) -> Counter[str]:
        """Pending records per error_type."""
        return Counter(r.error_type for r in self._pending)

    def flush(self) -> Path | None:
        """Append pending records to the run's log file.

        Returns the log path, or None when nothing was pending (no file is created).
        """
        if not self._pending:
            return None
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        path = self.file_path
        with path.open("a", encoding="utf-8") as f:
            f.writelines(f"{r.to_json_line()}\n" for r in self._pending)
        self._pending = []
        return path

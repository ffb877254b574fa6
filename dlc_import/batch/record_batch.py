from __future__ import annotations

import json
import os
import tempfile
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from dlc_import.models.records import Record

"""Batch sink for converted records.

Records are kept in the order they are added and written as one JSON array of
JSONModel dicts, the input format of the ArchivesSpace batch importer.
The output file is only (re)written on flush(); get_output_path() flushes
pending records first.
"""

__all__ = [
    "BatchMetrics",
    "BatchWriteError",
    "RecordBatch",
]


class BatchWriteError(Exception):
    pass


@dataclass(frozen=True)
class BatchMetrics:
    """Metrics for a single flush."""
    record_count: int
    elapsed_seconds: float
    start_time: float  # time.time()
    end_time: float


class RecordBatch:
    def __init__(
        self,
        output_path: Path | None = None,
        metrics_callback: Callable[[BatchMetrics], None] | None = None,
    ) -> None:
        self._records: list[Record] = []
        self._output_path = output_path
        self._dirty = True
        self.metrics_callback = metrics_callback

    def __lshift__(self, record: Record) -> RecordBatch:
        self.append(record)
        return self

    def append(self, record: Record) -> None:
        self._records.append(record)
        self._dirty = True

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[Record]:
        return list(self._records)

    def _resolve_path(self) -> Path:
        if self._output_path is None:
            fd, name = tempfile.mkstemp(prefix="dlc_import_", suffix=".json")
            os.close(fd)
            self._output_path = Path(name)
        return self._output_path

    def flush(self) -> Path:
        """Write all records to the output file.

        Note: metrics_callback is invoked once per flush, even for an empty batch.
        """
        path = self._resolve_path()
        payload = [r.to_jsonmodel() for r in self._records]

        start_time = time.time()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise BatchWriteError(f"failed writing batch to {path}: {e}") from e
        finally:
            end_time = time.time()
            if self.metrics_callback is not None:
                self.metrics_callback(BatchMetrics(
                    record_count=len(payload),
                    elapsed_seconds=end_time - start_time,
                    start_time=start_time,
                    end_time=end_time,
                ))
        self._dirty = False
        return path

    def get_output_path(self) -> Path:
        if self._dirty or self._output_path is None:
            return self.flush()
        return self._output_path

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

"""Result models for conversion runs.

ConversionStats covers a single input file (one run, one HierarchyContext).
FileStat / ProcessingResult aggregate a directory pass for the SUMMARY line.
"""


@dataclass
class ConversionStats:
    """Counters for one conversion run."""
    rows_read: int = 0
    rows_skipped: int = 0  # blank rows and unknown levels
    records_emitted: int = 0
    resources_created: int = 0
    resources_reused: int = 0


@dataclass(frozen=True)
class FileStat:
    """Per-file conversion statistics."""
    file_name: str
    status: str  # success/failed
    records: int
    skipped_rows: int
    elapsed_seconds: float
    output_path: Path | None = None
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for the SUMMARY output line."""
    success_files: int
    failed_files: int
    total_records: int
    skipped_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_records_per_sec: float
    file_stats: list[FileStat] | None = None

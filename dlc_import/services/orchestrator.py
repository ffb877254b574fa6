from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..batch.record_batch import BatchMetrics, BatchWriteError, RecordBatch
from ..config.loader import ImportConfig
from ..db.resource_lookup import InMemoryResourceLookup, ResourceLookup
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.processing_result import FileStat, ProcessingResult
from ..tabular.reader import SUPPORTED_SUFFIXES, normalize_rows, read_dlc_file
from .converter import ConversionAborted, DLCConverter
from .progress import ProgressTracker
from .uri_minter import UriMinter

"""Directory pass over DLC exports.

Each input file is an independent conversion run: fresh HierarchyContext,
fresh record collection, its own batch file in output_directory. A failing
file is recorded in the error log and does not stop the remaining files.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents the directory pass from starting."""


def scan_input_files(directory: Path) -> list[Path]:
    """List .csv / .xlsx files in ``directory`` (non-recursive), sorted by name.

    Raises:
        ProcessingError: directory missing, not a directory, or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def output_path_for(input_file: Path, output_directory: Path) -> Path:
    return output_directory / f"{input_file.stem}.json"


def process_all(
    config: ImportConfig,
    lookup: ResourceLookup | None = None,
    dump_output: bool | None = None,
) -> ProcessingResult:
    """Convert every DLC export in config.source_directory.

    Args:
        config: import configuration
        lookup: resource lookup store (None = in-memory store, nothing pre-exists)
        dump_output: override config.dump_output for the read-back diagnostic

    Raises:
        ProcessingError: source directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(started_at=start_time)
    dump = config.dump_output if dump_output is None else dump_output

    file_paths = scan_input_files(Path(config.source_directory))
    output_directory = Path(config.output_directory).resolve()

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_records = 0
    total_skipped = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            stat = _process_single_file(
                file_path,
                config,
                lookup if lookup is not None else InMemoryResourceLookup(),
                output_directory,
                error_log,
                dump,
            )
            file_stats.append(stat)

            if stat.status == "success":
                success_count += 1
                total_records += stat.records
                total_skipped += stat.skipped_rows
            else:
                failed_count += 1

            progress.set_postfix(success=success_count, failed=failed_count, records=total_records)
            progress.finish_file(success=(stat.status == "success"))

    counts = error_log.counts()
    try:
        log_path = error_log.flush()
        if log_path is not None:
            logger.warning(
                "errors written to %s (%s)",
                log_path,
                " ".join(f"{k}={v}" for k, v in sorted(counts.items())),
            )
    except OSError as e:
        logger.warning("failed writing error log: %s", e)

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput = total_records / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_records=total_records,
        skipped_rows=total_skipped,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_records_per_sec=throughput,
        file_stats=file_stats,
    )


def _log_batch_metrics(file_path: Path, metrics: BatchMetrics) -> None:
    logger.debug(
        "batch file=%s records=%d elapsed=%.4fs",
        file_path.name,
        metrics.record_count,
        metrics.elapsed_seconds,
    )


def _process_single_file(
    file_path: Path,
    config: ImportConfig,
    lookup: ResourceLookup,
    output_directory: Path,
    error_log: ErrorLogBuffer,
    dump: bool,
) -> FileStat:
    file_start = datetime.now(UTC)

    def _failed(row: int, error_type: str, message: str) -> FileStat:
        error_log.append(ErrorRecord.create(file_path.name, row, error_type, message))
        logger.error("file=%s %s", file_path.name, message)
        return FileStat(
            file_name=file_path.name,
            status="failed",
            records=0,
            skipped_rows=0,
            elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
            error=message,
        )

    converter = DLCConverter.instance_for(
        DLCConverter.IMPORT_TYPE,
        file_path,
        lookup=lookup,
        minter=UriMinter(config.repository_uri),
        batch=RecordBatch(
            output_path_for(file_path, output_directory),
            metrics_callback=lambda m: _log_batch_metrics(file_path, m),
        ),
        language=config.language,
    )

    try:
        rows = normalize_rows(read_dlc_file(file_path))
    except Exception as e:
        return _failed(-1, "READ_ERROR", f"failed reading input: {e}")

    try:
        stats = converter.run(rows)
        output_path = converter.get_output_path(dump=dump)
    except ConversionAborted as e:
        return _failed(e.row_number, "RESOURCE_UNRESOLVED", str(e))
    except BatchWriteError as e:
        return _failed(-1, "BATCH_WRITE_ERROR", str(e))
    except Exception as e:
        return _failed(-1, "UNEXPECTED_ERROR", str(e))

    logger.info(
        "file=%s records=%d resources_created=%d resources_reused=%d skipped_rows=%d output=%s",
        file_path.name,
        stats.records_emitted,
        stats.resources_created,
        stats.resources_reused,
        stats.rows_skipped,
        output_path,
    )
    return FileStat(
        file_name=file_path.name,
        status="success",
        records=stats.records_emitted,
        skipped_rows=stats.rows_skipped,
        elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
        output_path=output_path,
    )

from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering."""


def _format_number(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line for a directory pass.

    Format:
    SUMMARY files={total}/{total} success={success} failed={failed} records={records}
    skipped_rows={skipped} elapsed_sec={elapsed} throughput_rps={throughput}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2023, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2023, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_records=40,
        ...     skipped_rows=2, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_records_per_sec=20.0
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 records=40 skipped_rows=2 elapsed_sec=2 throughput_rps=20'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"records={result.total_records} "
        f"skipped_rows={result.skipped_rows} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_records_per_sec)}"
    )

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

from dlc_import.logging.error_log import ErrorLogBuffer, ErrorRecord

KEYS = {"timestamp", "file", "row", "error_type", "message"}


def test_error_record_json_line():
    rec = ErrorRecord.create("export.csv", 12, "RESOURCE_UNRESOLVED", "No resource defined")
    data = json.loads(rec.to_json_line())
    assert set(data) == KEYS
    assert data["row"] == 12
    assert data["timestamp"].endswith("Z")


def test_error_record_file_level_row():
    rec = ErrorRecord.create("export.csv", -1, "READ_ERROR", "bad file")
    assert json.loads(rec.to_json_line())["row"] == -1


def test_flush_empty_buffer_creates_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_flush_writes_json_lines(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("a.csv", 3, "RESOURCE_UNRESOLVED", "x"))
    buf.append(ErrorRecord.create("b.csv", -1, "READ_ERROR", "y"))
    path = buf.flush()

    assert path.parent.name == "logs"
    assert path.name.startswith("errors-")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert all(set(json.loads(ln)) == KEYS for ln in lines)
    assert len(buf) == 0


def test_multiple_flushes_append_to_same_file(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.append(ErrorRecord.create("a.csv", 1, "RESOURCE_UNRESOLVED", "x"))
    first = buf.flush()
    buf.append(ErrorRecord.create("a.csv", 2, "RESOURCE_UNRESOLVED", "y"))
    second = buf.flush()
    assert first == second
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2


def test_file_name_carries_run_start_time(tmp_path: Path):
    started = datetime(2024, 3, 5, 7, 8, 9, tzinfo=UTC)
    buf = ErrorLogBuffer(logs_dir=tmp_path, started_at=started)
    assert buf.file_path == tmp_path / "errors-20240305-070809.log"
    assert not buf.file_path.exists()


def test_counts_by_error_type_and_extend(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.extend([
        ErrorRecord.create("a.csv", 2, "RESOURCE_UNRESOLVED", "x"),
        ErrorRecord.create("b.csv", -1, "READ_ERROR", "y"),
        ErrorRecord.create("c.csv", 4, "RESOURCE_UNRESOLVED", "z"),
    ])
    assert len(buf) == 3
    assert buf.counts() == {"RESOURCE_UNRESOLVED": 2, "READ_ERROR": 1}
    buf.flush()
    assert buf.counts() == {}

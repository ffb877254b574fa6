# Shared pytest fixtures
from __future__ import annotations

import itertools
import tempfile
from pathlib import Path

import pytest

from dlc_import.logging.init import reset_logging
from dlc_import.models.row import COLUMNS, DLCRow
from dlc_import.services.uri_minter import UriMinter


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
repository_uri: /repositories/2
language: eng
dump_output: false
database:
  host: localhost
  port: 5432
  user: as
  password: secret
  database: archivesspace
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def counting_minter() -> UriMinter:
    """Minter with predictable tokens: t1, t2, ..."""
    counter = itertools.count(1)
    return UriMinter("/repositories/2", token_factory=lambda: f"t{next(counter)}")


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


def make_row(**values: str) -> DLCRow:
    """DLCRow from keyword cells, e.g. make_row(level="File", title="Letters")."""
    unknown = set(values) - set(COLUMNS)
    assert not unknown, f"unknown columns: {unknown}"
    return DLCRow.from_values([values.get(c) for c in COLUMNS])


def csv_line(**values: str) -> str:
    """One DLC CSV line in column order (no quoting of commas)."""
    return ",".join(values.get(c, "") for c in COLUMNS)

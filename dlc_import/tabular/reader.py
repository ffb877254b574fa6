from __future__ import annotations

import warnings
from pathlib import Path

import pandas as pd

from dlc_import.models.row import COLUMNS, DLCRow, RowData

"""DLC export reader.

DLC exports carry no meaningful header: columns are fixed by position
(see models.row.COLUMNS). Every cell is read as text; blank handling and
trimming happen in DLCRow.from_values so .csv and .xlsx behave the same.

Ragged CSV lines are tolerated: extra trailing cells are cut, missing ones
become None.
"""

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


class UnsupportedFileError(Exception):
    """Raised when the input file is neither .csv nor .xlsx."""


def _truncate_bad_line(bad_line: list[str]) -> list[str]:
    return bad_line[: len(COLUMNS)]


def read_dlc_file(path: Path) -> pd.DataFrame:
    """Read a DLC export into a raw DataFrame with one column per DLC field."""
    suffix = path.suffix.lower()
    if suffix == ".csv":
        # over-long lines are cut by _truncate_bad_line; pandas still warns about each one
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", pd.errors.ParserWarning)
            return pd.read_csv(
                path,
                header=None,
                names=list(COLUMNS),
                index_col=False,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=False,
                engine="python",
                on_bad_lines=_truncate_bad_line,
                encoding="utf-8",
            )
    if suffix == ".xlsx":
        df = pd.read_excel(path, sheet_name=0, header=None, dtype=str)
        return df.iloc[:, : len(COLUMNS)]
    raise UnsupportedFileError(f"unsupported input file: {path.name}")


def normalize_rows(df: pd.DataFrame) -> list[RowData]:
    """Turn a raw DataFrame into numbered DLCRows.

    Blank lines are kept (as empty rows); the converter decides what to skip.
    """
    rows: list[RowData] = []
    for number, values in enumerate(df.itertuples(index=False, name=None), start=1):
        rows.append(RowData(row_number=number, row=DLCRow.from_values(values)))
    return rows

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import astuple, dataclass, fields
from enum import Enum
from typing import Any

"""Row and Level models for the DLC -> ArchivesSpace converter.

A DLC export is a headerless sheet whose columns are fixed by position.
DLCRow is the fixed-shape view of one spreadsheet line after trimming and
blank -> None normalisation. RowData pairs it with the 1-based line number.
"""

__all__ = [
    "COLUMNS",
    "DLCRow",
    "Level",
    "RowData",
]


class Level(Enum):
    """Hierarchical depth of a row.

    UNKNOWN covers any label outside the level table; such rows are ignored.
    """
    COLLECTION = "collection"
    CLASS = "class"
    SERIES = "series"
    FILE = "file"
    ITEM = "item"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DLCRow:
    """One DLC spreadsheet line. Field order is the column order of the export."""
    level: str | None = None
    resource_id: str | None = None
    ud_int_2: str | None = None
    container_type: str | None = None
    container_indicator: str | None = None
    component_id: str | None = None
    title: str | None = None
    date: str | None = None
    extent_number: str | None = None
    extent_type: str | None = None
    extent_physical_details: str | None = None
    extent_dimensions: str | None = None
    scopecontent_note: str | None = None
    creator: str | None = None
    processinfo_note: str | None = None

    @classmethod
    def from_values(cls, values: Sequence[Any]) -> DLCRow:
        """Build a row by position. Extra trailing cells are dropped, missing ones are None."""
        cells = [_clean(v) for v in list(values)[: len(COLUMNS)]]
        cells += [None] * (len(COLUMNS) - len(cells))
        return cls(*cells)

    def is_empty(self) -> bool:
        return all(v is None for v in astuple(self))


COLUMNS: tuple[str, ...] = tuple(f.name for f in fields(DLCRow))


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    # pandas hands over NaN for missing cells
    if isinstance(value, float) and value != value:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class RowData:
    """A normalised row together with its spreadsheet line number (1-based)."""
    row_number: int
    row: DLCRow

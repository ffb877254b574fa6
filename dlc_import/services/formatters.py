from __future__ import annotations

from dlc_import.models.records import Date, Extent, Note
from dlc_import.models.row import DLCRow

"""Sub-structure builders for dates, extents and notes.

Each builder returns None (or an empty list) when its inputs are absent;
a missing date or extent is never an error, it is simply left out of the record.
"""

__all__ = [
    "DATE_LABEL",
    "NO_DATE_EXPRESSION",
    "format_date",
    "format_extent",
    "format_notes",
]

DATE_LABEL = "creation"
NO_DATE_EXPRESSION = "No date provided"


def format_date(value: str | None) -> Date | None:
    """Build a creation date from the raw date cell.

    A hyphen anywhere in the text makes the date ``inclusive``, otherwise ``single``.
    The expression keeps the raw text.
    """
    if value is None:
        return None
    return Date(
        date_type="inclusive" if "-" in value else "single",
        label=DATE_LABEL,
        expression=value or NO_DATE_EXPRESSION,
    )


def format_extent(row: DLCRow, portion: str = "part") -> Extent | None:
    """Build an extent when both number and type are present."""
    if not (row.extent_number and row.extent_type):
        return None
    return Extent(
        portion=portion,
        extent_type=row.extent_type,
        number=row.extent_number,
        physical_details=row.extent_physical_details,
        dimensions=row.extent_dimensions,
    )


def format_notes(row: DLCRow) -> list[Note]:
    # scopecontent always precedes processinfo
    notes: list[Note] = []
    if row.scopecontent_note:
        notes.append(Note(note_type="scopecontent", content=row.scopecontent_note))
    if row.processinfo_note:
        notes.append(Note(note_type="processinfo", content=row.processinfo_note))
    return notes

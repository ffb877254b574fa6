from __future__ import annotations

from dlc_import.models.records import ArchivalObjectRecord, ResourceRecord
from dlc_import.models.row import DLCRow, Level

from .formatters import format_date, format_extent, format_notes
from .uri_minter import UriMinter

"""Record synthesis for DLC rows.

build_archival_object is shared by class/series/file/item rows. The caller
attaches the parent ref and appends the record to the run's collection.
"""

__all__ = [
    "build_archival_object",
    "build_resource",
]


def build_archival_object(
    row: DLCRow,
    level: Level,
    resource_uri: str | None,
    minter: UriMinter,
) -> ArchivalObjectRecord:
    date = format_date(row.date)
    extent = format_extent(row)
    return ArchivalObjectRecord(
        uri=minter.archival_object_uri(),
        level=level.value,
        resource_ref=resource_uri,
        title=row.title,
        component_id=row.component_id,
        dates=[date] if date else [],
        extents=[extent] if extent else [],
        notes=format_notes(row),
    )


def build_resource(
    row: DLCRow,
    uri: str,
    identifier: tuple[str | None, str | None, str | None, str | None],
    language: str,
) -> ResourceRecord:
    """Collection-level record: whole-portion extent, user_defined integer_2 from ud_int_2."""
    date = format_date(row.date)
    extent = format_extent(row, portion="whole")
    return ResourceRecord(
        uri=uri,
        identifier=identifier,
        title=row.title,
        language=language,
        ud_int_2=row.ud_int_2,
        dates=[date] if date else [],
        extents=[extent] if extent else [],
    )

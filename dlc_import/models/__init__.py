"""Domain models for the DLC CSV -> ArchivesSpace converter.

Rows and levels, the hierarchy context threaded through a run, the JSONModel
record variants, and result/error records.
"""

from .context import HierarchyContext
from .records import ArchivalObjectRecord, Date, Extent, Note, Record, ResourceRecord
from .row import COLUMNS, DLCRow, Level, RowData

__all__ = [
    # Input
    "COLUMNS",
    "DLCRow",
    "Level",
    "RowData",
    # State
    "HierarchyContext",
    # Output records
    "ArchivalObjectRecord",
    "Date",
    "Extent",
    "Note",
    "Record",
    "ResourceRecord",
]

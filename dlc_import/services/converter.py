from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from dlc_import.batch.record_batch import RecordBatch
from dlc_import.db.resource_lookup import InMemoryResourceLookup, ResourceLookup
from dlc_import.models.context import HierarchyContext
from dlc_import.models.processing_result import ConversionStats
from dlc_import.models.records import ArchivalObjectRecord, Record
from dlc_import.models.row import DLCRow, Level, RowData

from .classifier import classify
from .resource_resolver import ResourceIdentifierError, ResourceResolver
from .synthesizer import build_archival_object
from .uri_minter import UriMinter

"""DLC CSV -> ArchivesSpace JSONModel converter.

Rows are consumed strictly in spreadsheet order. Hierarchy is never explicit in
the export: a row's ancestors are whatever collection / class / series rows
came last, tracked in a HierarchyContext that is threaded through process_row.

Records are collected newest-first and reversed once when the run finishes, so
the batch receives them in spreadsheet (top-down) order.
"""

__all__ = [
    "ConversionAborted",
    "DLCConverter",
]

logger = logging.getLogger(__name__)

READBACK_RULE = "=================="


class ConversionAborted(Exception):
    """The run cannot continue: no resource could be resolved for a collection row."""

    def __init__(self, message: str, row_number: int = -1) -> None:
        super().__init__(message)
        self.row_number = row_number


class DLCConverter:
    IMPORT_TYPE = "dlc"

    def __init__(
        self,
        input_file: Path | str | None = None,
        *,
        lookup: ResourceLookup | None = None,
        minter: UriMinter | None = None,
        batch: RecordBatch | None = None,
        language: str = "eng",
    ) -> None:
        self.input_file = Path(input_file) if input_file is not None else None
        self.lookup = lookup if lookup is not None else InMemoryResourceLookup()
        self.minter = minter or UriMinter()
        self.batch = batch if batch is not None else RecordBatch()
        self.resolver = ResourceResolver(self.lookup, self.minter, language=language)
        self.context = HierarchyContext()
        self.stats = ConversionStats()
        self._records: deque[Record] = deque()

    @classmethod
    def instance_for(cls, type: str, input_file: Path | str, **kwargs: Any) -> DLCConverter | None:
        if type == cls.IMPORT_TYPE:
            return cls(input_file, **kwargs)
        return None

    @classmethod
    def import_types(cls, show_hidden: bool = False) -> list[dict[str, str]]:
        return [
            {
                "name": cls.IMPORT_TYPE,
                "description": "Digital Library Collections CSV",
            }
        ]

    @classmethod
    def profile(cls) -> str:
        return "Convert a DLC CSV export to ArchivesSpace JSONModel records"

    @property
    def records(self) -> list[Record]:
        """Records built so far, in spreadsheet order."""
        return list(reversed(self._records))

    def _emit(self, record: Record) -> None:
        self._records.appendleft(record)
        self.stats.records_emitted += 1

    def run(self, rows: Iterable[RowData | DLCRow]) -> ConversionStats:
        """Convert all rows and hand the records to the batch in spreadsheet order.

        Raises:
            ConversionAborted: a collection row has no resolvable resource; the batch
                is left untouched
        """
        context = HierarchyContext()
        for number, item in enumerate(rows, start=1):
            if isinstance(item, RowData):
                number, row = item.row_number, item.row
            else:
                row = item
            self.stats.rows_read += 1

            if row.is_empty():
                self.stats.rows_skipped += 1
                continue

            context = self.process_row(row, context, row_number=number)
            self.context = context

        # single terminal reversal: newest-first -> spreadsheet order
        for record in reversed(self._records):
            self.batch.append(record)

        logger.debug(
            "conversion done file=%s rows=%d skipped=%d records=%d",
            self.input_file.name if self.input_file else "<rows>",
            self.stats.rows_read,
            self.stats.rows_skipped,
            self.stats.records_emitted,
        )
        return self.stats

    def process_row(
        self, row: DLCRow, context: HierarchyContext, row_number: int = -1
    ) -> HierarchyContext:
        """Apply one row and return the resulting context."""
        level = classify(row.level)

        if level is Level.COLLECTION:
            return context.advance(level, self._resolve_resource(row, row_number))

        if level is Level.CLASS:
            return context.advance(level, self._add_class(row, context))

        if level is Level.SERIES:
            return context.advance(level, self._add_series(row, context))

        if level in (Level.FILE, Level.ITEM):
            self._add_leaf(row, level, context)
            return context

        logger.debug("row=%d skipped: unknown level %r", row_number, row.level)
        self.stats.rows_skipped += 1
        return context

    def _resolve_resource(self, row: DLCRow, row_number: int) -> str:
        try:
            resolution = self.resolver.resolve(row)
        except ResourceIdentifierError as e:
            raise ConversionAborted(f"No resource defined: {e}", row_number) from e
        if not resolution.uri:
            raise ConversionAborted("No resource defined", row_number)

        if resolution.record is not None:
            self._emit(resolution.record)
            self.stats.resources_created += 1
        else:
            self.stats.resources_reused += 1
        return resolution.uri

    def _add_class(self, row: DLCRow, context: HierarchyContext) -> str | None:
        if classify(row.level) is not Level.CLASS:
            return context.class_ref
        record = build_archival_object(row, Level.CLASS, context.collection_ref, self.minter)
        self._emit(record)
        return record.uri

    def _add_series(self, row: DLCRow, context: HierarchyContext) -> str | None:
        if classify(row.level) is not Level.SERIES:
            return context.series_ref
        record = build_archival_object(row, Level.SERIES, context.collection_ref, self.minter)
        record.parent_ref = context.parent_for(Level.SERIES)
        self._emit(record)
        return record.uri

    def _add_leaf(self, row: DLCRow, level: Level, context: HierarchyContext) -> ArchivalObjectRecord:
        record = build_archival_object(row, level, context.collection_ref, self.minter)
        record.parent_ref = context.parent_for(level)
        self._emit(record)
        return record

    def get_output_path(self, dump: bool = False) -> Path:
        """Path of the written batch. With ``dump`` the file is read back and logged."""
        output_path = self.batch.get_output_path()
        if dump:
            logger.info(READBACK_RULE)
            logger.info("%s", output_path)
            logger.info("%s", output_path.read_text(encoding="utf-8"))
            logger.info(READBACK_RULE)
        return output_path

from __future__ import annotations

from dataclasses import dataclass, replace

from .row import Level

"""HierarchyContext: the running ancestor state of a conversion.

collection / class / series rows each replace their own slot; file, item and
unknown rows leave the context untouched. A context lives for one run only.
"""

__all__ = [
    "HierarchyContext",
]


@dataclass(frozen=True)
class HierarchyContext:
    collection_ref: str | None = None
    class_ref: str | None = None
    series_ref: str | None = None

    def advance(self, level: Level, ref: str | None) -> HierarchyContext:
        """Return the context after a row of ``level`` resolved to ``ref``."""
        if level is Level.COLLECTION:
            return replace(self, collection_ref=ref)
        if level is Level.CLASS:
            return replace(self, class_ref=ref)
        if level is Level.SERIES:
            return replace(self, series_ref=ref)
        return self

    def parent_for(self, level: Level) -> str | None:
        """Parent ref for a description row of ``level``.

        series -> class_ref. file/item -> class_ref, then series_ref wins when set,
        whether or not that series is really an ancestor of the row.
        """
        if level is Level.SERIES:
            return self.class_ref
        if level in (Level.FILE, Level.ITEM):
            parent = None
            if self.class_ref:
                parent = self.class_ref
            if self.series_ref:
                parent = self.series_ref
            return parent
        return None

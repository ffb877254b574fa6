from __future__ import annotations

from dlc_import.models.row import Level

"""Level classification for DLC rows.

Labels are matched exactly as they appear in DLC exports (after trimming).
Anything else is Level.UNKNOWN; the converter drops such rows without error.
"""

__all__ = [
    "LEVEL_MAP",
    "classify",
]

LEVEL_MAP: dict[str, Level] = {
    "Collection": Level.COLLECTION,
    "Class": Level.CLASS,
    "Series": Level.SERIES,
    "File": Level.FILE,
    "Item": Level.ITEM,
}


def classify(level_string: str | None) -> Level:
    if level_string is None:
        return Level.UNKNOWN
    return LEVEL_MAP.get(level_string, Level.UNKNOWN)

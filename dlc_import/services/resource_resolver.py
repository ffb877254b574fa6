from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from dlc_import.db.resource_lookup import ResourceLookup
from dlc_import.models.records import ResourceRecord
from dlc_import.models.row import DLCRow

from .synthesizer import build_resource
from .uri_minter import UriMinter

"""Find-or-create for the collection-level resource.

The resource_id cell holds up to 4 whitespace separated identifier parts
("MS 123 A"). They are padded with None to exactly 4 slots and encoded as a
compact JSON array, which is the deduplication key.

Lookup order for every collection row:
1. the external store (ResourceLookup)
2. resources already created earlier in this run
A hit returns the existing URI and emits no record.
"""

__all__ = [
    "IDENTIFIER_PARTS",
    "ResourceIdentifierError",
    "ResourceResolution",
    "ResourceResolver",
    "identifier_key",
    "split_identifier",
]

logger = logging.getLogger(__name__)

IDENTIFIER_PARTS = 4

Identifier = tuple[str | None, str | None, str | None, str | None]


class ResourceIdentifierError(Exception):
    """The resource_id cell cannot be turned into a 4-part identifier."""


@dataclass(frozen=True)
class ResourceResolution:
    uri: str
    record: ResourceRecord | None = None  # set only when a new resource was built

    @property
    def created(self) -> bool:
        return self.record is not None


def split_identifier(resource_id: str | None) -> Identifier:
    if resource_id is None:
        raise ResourceIdentifierError("resource_id is empty")
    parts: list[str | None] = list(resource_id.split())
    if not parts:
        raise ResourceIdentifierError("resource_id is empty")
    if len(parts) > IDENTIFIER_PARTS:
        raise ResourceIdentifierError(
            f"resource_id has {len(parts)} parts, at most {IDENTIFIER_PARTS} allowed: {resource_id!r}"
        )
    parts += [None] * (IDENTIFIER_PARTS - len(parts))
    return (parts[0], parts[1], parts[2], parts[3])


def identifier_key(identifier: Identifier) -> str:
    return json.dumps(list(identifier), separators=(",", ":"), ensure_ascii=False)


class ResourceResolver:
    def __init__(self, lookup: ResourceLookup, minter: UriMinter, language: str = "eng") -> None:
        self.lookup = lookup
        self.minter = minter
        self.language = language
        self._created: dict[str, str] = {}

    def resolve(self, row: DLCRow) -> ResourceResolution:
        """Return the URI for the row's resource, building a ResourceRecord if it is new.

        Raises:
            ResourceIdentifierError: resource_id is missing or has more than 4 parts
        """
        identifier = split_identifier(row.resource_id)
        key = identifier_key(identifier)

        existing = self.lookup.find_uri(key) or self._created.get(key)
        if existing:
            logger.debug("resource exists identifier=%s uri=%s", key, existing)
            return ResourceResolution(uri=existing)

        uri = self.minter.resource_uri()
        record = build_resource(row, uri, identifier, self.language)
        self._created[key] = uri
        logger.debug("resource created identifier=%s uri=%s", key, uri)
        return ResourceResolution(uri=uri, record=record)

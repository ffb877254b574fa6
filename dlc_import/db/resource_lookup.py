from __future__ import annotations

import logging
from typing import Any, Protocol

import psycopg2

"""Resource lookup store.

Resolves a composite identifier key (compact JSON array of the 4 id parts, the
format ArchivesSpace keeps in ``resource.identifier``) to the URI of an existing
resource.

- PgResourceLookup: live lookup through a psycopg2 cursor
- InMemoryResourceLookup: dict-backed store for tests and mock mode (no DB)

Driver errors during a lookup are logged and reported as "not found".
"""

__all__ = [
    "InMemoryResourceLookup",
    "PgResourceLookup",
    "ResourceLookup",
]

logger = logging.getLogger(__name__)

FIND_RESOURCE_SQL = "SELECT id, repo_id FROM resource WHERE identifier = %s LIMIT 1"


class ResourceLookup(Protocol):
    def find_uri(self, identifier_key: str) -> str | None:
        ...


class InMemoryResourceLookup:
    """Lookup backed by a plain dict of identifier key -> resource URI."""

    def __init__(self, resources: dict[str, str] | None = None) -> None:
        self.resources: dict[str, str] = dict(resources or {})
        self.queries: list[str] = []

    def find_uri(self, identifier_key: str) -> str | None:
        self.queries.append(identifier_key)
        return self.resources.get(identifier_key)


class PgResourceLookup:
    """Lookup against the ArchivesSpace ``resource`` table."""

    def __init__(self, cursor: Any) -> None:
        self.cursor = cursor

    def find_uri(self, identifier_key: str) -> str | None:
        try:
            self.cursor.execute(FIND_RESOURCE_SQL, (identifier_key,))
            row = self.cursor.fetchone()
        except psycopg2.Error as e:
            logger.warning("resource lookup failed identifier=%s err=%s", identifier_key, e)
            return None
        if not row:
            return None
        resource_id, repo_id = row[0], row[1]
        return f"/repositories/{repo_id}/resources/{resource_id}"

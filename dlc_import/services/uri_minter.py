from __future__ import annotations

import secrets
from collections.abc import Callable

"""Unique reference minting for imported records.

URIs follow the batch importer convention for not-yet-persisted records:
``<repository_uri>/resources/import_<hex>`` and
``<repository_uri>/archival_objects/import_<hex>``.
"""

__all__ = [
    "UriMinter",
]


def _random_token() -> str:
    return secrets.token_hex(16)


class UriMinter:
    def __init__(
        self,
        repository_uri: str = "/repositories/12345",
        token_factory: Callable[[], str] | None = None,
    ) -> None:
        self.repository_uri = repository_uri.rstrip("/")
        self._token_factory = token_factory or _random_token

    def resource_uri(self) -> str:
        return f"{self.repository_uri}/resources/import_{self._token_factory()}"

    def archival_object_uri(self) -> str:
        return f"{self.repository_uri}/archival_objects/import_{self._token_factory()}"

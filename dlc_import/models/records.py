from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

"""JSONModel record shapes emitted by the converter.

Two record variants share the date/extent/title/uri core:
- ResourceRecord: the collection-level container (4-part identifier, user_defined block)
- ArchivalObjectRecord: class/series/file/item descriptions (component_id, notes, refs)

to_jsonmodel() produces the dict the ArchivesSpace batch importer reads.
None-valued keys are dropped from the output.
"""

__all__ = [
    "ArchivalObjectRecord",
    "Date",
    "Extent",
    "Note",
    "Record",
    "ResourceRecord",
]


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class Date:
    date_type: str  # inclusive | single
    label: str
    expression: str

    def to_jsonmodel(self) -> dict[str, Any]:
        return {
            "jsonmodel_type": "date",
            "date_type": self.date_type,
            "label": self.label,
            "expression": self.expression,
        }


@dataclass(frozen=True)
class Extent:
    portion: str  # whole | part
    extent_type: str
    number: str
    physical_details: str | None = None
    dimensions: str | None = None

    def to_jsonmodel(self) -> dict[str, Any]:
        return _compact({
            "jsonmodel_type": "extent",
            "portion": self.portion,
            "extent_type": self.extent_type,
            "number": self.number,
            "physical_details": self.physical_details,
            "dimensions": self.dimensions,
        })


@dataclass(frozen=True)
class Note:
    """Multipart note with a single text subnote."""
    note_type: str  # scopecontent | processinfo
    content: str

    def to_jsonmodel(self) -> dict[str, Any]:
        return {
            "jsonmodel_type": "note_multipart",
            "type": self.note_type,
            "subnotes": [
                {
                    "jsonmodel_type": "note_text",
                    "content": self.content,
                }
            ],
        }


@dataclass
class ResourceRecord:
    uri: str
    identifier: tuple[str | None, str | None, str | None, str | None]
    title: str | None
    language: str
    ud_int_2: str | None = None
    level: str = "collection"
    dates: list[Date] = field(default_factory=list)
    extents: list[Extent] = field(default_factory=list)

    jsonmodel_type = "resource"

    def to_jsonmodel(self) -> dict[str, Any]:
        id_0, id_1, id_2, id_3 = self.identifier
        return _compact({
            "jsonmodel_type": self.jsonmodel_type,
            "uri": self.uri,
            "id_0": id_0,
            "id_1": id_1,
            "id_2": id_2,
            "id_3": id_3,
            "title": self.title,
            "level": self.level,
            "extents": [e.to_jsonmodel() for e in self.extents],
            "dates": [d.to_jsonmodel() for d in self.dates],
            "user_defined": _compact({
                "jsonmodel_type": "user_defined",
                "integer_2": self.ud_int_2,
            }),
            "language": self.language,
        })


@dataclass
class ArchivalObjectRecord:
    uri: str
    level: str
    resource_ref: str | None
    title: str | None = None
    component_id: str | None = None
    dates: list[Date] = field(default_factory=list)
    extents: list[Extent] = field(default_factory=list)
    notes: list[Note] = field(default_factory=list)
    parent_ref: str | None = None

    jsonmodel_type = "archival_object"

    def to_jsonmodel(self) -> dict[str, Any]:
        data = _compact({
            "jsonmodel_type": self.jsonmodel_type,
            "uri": self.uri,
            "title": self.title,
            "component_id": self.component_id,
            "level": self.level,
            "dates": [d.to_jsonmodel() for d in self.dates],
            "extents": [e.to_jsonmodel() for e in self.extents],
            "notes": [n.to_jsonmodel() for n in self.notes],
            "resource": {"ref": self.resource_ref},
        })
        if self.parent_ref:
            data["parent"] = {"ref": self.parent_ref}
        return data


Record = Union[ResourceRecord, ArchivalObjectRecord]

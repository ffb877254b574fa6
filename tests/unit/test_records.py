from __future__ import annotations

import json

from dlc_import.models.records import ArchivalObjectRecord, Date, Extent, Note, ResourceRecord


def test_resource_to_jsonmodel():
    rec = ResourceRecord(
        uri="/repositories/2/resources/import_a",
        identifier=("MS", "12", None, None),
        title="Papers of A. Person",
        language="eng",
        ud_int_2="42",
        dates=[Date("single", "creation", "1950")],
        extents=[Extent("whole", "boxes", "3")],
    )
    data = rec.to_jsonmodel()

    assert data == {
        "jsonmodel_type": "resource",
        "uri": "/repositories/2/resources/import_a",
        "id_0": "MS",
        "id_1": "12",
        "title": "Papers of A. Person",
        "level": "collection",
        "extents": [{"jsonmodel_type": "extent", "portion": "whole", "extent_type": "boxes", "number": "3"}],
        "dates": [{"jsonmodel_type": "date", "date_type": "single", "label": "creation", "expression": "1950"}],
        "user_defined": {"jsonmodel_type": "user_defined", "integer_2": "42"},
        "language": "eng",
    }
    # serialisable as-is
    json.dumps(data)


def test_archival_object_to_jsonmodel_with_parent_and_notes():
    rec = ArchivalObjectRecord(
        uri="/repositories/2/archival_objects/import_b",
        level="file",
        resource_ref="/repositories/2/resources/import_a",
        title="Letters",
        component_id="F1",
        notes=[Note("scopecontent", "Family letters")],
        parent_ref="/repositories/2/archival_objects/import_s",
    )
    data = rec.to_jsonmodel()

    assert data["jsonmodel_type"] == "archival_object"
    assert data["resource"] == {"ref": "/repositories/2/resources/import_a"}
    assert data["parent"] == {"ref": "/repositories/2/archival_objects/import_s"}
    assert data["notes"] == [
        {
            "jsonmodel_type": "note_multipart",
            "type": "scopecontent",
            "subnotes": [{"jsonmodel_type": "note_text", "content": "Family letters"}],
        }
    ]
    assert data["dates"] == []
    assert data["extents"] == []


def test_archival_object_without_parent_omits_key():
    rec = ArchivalObjectRecord(uri="/x", level="class", resource_ref="/r")
    data = rec.to_jsonmodel()
    assert "parent" not in data
    assert "title" not in data
    assert "component_id" not in data

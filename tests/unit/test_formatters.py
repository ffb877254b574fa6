from __future__ import annotations

from conftest import make_row

from dlc_import.models.records import Date, Extent, Note
from dlc_import.services.formatters import format_date, format_extent, format_notes


def test_format_date_inclusive_when_hyphen_present():
    assert format_date("1990-1995") == Date(date_type="inclusive", label="creation", expression="1990-1995")


def test_format_date_single_without_hyphen():
    assert format_date("1992") == Date(date_type="single", label="creation", expression="1992")


def test_format_date_hyphen_anywhere_counts():
    assert format_date("circa 1900 -").date_type == "inclusive"


def test_format_date_absent():
    assert format_date(None) is None


def test_format_date_empty_text_uses_placeholder():
    assert format_date("").expression == "No date provided"


def test_format_extent_requires_number_and_type():
    assert format_extent(make_row(extent_number="3")) is None
    assert format_extent(make_row(extent_type="boxes")) is None
    assert format_extent(make_row()) is None


def test_format_extent_defaults_to_part():
    row = make_row(extent_number="3", extent_type="boxes", extent_dimensions="30x40cm")
    assert format_extent(row) == Extent(
        portion="part",
        extent_type="boxes",
        number="3",
        physical_details=None,
        dimensions="30x40cm",
    )


def test_format_extent_portion_override():
    row = make_row(extent_number="1", extent_type="volume", extent_physical_details="bound")
    extent = format_extent(row, portion="whole")
    assert extent.portion == "whole"
    assert extent.physical_details == "bound"


def test_format_notes_fixed_order():
    row = make_row(processinfo_note="Rehoused 2001", scopecontent_note="Letters to family")
    assert format_notes(row) == [
        Note(note_type="scopecontent", content="Letters to family"),
        Note(note_type="processinfo", content="Rehoused 2001"),
    ]


def test_format_notes_each_optional():
    assert format_notes(make_row()) == []
    assert format_notes(make_row(processinfo_note="x")) == [Note("processinfo", "x")]

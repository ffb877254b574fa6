from __future__ import annotations

import json
from pathlib import Path

import pandas as pd  # type: ignore
import pytest
from conftest import csv_line

from dlc_import.cli import main as cli_main

"""End-to-end: DLC exports in ./data -> batch JSON in ./out via the CLI."""


@pytest.fixture()
def dlc_export(temp_workdir: Path, write_config, monkeypatch) -> Path:
    monkeypatch.setenv("DISABLE_DB_CONNECT", "1")
    path = temp_workdir / "data" / "export.csv"
    path.write_text(
        "\n".join([
            csv_line(level="Collection", resource_id="MS 12", ud_int_2="7", title="Smith family papers",
                     date="1900-1950", extent_number="3", extent_type="linear_feet"),
            csv_line(level="Class", title="Business"),
            csv_line(level="Series", title="Ledgers", component_id="S1", date="1910"),
            csv_line(level="File", title="Ledger 1910", scopecontent_note="Accounts"),
            csv_line(level="Item", title="Receipt"),
            csv_line(),
            csv_line(level="Box", title="not a level"),
            csv_line(level="Collection", resource_id="MS 12"),
            csv_line(level="File", title="Loose file"),
        ]) + "\n",
        encoding="utf-8",
    )
    return path


def _load_output(temp_workdir: Path, stem: str) -> list[dict]:
    return json.loads((temp_workdir / "out" / f"{stem}.json").read_text(encoding="utf-8"))


def test_run_success_writes_batch_in_input_order(dlc_export, temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out

    assert code == 0
    assert "SUMMARY files=1/1 success=1 failed=0 records=6 skipped_rows=2" in out

    records = _load_output(temp_workdir, "export")
    assert [r.get("title") for r in records] == [
        "Smith family papers",
        "Business",
        "Ledgers",
        "Ledger 1910",
        "Receipt",
        "Loose file",
    ]

    resource, klass, series, file_, item, loose = records
    assert resource["jsonmodel_type"] == "resource"
    assert resource["uri"].startswith("/repositories/2/resources/import_")
    assert (resource["id_0"], resource["id_1"]) == ("MS", "12")
    assert "id_2" not in resource
    assert resource["user_defined"]["integer_2"] == "7"
    assert resource["dates"][0]["date_type"] == "inclusive"
    assert resource["extents"][0]["portion"] == "whole"

    for ao in (klass, series, file_, item, loose):
        assert ao["jsonmodel_type"] == "archival_object"
        assert ao["uri"].startswith("/repositories/2/archival_objects/import_")
        assert ao["resource"]["ref"] == resource["uri"]

    assert "parent" not in klass
    assert series["parent"]["ref"] == klass["uri"]
    assert file_["parent"]["ref"] == series["uri"]
    assert item["parent"]["ref"] == series["uri"]
    assert file_["notes"][0]["type"] == "scopecontent"

    # second "MS 12" collection row reuses the resource created earlier in the run
    assert sum(1 for r in records if r["jsonmodel_type"] == "resource") == 1
    assert loose["parent"]["ref"] == series["uri"]


def test_run_success_xlsx_input(temp_workdir: Path, write_config, monkeypatch, capsys):
    monkeypatch.setenv("DISABLE_DB_CONNECT", "1")
    rows = [
        ["Collection", "MS 3", None, None, None, None, "Album"],
        ["Item", None, None, None, None, "I1", "Photograph"],
    ]
    with pd.ExcelWriter(temp_workdir / "data" / "album.xlsx", engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, header=False, index=False)

    assert cli_main([]) == 0
    records = _load_output(temp_workdir, "album")
    assert [r["jsonmodel_type"] for r in records] == ["resource", "archival_object"]
    assert records[1]["component_id"] == "I1"
    assert records[1]["resource"]["ref"] == records[0]["uri"]

from __future__ import annotations

import json
from pathlib import Path

from plate_ingest.cli import main as cli_main

"""Issue log contract: one JSON object per line with a fixed key set, plus the
full validation report as a JSON file with the same timestamp."""

ISSUE_KEYS = {"timestamp", "source", "folder", "kind", "detail"}
ISSUE_KINDS = {"MissingModel", "MultipleModels", "MissingImage", "MultipleImages"}
REPORT_KEYS = {"valid", "totalFolders", "validFolders", "invalidFolders", "issues"}
FOLDER_KEYS = {"folder", "path", "modelCount", "imageCount", "modelFiles", "imageFiles", "problems"}


def test_issue_log_written_on_validation_failure(
    temp_workdir: Path, sample_workbook, valid_assets, write_config, make_asset_tree
):
    make_asset_tree(valid_assets, {"5": [], "6": ["6.x_t", "a.png", "b.png"]})
    write_config()
    assert cli_main([]) == 2

    logs = sorted(Path("logs").glob("issues-*.log"))
    assert len(logs) == 1
    records = [json.loads(raw) for raw in logs[0].read_text(encoding="utf-8").splitlines()]
    assert len(records) == 3
    for rec in records:
        assert set(rec) == ISSUE_KEYS
        assert rec["kind"] in ISSUE_KINDS
        assert rec["timestamp"].endswith("Z")
    assert {(r["folder"], r["kind"]) for r in records} == {
        ("5", "MissingModel"),
        ("5", "MissingImage"),
        ("6", "MultipleImages"),
    }

    reports = list(Path("logs").glob("validation-*.json"))
    assert len(reports) == 1
    report = json.loads(reports[0].read_text(encoding="utf-8"))
    assert set(report) == REPORT_KEYS
    assert (report["totalFolders"], report["validFolders"], report["invalidFolders"]) == (5, 3, 2)
    by_folder = {i["folder"]: i for i in report["issues"]}
    assert set(by_folder["5"]) == FOLDER_KEYS
    assert (by_folder["5"]["modelCount"], by_folder["5"]["imageCount"]) == (0, 0)
    assert by_folder["6"]["modelFiles"] == ["6.x_t"]
    assert by_folder["6"]["imageFiles"] == ["a.png", "b.png"]
    assert [p["kind"] for p in by_folder["6"]["problems"]] == ["MultipleImages"]

from __future__ import annotations

import itertools
import json
from pathlib import Path

from plate_ingest.config.loader import load_config
from plate_ingest.services.orchestrator import inspect_spreadsheet, run_pipeline


def _ids():
    counter = itertools.count(1)
    return lambda: f"PL-{next(counter):03d}"


def test_full_run_writes_inventory(temp_workdir: Path, sample_workbook, valid_assets, write_config):
    cfg = load_config(write_config())
    result = run_pipeline(cfg, id_factory=_ids())

    assert result.total_plates == 4
    assert result.linked_plates == 2
    assert result.locked_plates == 1
    assert result.plates_with_history == 3
    assert result.validation.total_folders == 3
    assert result.copied_previews == 2
    assert result.output_path.parent == Path("./output")

    doc = json.loads(result.output_path.read_text(encoding="utf-8"))
    plates = {p["plateNumber"]: p for p in doc["plates"]}
    assert list(plates) == ["12", "12A", "7", "30"]
    assert doc["metadata"]["totalPlates"] == len(doc["plates"]) == 4

    p12 = plates["12"]
    assert p12["excelSource"]["rows"] == [3, 4, 5]
    assert [e["workOrder"] for e in p12["workHistoryEntries"]] == ["-100", "-100b", "-4961_061"]
    assert p12["currentModelFile"] == "12/12.x_t"
    assert p12["health"] == "used"
    assert p12["previewImage"].startswith("previews/")
    assert (Path("output") / p12["previewImage"]).exists()

    # 12A has no folder of its own even though folder 12 exists
    assert plates["12A"]["currentModelFile"] is None
    assert plates["12A"]["health"] == "new"
    assert plates["30"]["health"] == "locked"
    assert plates["30"]["isLocked"] is True

    assert set(doc["modelIndex"]) == {"12/12.x_t", "30/30.step"}
    assert [r["plateNumber"] for r in doc["workHistoryIndex"]["-100"]["usedByPlates"]] == ["12", "7"]
    assert doc["metadata"]["header"]["headerRow"] == 2
    assert not list(Path("logs").glob("issues-*.log"))


def test_second_run_keeps_first_output(temp_workdir: Path, sample_workbook, valid_assets, write_config):
    cfg = load_config(write_config())
    first = run_pipeline(cfg)
    second = run_pipeline(cfg)
    assert first.output_path != second.output_path
    assert first.output_path.exists() and second.output_path.exists()


def test_manual_lock_list_without_cell_fill(temp_workdir: Path, sample_workbook, valid_assets, write_config):
    cfg = load_config(write_config(lock_detection={"use_cell_fill": False, "manual_locked_plates": ["7"]}))
    view = inspect_spreadsheet(cfg)
    locked = [r.plate_number for r in view.records if r.is_locked]
    assert locked == ["7"]


def test_previews_can_be_disabled(temp_workdir: Path, sample_workbook, valid_assets, write_config):
    cfg = load_config(write_config(output={"copy_previews": False}))
    result = run_pipeline(cfg)
    assert result.copied_previews == 0
    assert not Path("output/previews").exists()
    doc = json.loads(result.output_path.read_text(encoding="utf-8"))
    p12 = next(p for p in doc["plates"] if p["plateNumber"] == "12")
    assert p12["previewImage"] == "12/12.png"

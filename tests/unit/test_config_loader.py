from __future__ import annotations

from pathlib import Path

import pytest

from plate_ingest.config.loader import ConfigError, load_config
from plate_ingest.models.config_models import DEFAULT_KEYWORDS, ExtensionConfig


def test_load_minimal_config_applies_defaults(temp_workdir: Path, write_config):
    cfg = load_config(write_config())
    assert cfg.info_file == "./data/plates.xlsx"
    assert cfg.asset_root == "./data/models"
    assert cfg.output_directory == "./output"
    assert cfg.worksheet is None
    assert cfg.header.scan_rows == 5
    assert cfg.header.similarity_threshold == 0.7
    assert cfg.header.keywords == DEFAULT_KEYWORDS
    assert cfg.extensions == ExtensionConfig()
    assert cfg.lock_detection.use_cell_fill is True
    assert cfg.lock_detection.manual_locked_plates == frozenset()
    assert cfg.output.file_prefix == "plates_inventory"
    assert cfg.output.copy_previews is True


def test_load_full_config(temp_workdir: Path, write_config):
    path = write_config(
        worksheet="Lemezek",
        header={"scan_rows": 3, "min_matches": 3, "keywords": {"boxSize": ["Doboz"]}},
        extensions={"model": [".STEP"], "image": [".png"]},
        lock_detection={"use_cell_fill": False, "manual_locked_plates": [12, "30A"], "red_indexed": [10]},
        output={"file_prefix": "inv", "copy_previews": False},
    )
    cfg = load_config(path)
    assert cfg.worksheet == "Lemezek"
    assert cfg.header.scan_rows == 3
    assert cfg.header.min_matches == 3
    assert cfg.header.keywords["boxSize"] == ("doboz",)
    assert cfg.header.keywords["plateNumber"] == DEFAULT_KEYWORDS["plateNumber"]
    assert cfg.extensions.model == frozenset({".step"})
    assert cfg.lock_detection.use_cell_fill is False
    assert cfg.lock_detection.manual_locked_plates == frozenset({"12", "30A"})
    assert cfg.lock_detection.red_indexed == frozenset({"10"})
    assert cfg.output.file_prefix == "inv"
    assert cfg.output.copy_previews is False


def test_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(temp_workdir / "config" / "missing.yml")


def test_invalid_yaml(temp_workdir: Path):
    p = temp_workdir / "config" / "ingest.yml"
    p.write_text("info_file: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(p)


def test_non_mapping_root(temp_workdir: Path):
    p = temp_workdir / "config" / "ingest.yml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(p)

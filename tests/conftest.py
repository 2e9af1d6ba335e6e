# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any

import pytest
import yaml
from openpyxl import Workbook
from openpyxl.styles import PatternFill

from plate_ingest.logging.init import reset_logging

HEADER_ROW = ["Készülék szám", "Projekt", "Raktár polc", "Kép", "Box size"]

# title row, header row, then plates 12 / 12A / 7 / 30; 12 spans three rows
SAMPLE_ROWS: list[list[Any]] = [
    ["Plate inventory"],
    HEADER_ROW,
    [12, "A: -100", "S-1", "12.png", "M"],
    [None, "B: -100b", None, None, None],
    [None, "C: -4961_061", None, None, None],
    ["12A", "", "S-2", "", "L"],
    [7, "A: -100, free text", "", "", ""],
    [30, "D: -555", "S-9", "30.png", "S"],
]


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


def build_workbook(
    path: Path,
    rows: Sequence[Sequence[Any]],
    *,
    sheet: str = "Plates",
    red_cells: Iterable[tuple[int, int]] = (),
    fills: dict[tuple[int, int], PatternFill] | None = None,
) -> Path:
    """Write ``rows`` to an .xlsx; cell coordinates are 1-based (row, column)."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet
    for row in rows:
        ws.append(list(row))
    for r, c in red_cells:
        ws.cell(row=r, column=c).fill = PatternFill(fill_type="solid", start_color="FFFF0000", end_color="FFFF0000")
    for (r, c), fill in (fills or {}).items():
        ws.cell(row=r, column=c).fill = fill
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


def build_asset_tree(root: Path, folders: dict[str, Sequence[str]]) -> Path:
    for folder, files in folders.items():
        d = root / folder
        d.mkdir(parents=True, exist_ok=True)
        for name in files:
            (d / name).write_bytes(b"data")
    return root


@pytest.fixture()
def make_workbook() -> Callable[..., Path]:
    return build_workbook


@pytest.fixture()
def make_asset_tree() -> Callable[..., Path]:
    return build_asset_tree


@pytest.fixture()
def sample_workbook(temp_workdir: Path) -> Path:
    # plate 30 is marked locked with a red fill on its plate-number cell (sheet row 8)
    return build_workbook(temp_workdir / "data" / "plates.xlsx", SAMPLE_ROWS, red_cells=[(8, 1)])


@pytest.fixture()
def valid_assets(temp_workdir: Path) -> Path:
    return build_asset_tree(
        temp_workdir / "data" / "models",
        {
            "12": ["12.x_t", "12.png"],
            "30": ["30.step", "30.jpg"],
            "99": ["99.x_t", "99.png"],
        },
    )


@pytest.fixture()
def sample_config() -> dict[str, Any]:
    return {
        "info_file": "./data/plates.xlsx",
        "asset_root": "./data/models",
        "output_directory": "./output",
    }


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config: dict[str, Any]) -> Callable[..., Path]:
    """Write config/ingest.yml from the sample config updated with ``overrides``."""

    def _write(**overrides: Any) -> Path:
        data = dict(sample_config)
        data.update(overrides)
        cfg = temp_workdir / "config" / "ingest.yml"
        cfg.write_text(yaml.safe_dump(data, allow_unicode=True, sort_keys=False), encoding="utf-8")
        return cfg

    return _write

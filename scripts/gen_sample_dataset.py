#!/usr/bin/env python3
"""Sample dataset generation for manual runs of the ingestion pipeline.

Creates:
- an info workbook: row 1 title, row 2 header, data from row 3, with plates
  spanning several rows (merged plate-number cells) and one red-filled
  (locked) plate
- an asset tree with one folder per plate holding one model file and one
  preview image; a few plates are left without a folder to exercise the
  "no model folder" path
- a matching config/ingest.yml (unless --no-config)
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import yaml
from openpyxl import Workbook
from openpyxl.styles import PatternFill

HEADER = ["Készülék szám", "Projekt", "Raktár polc", "Kép", "Box size"]
RED_FILL = PatternFill(fill_type="solid", start_color="FFFF0000", end_color="FFFF0000")


def generate_plates(count: int, seed: int = 42) -> list[dict]:
    """Generate plate descriptions: number, shelf, box size and work history rows."""
    rng = np.random.default_rng(seed)
    plates = []
    for i in range(count):
        rows = int(rng.integers(1, 4))
        history = [
            f"{chr(65 + int(rng.integers(0, 4)))}: -{int(rng.integers(100, 999))}"
            for _ in range(rows)
        ]
        if rng.random() < 0.2:
            history[0] = ""
        plates.append(
            {
                "number": str(100 + i),
                "shelf": f"S-{int(rng.integers(1, 20))}",
                "box": str(rng.choice(["S", "M", "L"])),
                "history": history,
            }
        )
    return plates


def create_workbook(path: Path, plates: list[dict], locked_index: int = 0) -> None:
    wb = Workbook()
    ws = wb.active
    ws.title = "Plates"
    ws.append(["Plate inventory"])
    ws.append(HEADER)
    for idx, plate in enumerate(plates):
        first = ws.max_row + 1
        for n, entry in enumerate(plate["history"]):
            if n == 0:
                ws.append([plate["number"], entry, plate["shelf"], f"{plate['number']}.png", plate["box"]])
            else:
                ws.append([None, entry, None, None, None])
        last = ws.max_row
        if last > first:
            ws.merge_cells(start_row=first, start_column=1, end_row=last, end_column=1)
        if idx == locked_index:
            ws.cell(row=first, column=1).fill = RED_FILL
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    print(f"Created workbook: {path} ({len(plates)} plates, {ws.max_row - 2} data rows)")


def create_asset_tree(root: Path, plates: list[dict], skip_every: int = 7) -> int:
    created = 0
    for i, plate in enumerate(plates):
        if skip_every and i % skip_every == skip_every - 1:
            continue
        folder = root / plate["number"]
        folder.mkdir(parents=True, exist_ok=True)
        (folder / f"{plate['number']}.x_t").write_text("model", encoding="utf-8")
        (folder / f"{plate['number']}.png").write_bytes(b"\x89PNG\r\n\x1a\n")
        created += 1
    print(f"Created asset tree: {root} ({created} folders)")
    return created


def write_config(path: Path, info_file: Path, asset_root: Path, output_dir: Path) -> None:
    data = {
        "info_file": str(info_file),
        "asset_root": str(asset_root),
        "output_directory": str(output_dir),
        "worksheet": "Plates",
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    print(f"Created config: {path}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a sample plate workbook and asset tree")
    parser.add_argument("--plates", type=int, default=20, help="Number of plates (default: 20)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--base", type=Path, default=Path("data/sample"), help="Output base directory")
    parser.add_argument("--config", type=Path, default=Path("config/ingest.yml"), help="Config file to write")
    parser.add_argument("--no-config", action="store_true", help="Do not write a config file")
    args = parser.parse_args()

    if args.plates <= 0:
        print("Error: --plates must be positive", file=sys.stderr)
        return 1

    plates = generate_plates(args.plates, args.seed)
    info_file = args.base / "plates.xlsx"
    asset_root = args.base / "models"
    create_workbook(info_file, plates)
    create_asset_tree(asset_root, plates)
    if not args.no_config:
        write_config(args.config, info_file, asset_root, args.base / "output")
    return 0


if __name__ == "__main__":
    sys.exit(main())

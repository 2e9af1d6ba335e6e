from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl import load_workbook

from ..errors import StructuralInputError

"""Spreadsheet reader.

Cell values are read with pandas (header-less, every cell rendered as a
string). Fill metadata for ``.xlsx``/``.xlsm`` workbooks comes from openpyxl,
addressable by the same zero-based (row, column) indices as the values.
Formats without style information (``.xls``, ``.ods``, ``.csv``) produce a
style-free WorksheetData; lock detection then relies on the manual list.
"""

__all__ = [
    "ColorRef",
    "CellFill",
    "WorksheetData",
    "cell_text",
    "list_worksheets",
    "read_workbook",
]

STYLED_SUFFIXES = {".xlsx", ".xlsm"}
EXCEL_SUFFIXES = STYLED_SUFFIXES | {".xls", ".ods"}


@dataclass(frozen=True)
class ColorRef:
    """A spreadsheet color reference: ``kind`` is rgb, indexed or theme."""
    kind: str
    value: str


@dataclass(frozen=True)
class CellFill:
    pattern_type: str | None
    fg_color: ColorRef | None = None
    bg_color: ColorRef | None = None

    @property
    def is_solid(self) -> bool:
        return self.pattern_type == "solid"


@dataclass
class WorksheetData:
    name: str
    rows: list[list[str]]
    has_styles: bool = False
    fills: dict[tuple[int, int], CellFill] = field(default_factory=dict)

    def cell(self, row_index: int, col_index: int) -> str:
        if row_index >= len(self.rows):
            return ""
        row = self.rows[row_index]
        return row[col_index] if col_index < len(row) else ""

    def fill_at(self, row_index: int, col_index: int) -> CellFill | None:
        """Fill of the cell at zero-based indices, or None when unknown/unfilled."""
        if not self.has_styles:
            return None
        return self.fills.get((row_index, col_index))


def cell_text(value: Any) -> str:
    """Render a raw cell value as trimmed text ("" for empty cells)."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value).strip()


def _color_ref(color: Any) -> ColorRef | None:
    if color is None:
        return None
    kind = getattr(color, "type", None)
    if kind == "rgb":
        value = color.rgb
    elif kind == "indexed":
        value = color.indexed
    elif kind == "theme":
        value = color.theme
    else:
        return None
    if value is None:
        return None
    return ColorRef(kind=kind, value=str(value).upper())


def _read_fills(path: Path, sheet_name: str) -> dict[tuple[int, int], CellFill]:
    wb = load_workbook(path, data_only=True)
    try:
        ws = wb[sheet_name]
        fills: dict[tuple[int, int], CellFill] = {}
        for row in ws.iter_rows():
            for c in row:
                pattern = getattr(c.fill, "patternType", None)
                if pattern is None:
                    continue
                fills[(c.row - 1, c.column - 1)] = CellFill(
                    pattern_type=pattern,
                    fg_color=_color_ref(c.fill.fgColor),
                    bg_color=_color_ref(c.fill.bgColor),
                )
        return fills
    finally:
        wb.close()


def _check_file(path: Path) -> None:
    if not path.exists():
        raise StructuralInputError(f"info file not found: {path}")
    if not path.is_file():
        raise StructuralInputError(f"info file is not a regular file: {path}")


def list_worksheets(path: Path) -> list[str]:
    _check_file(path)
    if path.suffix.lower() == ".csv":
        return [path.stem]
    try:
        with pd.ExcelFile(path) as xls:
            return [str(n) for n in xls.sheet_names]
    except Exception as e:
        raise StructuralInputError(f"cannot read spreadsheet {path}: {e}") from e


def read_workbook(path: Path, sheet: str | None = None, include_styles: bool = True) -> WorksheetData:
    """Read one worksheet as strings plus optional fill metadata.

    Parameters
    ----------
    path: spreadsheet path
    sheet: worksheet name (None -> first worksheet)
    include_styles: load fill metadata when the format carries it

    Raises
    ------
    StructuralInputError: file missing, unreadable, or worksheet not present
    """
    _check_file(path)
    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            df = pd.read_csv(path, header=None, dtype=object, keep_default_na=False)
            name = path.stem
        elif suffix in EXCEL_SUFFIXES:
            with pd.ExcelFile(path) as xls:
                names = [str(n) for n in xls.sheet_names]
                if not names:
                    raise StructuralInputError(f"spreadsheet has no worksheets: {path}")
                name = sheet if sheet is not None else names[0]
                if name not in names:
                    raise StructuralInputError(f"worksheet '{name}' not found in {path.name} (have: {names})")
                # keep_default_na=False keeps literal "NA"/"N/A" plate numbers as text
                df = xls.parse(name, header=None, dtype=object, keep_default_na=False)
        else:
            raise StructuralInputError(f"unsupported spreadsheet format: {path.suffix}")
    except StructuralInputError:
        raise
    except Exception as e:
        raise StructuralInputError(f"cannot read spreadsheet {path}: {e}") from e

    rows = [[cell_text(v) for v in raw] for raw in df.itertuples(index=False, name=None)]

    has_styles = include_styles and suffix in STYLED_SUFFIXES
    fills: dict[tuple[int, int], CellFill] = {}
    if has_styles:
        try:
            fills = _read_fills(path, name)
        except Exception as e:
            raise StructuralInputError(f"cannot read cell styles from {path}: {e}") from e
    return WorksheetData(name=name, rows=rows, has_styles=has_styles, fills=fills)

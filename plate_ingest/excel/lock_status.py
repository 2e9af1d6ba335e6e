from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from ..models.config_models import LockDetectionConfig
from .reader import CellFill, ColorRef

"""Lock-status detection.

A plate is locked when its plate-number cell carries a solid red-family fill,
or when its number is on the manually curated locked list. Fill semantics
differ between spreadsheet engines, so the manual list is consulted for every
plate regardless of what the fill check said or whether a fill was available.
"""

__all__ = [
    "LockCell",
    "LockDetector",
    "FillColorLockDetector",
    "ManualListLockDetector",
    "CompositeLockDetector",
    "build_lock_detector",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LockCell:
    """The plate-number cell of a record's first row."""
    plate_number: str
    row_number: int  # 1-based
    fill: CellFill | None = None
    has_styles: bool = False


def _rgb6(value: str) -> str:
    """Normalize ARGB/RGB hex to the 6-digit RGB part ("FFFF0000" -> "FF0000")."""
    text = str(value).strip().upper().lstrip("#")
    return text[-6:] if len(text) == 8 else text


class LockDetector(Protocol):
    def is_marked_locked(self, cell: LockCell) -> bool: ...


class FillColorLockDetector:
    """Locked iff the fill is solid and its fg or bg color is red-family."""

    def __init__(
        self,
        red_rgb: Iterable[str],
        red_indexed: Iterable[str],
        red_theme: Iterable[str],
    ) -> None:
        self.red_rgb = frozenset(_rgb6(s) for s in red_rgb)
        self.red_indexed = frozenset(str(s) for s in red_indexed)
        self.red_theme = frozenset(str(s) for s in red_theme)

    def is_red(self, color: ColorRef | None) -> bool:
        if color is None or not color.value:
            return False
        if color.kind == "rgb":
            return _rgb6(color.value) in self.red_rgb
        if color.kind == "indexed":
            return color.value in self.red_indexed
        if color.kind == "theme":
            return color.value in self.red_theme
        return False

    def is_marked_locked(self, cell: LockCell) -> bool:
        fill = cell.fill
        if fill is None or not fill.is_solid:
            return False
        if self.is_red(fill.fg_color) or self.is_red(fill.bg_color):
            logger.debug("plate %s: red solid fill at row %d (%s)", cell.plate_number, cell.row_number, fill)
            return True
        return False


class ManualListLockDetector:
    def __init__(self, locked_plates: Iterable[str]) -> None:
        self.locked_plates = frozenset(str(p).strip() for p in locked_plates)

    def is_marked_locked(self, cell: LockCell) -> bool:
        return cell.plate_number in self.locked_plates


class CompositeLockDetector:
    """Locked if any detector says so; the manual list is always evaluated."""

    def __init__(self, fill_detector: FillColorLockDetector | None, manual: ManualListLockDetector) -> None:
        self.fill_detector = fill_detector
        self.manual = manual

    def is_marked_locked(self, cell: LockCell) -> bool:
        by_fill = False
        if self.fill_detector is not None and cell.has_styles:
            by_fill = self.fill_detector.is_marked_locked(cell)
        by_list = self.manual.is_marked_locked(cell)
        if by_fill or by_list:
            logger.info(
                "plate %s is LOCKED (%s)",
                cell.plate_number,
                "red fill" if by_fill else "manual list",
            )
        return by_fill or by_list


def build_lock_detector(config: LockDetectionConfig | None = None) -> CompositeLockDetector:
    config = config or LockDetectionConfig()
    fill_detector = None
    if config.use_cell_fill:
        fill_detector = FillColorLockDetector(config.red_rgb, config.red_indexed, config.red_theme)
    return CompositeLockDetector(fill_detector, ManualListLockDetector(config.manual_locked_plates))

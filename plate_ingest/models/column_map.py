from __future__ import annotations

from dataclasses import dataclass, field

"""ColumnMap and HeaderResolution models.

ColumnMap maps the logical fields of a plate row to zero-based column indices.
It is resolved once per worksheet and never changes afterwards.
"""

__all__ = [
    "FIELD_NAMES",
    "CANONICAL_COLUMN_MAP",
    "ColumnMap",
    "HeaderResolution",
]

FIELD_NAMES: tuple[str, ...] = ("plateNumber", "workHistory", "shelfNumber", "previewImage", "boxSize")


@dataclass(frozen=True)
class ColumnMap:
    plate_number: int = 0
    work_history: int = 1
    shelf_number: int = 2
    preview_image: int = 3
    box_size: int = 4

    def as_dict(self) -> dict[str, int]:
        return {
            "plateNumber": self.plate_number,
            "workHistory": self.work_history,
            "shelfNumber": self.shelf_number,
            "previewImage": self.preview_image,
            "boxSize": self.box_size,
        }

    def indices(self) -> tuple[int, ...]:
        return (self.plate_number, self.work_history, self.shelf_number, self.preview_image, self.box_size)


CANONICAL_COLUMN_MAP = ColumnMap()


@dataclass(frozen=True)
class HeaderResolution:
    """Outcome of header detection for one worksheet.

    ``column_map`` is always the canonical layout. ``detected`` and
    ``match_count`` describe what keyword matching found, for diagnostics.
    """
    column_map: ColumnMap
    data_start_row: int  # 0-based index of the first data row
    header_row: int | None = None  # 0-based index of the detected header row
    match_count: int = 0
    detected: dict[str, int] = field(default_factory=dict)

    @property
    def header_found(self) -> bool:
        return self.header_row is not None

    def to_dict(self) -> dict[str, object]:
        return {
            "headerRow": None if self.header_row is None else self.header_row + 1,
            "dataStartRow": self.data_start_row + 1,
            "matchCount": self.match_count,
            "detectedColumns": dict(self.detected),
            "columnMap": self.column_map.as_dict(),
        }

from __future__ import annotations

from dataclasses import dataclass

from .work_history import WorkHistoryEntry

"""PlateRecord model and its builder.

A PlateRecord is the logical unit reconstructed from one or more physical
spreadsheet rows: the row holding a non-empty plate number plus every
immediately following row whose plate-number cell is empty (merged-cell
continuation rows).

PlateRecordBuilder accumulates those rows and becomes read-only once sealed.
"""

__all__ = [
    "PlateRecord",
    "PlateRecordBuilder",
    "RecordSealedError",
]


class RecordSealedError(RuntimeError):
    """Raised when a sealed PlateRecordBuilder is modified."""


@dataclass(frozen=True)
class PlateRecord:
    plate_number: str
    worksheet: str
    source_rows: tuple[int, ...]  # 1-based sheet row numbers, contiguous
    shelf_number: str | None = None
    box_size: str | None = None
    preview_image_ref: str | None = None
    is_locked: bool = False
    work_history_entries: tuple[WorkHistoryEntry, ...] = ()
    work_history_raw: tuple[str, ...] = ()  # untouched cell texts, one per contributing row

    @property
    def first_row(self) -> int:
        return self.source_rows[0]

    @property
    def last_row(self) -> int:
        return self.source_rows[-1]

    @property
    def work_history_combined(self) -> str:
        return "; ".join(self.work_history_raw)


class PlateRecordBuilder:
    """Mutable accumulator for one plate; ``seal()`` turns it into a PlateRecord.

    Shelf number and preview image follow a first-non-empty-wins policy: a
    continuation row only fills them in when they are still unset.
    """

    def __init__(
        self,
        plate_number: str,
        worksheet: str,
        row_number: int,
        *,
        shelf_number: str = "",
        box_size: str = "",
        preview_image: str = "",
        is_locked: bool = False,
    ) -> None:
        if not plate_number:
            raise ValueError("plate_number must be non-empty")
        self.plate_number = plate_number
        self.worksheet = worksheet
        self._rows: list[int] = [row_number]
        self._shelf_number = shelf_number or None
        self._box_size = box_size or None
        self._preview_image = preview_image or None
        self._is_locked = is_locked
        self._entries: list[WorkHistoryEntry] = []
        self._raw: list[str] = []
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def source_rows(self) -> tuple[int, ...]:
        return tuple(self._rows)

    def _check_open(self) -> None:
        if self._sealed:
            raise RecordSealedError(f"plate {self.plate_number} is sealed")

    def add_work_history(self, raw: str, entries: list[WorkHistoryEntry]) -> None:
        self._check_open()
        if raw:
            self._raw.append(raw)
        self._entries.extend(entries)

    def add_continuation_row(
        self,
        row_number: int,
        *,
        shelf_number: str = "",
        preview_image: str = "",
    ) -> None:
        self._check_open()
        # fully blank rows are skipped upstream, so gaps are allowed but order is not
        if row_number <= self._rows[-1]:
            raise ValueError(
                f"plate {self.plate_number}: row {row_number} is not after row {self._rows[-1]}"
            )
        self._rows.append(row_number)
        if self._shelf_number is None and shelf_number:
            self._shelf_number = shelf_number
        if self._preview_image is None and preview_image:
            self._preview_image = preview_image

    def seal(self) -> PlateRecord:
        self._check_open()
        self._sealed = True
        return PlateRecord(
            plate_number=self.plate_number,
            worksheet=self.worksheet,
            source_rows=tuple(self._rows),
            shelf_number=self._shelf_number,
            box_size=self._box_size,
            preview_image_ref=self._preview_image,
            is_locked=self._is_locked,
            work_history_entries=tuple(self._entries),
            work_history_raw=tuple(self._raw),
        )

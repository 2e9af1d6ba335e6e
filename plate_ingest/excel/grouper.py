from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from ..errors import DuplicatePlateNumberError
from ..models.column_map import ColumnMap, HeaderResolution
from ..models.plate_record import PlateRecord, PlateRecordBuilder
from .lock_status import LockCell, LockDetector
from .reader import WorksheetData
from .work_history import tokenize_work_history

"""Row grouper.

Walks data rows in sheet order and rebuilds one PlateRecord per merged
plate-number cell:

- a row whose mapped cells are all empty is skipped
- a non-empty plate-number cell seals the active record (if any) and starts a new one
- an empty plate-number cell continues the active record
- an empty plate-number cell with no active record is orphan data and ignored

Lock status is evaluated once, on the row that starts a record.
"""

__all__ = [
    "GrouperState",
    "group_rows",
]

logger = logging.getLogger(__name__)


class GrouperState(Enum):
    NO_ACTIVE_PLATE = "NoActivePlate"
    ACTIVE_PLATE = "ActivePlate"


def _mapped_cells(sheet: WorksheetData, row_index: int, columns: ColumnMap) -> dict[str, str]:
    return {
        "plateNumber": sheet.cell(row_index, columns.plate_number),
        "workHistory": sheet.cell(row_index, columns.work_history),
        "shelfNumber": sheet.cell(row_index, columns.shelf_number),
        "previewImage": sheet.cell(row_index, columns.preview_image),
        "boxSize": sheet.cell(row_index, columns.box_size),
    }


def _check_duplicates(records: Sequence[PlateRecord]) -> None:
    seen: dict[str, list[int]] = {}
    for record in records:
        seen.setdefault(record.plate_number, []).append(record.first_row)
    duplicates = {num: rows for num, rows in seen.items() if len(rows) > 1}
    if duplicates:
        raise DuplicatePlateNumberError(duplicates)


def group_rows(
    sheet: WorksheetData,
    resolution: HeaderResolution,
    lock_detector: LockDetector,
) -> list[PlateRecord]:
    """Group worksheet rows into sealed PlateRecords, in row order.

    Raises:
        DuplicatePlateNumberError: a plate number starts more than one record
    """
    columns = resolution.column_map
    records: list[PlateRecord] = []
    active: PlateRecordBuilder | None = None
    state = GrouperState.NO_ACTIVE_PLATE
    skipped_blank = 0
    orphan_rows: list[int] = []

    for row_index in range(resolution.data_start_row, len(sheet.rows)):
        row_number = row_index + 1
        cells = _mapped_cells(sheet, row_index, columns)
        if not any(cells.values()):
            skipped_blank += 1
            continue

        plate_number = cells["plateNumber"]
        work_history = cells["workHistory"]

        if plate_number:
            if active is not None:
                records.append(active.seal())
            is_locked = lock_detector.is_marked_locked(
                LockCell(
                    plate_number=plate_number,
                    row_number=row_number,
                    fill=sheet.fill_at(row_index, columns.plate_number),
                    has_styles=sheet.has_styles,
                )
            )
            active = PlateRecordBuilder(
                plate_number,
                sheet.name,
                row_number,
                shelf_number=cells["shelfNumber"],
                box_size=cells["boxSize"],
                preview_image=cells["previewImage"],
                is_locked=is_locked,
            )
            state = GrouperState.ACTIVE_PLATE
        elif state is GrouperState.ACTIVE_PLATE and active is not None:
            active.add_continuation_row(
                row_number,
                shelf_number=cells["shelfNumber"],
                preview_image=cells["previewImage"],
            )
        else:
            orphan_rows.append(row_number)
            continue

        if work_history:
            active.add_work_history(work_history, tokenize_work_history(work_history))
        logger.debug("row %d -> plate %s %s", row_number, active.plate_number, cells)

    if active is not None:
        records.append(active.seal())

    if orphan_rows:
        logger.warning(
            "sheet=%s ignored %d row(s) before the first plate number: %s",
            sheet.name,
            len(orphan_rows),
            orphan_rows,
        )
    data_rows = max(len(sheet.rows) - resolution.data_start_row, 0)
    logger.info(
        "sheet=%s grouped %d data rows into %d plates (blank=%d orphan=%d)",
        sheet.name,
        data_rows,
        len(records),
        skipped_blank,
        len(orphan_rows),
    )
    _check_duplicates(records)
    return records

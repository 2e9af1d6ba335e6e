"""Spreadsheet side of the pipeline: reading, header resolution, tokenizing, lock detection, grouping."""

from .grouper import group_rows
from .header import resolve_columns
from .lock_status import build_lock_detector
from .reader import WorksheetData, list_worksheets, read_workbook
from .work_history import tokenize_work_history

__all__ = [
    "WorksheetData",
    "build_lock_detector",
    "group_rows",
    "list_worksheets",
    "read_workbook",
    "resolve_columns",
    "tokenize_work_history",
]

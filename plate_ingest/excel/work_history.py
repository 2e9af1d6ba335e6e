from __future__ import annotations

import re

from ..models.work_history import WorkHistoryEntry

__all__ = [
    "SEGMENT_SPLIT",
    "PROJECT_ENTRY",
    "tokenize_work_history",
]

SEGMENT_SPLIT = re.compile(r"[,;]")
# "A: -4961_061" -> project A, work order "-4961_061"
PROJECT_ENTRY = re.compile(r"^([A-Z]):\s*(.+)$")


def tokenize_work_history(text: str | None) -> list[WorkHistoryEntry]:
    """Split a work-history cell into entries.

    Segments are separated by ``,`` or ``;``. Segments shaped like
    ``<LETTER>: <rest>`` become structured entries; anything else is kept as
    an unstructured entry with no project code. Only blank segments are dropped.
    """
    if not text:
        return []
    entries: list[WorkHistoryEntry] = []
    for part in SEGMENT_SPLIT.split(text):
        segment = part.strip()
        if not segment:
            continue
        match = PROJECT_ENTRY.match(segment)
        if match:
            entries.append(
                WorkHistoryEntry(project_code=match.group(1), work_order=match.group(2).strip(), full_entry=segment)
            )
        else:
            entries.append(WorkHistoryEntry(project_code=None, work_order=segment, full_entry=segment))
    return entries

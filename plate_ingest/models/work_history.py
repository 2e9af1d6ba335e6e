from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "WorkHistoryEntry",
]


@dataclass(frozen=True)
class WorkHistoryEntry:
    """One delimited segment of a work-history cell.

    ``project_code`` is the single leading letter of ``"<LETTER>: <rest>"``
    segments and None for unstructured segments.
    """
    project_code: str | None
    work_order: str
    full_entry: str

    def to_dict(self) -> dict[str, str | None]:
        return {
            "projectCode": self.project_code,
            "workOrder": self.work_order,
            "fullEntry": self.full_entry,
        }

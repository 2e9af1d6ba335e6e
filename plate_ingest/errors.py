from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.validation import ValidationReport

"""Exception hierarchy for the ingestion pipeline.

- StructuralInputError: an input the run depends on is missing or unreadable.
  Fatal, raised before anything is written.
- ValidationFailure: the asset tree violates the one-model/one-image rule.
  Fatal, but only raised after every folder has been checked.
"""

__all__ = [
    "IngestError",
    "StructuralInputError",
    "DuplicatePlateNumberError",
    "ValidationFailure",
]


class IngestError(Exception):
    """Base exception for ingestion errors."""
    pass


class StructuralInputError(IngestError):
    """Info file, worksheet or asset root missing or unreadable."""
    pass


class DuplicatePlateNumberError(StructuralInputError):
    """The same plate number starts more than one record."""

    def __init__(self, duplicates: dict[str, list[int]]) -> None:
        self.duplicates = duplicates
        listing = ", ".join(f"{num} (rows {', '.join(map(str, rows))})" for num, rows in duplicates.items())
        super().__init__(f"duplicate plate numbers: {listing}")


class ValidationFailure(IngestError):
    """Asset folder validation failed; carries the complete report."""

    def __init__(self, report: ValidationReport, message: str | None = None) -> None:
        self.report = report
        super().__init__(
            message
            or f"model folder validation failed: {report.invalid_folders} of {report.total_folders} folders invalid"
        )

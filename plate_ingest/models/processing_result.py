from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .validation import ValidationReport

"""Run result model for one ingestion pipeline invocation."""

__all__ = [
    "RunResult",
]


@dataclass(frozen=True)
class RunResult:
    """Aggregated outcome of a successful run, used for the SUMMARY line."""
    output_path: Path
    total_plates: int
    linked_plates: int
    locked_plates: int
    plates_with_history: int
    validation: ValidationReport
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    copied_previews: int = 0

    @property
    def unlinked_plates(self) -> int:
        return self.total_plates - self.linked_plates

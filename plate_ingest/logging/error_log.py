from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.issue_record import RUN_LEVEL, IssueRecord
from ..models.validation import ValidationReport

"""Issue log buffering.

Folder validation issues and fatal run errors are buffered in memory and
written as JSON Lines to ``logs/issues-YYYYMMDD-HHMMSS.log`` (UTC) on flush.
The file is only created when there is something to write. A failed
validation also leaves its full report in ``logs/validation-*.json``.
"""

__all__ = [
    "IssueRecord",
    "IssueLogBuffer",
    "records_from_report",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


def records_from_report(report: ValidationReport, source: str) -> list[IssueRecord]:
    return [
        IssueRecord.create(source=source, folder=p.folder_name, kind=p.kind.value, detail=p.detail)
        for p in report.all_problems
    ]


class IssueLogBuffer:
    """In-memory buffer of IssueRecords; ``flush()`` appends them as JSON Lines.

    The file path is fixed on first access, so one run writes one file. The
    full validation report of a failed run goes next to it as
    ``validation-YYYYMMDD-HHMMSS.json`` (same stamp).
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self.logs_dir = logs_dir or LOGS_DIR
        self._records: list[IssueRecord] = []
        self._stamp: str | None = None

    @property
    def stamp(self) -> str:
        if self._stamp is None:
            self._stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
        return self._stamp

    @property
    def file_path(self) -> Path:
        return self.logs_dir / f"issues-{self.stamp}.log"

    @property
    def report_path(self) -> Path:
        return self.logs_dir / f"validation-{self.stamp}.json"

    def write_report(self, report: ValidationReport) -> Path:
        """Write the structured report (folder, counts, files, problems) as JSON."""
        fp = self.report_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        fp.write_text(json.dumps(report.to_dict(), ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        return fp

    def append(self, record: IssueRecord) -> None:
        self._records.append(record)

    def extend(self, records: Iterable[IssueRecord]) -> None:
        self._records.extend(records)

    def append_run_error(self, source: str, error: BaseException) -> None:
        self.append(IssueRecord.create(source, RUN_LEVEL, type(error).__name__, str(error)))

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the file path, or None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp

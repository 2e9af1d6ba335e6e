from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""IssueRecord model for the JSON-lines issue log.

Folder-level validation issues and fatal run errors are written one JSON
object per line with a fixed key set. ``folder`` is ``"<RUN>"`` for errors
that do not belong to a single asset folder.
"""

__all__ = [
    "RUN_LEVEL",
    "IssueRecord",
]

RUN_LEVEL = "<RUN>"


@dataclass(frozen=True)
class IssueRecord:
    """Structured issue record.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: spreadsheet or asset root the issue was found in
        folder: asset folder name, or RUN_LEVEL
        kind: issue classification (IssueKind value or error class name)
        detail: human readable description
    """
    timestamp: str
    source: str
    folder: str
    kind: str
    detail: str

    @staticmethod
    def create(source: str, folder: str, kind: str, detail: str) -> IssueRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return IssueRecord(timestamp=ts, source=source, folder=folder, kind=kind, detail=detail)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)

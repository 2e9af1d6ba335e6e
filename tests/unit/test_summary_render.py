from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from plate_ingest.models.processing_result import RunResult
from plate_ingest.models.validation import ValidationReport
from plate_ingest.services.summary import format_elapsed, render_summary_line


def _result(elapsed: float) -> RunResult:
    now = datetime(2024, 1, 1, tzinfo=UTC)
    return RunResult(
        output_path=Path("out/plates.json"),
        total_plates=10,
        linked_plates=8,
        locked_plates=1,
        plates_with_history=6,
        validation=ValidationReport(valid=True, total_folders=9, valid_folders=9),
        start_time=now,
        end_time=now,
        elapsed_seconds=elapsed,
    )


def test_render_summary_line():
    assert render_summary_line(_result(1.5)) == (
        "SUMMARY plates=10 linked=8 locked=1 with_history=6 folders=9/9 elapsed_sec=1.5"
    )


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "0"), (3.0, "3"), (0.0042, "0.0042"), (0.123456, "0.123"), (12.5, "12.5")],
)
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected


def test_unlinked_plates():
    assert _result(0).unlinked_plates == 2

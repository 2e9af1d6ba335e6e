from __future__ import annotations

from ..models.processing_result import RunResult

"""SUMMARY line rendering.

Format:
SUMMARY plates={total} linked={linked} locked={locked} with_history={history}
folders={valid}/{total_folders} elapsed_sec={elapsed}
"""

__all__ = [
    "format_elapsed",
    "render_summary_line",
]


def format_elapsed(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very short runs
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a successful run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from pathlib import Path
        >>> from plate_ingest.models.validation import ValidationReport
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> report = ValidationReport(valid=True, total_folders=3, valid_folders=3, issues=(), folders=())
        >>> result = RunResult(
        ...     output_path=Path("out.json"), total_plates=4, linked_plates=3, locked_plates=1,
        ...     plates_with_history=2, validation=report, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY plates=4 linked=3 locked=1 with_history=2 folders=3/3 elapsed_sec=2'
    """
    v = result.validation
    return (
        f"SUMMARY plates={result.total_plates} "
        f"linked={result.linked_plates} "
        f"locked={result.locked_plates} "
        f"with_history={result.plates_with_history} "
        f"folders={v.valid_folders}/{v.total_folders} "
        f"elapsed_sec={format_elapsed(result.elapsed_seconds)}"
    )

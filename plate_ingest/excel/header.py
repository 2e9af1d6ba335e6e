from __future__ import annotations

import logging
from collections.abc import Sequence

from rapidfuzz.distance import Levenshtein

from ..models.column_map import CANONICAL_COLUMN_MAP, FIELD_NAMES, HeaderResolution
from ..models.config_models import HeaderConfig

"""Header/column resolver.

Keyword matching looks for a header row among the first few rows, but the
result only feeds diagnostics and the data start row: the column layout is
always the canonical one (plate number, work history, shelf, preview image,
box size in columns 0-4). The resolver never fails.
"""

__all__ = [
    "MIN_REVERSE_MATCH_LENGTH",
    "matches_any",
    "resolve_columns",
]

logger = logging.getLogger(__name__)

MIN_REVERSE_MATCH_LENGTH = 3


def matches_any(value: str, keywords: Sequence[str], threshold: float) -> bool:
    """True if ``value`` contains a keyword, or (for values of at least
    MIN_REVERSE_MATCH_LENGTH chars) is contained in one or is similar enough.

    Similarity is the normalized Levenshtein similarity (1.0 = equal).
    """
    if not value:
        return False
    for kw in keywords:
        if kw in value:
            return True
        # single letters ("A" shelf, "M" box size) would match almost any keyword
        if len(value) < MIN_REVERSE_MATCH_LENGTH:
            continue
        if value in kw or Levenshtein.normalized_similarity(value, kw) > threshold:
            return True
    return False


def _match_row(row: Sequence[str], config: HeaderConfig) -> dict[str, int]:
    detected: dict[str, int] = {}
    for col_index, raw in enumerate(row):
        value = str(raw).lower().strip()
        if not value:
            continue
        for field_name in FIELD_NAMES:
            if field_name in detected:
                continue
            if matches_any(value, config.keywords.get(field_name, ()), config.similarity_threshold):
                detected[field_name] = col_index
                break
    return detected


def resolve_columns(rows: Sequence[Sequence[str]], config: HeaderConfig | None = None) -> HeaderResolution:
    """Locate the header row and return the (fixed) column layout.

    Args:
        rows: worksheet rows as cell strings; only the first ``scan_rows`` are inspected
        config: keyword sets and thresholds

    Returns:
        HeaderResolution whose column map is always canonical. ``data_start_row``
        is the row after the detected header, or ``fallback_data_start_row``.
    """
    config = config or HeaderConfig()
    for row_index, row in enumerate(rows[: config.scan_rows]):
        if not row or not any(str(c).strip() for c in row):
            continue
        detected = _match_row(row, config)
        if len(detected) >= config.min_matches:
            logger.info(
                "header row %d detected (%d fields matched: %s); using canonical column layout",
                row_index + 1,
                len(detected),
                detected,
            )
            return HeaderResolution(
                column_map=CANONICAL_COLUMN_MAP,
                data_start_row=row_index + 1,
                header_row=row_index,
                match_count=len(detected),
                detected=detected,
            )

    logger.info(
        "no header row found in first %d rows; using canonical column layout from row %d",
        config.scan_rows,
        config.fallback_data_start_row + 1,
    )
    return HeaderResolution(
        column_map=CANONICAL_COLUMN_MAP,
        data_start_row=config.fallback_data_start_row,
    )

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from ..assets.filesystem import FileSystemReader, LocalFileSystem
from ..assets.scanner import validate_asset_root
from ..errors import IngestError, ValidationFailure
from ..excel.grouper import group_rows
from ..excel.header import resolve_columns
from ..excel.lock_status import build_lock_detector
from ..excel.reader import WorksheetData, read_workbook
from ..logging.error_log import IssueLogBuffer, records_from_report
from ..models.column_map import HeaderResolution
from ..models.config_models import IngestConfig
from ..models.plate_record import PlateRecord
from ..models.processing_result import RunResult
from .index_builder import build_inventory_document, generate_plate_id
from .matcher import match_plates
from .writer import InventoryWriter

"""Pipeline orchestration.

Stages run in a fixed order and the run fails closed:

1. read the worksheet and resolve the header (diagnostic)
2. group rows into PlateRecords (lock status per record)
3. scan and validate the asset root; any invalid folder stops the run
4. match records to model folders by exact name
5. copy previews, build the inventory document and write it

Nothing is written to the output directory unless step 3 passed. Validation
issues and fatal errors are flushed to the JSON-lines issue log; a failed
validation also writes the full report as JSON next to it. I/O failures
after the gate surface as StructuralInputError with staged previews removed.
"""

__all__ = [
    "SpreadsheetView",
    "inspect_spreadsheet",
    "run_pipeline",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpreadsheetView:
    sheet: WorksheetData
    resolution: HeaderResolution
    records: list[PlateRecord]


def inspect_spreadsheet(config: IngestConfig) -> SpreadsheetView:
    """Read, resolve and group the info file without touching the asset tree.

    Raises:
        StructuralInputError: info file or worksheet missing/unreadable, or
            duplicate plate numbers
    """
    info_file = Path(config.info_file)
    sheet = read_workbook(
        info_file,
        config.worksheet,
        include_styles=config.lock_detection.use_cell_fill,
    )
    logger.info("reading plates from %s [%s] (%d rows)", info_file, sheet.name, len(sheet.rows))
    resolution = resolve_columns(sheet.rows, config.header)
    records = group_rows(sheet, resolution, build_lock_detector(config.lock_detection))
    return SpreadsheetView(sheet=sheet, resolution=resolution, records=records)


def run_pipeline(
    config: IngestConfig,
    *,
    fs: FileSystemReader | None = None,
    issue_log: IssueLogBuffer | None = None,
    id_factory: Callable[[], str] = generate_plate_id,
    now: datetime | None = None,
) -> RunResult:
    """Run one ingestion and return its summary.

    Raises:
        StructuralInputError: fatal input problem (nothing written)
        ValidationFailure: asset tree invalid; carries the full report (nothing written)
    """
    start_time = datetime.now(UTC)
    fs = fs or LocalFileSystem()
    issue_log = issue_log or IssueLogBuffer()
    asset_root = Path(config.asset_root)

    try:
        view = inspect_spreadsheet(config)
        report = validate_asset_root(asset_root, config.extensions, fs)
        if not report.valid:
            raise ValidationFailure(report)

        match = match_plates(view.records, report.descriptors)

        writer = InventoryWriter(
            Path(config.output_directory),
            file_prefix=config.output.file_prefix,
            fs=fs,
            now=now,
        )
        preview_refs: dict[str, str] = {}
        if config.output.copy_previews:
            preview_refs = writer.copy_previews(match.plates, asset_root, report)
        document = build_inventory_document(
            match.plates,
            info_file=config.info_file,
            worksheet=view.sheet.name,
            asset_root=config.asset_root,
            resolution=view.resolution,
            validation=report,
            preview_refs=preview_refs,
            id_factory=id_factory,
            generated_at=now,
        )
        output_path = writer.write(document, report)
    except ValidationFailure as e:
        issue_log.extend(records_from_report(e.report, config.asset_root))
        log_path = issue_log.flush()
        report_path = issue_log.write_report(e.report)
        logger.error("%s (issue log: %s, report: %s)", e, log_path, report_path)
        raise
    except IngestError as e:
        issue_log.append_run_error(config.info_file, e)
        log_path = issue_log.flush()
        logger.error("%s (issue log: %s)", e, log_path)
        raise

    end_time = datetime.now(UTC)
    records = view.records
    return RunResult(
        output_path=output_path,
        total_plates=len(records),
        linked_plates=match.linked,
        locked_plates=sum(1 for r in records if r.is_locked),
        plates_with_history=sum(1 for r in records if r.work_history_entries),
        validation=report,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        copied_previews=len(preview_refs),
    )

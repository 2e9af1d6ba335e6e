"""Domain models for the plate inventory ingestion pipeline.

All models are immutable once the stage producing them completes; the only
mutable type is PlateRecordBuilder, which is sealed into a PlateRecord.
"""

from .column_map import CANONICAL_COLUMN_MAP, ColumnMap, HeaderResolution
from .config_models import (
    ExtensionConfig,
    HeaderConfig,
    IngestConfig,
    LockDetectionConfig,
    OutputConfig,
)
from .matched_plate import Health, MatchedPlate, Occupancy
from .model_file import FileKind, ModelFileDescriptor
from .plate_record import PlateRecord, PlateRecordBuilder, RecordSealedError
from .validation import FolderIssue, FolderScan, IssueKind, ValidationIssue, ValidationReport
from .work_history import WorkHistoryEntry

__all__ = [
    # Configuration models
    "ExtensionConfig",
    "HeaderConfig",
    "IngestConfig",
    "LockDetectionConfig",
    "OutputConfig",
    # Spreadsheet models
    "CANONICAL_COLUMN_MAP",
    "ColumnMap",
    "HeaderResolution",
    "PlateRecord",
    "PlateRecordBuilder",
    "RecordSealedError",
    "WorkHistoryEntry",
    # Asset models
    "FileKind",
    "FolderIssue",
    "FolderScan",
    "IssueKind",
    "ModelFileDescriptor",
    "ValidationIssue",
    "ValidationReport",
    # Matching models
    "Health",
    "MatchedPlate",
    "Occupancy",
]

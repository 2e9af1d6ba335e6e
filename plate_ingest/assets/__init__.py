"""Asset-folder side of the pipeline: filesystem access, scanning and validation."""

from .filesystem import DirEntry, FileSystemReader, LocalFileSystem
from .report import format_issue_report
from .scanner import classify_file, scan_folder, validate_asset_root

__all__ = [
    "DirEntry",
    "FileSystemReader",
    "LocalFileSystem",
    "classify_file",
    "format_issue_report",
    "scan_folder",
    "validate_asset_root",
]

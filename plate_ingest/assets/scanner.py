from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from ..errors import StructuralInputError
from ..models.config_models import ExtensionConfig
from ..models.model_file import FileKind, ModelFileDescriptor
from ..models.validation import FolderIssue, FolderScan, IssueKind, ValidationIssue, ValidationReport
from ..services.progress import ProgressTracker
from .filesystem import FileSystemReader, LocalFileSystem

"""Asset-folder scanner & validator.

The asset root holds one sub-directory per plate, named exactly like the
plate number. Every folder must contain exactly one model file and exactly one
preview image. All folders are scanned before a verdict is returned, so a
single report lists every problem.
"""

__all__ = [
    "classify_file",
    "scan_folder",
    "validate_asset_root",
]

logger = logging.getLogger(__name__)


def classify_file(file_name: str, extensions: ExtensionConfig) -> FileKind | None:
    ext = PurePosixPath(file_name).suffix.lower()
    if ext in extensions.model:
        return FileKind.MODEL
    if ext in extensions.image:
        return FileKind.IMAGE
    return None


def scan_folder(
    folder: Path,
    extensions: ExtensionConfig,
    fs: FileSystemReader,
) -> FolderScan:
    """Classify the files directly inside one plate folder."""
    model_files: list[str] = []
    image_files: list[str] = []
    descriptors: list[ModelFileDescriptor] = []
    try:
        entries = fs.list_dir(folder)
    except OSError as e:
        raise StructuralInputError(f"cannot list asset folder {folder}: {e}") from e
    for entry in entries:
        if not entry.is_file:
            continue
        kind = classify_file(entry.name, extensions)
        if kind is None:
            continue
        if kind is FileKind.MODEL:
            model_files.append(entry.name)
        else:
            image_files.append(entry.name)
        descriptors.append(
            ModelFileDescriptor(
                folder_name=folder.name,
                file_name=entry.name,
                relative_path=f"{folder.name}/{entry.name}",
                kind=kind,
            )
        )
    return FolderScan(
        folder_name=folder.name,
        path=str(folder),
        model_files=tuple(model_files),
        image_files=tuple(image_files),
        descriptors=tuple(descriptors),
    )


def _folder_problems(scan: FolderScan) -> list[ValidationIssue]:
    problems: list[ValidationIssue] = []
    name = scan.folder_name
    if scan.model_count == 0:
        problems.append(ValidationIssue(IssueKind.MISSING_MODEL, name, "No model file found"))
    elif scan.model_count > 1:
        problems.append(
            ValidationIssue(
                IssueKind.MULTIPLE_MODELS,
                name,
                f"Multiple model files found: {', '.join(scan.model_files)}",
            )
        )
    if scan.image_count == 0:
        problems.append(ValidationIssue(IssueKind.MISSING_IMAGE, name, "No preview image found"))
    elif scan.image_count > 1:
        problems.append(
            ValidationIssue(
                IssueKind.MULTIPLE_IMAGES,
                name,
                f"Multiple images found: {', '.join(scan.image_files)}",
            )
        )
    return problems


def validate_asset_root(
    asset_root: Path,
    extensions: ExtensionConfig | None = None,
    fs: FileSystemReader | None = None,
) -> ValidationReport:
    """Scan and validate every immediate sub-directory of ``asset_root``.

    Raises:
        StructuralInputError: asset root missing, not a directory or unreadable
    """
    extensions = extensions or ExtensionConfig()
    fs = fs or LocalFileSystem()

    if not fs.exists(asset_root):
        raise StructuralInputError(f"asset root not found: {asset_root}")
    if not fs.is_dir(asset_root):
        raise StructuralInputError(f"asset root is not a directory: {asset_root}")
    try:
        entries = fs.list_dir(asset_root)
    except OSError as e:
        raise StructuralInputError(f"cannot list asset root {asset_root}: {e}") from e

    folders = [e for e in entries if e.is_dir]
    stray = [e.name for e in entries if not e.is_dir]
    if stray:
        logger.debug("asset root has %d loose file(s), ignored: %s", len(stray), stray)
    logger.info("scanning %d model folder(s) under %s", len(folders), asset_root)

    scans: list[FolderScan] = []
    issues: list[FolderIssue] = []
    with ProgressTracker(len(folders), description="Scanning folders", unit="folder") as progress:
        for entry in folders:
            progress.start_item(entry.name)
            scan = scan_folder(entry.path, extensions, fs)
            scans.append(scan)
            problems = _folder_problems(scan)
            if problems:
                issues.append(
                    FolderIssue(
                        folder_name=scan.folder_name,
                        path=scan.path,
                        model_count=scan.model_count,
                        image_count=scan.image_count,
                        model_files=scan.model_files,
                        image_files=scan.image_files,
                        problems=tuple(problems),
                    )
                )
            progress.finish_item(success=not problems)

    report = ValidationReport(
        valid=not issues,
        total_folders=len(scans),
        valid_folders=len(scans) - len(issues),
        issues=tuple(issues),
        folders=tuple(scans),
    )
    if issues:
        logger.warning(
            "model folder validation found issues: total=%d valid=%d invalid=%d",
            report.total_folders,
            report.valid_folders,
            report.invalid_folders,
        )
    else:
        logger.info("model folder validation passed: %d folder(s)", report.total_folders)
    return report

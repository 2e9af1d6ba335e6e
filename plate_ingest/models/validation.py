from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .model_file import ModelFileDescriptor

"""Validation models for the asset-folder scanner.

A folder is valid iff it holds exactly one model file and exactly one image.
Issues are accumulated for every folder; ``ValidationReport.issues`` holds one
FolderIssue per failing folder, each carrying one ValidationIssue per broken
rule (a folder can miss its model and have two images at the same time).
"""

__all__ = [
    "IssueKind",
    "ValidationIssue",
    "FolderScan",
    "FolderIssue",
    "ValidationReport",
]


class IssueKind(Enum):
    """Per-folder rule violations.

    - MISSING_MODEL: no file with a model extension
    - MULTIPLE_MODELS: more than one model file
    - MISSING_IMAGE: no preview image
    - MULTIPLE_IMAGES: more than one preview image
    """
    MISSING_MODEL = "MissingModel"
    MULTIPLE_MODELS = "MultipleModels"
    MISSING_IMAGE = "MissingImage"
    MULTIPLE_IMAGES = "MultipleImages"


@dataclass(frozen=True)
class ValidationIssue:
    kind: IssueKind
    folder_name: str
    detail: str

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "folderName": self.folder_name, "detail": self.detail}


@dataclass(frozen=True)
class FolderScan:
    """Classified contents of one asset folder."""
    folder_name: str
    path: str
    model_files: tuple[str, ...] = ()
    image_files: tuple[str, ...] = ()
    descriptors: tuple[ModelFileDescriptor, ...] = ()

    @property
    def model_count(self) -> int:
        return len(self.model_files)

    @property
    def image_count(self) -> int:
        return len(self.image_files)

    @property
    def valid(self) -> bool:
        return self.model_count == 1 and self.image_count == 1


@dataclass(frozen=True)
class FolderIssue:
    folder_name: str
    path: str
    model_count: int
    image_count: int
    model_files: tuple[str, ...]
    image_files: tuple[str, ...]
    problems: tuple[ValidationIssue, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "folder": self.folder_name,
            "path": self.path,
            "modelCount": self.model_count,
            "imageCount": self.image_count,
            "modelFiles": list(self.model_files),
            "imageFiles": list(self.image_files),
            "problems": [p.to_dict() for p in self.problems],
        }


@dataclass(frozen=True)
class ValidationReport:
    valid: bool
    total_folders: int
    valid_folders: int
    issues: tuple[FolderIssue, ...] = ()
    folders: tuple[FolderScan, ...] = field(default=(), repr=False)

    @property
    def invalid_folders(self) -> int:
        return len(self.issues)

    @property
    def all_problems(self) -> list[ValidationIssue]:
        return [p for issue in self.issues for p in issue.problems]

    @property
    def descriptors(self) -> list[ModelFileDescriptor]:
        return [d for folder in self.folders for d in folder.descriptors]

    def counts_by_kind(self) -> dict[IssueKind, int]:
        counts = {kind: 0 for kind in IssueKind}
        for problem in self.all_problems:
            counts[problem.kind] += 1
        return counts

    def to_dict(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "totalFolders": self.total_folders,
            "validFolders": self.valid_folders,
            "invalidFolders": self.invalid_folders,
            "issues": [i.to_dict() for i in self.issues],
        }

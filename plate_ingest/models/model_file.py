from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""ModelFileDescriptor domain model and FileKind enum.

One asset folder yields zero or more descriptors; a valid folder yields
exactly one MODEL and one IMAGE descriptor.
"""

__all__ = [
    "FileKind",
    "ModelFileDescriptor",
]


class FileKind(Enum):
    MODEL = "model"
    IMAGE = "image"


@dataclass(frozen=True)
class ModelFileDescriptor:
    folder_name: str  # immediate sub-directory of the asset root
    file_name: str
    relative_path: str  # "<folder>/<file>", always forward slashes
    kind: FileKind

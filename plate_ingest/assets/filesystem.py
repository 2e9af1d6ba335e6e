from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

"""Filesystem reader abstraction used by the asset scanner and preview copier."""

__all__ = [
    "DirEntry",
    "FileSystemReader",
    "LocalFileSystem",
]


@dataclass(frozen=True)
class DirEntry:
    name: str
    path: Path
    is_dir: bool
    is_file: bool


class FileSystemReader(Protocol):
    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def list_dir(self, path: Path) -> list[DirEntry]: ...

    def copy_file(self, source: Path, target: Path) -> None: ...


class LocalFileSystem:
    """FileSystemReader over the local disk. Listings are sorted by name."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def list_dir(self, path: Path) -> list[DirEntry]:
        entries = [
            DirEntry(name=p.name, path=p, is_dir=p.is_dir(), is_file=p.is_file())
            for p in path.iterdir()
        ]
        return sorted(entries, key=lambda e: e.name)

    def copy_file(self, source: Path, target: Path) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)

from __future__ import annotations

import json
import logging
import shutil
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..assets.filesystem import FileSystemReader, LocalFileSystem
from ..errors import StructuralInputError, ValidationFailure
from ..models.matched_plate import MatchedPlate
from ..models.validation import ValidationReport

"""Inventory writer.

Each run writes one new document ``<prefix>_<UTC timestamp>.json``; an
existing file is never overwritten (exclusive create, numbered suffix on
collision). Preview images of linked folders are copied into a run-specific
``previews/<document stem>/`` directory. Nothing is written unless the asset
validation report is valid.
"""

__all__ = [
    "TIMESTAMP_FMT",
    "InventoryWriter",
]

logger = logging.getLogger(__name__)

TIMESTAMP_FMT = "%Y%m%dT%H%M%S_%fZ"
PREVIEWS_DIR = "previews"


def _require_valid(validation: ValidationReport) -> None:
    if not validation.valid:
        raise ValidationFailure(validation, "refusing to write inventory: model folder validation failed")


class InventoryWriter:
    def __init__(
        self,
        output_directory: Path,
        *,
        file_prefix: str = "plates_inventory",
        fs: FileSystemReader | None = None,
        now: datetime | None = None,
    ) -> None:
        self.output_directory = output_directory
        self.file_prefix = file_prefix
        self.fs = fs or LocalFileSystem()
        stamp = (now or datetime.now(UTC)).strftime(TIMESTAMP_FMT)
        self.stem = self._free_stem(f"{file_prefix}_{stamp}")

    def _free_stem(self, base: str) -> str:
        stem, n = base, 0
        while (self.output_directory / f"{stem}.json").exists() or (
            self.output_directory / PREVIEWS_DIR / stem
        ).exists():
            n += 1
            stem = f"{base}-{n}"
        return stem

    @property
    def output_path(self) -> Path:
        return self.output_directory / f"{self.stem}.json"

    @property
    def previews_directory(self) -> Path:
        return self.output_directory / PREVIEWS_DIR / self.stem

    def discard_previews(self) -> None:
        """Remove this run's previews directory (used when the run aborts)."""
        if self.previews_directory.is_dir():
            shutil.rmtree(self.previews_directory)
            logger.info("removed staged previews: %s", self.previews_directory)

    def copy_previews(
        self,
        plates: Sequence[MatchedPlate],
        asset_root: Path,
        validation: ValidationReport,
    ) -> dict[str, str]:
        """Copy each linked folder's image; returns plate number -> path relative to the output dir.

        Raises:
            ValidationFailure: validation report is not valid (nothing copied)
            StructuralInputError: a copy failed; previews copied so far are removed
        """
        _require_valid(validation)
        refs: dict[str, str] = {}
        try:
            for plate in plates:
                image = plate.folder_image
                if plate.linked_model is None or image is None:
                    continue
                source = asset_root / image.folder_name / image.file_name
                target = self.previews_directory / f"{image.folder_name}_{image.file_name}"
                self.fs.copy_file(source, target)
                refs[plate.plate_number] = target.relative_to(self.output_directory).as_posix()
        except OSError as e:
            self.discard_previews()
            raise StructuralInputError(f"cannot copy preview images to {self.previews_directory}: {e}") from e
        logger.info("copied %d preview image(s) to %s", len(refs), self.previews_directory)
        return refs

    def write(self, document: dict[str, Any], validation: ValidationReport) -> Path:
        """Serialize ``document`` to a new timestamped file and return its path.

        On failure the run's previews are removed as well, so an aborted run
        leaves nothing behind.

        Raises:
            ValidationFailure: validation report is not valid (nothing written)
            StructuralInputError: the output could not be written, including the
                reserved file name being taken concurrently
        """
        _require_valid(validation)
        payload = json.dumps(document, ensure_ascii=False, indent=2)
        path = self.output_path
        created = False
        try:
            self.output_directory.mkdir(parents=True, exist_ok=True)
            with path.open("x", encoding="utf-8") as f:
                created = True
                f.write(payload)
                f.write("\n")
        except OSError as e:
            if created:
                path.unlink(missing_ok=True)
            self.discard_previews()
            raise StructuralInputError(f"cannot write inventory document {path}: {e}") from e
        logger.info("saved inventory document: %s (%d plates)", path, len(document.get("plates", [])))
        return path

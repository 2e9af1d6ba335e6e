from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ..models.matched_plate import MatchedPlate
from ..models.model_file import FileKind, ModelFileDescriptor
from ..models.plate_record import PlateRecord

"""Plate-to-model matcher.

A plate links to the folder whose name is exactly its plate number: no case
folding, no trimming, no partial matches, no shelf-based fallback. Plate "12"
never picks up folder "12A".
"""

__all__ = [
    "FolderAssets",
    "MatchResult",
    "index_folders",
    "match_plates",
    "no_model_status",
]

logger = logging.getLogger(__name__)


@dataclass
class FolderAssets:
    models: list[ModelFileDescriptor] = field(default_factory=list)
    images: list[ModelFileDescriptor] = field(default_factory=list)


@dataclass(frozen=True)
class MatchResult:
    plates: tuple[MatchedPlate, ...]
    # folder name -> first rows of the records claiming it, when more than one does
    conflicts: dict[str, tuple[int, ...]] = field(default_factory=dict)

    @property
    def linked(self) -> int:
        return sum(1 for p in self.plates if p.is_linked)


def no_model_status(plate_number: str) -> str:
    return f"No model folder found for plate {plate_number}"


def index_folders(descriptors: Iterable[ModelFileDescriptor]) -> dict[str, FolderAssets]:
    """Group descriptors by folder name, keeping scan order within a folder."""
    folders: dict[str, FolderAssets] = {}
    for d in descriptors:
        assets = folders.setdefault(d.folder_name, FolderAssets())
        if d.kind is FileKind.MODEL:
            assets.models.append(d)
        else:
            assets.images.append(d)
    return folders


def match_plates(
    records: Sequence[PlateRecord],
    descriptors: Iterable[ModelFileDescriptor],
) -> MatchResult:
    """Link every record to at most one model folder by exact name.

    Two records with the same plate number both link to the folder; the
    collision is reported in ``MatchResult.conflicts`` and logged. Within
    ``run_pipeline`` this never happens: ``group_rows`` already raised
    DuplicatePlateNumberError, so ``conflicts`` is only populated for callers
    that build their own records.
    """
    folders = index_folders(descriptors)
    matched: list[MatchedPlate] = []
    claims: dict[str, list[int]] = {}

    for record in records:
        assets = folders.get(record.plate_number)
        if assets is None or not assets.models:
            status = no_model_status(record.plate_number)
            logger.info("plate %s: %s", record.plate_number, status)
            matched.append(MatchedPlate(record=record, model_status=status))
            continue
        claims.setdefault(record.plate_number, []).append(record.first_row)
        matched.append(
            MatchedPlate(
                record=record,
                linked_model=assets.models[0],
                model_files=tuple(assets.models),
                folder_image=assets.images[0] if assets.images else None,
            )
        )

    conflicts = {folder: tuple(rows) for folder, rows in claims.items() if len(rows) > 1}
    for folder, rows in conflicts.items():
        logger.warning("model folder %s is claimed by %d plate records (rows %s)", folder, len(rows), list(rows))

    result = MatchResult(plates=tuple(matched), conflicts=conflicts)
    logger.info("matched plates with models: total=%d linked=%d", len(matched), result.linked)
    return result

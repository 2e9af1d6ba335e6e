from __future__ import annotations

import uuid
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from ..models.column_map import HeaderResolution
from ..models.matched_plate import MatchedPlate, Occupancy
from ..models.validation import ValidationReport

"""Inventory document assembly.

Turns matched plates into the output document
``{metadata, plates, modelIndex, workHistoryIndex}``:

- every plate gets an opaque id, derived health and ``occupancy="free"``
- modelIndex: model relative path -> plates using it (with primary flag)
- workHistoryIndex: normalized work order -> plates that worked on it
"""

__all__ = [
    "UNKNOWN",
    "generate_plate_id",
    "normalize_work_order",
    "plate_entry",
    "build_model_index",
    "build_work_history_index",
    "build_inventory_document",
]

UNKNOWN = "Unknown"


def generate_plate_id() -> str:
    return f"PL-{uuid.uuid4().hex[:12]}"


def normalize_work_order(work_order: str) -> str:
    """Index key for a work order: whitespace collapsed, upper-cased."""
    return " ".join(work_order.split()).upper()


def _preview_for(plate: MatchedPlate, preview_refs: Mapping[str, str]) -> str | None:
    if plate.plate_number in preview_refs:
        return preview_refs[plate.plate_number]
    if plate.folder_image is not None:
        return plate.folder_image.relative_path
    return plate.record.preview_image_ref


def plate_entry(plate: MatchedPlate, plate_id: str, preview_refs: Mapping[str, str] | None = None) -> dict[str, Any]:
    record = plate.record
    entry: dict[str, Any] = {
        "id": plate_id,
        "plateNumber": record.plate_number,
        "shelfNumber": record.shelf_number or UNKNOWN,
        "boxSize": record.box_size or UNKNOWN,
        "health": plate.health.value,
        "occupancy": Occupancy.FREE.value,
        "isLocked": record.is_locked,
        "currentModelFile": plate.linked_model.relative_path if plate.linked_model else None,
        "modelFiles": [
            {
                "fileName": m.file_name,
                "relativePath": m.relative_path,
                "isPrimary": m == plate.linked_model,
            }
            for m in plate.model_files
        ],
        "previewImage": _preview_for(plate, preview_refs or {}),
        "workHistory": record.work_history_combined,
        "workHistoryEntries": [e.to_dict() for e in record.work_history_entries],
        "notes": "",
        "excelSource": {
            "worksheet": record.worksheet,
            "rows": list(record.source_rows),
            "firstRow": record.first_row,
            "lastRow": record.last_row,
            "rowCount": len(record.source_rows),
        },
    }
    if plate.model_status is not None:
        entry["modelStatus"] = plate.model_status
    return entry


def build_model_index(entries: Sequence[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    index: dict[str, dict[str, Any]] = {}
    for entry in entries:
        for model in entry["modelFiles"]:
            slot = index.setdefault(
                model["relativePath"],
                {
                    "fileName": model["fileName"],
                    "relativePath": model["relativePath"],
                    "folderName": model["relativePath"].split("/", 1)[0],
                    "usedByPlates": [],
                },
            )
            slot["usedByPlates"].append(
                {
                    "plateId": entry["id"],
                    "plateNumber": entry["plateNumber"],
                    "shelfNumber": entry["shelfNumber"],
                    "isPrimary": model["isPrimary"],
                }
            )
    return index


def build_work_history_index(entries: Sequence[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    index: dict[str, dict[str, Any]] = {}
    for entry in entries:
        for work in entry["workHistoryEntries"]:
            key = normalize_work_order(work["workOrder"])
            if not key:
                continue
            slot = index.setdefault(
                key,
                {
                    "workOrder": work["workOrder"],
                    "projectCodes": [],
                    "entries": [],
                    "usedByPlates": [],
                },
            )
            code = work["projectCode"]
            if code is not None and code not in slot["projectCodes"]:
                slot["projectCodes"].append(code)
            if work["fullEntry"] not in slot["entries"]:
                slot["entries"].append(work["fullEntry"])
            # one reference per plate even if the plate lists the order twice
            if any(ref["plateId"] == entry["id"] for ref in slot["usedByPlates"]):
                continue
            slot["usedByPlates"].append(
                {
                    "plateId": entry["id"],
                    "plateNumber": entry["plateNumber"],
                    "shelfNumber": entry["shelfNumber"],
                    "projectCode": code,
                }
            )
    return index


def build_inventory_document(
    plates: Sequence[MatchedPlate],
    *,
    info_file: str,
    worksheet: str,
    asset_root: str,
    resolution: HeaderResolution | None = None,
    validation: ValidationReport | None = None,
    preview_refs: Mapping[str, str] | None = None,
    id_factory: Callable[[], str] = generate_plate_id,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    generated_at = generated_at or datetime.now(UTC)
    entries = [plate_entry(p, id_factory(), preview_refs) for p in plates]

    metadata: dict[str, Any] = {
        "generatedDate": generated_at.isoformat().replace("+00:00", "Z"),
        "source": {"infoFile": info_file, "worksheet": worksheet, "assetRoot": asset_root},
        "totalPlates": len(entries),
        "platesWithModels": sum(1 for e in entries if e["currentModelFile"]),
        "platesWithWorkHistory": sum(1 for e in entries if e["workHistoryEntries"]),
        "lockedPlates": sum(1 for e in entries if e["isLocked"]),
    }
    if resolution is not None:
        metadata["header"] = resolution.to_dict()
    if validation is not None:
        metadata["validation"] = {
            "totalFolders": validation.total_folders,
            "validFolders": validation.valid_folders,
        }
    return {
        "metadata": metadata,
        "plates": entries,
        "modelIndex": build_model_index(entries),
        "workHistoryIndex": build_work_history_index(entries),
    }

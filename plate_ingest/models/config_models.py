from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the plate inventory ingestion pipeline.

These are the typed, frozen views produced by ``plate_ingest.config.loader``.
Each pipeline component receives only the slice it needs, so several
configurations can coexist in one process (tests build them directly).
"""

__all__ = [
    "DEFAULT_KEYWORDS",
    "HeaderConfig",
    "ExtensionConfig",
    "LockDetectionConfig",
    "OutputConfig",
    "IngestConfig",
]


DEFAULT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "plateNumber": ("készülék", "szám", "number", "equipment"),
    "workHistory": ("projekt", "project", "work"),
    "shelfNumber": ("raktár", "polc", "shelf", "storage"),
    "previewImage": ("kép", "image", "preview", "előnézet"),
    "boxSize": ("box", "size", "méret"),
}


@dataclass(frozen=True)
class HeaderConfig:
    """Header detection knobs. Detection is diagnostic only; the layout is fixed."""
    scan_rows: int = 5
    similarity_threshold: float = 0.7
    min_matches: int = 2
    fallback_data_start_row: int = 2  # 0-based row index used when no header row qualifies
    keywords: dict[str, tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_KEYWORDS))


@dataclass(frozen=True)
class ExtensionConfig:
    """File extension sets used to classify asset files (lower-case, leading dot)."""
    model: frozenset[str] = frozenset({".x_t", ".step", ".stp", ".iges", ".igs", ".dwg", ".psmodel"})
    image: frozenset[str] = frozenset({".png", ".jpg", ".jpeg"})


@dataclass(frozen=True)
class LockDetectionConfig:
    """Lock-status detection settings.

    ``manual_locked_plates`` is always consulted, whether or not the reader
    delivered fill metadata for the plate-number cell.
    """
    use_cell_fill: bool = True
    manual_locked_plates: frozenset[str] = frozenset()
    red_rgb: tuple[str, ...] = (
        "FFFF0000",
        "FF0000",
        "FFC00000",
        "FFFF9999",
        "FFE6B8B8",
        "FFFFC0C0",
        "FFFF8080",
        "FFFF4040",
        "FFCC0000",
    )
    red_indexed: frozenset[str] = frozenset({"9", "10", "53"})
    red_theme: frozenset[str] = frozenset({"2"})


@dataclass(frozen=True)
class OutputConfig:
    file_prefix: str = "plates_inventory"
    copy_previews: bool = True


@dataclass(frozen=True)
class IngestConfig:
    """Root configuration object for one ingestion run."""
    info_file: str  # spreadsheet path
    asset_root: str  # directory holding one folder per plate
    output_directory: str  # where the timestamped inventory document is written
    worksheet: str | None = None  # None -> first worksheet
    header: HeaderConfig = field(default_factory=HeaderConfig)
    extensions: ExtensionConfig = field(default_factory=ExtensionConfig)
    lock_detection: LockDetectionConfig = field(default_factory=LockDetectionConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

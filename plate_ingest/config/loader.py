from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_KEYWORDS,
    ExtensionConfig,
    HeaderConfig,
    IngestConfig,
    LockDetectionConfig,
    OutputConfig,
)

"""Config loader.

Responsibilities:
- Load the YAML config (default ``config/ingest.yml``)
- Validate it against the bundled ``config_schema.json``
- Apply defaults and return a frozen ``IngestConfig``
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "load_config",
    "config_from_dict",
]

DEFAULT_CONFIG_PATH = Path("config/ingest.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or not valid JSON, or the data fails
            validation (missing required keys, wrong types, unknown keys)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigError(f"config validation failed at {where}: {e.message}") from e


def _extensions(values: list[str] | None, default: frozenset[str]) -> frozenset[str]:
    if values is None:
        return default
    return frozenset(v.lower() for v in values)


def config_from_dict(data: dict[str, Any]) -> IngestConfig:
    """Build an IngestConfig from already validated data, filling defaults."""
    header_raw = data.get("header") or {}
    header_default = HeaderConfig()
    keywords = dict(DEFAULT_KEYWORDS)
    for field_name, words in (header_raw.get("keywords") or {}).items():
        keywords[field_name] = tuple(w.lower() for w in words)
    header = HeaderConfig(
        scan_rows=header_raw.get("scan_rows", header_default.scan_rows),
        similarity_threshold=float(header_raw.get("similarity_threshold", header_default.similarity_threshold)),
        min_matches=header_raw.get("min_matches", header_default.min_matches),
        fallback_data_start_row=header_raw.get("fallback_data_start_row", header_default.fallback_data_start_row),
        keywords=keywords,
    )

    ext_raw = data.get("extensions") or {}
    ext_default = ExtensionConfig()
    extensions = ExtensionConfig(
        model=_extensions(ext_raw.get("model"), ext_default.model),
        image=_extensions(ext_raw.get("image"), ext_default.image),
    )

    lock_raw = data.get("lock_detection") or {}
    lock_default = LockDetectionConfig()
    lock = LockDetectionConfig(
        use_cell_fill=lock_raw.get("use_cell_fill", lock_default.use_cell_fill),
        manual_locked_plates=frozenset(str(p).strip() for p in lock_raw.get("manual_locked_plates", [])),
        red_rgb=tuple(lock_raw.get("red_rgb", lock_default.red_rgb)),
        red_indexed=frozenset(str(v) for v in lock_raw.get("red_indexed", lock_default.red_indexed)),
        red_theme=frozenset(str(v) for v in lock_raw.get("red_theme", lock_default.red_theme)),
    )

    out_raw = data.get("output") or {}
    out_default = OutputConfig()
    output = OutputConfig(
        file_prefix=out_raw.get("file_prefix", out_default.file_prefix),
        copy_previews=out_raw.get("copy_previews", out_default.copy_previews),
    )

    return IngestConfig(
        info_file=data["info_file"],
        asset_root=data["asset_root"],
        output_directory=data["output_directory"],
        worksheet=data.get("worksheet"),
        header=header,
        extensions=extensions,
        lock_detection=lock,
        output=output,
    )


def load_config(path: Path) -> IngestConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)
    return config_from_dict(data)

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..assets.report import format_issue_report
from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..errors import IngestError, ValidationFailure
from ..logging.init import log_summary, setup_logging
from ..models.config_models import IngestConfig
from ..services.orchestrator import inspect_spreadsheet, run_pipeline
from ..services.summary import render_summary_line

"""CLI entrypoint: ``python -m plate_ingest.cli``.

Flow: load .env -> load config -> run the pipeline -> print SUMMARY.
The config path is taken from ``--config``, then ``PLATE_INGEST_CONFIG``
(which may come from .env), then ``config/ingest.yml``.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_VALIDATION_FAILURE = 2

CONFIG_ENV_VAR = "PLATE_INGEST_CONFIG"
INSPECT_SAMPLE = 5


def _load_env_file(path: Path) -> None:
    """Load .env without overriding variables already set in the process."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Plate inventory ingestion: spreadsheet + model folders -> JSON")
    p.add_argument("--config", type=Path, default=None, help=f"Config YAML (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print header diagnostics and the first grouped plates, then exit",
    )
    return p.parse_args(argv)


def _resolve_config_path(arg: Path | None) -> Path:
    if arg is not None:
        return arg
    env = os.getenv(CONFIG_ENV_VAR)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def _inspect_data(cfg: IngestConfig) -> int:
    view = inspect_spreadsheet(cfg)
    res = view.resolution
    print(f"FILE: {cfg.info_file} SHEET: {view.sheet.name} rows={len(view.sheet.rows)} styles={view.sheet.has_styles}")
    if res.header_found:
        print(f"  header_row={res.header_row + 1} matches={res.match_count} detected={res.detected}")
    else:
        print(f"  header_row=<not found> fallback data_start_row={res.data_start_row + 1}")
    print(f"  column_map={res.column_map.as_dict()}")
    print(f"  plates={len(view.records)}")
    for record in view.records[:INSPECT_SAMPLE]:
        print(
            f"    {record.plate_number}: rows={list(record.source_rows)} shelf={record.shelf_number} "
            f"locked={record.is_locked} history={[e.full_entry for e in record.work_history_entries]}"
        )
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    # argv=None only; an empty list from tests must not pick up pytest's arguments
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)

    _load_env_file(Path(".env"))
    config_path = _resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        try:
            return _inspect_data(cfg)
        except IngestError as e:
            logger.error(f"inspect: {e}")
            return EXIT_FATAL

    logger.info(f"info file: {cfg.info_file} | asset root: {cfg.asset_root}")
    try:
        result = run_pipeline(cfg)
    except ValidationFailure as e:
        print(format_issue_report(e.report, cfg.extensions))
        return EXIT_VALIDATION_FAILURE
    except IngestError:
        # already logged with the issue log path by the orchestrator
        return EXIT_FATAL

    logger.info(f"output: {result.output_path} (previews copied: {result.copied_previews})")
    # log_summary adds the SUMMARY label itself
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

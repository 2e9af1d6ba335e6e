from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from plate_ingest.cli import EXIT_FATAL, EXIT_SUCCESS, EXIT_VALIDATION_FAILURE
from plate_ingest.cli import main as cli_main
from plate_ingest.errors import StructuralInputError

"""Exit code contract: 0 success, 1 fatal, 2 validation failure."""


def test_exit_code_fatal_without_config(temp_workdir: Path, capsys):
    code = cli_main([])
    captured = capsys.readouterr()
    assert code == EXIT_FATAL == 1
    assert "ERROR config:" in captured.out


def test_exit_code_success(temp_workdir: Path, sample_workbook, valid_assets, write_config, capsys):
    write_config()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS == 0
    assert "SUMMARY plates=4 linked=2 locked=1 with_history=3 folders=3/3" in out


def test_exit_code_validation_failure(
    temp_workdir: Path, sample_workbook, valid_assets, write_config, make_asset_tree, capsys
):
    make_asset_tree(valid_assets, {"7": ["a.step", "b.step", "p.png"]})
    write_config()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == EXIT_VALIDATION_FAILURE == 2
    assert "Model folder validation failed: 1 of 4 folder(s) invalid" in out
    assert "[x] 7: models=2 images=1" in out
    assert "SUMMARY" not in out
    assert not Path("output").exists()


def test_exit_code_structural_error(temp_workdir: Path, write_config, capsys):
    write_config()
    with patch("plate_ingest.cli.__main__.run_pipeline", side_effect=StructuralInputError("asset root not found: x")):
        code = cli_main([])
    assert code == EXIT_FATAL

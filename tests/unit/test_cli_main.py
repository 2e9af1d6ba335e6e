from __future__ import annotations

from pathlib import Path

from plate_ingest.cli import main as cli_main


def test_config_flag(temp_workdir: Path, sample_workbook, valid_assets, write_config, capsys):
    cfg = write_config()
    moved = temp_workdir / "alt.yml"
    cfg.rename(moved)
    assert cli_main(["--config", str(moved)]) == 0
    assert "SUMMARY" in capsys.readouterr().out


def test_config_from_env_file(temp_workdir: Path, sample_workbook, valid_assets, write_config, monkeypatch, capsys):
    # setenv+delenv so monkeypatch restores the original state after dotenv has set it
    monkeypatch.setenv("PLATE_INGEST_CONFIG", "unused")
    monkeypatch.delenv("PLATE_INGEST_CONFIG")
    cfg = write_config()
    moved = temp_workdir / "env.yml"
    cfg.rename(moved)
    (temp_workdir / ".env").write_text(f"PLATE_INGEST_CONFIG={moved}\n", encoding="utf-8")
    assert cli_main([]) == 0
    assert "SUMMARY" in capsys.readouterr().out


def test_inspect_data_does_not_write(temp_workdir: Path, sample_workbook, write_config, capsys):
    # no asset tree on purpose: inspection only reads the spreadsheet
    write_config()
    assert cli_main(["--inspect-data"]) == 0
    out = capsys.readouterr().out
    assert "SHEET: Plates" in out
    assert "header_row=2" in out
    assert "plates=4" in out
    assert "12: rows=[3, 4, 5]" in out
    assert not Path("output").exists()


def test_inspect_data_missing_info_file(temp_workdir: Path, write_config, capsys):
    write_config()
    assert cli_main(["--inspect-data"]) == 1
    assert "ERROR inspect:" in capsys.readouterr().out


def test_debug_flag(temp_workdir: Path, sample_workbook, valid_assets, write_config, capsys):
    write_config()
    assert cli_main(["--debug"]) == 0
    out = capsys.readouterr().out
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG row 3 -> plate 12" in out


def test_output_directory_is_a_file(temp_workdir: Path, sample_workbook, valid_assets, write_config, capsys):
    (temp_workdir / "output").write_text("not a directory", encoding="utf-8")
    write_config()
    assert cli_main([]) == 1
    assert "SUMMARY" not in capsys.readouterr().out
    assert (temp_workdir / "output").read_text(encoding="utf-8") == "not a directory"
    assert len(list((temp_workdir / "logs").glob("issues-*.log"))) == 1

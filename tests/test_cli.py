import functools
import sys

import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from core.services.warnings_pipeline import collect_overlay

from conftest import ARCHIVE, VALID_RECORD, archive_document, day_url, mock_archive

runner = CliRunner()


def _patch_archive(monkeypatch, documents):
    monkeypatch.setenv("TOR_OVERLAY_ARCHIVE_BASE_URL", ARCHIVE)
    monkeypatch.setattr(
        cli_main,
        "collect_overlay",
        functools.partial(collect_overlay, transport=mock_archive(documents)),
    )


def test_render_to_stdout(monkeypatch):
    _patch_archive(monkeypatch, {day_url("2021-12-10"): archive_document(VALID_RECORD)})
    result = runner.invoke(cli_main.app, ["render", "--start", "2021-12-10", "--end", "2021-12-10", "--quiet"])
    assert result.exit_code == 0, result.output
    assert "87.20, -35.40" in result.stdout
    assert "Title: Past TORs" in result.stdout


def test_render_to_file(monkeypatch, tmp_path):
    _patch_archive(monkeypatch, {day_url("2021-12-10"): archive_document(VALID_RECORD)})
    out = tmp_path / "overlays" / "tors.txt"
    result = runner.invoke(
        cli_main.app, ["render", "--start", "2021-12-10", "--end", "2021-12-10", "-o", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8").count("End:") == 1


def test_render_rejects_malformed_date(monkeypatch):
    _patch_archive(monkeypatch, {})
    result = runner.invoke(cli_main.app, ["render", "--start", "2021-13-40", "--end", "2021-12-10"])
    assert result.exit_code == 2


def test_render_fails_on_extraction_fault(monkeypatch):
    broken = VALID_RECORD.replace("LAT...LON 2 3540 08720", "")
    _patch_archive(monkeypatch, {day_url("2021-12-10"): archive_document(broken)})
    result = runner.invoke(cli_main.app, ["render", "--start", "2021-12-10", "--end", "2021-12-10"])
    assert result.exit_code == 1


def test_module_entry_point_runs_the_app(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["tor-overlay", "--help"])
    with pytest.raises(SystemExit) as excinfo:
        cli_main.run()
    assert excinfo.value.code == 0

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner

from pdfinterleave import __version__
from pdfinterleave.cli import cli


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("pdfinterleave")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    for name in ("NAME_PREFIX", "FALLBACK_NAME", "TEMP_DIR", "LOG_LEVEL", "PASSWORD"):
        monkeypatch.delenv(f"PDFINTERLEAVE_{name}", raising=False)
    return CliRunner()


def test_merge_to_file(
    runner: CliRunner,
    odd_pdf: Path,
    even_pdf: Path,
    tmp_path: Path,
    page_widths: Callable[[bytes], list[float]],
) -> None:
    output = tmp_path / "book.pdf"

    result = runner.invoke(cli, ["merge", str(odd_pdf), str(even_pdf), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert output.exists()
    assert page_widths(output.read_bytes()) == [100.0, 300.0, 101.0, 301.0, 102.0]
    assert "Done." in result.output


def test_merge_to_directory_uses_derived_name(
    runner: CliRunner,
    odd_pdf: Path,
    even_pdf: Path,
    tmp_path: Path,
) -> None:
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    result = runner.invoke(cli, ["merge", str(odd_pdf), str(even_pdf), "--output", str(out_dir)])

    assert result.exit_code == 0, result.output
    assert (out_dir / "al-report.pdf").exists()


@pytest.mark.parametrize("existing", [False, True])
def test_merge_to_directory_with_trailing_separator(
    runner: CliRunner,
    odd_pdf: Path,
    even_pdf: Path,
    tmp_path: Path,
    existing: bool,
) -> None:
    out_dir = tmp_path / "scans"
    if existing:
        out_dir.mkdir()

    result = runner.invoke(cli, ["merge", str(odd_pdf), str(even_pdf), "-o", str(out_dir) + os.sep])

    assert result.exit_code == 0, result.output
    assert out_dir.is_dir()
    assert (out_dir / "al-report.pdf").exists()


def test_merge_defaults_to_current_directory(
    runner: CliRunner,
    odd_pdf: Path,
    even_pdf: Path,
    tmp_path: Path,
) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
        result = runner.invoke(cli, ["merge", str(odd_pdf), str(even_pdf), "--prefix", "mixed-"])

        assert result.exit_code == 0, result.output
        assert (Path(cwd) / "mixed-report.pdf").exists()


def test_merge_reports_load_failure(
    runner: CliRunner,
    invalid_pdf: Path,
    even_pdf: Path,
    tmp_path: Path,
) -> None:
    output = tmp_path / "book.pdf"

    result = runner.invoke(cli, ["merge", str(invalid_pdf), str(even_pdf), "-o", str(output)])

    assert result.exit_code == 1
    assert "Failed to load PDF A." in result.output
    assert not output.exists()


def test_info(runner: CliRunner, odd_pdf: Path, even_pdf: Path) -> None:
    result = runner.invoke(cli, ["info", str(odd_pdf), str(even_pdf)])

    assert result.exit_code == 0, result.output
    assert "report.pdf" in result.output
    assert "notes.pdf" in result.output


def test_info_reports_invalid_file(runner: CliRunner, odd_pdf: Path, invalid_pdf: Path) -> None:
    result = runner.invoke(cli, ["info", str(odd_pdf), str(invalid_pdf)])

    assert result.exit_code == 1
    assert "broken.pdf" in result.output


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output

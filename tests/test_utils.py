from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pdfinterleave import InterleaveConfig, format_file_size
from pdfinterleave.utils import configure_logging, ensure_path


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (None, "-"),
        (0, "0 B"),
        (512, "512 B"),
        (1023, "1023 B"),
        (1024, "1.0 KB"),
        (1536, "1.5 KB"),
        (10 * 1024, "10 KB"),
        (5 * 1024 ** 2, "5.0 MB"),
        (12_345_678, "12 MB"),
        (3 * 1024 ** 3, "3.0 GB"),
        (1024 ** 4, "1024 GB"),
    ],
)
def test_format_file_size(size: int | None, expected: str) -> None:
    assert format_file_size(size) == expected


def test_ensure_path(tmp_path: Path) -> None:
    resolved = ensure_path(str(tmp_path / "a" / ".." / "b.pdf"))
    assert resolved == (tmp_path / "b.pdf").resolve()


def test_config_defaults() -> None:
    config = InterleaveConfig()
    assert config.name_prefix == "al-"
    assert config.fallback_name == "interleaved.pdf"
    assert config.temp_dir is None


def test_config_from_env(tmp_path: Path) -> None:
    config = InterleaveConfig.from_env(
        {
            "PDFINTERLEAVE_NAME_PREFIX": "mix-",
            "PDFINTERLEAVE_LOG_LEVEL": "DEBUG",
            "PDFINTERLEAVE_TEMP_DIR": str(tmp_path),
            "UNRELATED": "ignored",
        }
    )

    assert config.name_prefix == "mix-"
    assert config.log_level == "DEBUG"
    assert config.temp_dir == tmp_path
    assert config.fallback_name == "interleaved.pdf"


def test_config_with_updates_skips_none() -> None:
    config = InterleaveConfig()
    assert config.with_updates(name_prefix=None) is config
    assert config.with_updates(name_prefix="x-").name_prefix == "x-"


def test_configure_logging() -> None:
    logger = configure_logging("debug")
    try:
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

        configure_logging("not-a-level")
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

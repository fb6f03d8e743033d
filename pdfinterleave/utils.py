"""Utility helpers shared by :mod:`pdfinterleave` modules."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIZE_UNITS = ("B", "KB", "MB", "GB")
PLACEHOLDER = "-"


def ensure_path(path: PathLike) -> Path:
    """Return a :class:`~pathlib.Path` instance for *path*."""

    resolved = Path(path).expanduser()
    try:
        return resolved.resolve(strict=False)
    except FileNotFoundError:  # pragma: no cover - defensive
        return resolved


def format_file_size(size_bytes: Optional[int]) -> str:
    """
    Format a byte count for display.

    The value is divided by 1024 at most three times. Whole numbers are shown
    for plain bytes and for values of 10 or more, one decimal otherwise.

    Args:
        size_bytes: Size in bytes, or ``None`` when unknown

    Returns:
        Formatted string (e.g. "512 B", "1.5 KB", "12 MB") or "-"
    """
    if size_bytes is None:
        return PLACEHOLDER

    value = float(size_bytes)
    index = 0
    while value >= 1024 and index < len(SIZE_UNITS) - 1:
        value /= 1024
        index += 1

    decimals = 0 if value >= 10 or index == 0 else 1
    return f"{value:.{decimals}f} {SIZE_UNITS[index]}"


def configure_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Attach a stream handler to the ``pdfinterleave`` logger and set *level*."""

    logger = logging.getLogger("pdfinterleave")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)
    return logger


__all__ = [
    "PathLike",
    "PLACEHOLDER",
    "configure_logging",
    "ensure_path",
    "format_file_size",
]

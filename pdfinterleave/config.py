"""Runtime settings for :mod:`pdfinterleave`."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "PDFINTERLEAVE_"


@dataclass(frozen=True)
class InterleaveConfig:
    """Settings shared by the merger, the session and the CLI.

    Attributes:
        name_prefix: Prepended to source A's file name to name the output.
        fallback_name: Used in place of source A's name when it is empty.
        temp_dir: Directory for artifact temporary files (system default when ``None``).
        log_level: Level passed to :func:`~pdfinterleave.utils.configure_logging`.
        password: Password tried on encrypted sources.
    """

    name_prefix: str = "al-"
    fallback_name: str = "interleaved.pdf"
    temp_dir: Optional[Path] = None
    log_level: str = "WARNING"
    password: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "InterleaveConfig":
        """Build a config from ``PDFINTERLEAVE_*`` environment variables."""

        env = os.environ if environ is None else environ
        config = cls()
        overrides: dict[str, object] = {}

        for field_name in ("name_prefix", "fallback_name", "log_level", "password"):
            value = env.get(ENV_PREFIX + field_name.upper())
            if value is not None:
                overrides[field_name] = value

        temp_dir = env.get(ENV_PREFIX + "TEMP_DIR")
        if temp_dir:
            overrides["temp_dir"] = Path(temp_dir).expanduser()

        return replace(config, **overrides) if overrides else config

    def with_updates(self, **updates: object) -> "InterleaveConfig":
        """Return a copy with the non-``None`` *updates* applied."""

        values = {key: value for key, value in updates.items() if value is not None}
        return replace(self, **values) if values else self


DEFAULT_CONFIG = InterleaveConfig()

__all__ = ["InterleaveConfig", "DEFAULT_CONFIG", "ENV_PREFIX"]

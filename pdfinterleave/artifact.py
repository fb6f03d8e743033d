"""Ownership of the merged PDF while it is offered for saving."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Optional

from .exceptions import ArtifactReleasedError
from .merger import MergedArtifact
from .utils import PathLike, ensure_path

LOGGER = logging.getLogger("pdfinterleave.artifact")


def _safe_filename(filename: str | None, default: str) -> str:
    """Return a filesystem-safe filename derived from user input."""

    if not filename:
        return default

    candidate = Path(filename).name
    return candidate or default


class ArtifactHandle:
    """A merged PDF materialized in a private temporary directory.

    The handle stays valid until :meth:`release` is called, which removes the
    directory. Releasing twice is harmless.
    """

    def __init__(self, artifact: MergedArtifact, *, directory: PathLike | None = None) -> None:
        self._artifact = artifact
        self._temp_dir: Optional[TemporaryDirectory] = TemporaryDirectory(
            prefix="pdfinterleave-",
            dir=str(ensure_path(directory)) if directory is not None else None,
        )
        self._path = Path(self._temp_dir.name) / _safe_filename(artifact.name, "interleaved.pdf")
        self._path.write_bytes(artifact.data)
        LOGGER.debug("Stored merged PDF at %s", self._path)

    @property
    def released(self) -> bool:
        return self._temp_dir is None

    @property
    def artifact(self) -> MergedArtifact:
        self._check()
        return self._artifact

    @property
    def path(self) -> Path:
        self._check()
        return self._path

    def save(self, destination: PathLike) -> Path:
        """Copy the merged PDF to *destination*.

        When *destination* is an existing directory, or ends with a path
        separator (created if missing), the artifact's name is used inside it.
        """

        self._check()
        target = ensure_path(destination)
        separators = tuple(sep for sep in (os.sep, os.altsep) if sep)
        if str(destination).endswith(separators):
            target.mkdir(parents=True, exist_ok=True)
        if target.is_dir():
            target = target / self._path.name
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self._path, target)
        LOGGER.info("Saved merged PDF to %s", target)
        return target

    def release(self) -> None:
        if self._temp_dir is None:
            return
        LOGGER.debug("Releasing merged PDF at %s", self._path)
        self._temp_dir.cleanup()
        self._temp_dir = None

    def _check(self) -> None:
        if self._temp_dir is None:
            raise ArtifactReleasedError()

    def __enter__(self) -> "ArtifactHandle":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else str(self._path)
        return f"ArtifactHandle({self._artifact.name!r}, {state})"


class ArtifactSlot:
    """Holds at most one live :class:`ArtifactHandle`."""

    def __init__(self) -> None:
        self._handle: Optional[ArtifactHandle] = None

    @property
    def current(self) -> Optional[ArtifactHandle]:
        return self._handle

    def replace(self, handle: ArtifactHandle) -> None:
        """Release the current handle, then store *handle*."""

        if handle is self._handle:
            return
        self.clear()
        self._handle = handle

    def clear(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.release()

    def __bool__(self) -> bool:
        return self._handle is not None


__all__ = ["ArtifactHandle", "ArtifactSlot"]

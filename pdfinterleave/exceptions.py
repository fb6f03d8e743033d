"""
Custom exceptions for pdfinterleave.

Loader failures carry the slot they belong to so callers can report them
per source document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .loader import Slot


class InterleaveError(Exception):
    """Base exception for all pdfinterleave errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown interleave error occurred."


class LoadError(InterleaveError):
    """Raised when a source document cannot be read or parsed."""

    def __init__(self, slot: Optional["Slot"] = None, message: str = "") -> None:
        self.slot = slot
        super().__init__(message)

    @property
    def default_message(self) -> str:
        if self.slot is None:
            return "Failed to load PDF."
        return f"Failed to load PDF {self.slot.value}."


class MergeError(InterleaveError):
    """Raised when copying pages or writing the merged document fails."""

    @property
    def default_message(self) -> str:
        return "Failed to merge the PDFs."


class ArtifactReleasedError(InterleaveError):
    """Raised when a released artifact handle is used."""

    @property
    def default_message(self) -> str:
        return "The merged PDF has already been released."

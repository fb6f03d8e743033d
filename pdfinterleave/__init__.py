"""Interleave the pages of two PDFs into a single document."""

from __future__ import annotations

from .artifact import ArtifactHandle, ArtifactSlot
from .config import InterleaveConfig
from .exceptions import ArtifactReleasedError, InterleaveError, LoadError, MergeError
from .loader import Slot, SourceDocument, load_document, load_file, load_pair
from .merger import MergedArtifact, artifact_name, interleave_order, merge_documents
from .session import (
    InterleaveSession,
    MergeFailure,
    MergeOutcome,
    MergeSuccess,
    SlotStatus,
    SourceInfo,
)
from .utils import format_file_size

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "ArtifactHandle",
    "ArtifactReleasedError",
    "ArtifactSlot",
    "InterleaveConfig",
    "InterleaveError",
    "InterleaveSession",
    "LoadError",
    "MergeError",
    "MergeFailure",
    "MergeOutcome",
    "MergeSuccess",
    "MergedArtifact",
    "Slot",
    "SlotStatus",
    "SourceDocument",
    "SourceInfo",
    "artifact_name",
    "format_file_size",
    "interleave_order",
    "load_document",
    "load_file",
    "load_pair",
    "merge_documents",
]

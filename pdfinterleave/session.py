"""Interactive state for one interleaving session.

A session owns the two source slots, the status line, the busy flag and the
current merged artifact. Load and merge failures are turned into status
messages here; they never escape to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from .artifact import ArtifactHandle, ArtifactSlot
from .config import InterleaveConfig
from .exceptions import LoadError, MergeError
from .loader import Slot, Source, SourceDocument, load_pair, load_source
from .merger import MergedArtifact, merge_documents
from .utils import PLACEHOLDER, format_file_size

LOGGER = logging.getLogger("pdfinterleave.session")

STATUS_SELECT = "Select two PDFs."
STATUS_MERGING = "Merging..."
STATUS_DONE = "Done."
STATUS_MERGE_FAILED = "Merge failed. Check the PDFs."
RESULT_PENDING = "Not generated yet."
LABEL_MERGE = "Merge"


def load_failed_status(slot: Slot) -> str:
    return f"Failed to load PDF {slot.value}."


class SlotStatus(str, Enum):
    ABSENT = "absent"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class SourceInfo:
    """Name, page count and size shown for a source or the result."""

    name: str = PLACEHOLDER
    pages: int = 0
    size: Optional[int] = None

    def describe(self) -> str:
        return f"{self.name} · {self.pages} pages · {format_file_size(self.size)}"


@dataclass(frozen=True)
class SlotState:
    status: SlotStatus = SlotStatus.ABSENT
    document: Optional[SourceDocument] = None
    error: Optional[LoadError] = None

    @property
    def info(self) -> SourceInfo:
        if self.document is None:
            return SourceInfo()
        return SourceInfo(
            name=self.document.name or PLACEHOLDER,
            pages=self.document.page_count,
            size=self.document.size,
        )


@dataclass(frozen=True)
class MergeSuccess:
    artifact: MergedArtifact

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class MergeFailure:
    reason: str

    @property
    def ok(self) -> bool:
        return False


MergeOutcome = Union[MergeSuccess, MergeFailure]


class InterleaveSession:
    """Two source slots, one merge at a time, at most one live artifact."""

    def __init__(self, config: InterleaveConfig | None = None) -> None:
        self.config = config or InterleaveConfig()
        self.status = STATUS_SELECT
        self._slots: Dict[Slot, SlotState] = {Slot.A: SlotState(), Slot.B: SlotState()}
        self._tokens: Dict[Slot, int] = {Slot.A: 0, Slot.B: 0}
        self._generation = 0
        self._busy = False
        self._artifacts = ArtifactSlot()
        self._result_info = SourceInfo()

    # state -----------------------------------------------------------------

    def state(self, slot: Slot) -> SlotState:
        return self._slots[slot]

    def source_info(self, slot: Slot) -> SourceInfo:
        return self._slots[slot].info

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def can_merge(self) -> bool:
        return not self._busy and all(
            state.status is SlotStatus.LOADED for state in self._slots.values()
        )

    @property
    def artifact(self) -> Optional[ArtifactHandle]:
        return self._artifacts.current

    @property
    def result_info(self) -> SourceInfo:
        return self._result_info

    @property
    def result_summary(self) -> str:
        if not self._result_info.pages:
            return RESULT_PENDING
        return self._result_info.describe()

    @property
    def merge_label(self) -> str:
        return STATUS_MERGING if self._busy else LABEL_MERGE

    # transitions -----------------------------------------------------------

    def _invalidate(self, *slots: Slot) -> Dict[Slot, int]:
        """Drop the current artifact and start a new selection on *slots*."""

        self._artifacts.clear()
        self._result_info = SourceInfo()
        self._generation += 1
        tokens = {}
        for slot in slots:
            self._tokens[slot] += 1
            tokens[slot] = self._tokens[slot]
            self._slots[slot] = SlotState()
        return tokens

    def _apply(self, slot: Slot, token: int, result: Union[SourceDocument, LoadError]) -> None:
        if self._tokens[slot] != token:
            LOGGER.debug("Discarding stale load result for PDF %s", slot.value)
            return

        if isinstance(result, LoadError):
            LOGGER.warning("PDF %s could not be loaded: %s", slot.value, result)
            self._slots[slot] = SlotState(status=SlotStatus.FAILED, error=result)
            self.status = load_failed_status(slot)
        else:
            self._slots[slot] = SlotState(status=SlotStatus.LOADED, document=result)
            self.status = STATUS_SELECT

    async def select(self, slot: Slot, source: Optional[Source]) -> SlotState:
        """Replace the document in *slot* with *source* (``None`` empties it)."""

        token = self._invalidate(slot)[slot]
        if source is None:
            self.status = STATUS_SELECT
            return self._slots[slot]

        result: Union[SourceDocument, LoadError]
        try:
            result = await asyncio.to_thread(
                load_source, source, slot=slot, password=self.config.password
            )
        except LoadError as exc:
            result = exc
        except Exception as exc:
            LOGGER.error("Unexpected error loading PDF %s: %s", slot.value, exc)
            result = LoadError(slot)
            result.__cause__ = exc

        self._apply(slot, token, result)
        return self._slots[slot]

    async def select_pair(self, source_a: Source, source_b: Source) -> Dict[Slot, SlotState]:
        """Load both slots concurrently; each slot succeeds or fails on its own."""

        tokens = self._invalidate(Slot.A, Slot.B)
        results = await load_pair(source_a, source_b, password=self.config.password)
        for slot in (Slot.A, Slot.B):
            self._apply(slot, tokens[slot], results[slot])

        failed = [
            slot
            for slot in (Slot.A, Slot.B)
            if self._tokens[slot] == tokens[slot]
            and self._slots[slot].status is SlotStatus.FAILED
        ]
        if failed:
            self.status = load_failed_status(failed[0])
        return dict(self._slots)

    async def merge(self) -> Optional[MergeOutcome]:
        """Interleave the two loaded documents.

        Returns ``None`` without doing anything when a slot is not loaded or a
        merge is already running.
        """

        if not self.can_merge:
            LOGGER.debug("Merge ignored: busy=%s, slots=%s", self._busy, self._slots)
            return None

        doc_a = self._slots[Slot.A].document
        doc_b = self._slots[Slot.B].document
        if doc_a is None or doc_b is None:
            return None

        self._busy = True
        self.status = STATUS_MERGING
        self._artifacts.clear()
        self._result_info = SourceInfo()
        generation = self._generation

        try:
            try:
                artifact = await asyncio.to_thread(
                    merge_documents, doc_a, doc_b, config=self.config
                )
                handle = ArtifactHandle(artifact, directory=self.config.temp_dir)
            except (MergeError, OSError) as exc:
                LOGGER.error("Merge failed: %s", exc)
                self.status = STATUS_MERGE_FAILED
                return MergeFailure(str(exc))

            if generation != self._generation:
                LOGGER.info("Sources changed during merge; discarding %s", artifact.name)
                handle.release()
                if self.status == STATUS_MERGING:
                    self.status = STATUS_SELECT
                return MergeFailure("Sources changed while merging.")

            self._artifacts.replace(handle)
            self._result_info = SourceInfo(
                name=artifact.name,
                pages=artifact.page_count,
                size=artifact.size,
            )
            self.status = STATUS_DONE
            return MergeSuccess(artifact)
        finally:
            self._busy = False

    def close(self) -> None:
        self._artifacts.clear()
        self._result_info = SourceInfo()

    def __enter__(self) -> "InterleaveSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "InterleaveSession",
    "MergeFailure",
    "MergeOutcome",
    "MergeSuccess",
    "SlotState",
    "SlotStatus",
    "SourceInfo",
    "load_failed_status",
]

"""Interleaving merge for the :mod:`pdfinterleave` package."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import Optional

from pypdf import PdfWriter

from .config import DEFAULT_CONFIG, InterleaveConfig
from .exceptions import MergeError
from .loader import Slot, SourceDocument

LOGGER = logging.getLogger("pdfinterleave.merge")

PDF_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class MergedArtifact:
    """The serialized output of one merge."""

    data: bytes = field(repr=False)
    page_count: int
    name: str

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def media_type(self) -> str:
        return PDF_MEDIA_TYPE


def interleave_order(a_count: int, b_count: int) -> list[tuple[Slot, int]]:
    """Return the ``(slot, page_index)`` sequence of the merged document.

    A's page ``i`` always comes right before B's page ``i``. When one side
    runs out, the remaining pages of the other follow in their original order.
    """

    if a_count < 0 or b_count < 0:
        raise ValueError("Page counts must not be negative")

    order: list[tuple[Slot, int]] = []
    for index in range(max(a_count, b_count)):
        if index < a_count:
            order.append((Slot.A, index))
        if index < b_count:
            order.append((Slot.B, index))
    return order


def artifact_name(
    source_name: Optional[str],
    *,
    prefix: str = DEFAULT_CONFIG.name_prefix,
    fallback: str = DEFAULT_CONFIG.fallback_name,
) -> str:
    """Return the download name derived from source A's file name."""

    return f"{prefix}{source_name or fallback}"


def merge_documents(
    doc_a: SourceDocument,
    doc_b: SourceDocument,
    *,
    config: InterleaveConfig | None = None,
) -> MergedArtifact:
    """Interleave the pages of *doc_a* and *doc_b* into a new PDF.

    Args:
        doc_a: Source of the odd pages (1, 3, 5, ...).
        doc_b: Source of the even pages (2, 4, 6, ...).
        config: Naming settings; defaults to :data:`DEFAULT_CONFIG`.

    Raises:
        MergeError: If both documents are empty, or if copying a page or
            writing the output fails. Nothing is returned in that case.
    """

    settings = config or DEFAULT_CONFIG
    order = interleave_order(doc_a.page_count, doc_b.page_count)
    if not order:
        raise MergeError("Both PDFs are empty; nothing to interleave.")

    sources = {Slot.A: doc_a, Slot.B: doc_b}
    writer = PdfWriter()

    for slot, page_index in order:
        LOGGER.debug("Adding page %s from PDF %s", page_index, slot.value)
        try:
            writer.add_page(sources[slot].reader.pages[page_index])
        except Exception as exc:
            LOGGER.error(
                "Failed to copy page %s of PDF %s: %s", page_index, slot.value, exc
            )
            raise MergeError(
                f"Failed to copy page {page_index + 1} of PDF {slot.value}."
            ) from exc

    buffer = BytesIO()
    try:
        writer.write(buffer)
    except Exception as exc:
        LOGGER.error("Failed to write merged PDF: %s", exc)
        raise MergeError("Failed to write the merged PDF.") from exc

    artifact = MergedArtifact(
        data=buffer.getvalue(),
        page_count=doc_a.page_count + doc_b.page_count,
        name=artifact_name(
            doc_a.name,
            prefix=settings.name_prefix,
            fallback=settings.fallback_name,
        ),
    )
    LOGGER.info(
        "Interleaved %d + %d pages into %s (%d bytes)",
        doc_a.page_count,
        doc_b.page_count,
        artifact.name,
        artifact.size,
    )
    return artifact


__all__ = [
    "MergedArtifact",
    "PDF_MEDIA_TYPE",
    "artifact_name",
    "interleave_order",
    "merge_documents",
]

"""Loading of the two source documents for :mod:`pdfinterleave`."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from io import BytesIO
from pathlib import Path
from typing import Dict, Tuple, Union

from pypdf import PasswordType, PdfReader

from .exceptions import LoadError
from .utils import PathLike, ensure_path

LOGGER = logging.getLogger("pdfinterleave.loader")

Source = Union[PathLike, Tuple[str, bytes]]


class Slot(str, Enum):
    """Input position of a source document."""

    A = "A"
    B = "B"

    @property
    def role(self) -> str:
        return "odd pages" if self is Slot.A else "even pages"


@dataclass(frozen=True)
class SourceDocument:
    """A parsed source PDF bound to its slot."""

    slot: Slot
    name: str
    data: bytes = field(repr=False)
    page_count: int
    reader: PdfReader = field(repr=False, compare=False)

    @property
    def size(self) -> int:
        return len(self.data)


def _open_reader(data: bytes, slot: Slot, password: str) -> PdfReader:
    try:
        reader = PdfReader(BytesIO(data))
    except Exception as exc:  # pypdf raises a variety of errors
        LOGGER.error("Failed to parse PDF %s: %s", slot.value, exc)
        raise LoadError(slot) from exc

    if reader.is_encrypted:
        LOGGER.debug("Attempting to decrypt encrypted PDF %s", slot.value)
        try:
            result = reader.decrypt(password)
        except Exception as exc:  # pragma: no cover - decrypt errors vary
            LOGGER.error("Failed to decrypt PDF %s: %s", slot.value, exc)
            raise LoadError(slot, f"Unable to decrypt PDF {slot.value}.") from exc
        if result == PasswordType.NOT_DECRYPTED:
            LOGGER.error("Wrong password for encrypted PDF %s", slot.value)
            raise LoadError(slot, f"Unable to decrypt PDF {slot.value}.")
    return reader


def load_document(
    data: bytes,
    *,
    slot: Slot,
    name: str = "",
    password: str = "",
    require_pages: bool = True,
) -> SourceDocument:
    """Parse *data* into a :class:`SourceDocument` for *slot*.

    Args:
        data: Raw bytes of the selected file. They are not modified.
        slot: The slot the document is loaded into; attached to any error.
        name: Original file name, used to name the merged output.
        password: Password tried when the document is encrypted.
        require_pages: Reject documents without pages.

    Raises:
        LoadError: If the bytes cannot be parsed as a PDF, the document cannot
            be decrypted, or it has no pages while *require_pages* is set.
    """

    data = bytes(data)
    reader = _open_reader(data, slot, password)

    try:
        page_count = len(reader.pages)
    except Exception as exc:
        LOGGER.error("Failed to read page tree of PDF %s: %s", slot.value, exc)
        raise LoadError(slot) from exc

    if page_count == 0 and require_pages:
        LOGGER.error("PDF %s contains no pages", slot.value)
        raise LoadError(slot, f"PDF {slot.value} contains no pages.")

    document = SourceDocument(
        slot=slot,
        name=name,
        data=data,
        page_count=page_count,
        reader=reader,
    )
    LOGGER.info(
        "Loaded PDF %s: name=%s, pages=%d, size=%d",
        slot.value,
        name or "-",
        page_count,
        document.size,
    )
    return document


def load_file(
    path: PathLike,
    *,
    slot: Slot,
    password: str = "",
    require_pages: bool = True,
) -> SourceDocument:
    """Read *path* from disk and load it into *slot*.

    The document is named after *path* as given, not after a symlink target.
    """

    name = Path(path).name
    pdf_path = ensure_path(path)
    LOGGER.debug("Reading PDF %s from %s", slot.value, pdf_path)
    try:
        data = pdf_path.read_bytes()
    except OSError as exc:
        LOGGER.error("Failed to read %s: %s", pdf_path, exc)
        raise LoadError(slot, f"Cannot read file for PDF {slot.value}: {pdf_path}") from exc

    return load_document(
        data,
        slot=slot,
        name=name,
        password=password,
        require_pages=require_pages,
    )


def load_source(
    source: Source,
    *,
    slot: Slot,
    password: str = "",
    require_pages: bool = True,
) -> SourceDocument:
    """Load *source*, either a path or a ``(name, bytes)`` pair."""

    if isinstance(source, tuple):
        name, data = source
        return load_document(
            data,
            slot=slot,
            name=name or "",
            password=password,
            require_pages=require_pages,
        )
    return load_file(source, slot=slot, password=password, require_pages=require_pages)


async def load_pair(
    source_a: Source,
    source_b: Source,
    *,
    password: str = "",
) -> Dict[Slot, Union[SourceDocument, LoadError]]:
    """Load both sources concurrently.

    Each slot gets either its document or its own :class:`LoadError`; a
    failure on one side does not affect the other.
    """

    results = await asyncio.gather(
        asyncio.to_thread(load_source, source_a, slot=Slot.A, password=password),
        asyncio.to_thread(load_source, source_b, slot=Slot.B, password=password),
        return_exceptions=True,
    )

    outcome: Dict[Slot, Union[SourceDocument, LoadError]] = {}
    for slot, result in zip((Slot.A, Slot.B), results):
        if isinstance(result, LoadError):
            outcome[slot] = result
        elif isinstance(result, Exception):
            LOGGER.error("Unexpected error loading PDF %s: %s", slot.value, result)
            error = LoadError(slot)
            error.__cause__ = result
            outcome[slot] = error
        elif isinstance(result, BaseException):
            raise result
        else:
            outcome[slot] = result
    return outcome


__all__ = [
    "Slot",
    "Source",
    "SourceDocument",
    "load_document",
    "load_file",
    "load_source",
    "load_pair",
]

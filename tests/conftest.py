from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from pypdf import PdfReader, PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfinterleave.loader import Slot, SourceDocument, load_document  # noqa: E402

# Pages are told apart by width: A pages are 100pt + index, B pages 300pt + index.
A_WIDTH = 100
B_WIDTH = 300


def _build_pdf(widths: Sequence[float], title: str | None = None) -> bytes:
    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=200)
    if title is not None:
        writer.add_metadata({"/Title": title})
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def _widths(slot: Slot, count: int) -> list[float]:
    base = A_WIDTH if slot is Slot.A else B_WIDTH
    return [float(base + index) for index in range(count)]


@pytest.fixture()
def make_pdf() -> Callable[..., bytes]:
    return _build_pdf


@pytest.fixture()
def page_widths() -> Callable[[bytes], list[float]]:
    def _read(data: bytes) -> list[float]:
        reader = PdfReader(BytesIO(data))
        return [float(page.mediabox.width) for page in reader.pages]

    return _read


@pytest.fixture()
def document_factory() -> Callable[..., SourceDocument]:
    """Build a loaded document whose pages carry the widths of *slot*."""

    def _create(slot: Slot, pages: int, name: str = "") -> SourceDocument:
        return load_document(
            _build_pdf(_widths(slot, pages)),
            slot=slot,
            name=name,
            require_pages=False,
        )

    return _create


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, slot: Slot, pages: int, title: str | None = None) -> Path:
        path = tmp_path / filename
        path.write_bytes(_build_pdf(_widths(slot, pages), title=title))
        return path

    return _create


@pytest.fixture()
def odd_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("report.pdf", Slot.A, 3)


@pytest.fixture()
def even_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("notes.pdf", Slot.B, 2)


@pytest.fixture()
def invalid_pdf(tmp_path: Path) -> Path:
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"this is not a pdf document")
    return path

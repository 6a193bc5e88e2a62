from __future__ import annotations

import zlib
from pathlib import Path
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import DecodedStreamObject, NameObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

DEFLATE_PLAIN = b"BT /F1 12 Tf 72 712 Td (Hello, PDF object syntax) Tj ET\n" * 8


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(3):
        page = writer.add_blank_page(width=200, height=200)
        stream = DecodedStreamObject()
        stream.set_data(b"q\n0 0 m\n10 10 l\nS\nQ\n")
        page[NameObject("/Contents")] = writer._add_object(stream)
    writer.add_metadata({"/Producer": "pdfparsex-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as handle:
        writer.write(handle)
    return pdf_path


@pytest.fixture()
def deflate_fixture() -> tuple[bytes, bytes]:
    """Return ``(plain, compressed)`` bytes for a known zlib payload."""

    return DEFLATE_PLAIN, zlib.compress(DEFLATE_PLAIN)

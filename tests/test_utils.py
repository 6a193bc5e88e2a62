from __future__ import annotations

import io
from pathlib import Path

import pytest

from pdfparsex import DecompressionError, PdfIOError, bytes_till_end, inflate, inflate_bytes, slurp_bytes
from pdfparsex.utils import resolve_path


def test_bytes_till_end_restores_position() -> None:
    source = io.BytesIO(b"0123456789")
    source.seek(3)

    assert bytes_till_end(source) == 7
    assert source.tell() == 3
    assert bytes_till_end(source) == 7


def test_bytes_till_end_at_end_of_source() -> None:
    source = io.BytesIO(b"abc")
    source.seek(0, io.SEEK_END)

    assert bytes_till_end(source) == 0


def test_slurp_bytes_reads_whole_file(sample_pdf: Path) -> None:
    data = slurp_bytes(sample_pdf)

    assert data == sample_pdf.read_bytes()
    assert data.startswith(b"%PDF-")


def test_slurp_bytes_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PdfIOError) as excinfo:
        slurp_bytes(tmp_path / "missing.pdf")

    assert isinstance(excinfo.value.__cause__, OSError)


def test_slurp_bytes_directory(tmp_path: Path) -> None:
    with pytest.raises(PdfIOError):
        slurp_bytes(tmp_path)


def test_inflate_known_fixture(deflate_fixture: tuple[bytes, bytes]) -> None:
    plain, compressed = deflate_fixture
    source = io.BytesIO(b"junk" + compressed + b"trailing")
    source.seek(4)
    before = bytes_till_end(source)

    result = inflate(source, len(compressed))

    assert result == plain
    assert source.tell() == 4
    assert bytes_till_end(source) == before


def test_inflate_rejects_malformed_data() -> None:
    source = io.BytesIO(b"this is not deflate data")

    with pytest.raises(DecompressionError):
        inflate(source, 10)
    assert source.tell() == 0


def test_inflate_rejects_truncated_data(deflate_fixture: tuple[bytes, bytes]) -> None:
    _, compressed = deflate_fixture
    source = io.BytesIO(compressed)

    with pytest.raises(DecompressionError):
        inflate(source, len(compressed) - 5)
    with pytest.raises(DecompressionError):
        inflate(source, len(compressed) + 5)


def test_inflate_bytes_is_pure(deflate_fixture: tuple[bytes, bytes]) -> None:
    plain, compressed = deflate_fixture

    assert inflate_bytes(compressed) == plain
    assert inflate_bytes(compressed) == plain


def test_resolve_path_rejects_none() -> None:
    with pytest.raises(ValueError):
        resolve_path(None)

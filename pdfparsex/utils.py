"""Byte source and decompression helpers shared by :mod:`pdfparsex`."""

from __future__ import annotations

import logging
import os
import zlib
from pathlib import Path
from typing import BinaryIO, Union

from .exceptions import DecompressionError, PdfIOError

PathLike = Union[str, os.PathLike[str]]

LOGGER = logging.getLogger("pdfparsex.utils")


def resolve_path(path: PathLike | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    return Path(path).expanduser().resolve()


def bytes_till_end(src: BinaryIO) -> int:
    """Return the number of bytes between the current position and the end.

    The position of ``src`` is restored before returning.
    """

    position = src.tell()
    try:
        end = src.seek(0, os.SEEK_END)
    finally:
        src.seek(position)
    return max(0, end - position)


def slurp_bytes(path: PathLike) -> bytes:
    """Read the whole file at ``path``.

    Raises:
        PdfIOError: If the file cannot be opened or read.
    """

    resolved = resolve_path(path)
    try:
        with resolved.open("rb") as handle:
            data = handle.read()
    except OSError as exc:
        LOGGER.error("Failed to read %s: %s", resolved, exc)
        raise PdfIOError(f"Unable to read file: {resolved}") from exc
    LOGGER.debug("Read %d bytes from %s", len(data), resolved)
    return data


def inflate_bytes(data: bytes) -> bytes:
    """Decompress a zlib/DEFLATE payload."""

    decompressor = zlib.decompressobj()
    try:
        result = decompressor.decompress(data)
        result += decompressor.flush()
    except zlib.error as exc:
        raise DecompressionError(f"Malformed compressed data: {exc}") from exc
    if not decompressor.eof:
        raise DecompressionError("Compressed data ended before the end of the deflate stream")
    return result


def inflate(src: BinaryIO, length: int) -> bytes:
    """Decompress ``length`` bytes read from ``src``.

    The position of ``src`` is restored afterwards. The decompressed size is
    not checked against any declared length.
    """

    if length < 0:
        raise ValueError("length must not be negative")
    position = src.tell()
    try:
        payload = src.read(length)
    finally:
        src.seek(position)
    if len(payload) != length:
        raise DecompressionError(
            f"Expected {length} compressed bytes, only {len(payload)} available"
        )
    result = inflate_bytes(payload)
    LOGGER.debug("Inflated %d bytes into %d bytes", length, len(result))
    return result


__all__ = [
    "PathLike",
    "resolve_path",
    "bytes_till_end",
    "slurp_bytes",
    "inflate_bytes",
    "inflate",
]

"""Custom exception types for the :mod:`pdfparsex` package."""

from __future__ import annotations


class PdfParseXError(Exception):
    """Base exception for all :mod:`pdfparsex` related errors."""


class PdfSyntaxError(PdfParseXError):
    """Raised when the byte source does not match PDF object syntax."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)
        self.offset = offset


class UnresolvedLengthError(PdfSyntaxError):
    """Raised when a stream ``/Length`` is an indirect reference nobody resolved."""

    def __init__(self, ref: object, offset: int | None = None) -> None:
        super().__init__(f"Stream /Length is an unresolved reference {ref}", offset)
        self.ref = ref


class PdfIOError(PdfParseXError):
    """Raised when a file cannot be opened or read."""


class DecompressionError(PdfParseXError):
    """Raised when a compressed payload is malformed or truncated."""


class UnsupportedFilterError(DecompressionError):
    """Raised when a stream declares a filter this package cannot decode."""


__all__ = [
    "PdfParseXError",
    "PdfSyntaxError",
    "UnresolvedLengthError",
    "PdfIOError",
    "DecompressionError",
    "UnsupportedFilterError",
]

"""Parser, object model and serializer for PDF object syntax."""

from __future__ import annotations

from .cursor import ByteCursor, Checkpoint
from .exceptions import (
    DecompressionError,
    PdfIOError,
    PdfParseXError,
    PdfSyntaxError,
    UnresolvedLengthError,
    UnsupportedFilterError,
)
from .filters import decode_stream, encode_stream
from .objects import (
    NULL,
    Array,
    Bool,
    Dict,
    Int,
    Name,
    Null,
    PdfObject,
    Real,
    Ref,
    Stream,
    String,
    TopLevel,
)
from .parser import (
    ObjectParser,
    ParserOptions,
    iter_top_level,
    loads,
    parse_object,
    parse_top_level,
)
from .serializer import serialize, write_object
from .utils import bytes_till_end, inflate, inflate_bytes, slurp_bytes

__all__ = [
    "ByteCursor",
    "Checkpoint",
    "PdfParseXError",
    "PdfSyntaxError",
    "UnresolvedLengthError",
    "PdfIOError",
    "DecompressionError",
    "UnsupportedFilterError",
    "NULL",
    "Null",
    "Bool",
    "Int",
    "Real",
    "String",
    "Name",
    "Array",
    "Dict",
    "Stream",
    "Ref",
    "PdfObject",
    "TopLevel",
    "ObjectParser",
    "ParserOptions",
    "parse_object",
    "parse_top_level",
    "iter_top_level",
    "loads",
    "serialize",
    "write_object",
    "decode_stream",
    "encode_stream",
    "bytes_till_end",
    "slurp_bytes",
    "inflate",
    "inflate_bytes",
]

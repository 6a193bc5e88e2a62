"""Canonical byte serialization of :mod:`pdfparsex.objects`.

The output parses back to an equal object. Dictionary keys are always
written in ascending order of their name bytes, independent of the order
they were inserted or parsed in.
"""

from __future__ import annotations

import io
import math
from decimal import Decimal
from typing import BinaryIO

from .objects import (
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
from .tokenizer import DELIMITERS, WHITESPACE

_NAME_ESCAPED = DELIMITERS | WHITESPACE | frozenset(b"#")
_LITERAL_ESCAPED = {ord("("): b"\\(", ord(")"): b"\\)", ord("\\"): b"\\\\", ord("\r"): b"\\r"}


def format_real(value: float) -> bytes:
    """Format ``value`` with up to 15 significant digits and no exponent."""

    if not math.isfinite(value):
        raise ValueError(f"PDF cannot represent the real number {value!r}")
    text = f"{value:.15g}"
    if "e" in text:
        # expand the already rounded digits instead of the full binary value
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    elif text.endswith("."):
        text += "0"
    if text in ("-0.0", "-0."):
        text = "0.0"
    return text.encode("ascii")


def encode_name(name: Name) -> bytes:
    out = bytearray(b"/")
    for byte in name.to_bytes():
        if byte in _NAME_ESCAPED or not 0x21 <= byte <= 0x7E:
            out += b"#%02X" % byte
        else:
            out.append(byte)
    return bytes(out)


def _is_literal_body(data: bytes) -> bool:
    """Return True if ``data`` reads back unchanged between ``(`` and ``)``."""

    depth = 0
    escaped = False
    for byte in data:
        if escaped:
            escaped = False
        elif byte == ord("\\"):
            escaped = True
        elif byte == ord("("):
            depth += 1
        elif byte == ord(")"):
            depth -= 1
            if depth < 0:
                return False
    return depth == 0 and not escaped


def encode_literal(string: String) -> bytes:
    """Write a literal string, escaping its value if the stored body is malformed."""

    if _is_literal_body(string.data):
        return b"(" + string.data + b")"
    out = bytearray(b"(")
    for byte in string.value():
        out += _LITERAL_ESCAPED.get(byte, bytes([byte]))
    out += b")"
    return bytes(out)


def write_object(obj: PdfObject | TopLevel, stream: BinaryIO) -> None:
    """Write the canonical form of ``obj`` to a binary stream."""

    if isinstance(obj, Null):
        stream.write(b"null")
    elif isinstance(obj, Bool):
        stream.write(b"true" if obj.value else b"false")
    elif isinstance(obj, Int):
        stream.write(b"%d" % obj.value)
    elif isinstance(obj, Real):
        stream.write(format_real(obj.value))
    elif isinstance(obj, String):
        if obj.hex:
            stream.write(b"<" + obj.data.hex().encode("ascii") + b">")
        else:
            stream.write(encode_literal(obj))
    elif isinstance(obj, Name):
        stream.write(encode_name(obj))
    elif isinstance(obj, Array):
        stream.write(b"[ ")
        for item in obj.items:
            write_object(item, stream)
            stream.write(b" ")
        stream.write(b"]")
    elif isinstance(obj, Dict):
        stream.write(b"<< ")
        for key, value in obj.sorted_items():
            stream.write(encode_name(key))
            stream.write(b" ")
            write_object(value, stream)
            stream.write(b" ")
        stream.write(b">>")
    elif isinstance(obj, Stream):
        write_object(obj.dictionary, stream)
        stream.write(b"\nstream\n")
        stream.write(obj.data)
        stream.write(b"\nendstream\n")
    elif isinstance(obj, Ref):
        stream.write(b"%d %d R" % (obj.object_number, obj.generation))
    elif isinstance(obj, TopLevel):
        stream.write(b"%d %d obj\n" % (obj.object_number, obj.generation))
        write_object(obj.payload, stream)
        stream.write(b"\nendobj\n")
    else:
        raise TypeError(f"Cannot serialize {type(obj).__name__} as a PDF object")


def serialize(obj: PdfObject | TopLevel) -> bytes:
    buffer = io.BytesIO()
    write_object(obj, buffer)
    return buffer.getvalue()


__all__ = ["format_real", "encode_name", "encode_literal", "write_object", "serialize"]

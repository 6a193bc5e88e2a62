"""Recursive-descent parser for PDF object syntax.

:class:`ObjectParser` reads objects from a :class:`~pdfparsex.cursor.ByteCursor`.
The only genuinely ambiguous production is a leading integer, which may be a
bare number, the start of an indirect reference ``N G R`` or the start of an
indirect object definition ``N G obj ... endobj``. The parser resolves it by
looking ahead from a checkpoint and restoring the checkpoint whenever the
longer forms do not match, so a failed attempt never consumes input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator

from .cursor import ByteCursor, ByteSource
from .exceptions import PdfSyntaxError, UnresolvedLengthError
from .objects import (
    NULL,
    Array,
    Bool,
    Dict,
    Int,
    Name,
    PdfObject,
    Real,
    Ref,
    Stream,
    String,
    TopLevel,
)
from .tokenizer import (
    DIGITS,
    HEX_DIGITS,
    decode_name,
    get_name_token,
    is_whitespace,
    match_keyword,
    parse_int,
    parse_number,
    skip_whitespace,
)

LOGGER = logging.getLogger("pdfparsex.parser")

LengthResolver = Callable[[Ref], int]

_NUMERIC_START = DIGITS | frozenset(b"+-.")


@dataclass(slots=True)
class ParserOptions:
    """Options controlling how objects are parsed."""

    # Maps a stream's indirect /Length to its integer value.
    length_resolver: LengthResolver | None = None
    # Each level costs several interpreter frames.
    max_depth: int = 100


class ObjectParser:
    """Parse PDF objects from bytes or a seekable binary stream."""

    def __init__(self, source: ByteSource | ByteCursor, options: ParserOptions | None = None) -> None:
        self.cursor = source if isinstance(source, ByteCursor) else ByteCursor(source)
        self.options = options or ParserOptions()
        self._depth = 0

    # -- Entry points --------------------------------------------------------

    def parse_object(self) -> PdfObject | TopLevel:
        """Parse the next object, which may be an indirect object definition."""

        offset = self.cursor.tell()
        try:
            return self._parse(allow_top_level=True)
        except RecursionError as exc:
            raise PdfSyntaxError("Objects nested too deeply for the interpreter stack", offset) from exc

    def parse_top_level(self) -> TopLevel:
        """Parse the next object and require it to be ``N G obj ... endobj``."""

        skip_whitespace(self.cursor)
        offset = self.cursor.tell()
        obj = self.parse_object()
        if not isinstance(obj, TopLevel):
            raise PdfSyntaxError(
                f"Expected an indirect object definition, found {type(obj).__name__}", offset
            )
        return obj

    def iter_top_level(self) -> Iterator[TopLevel]:
        """Yield consecutive indirect object definitions until the input ends."""

        while True:
            skip_whitespace(self.cursor)
            if self.cursor.at_end():
                return
            yield self.parse_top_level()

    # -- Dispatch ------------------------------------------------------------

    def _parse(self, *, allow_top_level: bool) -> PdfObject | TopLevel:
        cursor = self.cursor
        skip_whitespace(cursor)
        offset = cursor.tell()
        lookahead = cursor.peek(2)
        if not lookahead:
            raise PdfSyntaxError("Unexpected end of input", offset)

        first = lookahead[0]
        if first == ord("/"):
            return self._parse_name()
        if first == ord("("):
            return self._parse_literal_string()
        if lookahead == b"<<":
            return self._nested(self._parse_dict_or_stream)
        if first == ord("<"):
            return self._parse_hex_string()
        if first == ord("["):
            return self._nested(self._parse_array)
        if first in _NUMERIC_START:
            return self._parse_numeric(allow_top_level=allow_top_level)
        if match_keyword(cursor, b"true"):
            return Bool(True)
        if match_keyword(cursor, b"false"):
            return Bool(False)
        if match_keyword(cursor, b"null"):
            return NULL
        raise PdfSyntaxError(f"Unexpected byte {bytes([first])!r}", offset)

    def _nested(self, production: Callable[[], PdfObject]) -> PdfObject:
        if self._depth >= self.options.max_depth:
            raise PdfSyntaxError(
                f"Objects nested deeper than {self.options.max_depth} levels", self.cursor.tell()
            )
        self._depth += 1
        try:
            return production()
        finally:
            self._depth -= 1

    def _parse_value(self) -> PdfObject:
        return self._parse(allow_top_level=False)  # type: ignore[return-value]

    # -- Scalars -------------------------------------------------------------

    def _parse_name(self) -> Name:
        offset = self.cursor.tell()
        self.cursor.skip()
        raw = get_name_token(self.cursor)
        return Name(decode_name(raw, offset))

    def _parse_literal_string(self) -> String:
        cursor = self.cursor
        offset = cursor.tell()
        cursor.skip()
        data = bytearray()
        depth = 1
        while True:
            byte = cursor.read_byte()
            if byte is None:
                raise PdfSyntaxError("Unterminated literal string", offset)
            if byte == ord("\\"):
                escaped = cursor.read_byte()
                if escaped is None:
                    raise PdfSyntaxError("Unterminated literal string", offset)
                data.append(byte)
                data.append(escaped)
                continue
            if byte == ord("("):
                depth += 1
            elif byte == ord(")"):
                depth -= 1
                if depth == 0:
                    return String(bytes(data))
            data.append(byte)

    def _parse_hex_string(self) -> String:
        cursor = self.cursor
        offset = cursor.tell()
        cursor.skip()
        digits = bytearray()
        while True:
            byte = cursor.read_byte()
            if byte is None:
                raise PdfSyntaxError("Unterminated hex string", offset)
            if byte == ord(">"):
                break
            if is_whitespace(byte):
                continue
            if byte not in HEX_DIGITS:
                raise PdfSyntaxError(f"Invalid byte {bytes([byte])!r} in hex string", cursor.tell() - 1)
            digits.append(byte)
        if len(digits) % 2:
            digits.append(ord("0"))
        return String(bytes.fromhex(digits.decode("ascii")), hex=True)

    def _parse_numeric(self, *, allow_top_level: bool) -> PdfObject | TopLevel:
        cursor = self.cursor
        offset = cursor.tell()
        number = parse_number(cursor)
        if number is None:
            raise PdfSyntaxError("Malformed number", offset)
        if isinstance(number, float):
            return Real(number)

        after_first = cursor.checkpoint()
        if number >= 0 and skip_whitespace(cursor):
            generation = parse_int(cursor)
            if generation is not None and generation >= 0:
                after_second = cursor.checkpoint()
                if skip_whitespace(cursor):
                    if match_keyword(cursor, b"R"):
                        return Ref(number, generation)
                    keyword_offset = cursor.tell()
                    if match_keyword(cursor, b"obj"):
                        if not allow_top_level:
                            raise PdfSyntaxError("Indirect object definition is not allowed here", keyword_offset)
                        return self._finish_top_level(number, generation)
                after_second.restore()
        after_first.restore()
        return Int(number)

    def _finish_top_level(self, number: int, generation: int) -> TopLevel:
        payload = self._parse_value()
        skip_whitespace(self.cursor)
        if not match_keyword(self.cursor, b"endobj"):
            raise PdfSyntaxError(
                f"Missing 'endobj' for object {number} {generation}", self.cursor.tell()
            )
        return TopLevel(number, generation, payload)

    # -- Composites ----------------------------------------------------------

    def _parse_array(self) -> Array:
        cursor = self.cursor
        offset = cursor.tell()
        cursor.skip()
        array = Array()
        while True:
            skip_whitespace(cursor)
            byte = cursor.peek_byte()
            if byte is None:
                raise PdfSyntaxError("Unterminated array", offset)
            if byte == ord("]"):
                cursor.skip()
                return array
            array.append(self._parse_value())

    def _parse_dict_or_stream(self) -> Dict | Stream:
        dictionary = self._parse_dict()
        after_dict = self.cursor.checkpoint()
        skip_whitespace(self.cursor)
        if match_keyword(self.cursor, b"stream"):
            return self._parse_stream_body(dictionary)
        after_dict.restore()
        return dictionary

    def _parse_dict(self) -> Dict:
        cursor = self.cursor
        offset = cursor.tell()
        cursor.skip(2)
        dictionary = Dict()
        while True:
            skip_whitespace(cursor)
            lookahead = cursor.peek(2)
            if not lookahead:
                raise PdfSyntaxError("Unterminated dictionary", offset)
            if lookahead == b">>":
                cursor.skip(2)
                return dictionary
            if lookahead[0] != ord("/"):
                raise PdfSyntaxError("Dictionary key must be a name", cursor.tell())
            key = self._parse_name()
            skip_whitespace(cursor)
            if cursor.startswith(b">>"):
                raise PdfSyntaxError(f"Missing value for dictionary key {key}", cursor.tell())
            dictionary[key] = self._parse_value()

    def _parse_stream_body(self, dictionary: Dict) -> Stream:
        cursor = self.cursor
        byte = cursor.read_byte()
        if byte == ord("\r"):
            if cursor.peek_byte() == ord("\n"):
                cursor.skip()
        elif byte != ord("\n"):
            raise PdfSyntaxError("Keyword 'stream' must be followed by an end-of-line", cursor.tell())

        start = cursor.tell()
        length = self._stream_length(dictionary, start)
        data = cursor.read(length)
        if len(data) != length:
            raise PdfSyntaxError(
                f"Stream declares {length} bytes but only {len(data)} remain", start
            )
        skip_whitespace(cursor)
        if not match_keyword(cursor, b"endstream"):
            raise PdfSyntaxError("Missing 'endstream' after stream data", cursor.tell())
        LOGGER.debug("Read %d byte stream at offset %d", length, start)
        return Stream(dictionary, data)

    def _stream_length(self, dictionary: Dict, offset: int) -> int:
        declared = dictionary.get("Length")
        if isinstance(declared, Ref):
            resolver = self.options.length_resolver
            if resolver is None:
                raise UnresolvedLengthError(declared, offset)
            length = resolver(declared)
            LOGGER.debug("Resolved stream /Length %s to %d", declared, length)
        elif isinstance(declared, Int):
            length = declared.value
        else:
            raise PdfSyntaxError("Stream dictionary has no integer /Length", offset)
        if length < 0:
            raise PdfSyntaxError(f"Negative stream /Length {length}", offset)
        return length


# -- Convenience wrappers ----------------------------------------------------


def parse_object(source: ByteSource | ByteCursor, options: ParserOptions | None = None) -> PdfObject | TopLevel:
    return ObjectParser(source, options).parse_object()


def parse_top_level(source: ByteSource | ByteCursor, options: ParserOptions | None = None) -> TopLevel:
    return ObjectParser(source, options).parse_top_level()


def iter_top_level(source: ByteSource | ByteCursor, options: ParserOptions | None = None) -> Iterator[TopLevel]:
    return ObjectParser(source, options).iter_top_level()


def loads(data: bytes, options: ParserOptions | None = None) -> PdfObject | TopLevel:
    """Parse a single object from ``data``."""

    return parse_object(data, options)


__all__ = [
    "LengthResolver",
    "ParserOptions",
    "ObjectParser",
    "parse_object",
    "parse_top_level",
    "iter_top_level",
    "loads",
]

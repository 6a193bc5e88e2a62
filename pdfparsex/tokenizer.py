"""Low level lexical helpers for PDF object syntax.

All helpers operate on a :class:`~pdfparsex.cursor.ByteCursor`. Recognition
helpers (``parse_int``, ``parse_double``, ``parse_number``,
``match_keyword``) never raise on a mismatch: they leave the cursor where it
was and return ``None``/``False`` so callers can backtrack cheaply.
"""

from __future__ import annotations

from .cursor import ByteCursor
from .exceptions import PdfSyntaxError

WHITESPACE = frozenset(b"\x00\t\n\x0c\r ")
DELIMITERS = frozenset(b"()<>[]{}/%")
DIGITS = frozenset(b"0123456789")
HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def is_whitespace(byte: int | None) -> bool:
    return byte is not None and byte in WHITESPACE


def ends_name(byte: int | None) -> bool:
    """Return ``True`` when ``byte`` terminates a name or keyword token."""

    return byte is None or byte in WHITESPACE or byte in DELIMITERS


def valid_name_char(byte: int | None) -> bool:
    return not ends_name(byte)


def skip_whitespace(cursor: ByteCursor) -> int:
    """Advance past PDF whitespace and return the number of bytes skipped."""

    skipped = 0
    while is_whitespace(cursor.peek_byte()):
        cursor.skip()
        skipped += 1
    return skipped


def get_name_token(cursor: ByteCursor) -> bytes:
    """Read raw name bytes up to the next delimiter or whitespace."""

    token = bytearray()
    while valid_name_char(cursor.peek_byte()):
        token.append(cursor.read_byte())
    return bytes(token)


def decode_name(raw: bytes, offset: int | None = None) -> str:
    """Resolve ``#xx`` escapes in a raw name token."""

    if b"#" not in raw:
        return raw.decode("latin-1")
    decoded = bytearray()
    index = 0
    while index < len(raw):
        byte = raw[index]
        if byte == ord("#"):
            digits = raw[index + 1 : index + 3]
            if len(digits) != 2 or not all(d in HEX_DIGITS for d in digits):
                raise PdfSyntaxError(f"Invalid #-escape in name /{raw.decode('latin-1')}", offset)
            decoded.append(int(digits, 16))
            index += 3
        else:
            decoded.append(byte)
            index += 1
    return decoded.decode("latin-1")


def _scan_numeral(cursor: ByteCursor) -> bytes | None:
    """Consume ``[+-]?digits?(.digits?)?`` holding at least one digit."""

    checkpoint = cursor.checkpoint()
    numeral = bytearray()
    byte = cursor.peek_byte()
    if byte is not None and byte in b"+-":
        numeral.append(cursor.read_byte())
    digits = 0
    seen_point = False
    while True:
        byte = cursor.peek_byte()
        if byte is not None and byte in DIGITS:
            digits += 1
        elif byte == ord(".") and not seen_point:
            seen_point = True
        else:
            break
        numeral.append(cursor.read_byte())
    if digits == 0:
        checkpoint.restore()
        return None
    return bytes(numeral)


def parse_number(cursor: ByteCursor) -> int | float | None:
    """Consume the longest numeral; ``int`` without a ``.``, ``float`` with one."""

    checkpoint = cursor.checkpoint()
    numeral = _scan_numeral(cursor)
    if numeral is None:
        return None
    if b"." in numeral:
        return float(numeral)
    value = int(numeral)
    if not INT64_MIN <= value <= INT64_MAX:
        checkpoint.restore()
        return parse_double(cursor)
    return value


def parse_int(cursor: ByteCursor) -> int | None:
    """Consume a signed 64-bit integer literal, or nothing."""

    checkpoint = cursor.checkpoint()
    numeral = _scan_numeral(cursor)
    if numeral is None:
        return None
    if b"." in numeral:
        checkpoint.restore()
        return None
    value = int(numeral)
    if not INT64_MIN <= value <= INT64_MAX:
        checkpoint.restore()
        return None
    return value


def parse_double(cursor: ByteCursor) -> float | None:
    """Consume a real literal such as ``1``, ``-2.5``, ``.5`` or ``5.``, or nothing."""

    numeral = _scan_numeral(cursor)
    if numeral is None:
        return None
    return float(numeral)


def match_keyword(cursor: ByteCursor, keyword: bytes) -> bool:
    """Consume ``keyword`` when it appears as a whole token."""

    checkpoint = cursor.checkpoint()
    if cursor.read(len(keyword)) == keyword and ends_name(cursor.peek_byte()):
        return True
    checkpoint.restore()
    return False


__all__ = [
    "WHITESPACE",
    "DELIMITERS",
    "is_whitespace",
    "ends_name",
    "valid_name_char",
    "skip_whitespace",
    "get_name_token",
    "decode_name",
    "parse_number",
    "parse_int",
    "parse_double",
    "match_keyword",
]

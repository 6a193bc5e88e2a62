"""In-memory model of PDF objects.

Every PDF object is one of a closed set of dataclasses collected in the
:data:`PdfObject` union. Composite objects (:class:`Array`, :class:`Dict`,
:class:`Stream`) own their children, so a parsed object graph is a tree.
:class:`Ref` only names another object by number and generation; resolving
it needs a document level object table and is left to callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

from .tokenizer import INT64_MAX, INT64_MIN

_LITERAL_ESCAPES = {
    ord("n"): b"\n",
    ord("r"): b"\r",
    ord("t"): b"\t",
    ord("b"): b"\b",
    ord("f"): b"\f",
    ord("("): b"(",
    ord(")"): b")",
    ord("\\"): b"\\",
}


@dataclass(slots=True, frozen=True)
class Null:
    """The PDF ``null`` object."""

    def __repr__(self) -> str:
        return "Null"


NULL = Null()


@dataclass(slots=True, frozen=True)
class Bool:
    value: bool


@dataclass(slots=True, frozen=True)
class Int:
    value: int

    def __post_init__(self) -> None:
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"Integer {self.value} does not fit in 64 bits")


@dataclass(slots=True, frozen=True)
class Real:
    value: float


@dataclass(slots=True, frozen=True)
class String:
    """A PDF string.

    ``data`` holds the bytes between the delimiters exactly as written for
    literal strings, and the decoded bytes for hex strings. ``hex`` records
    which form was used. Equality and hashing use :meth:`value`, so ``(\\101)``,
    ``(A)`` and ``<41>`` are all equal.
    """

    data: bytes
    hex: bool = field(default=False, compare=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, String):
            return NotImplemented
        return self.value() == other.value()

    def __hash__(self) -> int:
        return hash(self.value())

    def value(self) -> bytes:
        """Return the string value with literal escape sequences resolved."""

        if self.hex:
            return self.data
        raw = self.data
        out = bytearray()
        index = 0
        while index < len(raw):
            byte = raw[index]
            index += 1
            if byte == ord("\r"):
                # a bare end-of-line inside a literal string reads as LF
                if index < len(raw) and raw[index] == ord("\n"):
                    index += 1
                out.append(ord("\n"))
                continue
            if byte != ord("\\") or index >= len(raw):
                out.append(byte)
                continue
            escaped = raw[index]
            index += 1
            if escaped in _LITERAL_ESCAPES:
                out += _LITERAL_ESCAPES[escaped]
            elif escaped in b"01234567":
                digits = bytes([escaped])
                while len(digits) < 3 and index < len(raw) and raw[index] in b"01234567":
                    digits += raw[index : index + 1]
                    index += 1
                out.append(int(digits, 8) & 0xFF)
            elif escaped == ord("\r"):
                if index < len(raw) and raw[index] == ord("\n"):
                    index += 1
            elif escaped == ord("\n"):
                pass
            else:
                out.append(escaped)
        return bytes(out)


@dataclass(slots=True, frozen=True, order=True)
class Name:
    """A PDF name, stored decoded and without the leading ``/``.

    Each character stands for one byte (latin-1), so ordering names orders
    their underlying bytes.
    """

    value: str

    def __post_init__(self) -> None:
        if any(ord(char) > 0xFF for char in self.value):
            raise ValueError(f"Name {self.value!r} has characters outside the byte range")

    def to_bytes(self) -> bytes:
        return self.value.encode("latin-1")

    def __str__(self) -> str:
        return "/" + self.value


@dataclass(slots=True)
class Array:
    items: list["PdfObject"] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["PdfObject"]:
        return iter(self.items)

    def __getitem__(self, index: int) -> "PdfObject":
        return self.items[index]

    def append(self, obj: "PdfObject") -> None:
        self.items.append(obj)


def _as_name(key: Name | str) -> Name:
    if isinstance(key, Name):
        return key
    return Name(key[1:] if key.startswith("/") else key)


@dataclass(slots=True)
class Dict:
    """Mapping from :class:`Name` to object.

    Lookups accept a :class:`Name` or a plain string with or without the
    leading slash, so ``d["Length"]`` and ``d["/Length"]`` are equivalent.
    """

    entries: dict[Name, "PdfObject"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Name]:
        return iter(self.entries)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (Name, str)):
            return False
        return _as_name(key) in self.entries

    def __getitem__(self, key: Name | str) -> "PdfObject":
        return self.entries[_as_name(key)]

    def __setitem__(self, key: Name | str, value: "PdfObject") -> None:
        self.entries[_as_name(key)] = value

    def get(self, key: Name | str, default: "PdfObject | None" = None) -> "PdfObject | None":
        return self.entries.get(_as_name(key), default)

    def sorted_items(self) -> list[tuple[Name, "PdfObject"]]:
        return sorted(self.entries.items(), key=lambda item: item[0].to_bytes())


@dataclass(slots=True)
class Stream:
    """A dictionary paired with its raw, still encoded payload."""

    dictionary: Dict = field(default_factory=Dict)
    data: bytes = b""

    @property
    def length(self) -> int | None:
        declared = self.dictionary.get("Length")
        if isinstance(declared, Int):
            return declared.value
        return None


@dataclass(slots=True, frozen=True)
class Ref:
    """Indirect reference ``N G R``."""

    object_number: int
    generation: int

    def __str__(self) -> str:
        return f"{self.object_number} {self.generation} R"


PdfObject = Union[Null, Bool, Int, Real, String, Name, Array, Dict, Stream, Ref]


@dataclass(slots=True)
class TopLevel:
    """Numbered indirect object definition ``N G obj ... endobj``."""

    object_number: int
    generation: int
    payload: PdfObject

    def __post_init__(self) -> None:
        if self.object_number < 0 or self.generation < 0:
            raise ValueError("Object number and generation must not be negative")

    @property
    def ref(self) -> Ref:
        return Ref(self.object_number, self.generation)


__all__ = [
    "Null",
    "NULL",
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
]

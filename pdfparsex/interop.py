"""Conversion between :mod:`pdfparsex.objects` and :mod:`pypdf.generic`.

This lets objects parsed here be handed to pypdf based tooling, and objects
read by :class:`pypdf.PdfReader` be compared with or serialized by this
package. Indirect references are never resolved in either direction.
"""

from __future__ import annotations

from typing import Any

from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    ByteStringObject,
    DecodedStreamObject,
    DictionaryObject,
    EncodedStreamObject,
    FloatObject,
    IndirectObject,
    NameObject,
    NullObject,
    NumberObject,
    StreamObject,
    TextStringObject,
)

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


def _name_from_pypdf(name: str) -> Name:
    text = name[1:] if name.startswith("/") else name
    return Name(text.encode("utf-8").decode("latin-1"))


def _name_to_pypdf(name: Name) -> NameObject:
    raw = name.to_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        text = name.value
    return NameObject("/" + text)


def _string_bytes(obj: TextStringObject) -> bytes:
    original = getattr(obj, "original_bytes", None)
    if original is not None:
        return bytes(original)
    return str(obj).encode("latin-1", "replace")


def from_pypdf(obj: Any) -> PdfObject:
    """Convert a :mod:`pypdf.generic` object into the local object model."""

    if obj is None or isinstance(obj, NullObject):
        return NULL
    if isinstance(obj, IndirectObject):
        return Ref(obj.idnum, obj.generation)
    if isinstance(obj, BooleanObject):
        return Bool(bool(obj.value))
    if isinstance(obj, NumberObject):
        return Int(int(obj))
    if isinstance(obj, FloatObject):
        return Real(float(obj))
    if isinstance(obj, NameObject):
        return _name_from_pypdf(obj)
    if isinstance(obj, ByteStringObject):
        return String(bytes(obj), hex=True)
    if isinstance(obj, TextStringObject):
        return String(_string_bytes(obj), hex=True)
    if isinstance(obj, ArrayObject):
        return Array([from_pypdf(item) for item in obj])
    if isinstance(obj, StreamObject):
        data = bytes(getattr(obj, "_data", b"") or b"")
        dictionary = _dict_from_pypdf(obj)
        dictionary["Length"] = Int(len(data))
        return Stream(dictionary, data)
    if isinstance(obj, DictionaryObject):
        return _dict_from_pypdf(obj)
    raise TypeError(f"Cannot convert {type(obj).__name__} from pypdf")


def _dict_from_pypdf(obj: DictionaryObject) -> Dict:
    dictionary = Dict()
    # raw_get keeps indirect references unresolved
    for key in obj.keys():
        dictionary[_name_from_pypdf(key)] = from_pypdf(obj.raw_get(key))
    return dictionary


def to_pypdf(obj: PdfObject) -> Any:
    """Convert a local object into the equivalent :mod:`pypdf.generic` object.

    :class:`Ref` becomes an :class:`~pypdf.generic.IndirectObject` that is not
    bound to any reader.
    """

    if isinstance(obj, Null):
        return NullObject()
    if isinstance(obj, Bool):
        return BooleanObject(obj.value)
    if isinstance(obj, Int):
        return NumberObject(obj.value)
    if isinstance(obj, Real):
        return FloatObject(obj.value)
    if isinstance(obj, String):
        return ByteStringObject(obj.value())
    if isinstance(obj, Name):
        return _name_to_pypdf(obj)
    if isinstance(obj, Array):
        return ArrayObject([to_pypdf(item) for item in obj.items])
    if isinstance(obj, Dict):
        return _dict_to_pypdf(obj, DictionaryObject())
    if isinstance(obj, Stream):
        target = EncodedStreamObject() if "Filter" in obj.dictionary else DecodedStreamObject()
        _dict_to_pypdf(obj.dictionary, target)
        target._data = obj.data
        return target
    if isinstance(obj, Ref):
        return IndirectObject(obj.object_number, obj.generation, None)
    if isinstance(obj, TopLevel):
        raise TypeError("Indirect object definitions have no pypdf object equivalent")
    raise TypeError(f"Cannot convert {type(obj).__name__} to pypdf")


def _dict_to_pypdf(obj: Dict, target: DictionaryObject) -> DictionaryObject:
    for key, value in obj.entries.items():
        target[_name_to_pypdf(key)] = to_pypdf(value)
    return target


__all__ = ["from_pypdf", "to_pypdf"]

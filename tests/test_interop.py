from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfReader
from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    DictionaryObject,
    FloatObject,
    IndirectObject,
    NameObject,
    NullObject,
    NumberObject,
    TextStringObject,
)

from pdfparsex import (
    NULL,
    Array,
    Bool,
    Dict,
    Int,
    Name,
    Real,
    Ref,
    Stream,
    String,
    TopLevel,
    ObjectParser,
    decode_stream,
    slurp_bytes,
)
from pdfparsex.interop import from_pypdf, to_pypdf


def _xref_offsets(reader: PdfReader) -> dict[tuple[int, int], int]:
    offsets: dict[tuple[int, int], int] = {}
    free = getattr(reader, "xref_free_entry", {})
    for generation, entries in reader.xref.items():
        for number, offset in entries.items():
            if number == 0 or free.get(generation, {}).get(number):
                continue
            offsets[(number, generation)] = offset
    return offsets


def test_from_pypdf_scalars() -> None:
    assert from_pypdf(NullObject()) == NULL
    assert from_pypdf(None) == NULL
    assert from_pypdf(BooleanObject(True)) == Bool(True)
    assert from_pypdf(NumberObject(7)) == Int(7)
    assert from_pypdf(FloatObject(1.5)) == Real(1.5)
    assert from_pypdf(NameObject("/Type")) == Name("Type")
    assert from_pypdf(TextStringObject("abc")) == String(b"abc")
    assert from_pypdf(IndirectObject(3, 0, None)) == Ref(3, 0)


def test_from_pypdf_composites() -> None:
    source = DictionaryObject(
        {
            NameObject("/Kids"): ArrayObject([IndirectObject(4, 0, None), NumberObject(1)]),
            NameObject("/Count"): NumberObject(1),
        }
    )

    assert from_pypdf(source) == Dict(
        {Name("Kids"): Array([Ref(4, 0), Int(1)]), Name("Count"): Int(1)}
    )


def test_to_pypdf_round_trip() -> None:
    obj = Dict(
        {
            Name("Type"): Name("Annot"),
            Name("Rect"): Array([Int(0), Real(0.5), Int(10), Int(20)]),
            Name("P"): Ref(2, 0),
            Name("Contents"): String(b"note"),
            Name("Open"): Bool(False),
            Name("Parent"): NULL,
        }
    )

    assert from_pypdf(to_pypdf(obj)) == obj


def test_to_pypdf_stream_keeps_raw_payload() -> None:
    stream = Stream(Dict({Name("Length"): Int(3)}), b"abc")

    converted = to_pypdf(stream)

    assert converted._data == b"abc"
    assert from_pypdf(converted) == stream


def test_to_pypdf_rejects_top_level() -> None:
    with pytest.raises(TypeError):
        to_pypdf(TopLevel(1, 0, NULL))


def test_every_written_object_parses(sample_pdf: Path) -> None:
    data = slurp_bytes(sample_pdf)
    reader = PdfReader(str(sample_pdf))
    offsets = _xref_offsets(reader)
    assert offsets

    for (number, generation), offset in offsets.items():
        parser = ObjectParser(data)
        parser.cursor.seek(offset)
        top = parser.parse_top_level()

        assert top.object_number == number
        assert top.generation == generation


def test_parsed_objects_match_pypdf(sample_pdf: Path) -> None:
    data = slurp_bytes(sample_pdf)
    reader = PdfReader(str(sample_pdf))
    offsets = _xref_offsets(reader)
    root_ref = reader.trailer.raw_get("/Root")
    pages_ref = reader.trailer["/Root"].raw_get("/Pages")

    for ref in (root_ref, pages_ref):
        parser = ObjectParser(data)
        parser.cursor.seek(offsets[(ref.idnum, ref.generation)])
        top = parser.parse_top_level()

        assert top.payload == from_pypdf(reader.get_object(ref))

    assert top.payload["Count"] == Int(3)
    assert len(top.payload["Kids"]) == 3
    assert all(isinstance(kid, Ref) for kid in top.payload["Kids"])


def test_content_streams_match_pypdf(sample_pdf: Path) -> None:
    data = slurp_bytes(sample_pdf)
    reader = PdfReader(str(sample_pdf))
    offsets = _xref_offsets(reader)

    for page in reader.pages:
        contents_ref = page.raw_get("/Contents")
        parser = ObjectParser(data)
        parser.cursor.seek(offsets[(contents_ref.idnum, contents_ref.generation)])
        top = parser.parse_top_level()

        assert isinstance(top.payload, Stream)
        assert decode_stream(top.payload) == reader.get_object(contents_ref).get_data()
        assert b"10 10 l" in top.payload.data

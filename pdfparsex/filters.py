"""Stream payload decoding and encoding."""

from __future__ import annotations

import logging
import zlib
from typing import Mapping

from .exceptions import UnsupportedFilterError
from .objects import Array, Dict, Int, Name, PdfObject, Stream
from .utils import inflate_bytes

LOGGER = logging.getLogger("pdfparsex.filters")

FLATE_DECODE = Name("FlateDecode")


def _as_list(value: PdfObject | None) -> list[PdfObject]:
    if value is None:
        return []
    if isinstance(value, Array):
        return list(value.items)
    return [value]


def stream_filters(stream: Stream) -> list[Name]:
    """Return the filter names declared by ``stream`` in application order."""

    filters = []
    for entry in _as_list(stream.dictionary.get("Filter")):
        if not isinstance(entry, Name):
            raise UnsupportedFilterError(f"Stream /Filter entry is not a name: {entry!r}")
        filters.append(entry)
    return filters


def _check_decode_parms(stream: Stream) -> None:
    for parms in _as_list(stream.dictionary.get("DecodeParms")):
        if not isinstance(parms, Dict):
            continue
        predictor = parms.get("Predictor")
        if isinstance(predictor, Int) and predictor.value > 1:
            raise UnsupportedFilterError(f"Predictor {predictor.value} is not supported")


def decode_stream(stream: Stream) -> bytes:
    """Return the payload of ``stream`` with its filters undone.

    Raises:
        UnsupportedFilterError: If a filter other than ``/FlateDecode`` or a
            predictor is declared.
        DecompressionError: If the compressed payload is malformed.
    """

    filters = stream_filters(stream)
    if not filters:
        return stream.data
    _check_decode_parms(stream)
    data = stream.data
    for name in filters:
        if name != FLATE_DECODE:
            raise UnsupportedFilterError(f"Unsupported stream filter {name}")
        data = inflate_bytes(data)
    LOGGER.debug("Decoded %d byte stream into %d bytes", len(stream.data), len(data))
    return data


def encode_stream(
    data: bytes,
    entries: Mapping[str, PdfObject] | None = None,
    *,
    compress: bool = True,
) -> Stream:
    """Build a :class:`Stream` for ``data`` with a matching ``/Length``."""

    dictionary = Dict()
    for key, value in (entries or {}).items():
        dictionary[key] = value
    payload = data
    if compress:
        payload = zlib.compress(data)
        dictionary["Filter"] = FLATE_DECODE
    dictionary["Length"] = Int(len(payload))
    return Stream(dictionary, payload)


__all__ = ["FLATE_DECODE", "stream_filters", "decode_stream", "encode_stream"]

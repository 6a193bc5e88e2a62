"""Position-tracking cursor over a seekable byte source."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import BinaryIO, Union

ByteSource = Union[bytes, bytearray, memoryview, BinaryIO]


@dataclass(slots=True, frozen=True)
class Checkpoint:
    """A saved cursor position that can be returned to."""

    cursor: "ByteCursor"
    position: int

    def restore(self) -> None:
        self.cursor.seek(self.position)


class ByteCursor:
    """Byte-at-a-time reader with explicit checkpoints for backtracking.

    ``source`` may be a bytes-like object or any seekable binary stream. The
    cursor reads through the stream, so the stream position and the cursor
    position always agree.
    """

    def __init__(self, source: ByteSource) -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        if not source.seekable():
            raise ValueError("ByteCursor requires a seekable byte source")
        self.stream: BinaryIO = source

    def tell(self) -> int:
        return self.stream.tell()

    def seek(self, position: int) -> None:
        self.stream.seek(position)

    def checkpoint(self) -> Checkpoint:
        return Checkpoint(self, self.tell())

    def peek(self, size: int = 1) -> bytes:
        """Return up to ``size`` upcoming bytes without consuming them."""

        position = self.tell()
        data = self.stream.read(size)
        self.seek(position)
        return data

    def peek_byte(self) -> int | None:
        data = self.peek(1)
        return data[0] if data else None

    def read(self, size: int) -> bytes:
        return self.stream.read(size)

    def read_byte(self) -> int | None:
        data = self.stream.read(1)
        return data[0] if data else None

    def skip(self, size: int = 1) -> None:
        self.seek(self.tell() + size)

    def at_end(self) -> bool:
        return not self.peek(1)

    def startswith(self, prefix: bytes) -> bool:
        return self.peek(len(prefix)) == prefix


__all__ = ["ByteSource", "ByteCursor", "Checkpoint"]

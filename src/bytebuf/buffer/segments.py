"""Splitting a buffer into independently owned segments."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, overload

from .buffer import ByteBuffer
from .search import iter_occurrences
from .validation import Operand, coerce_operand, ensure_delimiter


class SegmentList(Sequence[ByteBuffer]):
    """Ordered, owning collection of split segments.

    ``release`` frees every segment together; using the list as a context
    manager releases it on exit.
    """

    def __init__(self, segments: Iterable[ByteBuffer] = ()) -> None:
        self._segments: List[ByteBuffer] = list(segments)

    def __len__(self) -> int:
        return len(self._segments)

    @overload
    def __getitem__(self, index: int) -> ByteBuffer: ...

    @overload
    def __getitem__(self, index: slice) -> List[ByteBuffer]: ...

    def __getitem__(self, index):
        return self._segments[index]

    def __iter__(self) -> Iterator[ByteBuffer]:
        return iter(self._segments)

    def __repr__(self) -> str:
        return f"SegmentList({self.to_list()!r})"

    def to_list(self) -> List[bytes]:
        return [segment.to_bytes() for segment in self._segments]

    def join(self, delimiter: Operand, *, name: str = "joined") -> ByteBuffer:
        """Concatenate the segments with ``delimiter`` in one exact-size buffer."""

        glue = coerce_operand(delimiter, argument="delimiter")
        pieces: List[bytes] = []
        for index, segment in enumerate(self._segments):
            if index:
                pieces.append(glue)
            pieces.append(segment.to_bytes())
        total = sum(len(piece) for piece in pieces)
        joined = ByteBuffer(capacity=total, name=name) if total else ByteBuffer(name=name)
        joined.append_many(pieces)
        return joined

    def release(self) -> None:
        for segment in self._segments:
            segment.release()
        self._segments.clear()

    def __enter__(self) -> "SegmentList":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False


def split(source: ByteBuffer, delimiter: bytes) -> SegmentList:
    """Cut ``source`` around every non-overlapping ``delimiter``.

    Always yields ``count(delimiter) + 1`` segments; an empty delimiter is
    rejected because it would never advance the scan.
    """

    ensure_delimiter(delimiter)
    content = source.to_bytes()
    segments: List[ByteBuffer] = []
    cursor = 0
    for position in iter_occurrences(content, len(content), delimiter):
        segments.append(ByteBuffer(content[cursor:position], name=source.name))
        cursor = position + len(delimiter)
    segments.append(ByteBuffer(content[cursor:], name=source.name))
    return SegmentList(segments)

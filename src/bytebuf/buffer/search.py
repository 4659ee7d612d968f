"""Bounded search and comparison primitives over a region's content.

Every function takes the owned ``region`` together with the content
``length`` and never looks at bytes at or beyond ``length``.
"""

from __future__ import annotations

from typing import Iterator, Optional, Union

NOT_FOUND = -1

Region = Union[bytes, bytearray]


def find(region: Optional[Region], length: int, needle: bytes, start: int = 0) -> int:
    """Offset of the first ``needle`` at or after ``start``, else ``NOT_FOUND``.

    An empty needle never matches.
    """

    if region is None or not needle or start >= length:
        return NOT_FOUND
    if len(needle) > length - start:
        return NOT_FOUND
    return region.find(needle, start, length)


def iter_occurrences(
    region: Optional[Region], length: int, needle: bytes
) -> Iterator[int]:
    """Yield offsets of non-overlapping occurrences, left to right."""

    step = len(needle)
    position = find(region, length, needle)
    while position != NOT_FOUND:
        yield position
        position = find(region, length, needle, position + step)


def count(region: Optional[Region], length: int, needle: bytes) -> int:
    if not needle:
        return 0
    return sum(1 for _ in iter_occurrences(region, length, needle))


def equals(region: Optional[Region], length: int, other: bytes) -> bool:
    if length != len(other):
        return False
    if length == 0:
        return True
    assert region is not None
    return memoryview(region)[:length] == other

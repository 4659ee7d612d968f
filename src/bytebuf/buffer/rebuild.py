"""Replace and remove algorithms.

The rebuild functions never mutate the region they are given. They size the
result exactly, ask ``allocate`` for a fresh region and return it so the
caller can install it in one step; a failed allocation therefore leaves the
caller's region untouched. ``compact`` is the one in-place path, valid only
because removal can never grow the content.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .search import NOT_FOUND, count, find, iter_occurrences

Allocator = Callable[[int], bytearray]


@dataclass(frozen=True, slots=True)
class Rebuild:
    """A freshly built region ready to be installed."""

    region: Optional[bytearray]
    length: int
    substitutions: int


def replace_first(
    region: Optional[bytearray],
    length: int,
    old: bytes,
    new: bytes,
    allocate: Allocator,
) -> Optional[Rebuild]:
    position = find(region, length, old)
    if position == NOT_FOUND:
        return None
    assert region is not None

    tail = position + len(old)
    final_length = length - len(old) + len(new)
    out = allocate(final_length)
    out[:position] = region[:position]
    out[position : position + len(new)] = new
    out[position + len(new) : final_length] = region[tail:length]
    return Rebuild(out, final_length, 1)


def replace_all(
    region: Optional[bytearray],
    length: int,
    old: bytes,
    new: bytes,
    allocate: Allocator,
) -> Optional[Rebuild]:
    occurrences = count(region, length, old)
    if occurrences == 0:
        return None
    assert region is not None

    final_length = length + occurrences * (len(new) - len(old))
    out = allocate(final_length)
    read = write = 0
    for position in iter_occurrences(region, length, old):
        span = position - read
        out[write : write + span] = region[read:position]
        write += span
        out[write : write + len(new)] = new
        write += len(new)
        read = position + len(old)
    out[write:final_length] = region[read:length]
    return Rebuild(out, final_length, occurrences)


def compact(region: Optional[bytearray], length: int, target: bytes) -> tuple[int, int]:
    """Remove every ``target`` in place; return ``(new_length, removed)``.

    The read cursor runs ahead of the write cursor, so each kept span is moved
    down over bytes that have already been consumed.
    """

    if region is None:
        return length, 0
    read = write = removed = 0
    for position in iter_occurrences(region, length, target):
        span = position - read
        if span and write != read:
            region[write : write + span] = region[read:position]
        write += span
        read = position + len(target)
        removed += 1
    if removed == 0:
        return length, 0
    span = length - read
    if span:
        region[write : write + span] = region[read:length]
    return write + span, removed

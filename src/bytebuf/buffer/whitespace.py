"""ASCII whitespace classification used by the strip operations."""

from __future__ import annotations

from typing import Optional

ASCII_WHITESPACE = frozenset(b" \t\n\r")


def is_space(byte: int) -> bool:
    return byte in ASCII_WHITESPACE


def content_bounds(
    region: Optional[bytearray], length: int, *, left: bool = True, right: bool = True
) -> tuple[int, int]:
    """Return ``(start, end)`` of the content once edge whitespace is dropped."""

    start, end = 0, length
    if region is None:
        return start, end
    if left:
        while start < end and is_space(region[start]):
            start += 1
    if right:
        while end > start and is_space(region[end - 1]):
            end -= 1
    return start, end

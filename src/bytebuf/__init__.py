"""Growable byte strings with explicit length and capacity."""

from .buffer import (
    NOT_FOUND,
    AllocationError,
    BufferView,
    ByteBuffer,
    ByteBufferError,
    InvalidArgument,
    RangeError,
    SegmentList,
)

__all__ = [
    "NOT_FOUND",
    "AllocationError",
    "BufferView",
    "ByteBuffer",
    "ByteBufferError",
    "InvalidArgument",
    "RangeError",
    "SegmentList",
    "buffer",
    "runtime",
]

__version__ = "0.1.0"

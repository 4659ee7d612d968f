"""Owned byte buffers and the operations defined over them."""

from .buffer import BufferView, ByteBuffer, Transaction
from .errors import AllocationError, ByteBufferError, InvalidArgument, RangeError
from .search import NOT_FOUND
from .segments import SegmentList, split
from .validation import coerce_operand, ensure_position
from .whitespace import ASCII_WHITESPACE

__all__ = [
    "ASCII_WHITESPACE",
    "AllocationError",
    "BufferView",
    "ByteBuffer",
    "ByteBufferError",
    "InvalidArgument",
    "NOT_FOUND",
    "RangeError",
    "SegmentList",
    "Transaction",
    "coerce_operand",
    "ensure_position",
    "split",
]

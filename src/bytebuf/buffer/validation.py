"""Validation helpers shared across buffer operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from .errors import InvalidArgument, RangeError

if TYPE_CHECKING:
    from .buffer import ByteBuffer

ByteLiteral = Union[bytes, bytearray, memoryview, str]
Operand = Union[ByteLiteral, "ByteBuffer"]

TEXT_ENCODING = "utf-8"


def coerce_operand(value: object, *, argument: str = "operand") -> bytes:
    """Return an independent ``bytes`` copy of a literal or buffer operand.

    Both call conventions funnel through here so that every algorithm sees the
    same input type. ``str`` is encoded as UTF-8 and treated as raw bytes.
    """

    from .buffer import ByteBuffer

    if isinstance(value, ByteBuffer):
        return value.to_bytes()
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode(TEXT_ENCODING)
    if value is None:
        raise InvalidArgument(f"{argument} is required", argument=argument)
    raise InvalidArgument(
        f"{argument} must be bytes-like, str or ByteBuffer, not {type(value).__name__}",
        argument=argument,
    )


def ensure_position(position: int, length: int) -> int:
    """Check ``0 <= position <= length``."""

    if not isinstance(position, int) or isinstance(position, bool):
        raise InvalidArgument("position must be an integer", argument="position")
    if position < 0 or position > length:
        raise RangeError(
            f"Position {position} out of range for length {length}",
            position=position,
            length=length,
        )
    return position


def ensure_size(value: int, *, argument: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgument(f"{argument} must be an integer", argument=argument)
    if value < 0:
        raise RangeError(f"{argument} cannot be negative", position=value)
    return value


def ensure_delimiter(delimiter: bytes) -> bytes:
    if not delimiter:
        raise InvalidArgument("delimiter cannot be empty", argument="delimiter")
    return delimiter

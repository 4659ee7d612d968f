"""Error types raised by buffer operations."""

from __future__ import annotations

from typing import Optional


class ByteBufferError(RuntimeError):
    """Base class for every failure signalled by the buffer layer."""


class AllocationError(ByteBufferError, MemoryError):
    """Raised when an owned region of ``requested`` bytes cannot be provided."""

    def __init__(self, message: str, *, requested: int) -> None:
        super().__init__(message)
        self.requested = requested


class RangeError(ByteBufferError, IndexError):
    """Raised when an explicit position falls outside the content."""

    def __init__(
        self, message: str, *, position: int, length: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.position = position
        self.length = length


class InvalidArgument(ByteBufferError, ValueError):
    """Raised for missing, mistyped or unusable arguments (e.g. an empty delimiter)."""

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        super().__init__(message)
        self.argument = argument

"""Owned, growable byte buffer with explicit length and capacity."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import TYPE_CHECKING, ContextManager, Iterable, Optional

from bytebuf.runtime import telemetry
from bytebuf.runtime.limits import current_limits

from . import rebuild, search
from .errors import AllocationError, InvalidArgument
from .rebuild import Rebuild
from .validation import Operand, coerce_operand, ensure_position, ensure_size
from .whitespace import content_bounds

if TYPE_CHECKING:
    from .segments import SegmentList


@dataclass(frozen=True, slots=True)
class BufferView:
    content: bytes
    length: int
    capacity: int


class ByteBuffer:
    """A byte string that owns its storage region.

    Content is the first ``length`` bytes of the region; the rest of the
    region is spare capacity. An empty buffer may own no region at all, which
    is the state every buffer starts in and returns to after ``release``.

    Growth is exact: the region is resized to precisely what an operation
    needs, never over-allocated. Every mutation that needs a new region
    allocates it before touching the current one, so an ``AllocationError``
    leaves the buffer as it was. Instances are not synchronized.
    """

    def __init__(
        self,
        initial: Optional[Operand] = None,
        *,
        capacity: Optional[int] = None,
        name: str = "default",
    ) -> None:
        self.name = name
        self._region: Optional[bytearray] = None
        self._length = 0
        if capacity is not None:
            ensure_size(capacity, argument="capacity")
            if capacity == 0:
                raise InvalidArgument(
                    "capacity hint must be positive", argument="capacity"
                )
            self._install(self._allocate(capacity), 0)
        if initial is not None:
            self.assign(initial)

    @classmethod
    def init(
        cls, capacity: Optional[int] = None, *, name: str = "default"
    ) -> "ByteBuffer":
        return cls(capacity=capacity, name=name)

    # -- state ---------------------------------------------------------------

    @property
    def length(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return 0 if self._region is None else len(self._region)

    @property
    def is_allocated(self) -> bool:
        return self._region is not None

    def __len__(self) -> int:
        return self._length

    def to_bytes(self) -> bytes:
        if self._region is None:
            return b""
        return bytes(self._region[: self._length])

    __bytes__ = to_bytes

    def snapshot(self) -> BufferView:
        return BufferView(
            content=self.to_bytes(), length=self._length, capacity=self.capacity
        )

    def __repr__(self) -> str:
        return (
            f"ByteBuffer(name={self.name!r}, length={self._length}, "
            f"capacity={self.capacity}, content={self.to_bytes()!r})"
        )

    # -- capacity management -------------------------------------------------

    def ensure_capacity(self, min_required: int) -> None:
        """Make room for ``min_required`` content bytes, keeping current content."""

        ensure_size(min_required, argument="min_required")
        if self.capacity >= min_required:
            return
        with Transaction(self, "ensure_capacity"):
            self._grow(min_required)

    def fit(self) -> None:
        """Shrink the region to the content; empty content drops it entirely."""

        with Transaction(self, "fit"):
            self._fit()

    trim = fit

    def release(self) -> None:
        self._region = None
        self._length = 0

    # -- content operations --------------------------------------------------

    def assign(self, source: Operand) -> None:
        data = coerce_operand(source, argument="source")
        with Transaction(self, "assign"):
            self._grow(len(data))
            if self._region is not None:
                self._region[: len(data)] = data
            self._length = len(data)

    def copy_from(self, other: "ByteBuffer") -> None:
        if not isinstance(other, ByteBuffer):
            raise InvalidArgument("copy_from expects a ByteBuffer", argument="other")
        if other is self:
            return
        self.assign(other)

    def append(self, suffix: Operand) -> None:
        self._append_pieces([coerce_operand(suffix, argument="suffix")], "append")

    def append_many(self, suffixes: Iterable[Operand]) -> None:
        """Append every operand in order after a single capacity check."""

        if suffixes is None or isinstance(
            suffixes, (bytes, bytearray, memoryview, str, ByteBuffer)
        ):
            raise InvalidArgument(
                "append_many expects a sequence of operands", argument="suffixes"
            )
        pieces = [
            coerce_operand(suffix, argument=f"suffixes[{index}]")
            for index, suffix in enumerate(suffixes)
        ]
        self._append_pieces(pieces, "append_many")

    def insert(self, position: int, data: Operand) -> None:
        ensure_position(position, self._length)
        payload = coerce_operand(data, argument="data")
        size = len(payload)
        if not size:
            return
        with Transaction(self, "insert"):
            self._grow(self._length + size)
            region = self._region
            assert region is not None
            end = self._length
            region[position + size : end + size] = region[position:end]
            region[position : position + size] = payload
            self._length = end + size

    def substring(self, position: int, requested_length: int) -> "ByteBuffer":
        """Return a new buffer with at most ``requested_length`` bytes from ``position``.

        A start at or past the end yields an empty buffer; the length is
        clamped to the available content.
        """

        ensure_size(position, argument="position")
        ensure_size(requested_length, argument="requested_length")
        result = ByteBuffer(name=f"{self.name}.substring")
        if position >= self._length or self._region is None:
            return result
        end = position + min(requested_length, self._length - position)
        result.assign(memoryview(self._region)[position:end])
        return result

    extract_substring = substring

    # -- search and comparison -----------------------------------------------

    def find(self, needle: Operand) -> int:
        return search.find(
            self._region, self._length, coerce_operand(needle, argument="needle")
        )

    def find_from(self, needle: Operand, start: int) -> int:
        ensure_size(start, argument="start")
        return search.find(
            self._region,
            self._length,
            coerce_operand(needle, argument="needle"),
            start,
        )

    def count(self, needle: Operand) -> int:
        return search.count(
            self._region, self._length, coerce_operand(needle, argument="needle")
        )

    def equals(self, other: Operand) -> bool:
        return search.equals(
            self._region, self._length, coerce_operand(other, argument="other")
        )

    def __contains__(self, needle: Operand) -> bool:
        return self.find(needle) != search.NOT_FOUND

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (ByteBuffer, bytes, bytearray, memoryview, str)):
            return self.equals(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    # -- replace / remove ----------------------------------------------------

    def replace_first(self, old: Operand, new: Operand) -> int:
        """Replace the first ``old`` with ``new``; return 1, or 0 on a miss."""

        return self._rebuild(rebuild.replace_first, old, new, "replace_first")

    def replace_all(self, old: Operand, new: Operand) -> int:
        """Replace every non-overlapping ``old``; return the number replaced."""

        return self._rebuild(rebuild.replace_all, old, new, "replace_all")

    def remove_first(self, substring: Operand) -> int:
        return self._rebuild(rebuild.replace_first, substring, b"", "remove_first")

    def remove_all(self, substring: Operand) -> int:
        target = coerce_operand(substring, argument="substring")
        with Transaction(self, "remove_all") as tx:
            new_length, removed = rebuild.compact(self._region, self._length, target)
            if removed:
                tx.record(self._length, new_length, removed)
                self._length = new_length
                self._fit()
            return removed

    # -- split / whitespace --------------------------------------------------

    def split(self, delimiter: Operand) -> "SegmentList":
        from .segments import split

        return split(self, coerce_operand(delimiter, argument="delimiter"))

    def strip(self) -> None:
        """Drop leading and trailing ASCII whitespace (space, tab, CR, LF)."""

        self._strip(left=True, right=True, label="strip")

    def lstrip(self) -> None:
        self._strip(left=True, right=False, label="lstrip")

    def rstrip(self) -> None:
        self._strip(left=False, right=True, label="rstrip")

    # -- internals -----------------------------------------------------------

    def _allocate(self, size: int) -> bytearray:
        limits = current_limits()
        if not limits.allows(size):
            telemetry.record_event(
                "buffer.allocation_failed",
                level="error",
                data={
                    "buffer": self.name,
                    "requested": size,
                    "max_capacity": limits.max_capacity,
                },
            )
            raise AllocationError(
                f"Cannot allocate {size} bytes (limit {limits.max_capacity})",
                requested=size,
            )
        try:
            return bytearray(size)
        except (MemoryError, OverflowError) as exc:
            telemetry.record_event(
                "buffer.allocation_failed",
                level="error",
                data={"buffer": self.name, "requested": size},
            )
            raise AllocationError(
                f"Cannot allocate {size} bytes", requested=size
            ) from exc

    def _install(self, region: Optional[bytearray], length: int) -> None:
        if region is not None and not len(region):
            region = None
        self._region = region
        self._length = length

    def _grow(self, min_required: int) -> None:
        if self.capacity >= min_required:
            return
        grown = self._allocate(min_required)
        if self._region is not None:
            grown[: self._length] = self._region[: self._length]
        self._install(grown, self._length)

    def _fit(self) -> None:
        if self._length == 0:
            self.release()
            return
        if self.capacity == self._length:
            return
        assert self._region is not None
        try:
            fitted = self._allocate(self._length)
        except AllocationError:
            telemetry.record_event(
                "buffer.shrink_failed",
                level="warning",
                data={"buffer": self.name, "capacity": self.capacity},
            )
            return
        fitted[:] = self._region[: self._length]
        self._install(fitted, self._length)

    def _append_pieces(self, pieces: list[bytes], label: str) -> None:
        total = sum(len(piece) for piece in pieces)
        if not total:
            return
        with Transaction(self, label):
            self._grow(self._length + total)
            region = self._region
            assert region is not None
            offset = self._length
            for piece in pieces:
                region[offset : offset + len(piece)] = piece
                offset += len(piece)
            self._length = offset

    def _rebuild(self, algorithm, old: Operand, new: Operand, label: str) -> int:
        target = coerce_operand(old, argument="old")
        replacement = coerce_operand(new, argument="new")
        with Transaction(self, label) as tx:
            result = algorithm(
                self._region, self._length, target, replacement, self._allocate
            )
            if result is None:
                return 0
            tx.commit(result)
            return result.substitutions

    def _strip(self, *, left: bool, right: bool, label: str) -> None:
        start, end = content_bounds(
            self._region, self._length, left=left, right=right
        )
        if start == 0 and end == self._length:
            return
        with Transaction(self, label):
            region = self._region
            assert region is not None
            if start:
                region[: end - start] = region[start:end]
            self._length = end - start
            self._fit()


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one mutating operation in a telemetry span and installs its result."""

    def __init__(self, buffer: ByteBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            self.label, buffer=self.buffer.name, length=self.buffer.length
        )
        self._span_cm.__enter__()
        return self

    def commit(self, result: Rebuild) -> None:
        self.record(self.buffer.length, result.length, result.substitutions)
        self.buffer._install(result.region, result.length)

    def record(self, before: int, after: int, substitutions: int) -> None:
        telemetry.record_event(
            "buffer.rebuild",
            level="debug",
            data={
                "buffer": self.buffer.name,
                "operation": self.label,
                "before": before,
                "after": after,
                "substitutions": substitutions,
            },
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False

import pytest

from bytebuf import AllocationError, ByteBuffer, InvalidArgument, RangeError
from bytebuf.runtime.limits import configure_limits


def make_buffer(content: bytes = b"", *, name: str = "test") -> ByteBuffer:
    buffer = ByteBuffer(name=name)
    if content:
        buffer.assign(content)
    return buffer


def test_assign_then_append_scenario() -> None:
    buffer = make_buffer()

    buffer.assign("Hello, World!")
    buffer.append(" Goodbye!")

    assert buffer.to_bytes() == b"Hello, World! Goodbye!"
    assert buffer.length == 22


def test_assign_never_shrinks_capacity() -> None:
    buffer = make_buffer(b"a long piece of content")
    capacity = buffer.capacity

    buffer.assign(b"short")

    assert buffer.to_bytes() == b"short"
    assert buffer.capacity == capacity


def test_assign_keeps_embedded_zero_bytes() -> None:
    buffer = make_buffer(b"a\x00b")

    assert buffer.length == 3
    assert buffer.equals(b"a\x00b")
    assert not buffer.equals(b"a")


def test_copy_from_is_independent() -> None:
    source = make_buffer(b"origin")
    target = make_buffer(b"x")

    target.copy_from(source)
    source.append(b"-changed")

    assert target.to_bytes() == b"origin"
    assert source.to_bytes() == b"origin-changed"


def test_copy_from_requires_buffer() -> None:
    with pytest.raises(InvalidArgument):
        make_buffer().copy_from(b"raw")  # type: ignore[arg-type]


def test_append_accepts_buffer_operand() -> None:
    buffer = make_buffer(b"ab")

    buffer.append(make_buffer(b"cd"))
    buffer.append(buffer)

    assert buffer.to_bytes() == b"abcdabcd"


def test_append_many_sizes_once() -> None:
    buffer = make_buffer(b"start")

    buffer.append_many([b"-", "one", bytearray(b"-"), make_buffer(b"two")])

    assert buffer.to_bytes() == b"start-one-two"
    assert buffer.capacity == buffer.length


def test_append_many_rejects_invalid_element_before_mutating() -> None:
    buffer = make_buffer(b"keep")

    with pytest.raises(InvalidArgument) as excinfo:
        buffer.append_many([b"ok", None])  # type: ignore[list-item]

    assert excinfo.value.argument == "suffixes[1]"
    assert buffer.to_bytes() == b"keep"


def test_append_many_rejects_single_literal() -> None:
    with pytest.raises(InvalidArgument):
        make_buffer().append_many(b"abc")


def test_append_failure_leaves_content_unchanged() -> None:
    buffer = make_buffer(b"abc")
    configure_limits(max_capacity=4)

    with pytest.raises(AllocationError):
        buffer.append(b"de")

    assert buffer.to_bytes() == b"abc"
    assert buffer.capacity == 3


def test_insert_at_end() -> None:
    buffer = make_buffer(b"abc")

    buffer.insert(3, b"XY")

    assert buffer.to_bytes() == b"abcXY"


def test_insert_in_middle_and_front() -> None:
    buffer = make_buffer(b"ace")

    buffer.insert(1, "b")
    buffer.insert(3, "d")
    buffer.insert(0, ">")

    assert buffer.to_bytes() == b">abcde"


def test_insert_past_end_raises_range_error() -> None:
    buffer = make_buffer(b"abc")

    with pytest.raises(RangeError) as excinfo:
        buffer.insert(4, b"XY")

    assert excinfo.value.position == 4
    assert excinfo.value.length == 3
    assert buffer.to_bytes() == b"abc"


def test_insert_negative_position_raises_range_error() -> None:
    with pytest.raises(RangeError):
        make_buffer(b"abc").insert(-1, b"X")


def test_insert_self_copy() -> None:
    buffer = make_buffer(b"ab")

    buffer.insert(1, buffer)

    assert buffer.to_bytes() == b"aabb"


def test_substring_clamps_length() -> None:
    buffer = make_buffer(b"abcdef")

    part = buffer.substring(2, 10)

    assert part.to_bytes() == b"cdef"
    assert buffer.to_bytes() == b"abcdef"


def test_substring_past_end_is_empty() -> None:
    buffer = make_buffer(b"abc")

    assert buffer.extract_substring(3, 2).to_bytes() == b""
    assert buffer.substring(10, 1).length == 0
    assert make_buffer().substring(0, 5).to_bytes() == b""


def test_substring_is_independent_copy() -> None:
    buffer = make_buffer(b"abcdef")
    part = buffer.substring(1, 3)

    buffer.assign(b"zzzzzz")

    assert part.to_bytes() == b"bcd"


def test_operand_type_is_validated() -> None:
    buffer = make_buffer(b"abc")

    with pytest.raises(InvalidArgument):
        buffer.append(None)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgument):
        buffer.append(42)  # type: ignore[arg-type]

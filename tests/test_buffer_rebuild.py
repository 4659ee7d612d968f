import pytest

from bytebuf import AllocationError, ByteBuffer
from bytebuf.runtime.limits import configure_limits


def test_replace_all_grows_with_single_exact_region() -> None:
    buffer = ByteBuffer(b"a.b.c")

    replaced = buffer.replace_all(b".", b"::")

    assert replaced == 2
    assert buffer.to_bytes() == b"a::b::c"
    assert buffer.capacity == buffer.length == 7


def test_replace_all_length_law() -> None:
    content = b"the cat sat on the mat with the hat"
    buffer = ByteBuffer(content)
    occurrences = buffer.count(b"the")

    buffer.replace_all(b"the", b"a")

    assert buffer.length == len(content) + occurrences * (len(b"a") - len(b"the"))
    assert buffer.count(b"the") == 0
    assert buffer.to_bytes() == content.replace(b"the", b"a")


def test_replace_all_same_length() -> None:
    buffer = ByteBuffer(b"abab")

    assert buffer.replace_all(b"ab", b"ba") == 2
    assert buffer.to_bytes() == b"baba"


def test_replace_all_non_overlapping_scan() -> None:
    buffer = ByteBuffer(b"aaaaa")

    assert buffer.replace_all(b"aa", b"b") == 2
    assert buffer.to_bytes() == b"bba"


def test_replace_all_to_empty_content_releases_region() -> None:
    buffer = ByteBuffer(b"xx")

    buffer.replace_all(b"x", b"")

    assert buffer.length == 0
    assert not buffer.is_allocated


def test_replace_all_noop_paths() -> None:
    buffer = ByteBuffer(b"abc", capacity=8)

    assert buffer.replace_all(b"zz", b"y") == 0
    assert buffer.replace_all(b"", b"y") == 0
    assert buffer.replace_all(b"abcd", b"y") == 0
    assert buffer.to_bytes() == b"abc"
    assert buffer.capacity == 8


def test_replace_all_with_buffer_operands() -> None:
    literal = ByteBuffer(b"x-y-z")
    buffered = ByteBuffer(b"x-y-z")

    literal.replace_all(b"-", b"+=")
    buffered.replace_all(ByteBuffer(b"-"), ByteBuffer(b"+="))

    assert literal == buffered


def test_replace_all_allocation_failure_leaves_buffer_intact() -> None:
    buffer = ByteBuffer(b"a.b")
    configure_limits(max_capacity=4)

    with pytest.raises(AllocationError):
        buffer.replace_all(b".", b"...")

    assert buffer.to_bytes() == b"a.b"
    assert buffer.capacity == 3


def test_replace_first_only_touches_first_match() -> None:
    buffer = ByteBuffer(b"one one one")

    assert buffer.replace_first(b"one", b"1") == 1
    assert buffer.to_bytes() == b"1 one one"
    assert buffer.capacity == buffer.length


def test_replace_first_miss_is_noop() -> None:
    buffer = ByteBuffer(b"abc")

    assert buffer.replace_first(b"z", b"y") == 0
    assert buffer.replace_first(b"", b"y") == 0
    assert buffer.to_bytes() == b"abc"


def test_remove_first() -> None:
    buffer = ByteBuffer(b"a--b--c")

    assert buffer.remove_first("--") == 1
    assert buffer.to_bytes() == b"ab--c"


def test_remove_all_compacts_and_fits() -> None:
    buffer = ByteBuffer(b"--a--b----c--", capacity=32)

    assert buffer.remove_all(b"--") == 5
    assert buffer.to_bytes() == b"abc"
    assert buffer.capacity == 3


def test_remove_all_without_matches_is_untouched() -> None:
    buffer = ByteBuffer(b"abc", capacity=10)

    assert buffer.remove_all(b"x") == 0
    assert buffer.remove_all(b"") == 0
    assert buffer.to_bytes() == b"abc"
    assert buffer.capacity == 10


def test_remove_all_whole_content() -> None:
    buffer = ByteBuffer(b"abab")

    assert buffer.remove_all(ByteBuffer(b"ab")) == 2
    assert buffer.length == 0
    assert not buffer.is_allocated

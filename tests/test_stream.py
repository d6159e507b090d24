# =============================================================================
# test_stream.py - Peekable Stream Tests
# =============================================================================
# Tests for the Stream capability and the BufferStream lookahead decorator,
# used both for characters and for tokens.
# =============================================================================

import pytest

from shellfront.stream import BufferStream, Stream


class CountingSource:
    """Fetch function that records how many items were pulled."""

    def __init__(self, items):
        self.items = list(items)
        self.pulls = 0

    def __call__(self):
        self.pulls += 1
        if self.items:
            return self.items.pop(0)
        return None


class TestBufferStream:
    """FIFO lookahead behaviour."""

    def test_get_in_order(self):
        stream = BufferStream.from_iterable([1, 2, 3], end=None)
        assert [stream.get() for _ in range(4)] == [1, 2, 3, None]

    def test_peek_does_not_consume(self):
        stream = BufferStream.from_iterable("abc", end=None)
        assert stream.peek() == "a"
        assert stream.peek(0) == "a"
        assert stream.get() == "a"

    def test_peek_ahead(self):
        stream = BufferStream.from_iterable("abc", end=None)
        assert stream.peek(2) == "c"
        assert stream.peek(1) == "b"
        assert [stream.get(), stream.get(), stream.get()] == ["a", "b", "c"]

    def test_end_repeats(self):
        stream = BufferStream.from_iterable("", end="<end>")
        assert stream.peek(3) == "<end>"
        assert stream.get() == "<end>"
        assert stream.get() == "<end>"

    def test_negative_offset_rejected(self):
        stream = BufferStream.from_iterable("a", end=None)
        with pytest.raises(ValueError):
            stream.peek(-1)

    def test_is_a_stream(self):
        assert isinstance(BufferStream(lambda: None), Stream)

    def test_stream_is_abstract(self):
        with pytest.raises(TypeError):
            Stream()


class TestLaziness:
    """Upstream items are fetched only as far as requested."""

    def test_nothing_fetched_up_front(self):
        source = CountingSource("abc")
        BufferStream(source)
        assert source.pulls == 0

    def test_fetch_up_to_highest_offset(self):
        source = CountingSource("abcdef")
        stream = BufferStream(source)
        stream.peek(2)
        assert source.pulls == 3
        assert stream.buffered == 3
        stream.peek(1)
        assert source.pulls == 3

    def test_get_prefers_buffer(self):
        source = CountingSource("abc")
        stream = BufferStream(source)
        stream.peek(1)
        assert stream.get() == "a"
        assert stream.get() == "b"
        assert source.pulls == 2
        assert stream.buffered == 0
        assert stream.get() == "c"
        assert source.pulls == 3

    def test_get_without_peek_goes_straight_upstream(self):
        source = CountingSource("ab")
        stream = BufferStream(source)
        assert stream.get() == "a"
        assert stream.buffered == 0


class TestErrors:
    """Failures from the base propagate unchanged."""

    def test_fetch_error_from_peek(self):
        def fetch():
            raise RuntimeError("source failed")

        stream = BufferStream(fetch)
        with pytest.raises(RuntimeError, match="source failed"):
            stream.peek()

    def test_buffered_items_survive_later_error(self):
        items = iter(["a"])

        def fetch():
            item = next(items, None)
            if item is None:
                raise RuntimeError("exhausted")
            return item

        stream = BufferStream(fetch)
        assert stream.peek() == "a"
        with pytest.raises(RuntimeError):
            stream.peek(1)
        assert stream.get() == "a"


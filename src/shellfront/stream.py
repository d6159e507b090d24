"""
Peekable Streams
================

A small capability for pulling items lazily with bounded lookahead. The
same buffering decorator serves the character layer (inside the scanner)
and the token layer (in front of the parser).

    >>> chars = BufferStream.from_iterable("ab", end=None)
    >>> chars.peek(1)
    'b'
    >>> chars.get()
    'a'
    >>> chars.get(), chars.get(), chars.get()
    ('b', None, None)

Contract
--------
- ``peek(offset)`` never changes what later ``get()`` calls return.
- The decorator fetches from its base only as far as the highest offset
  ever requested, and holds each fetched item until ``get()`` takes it.
- Exceptions from the base propagate unchanged.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Generic, Iterable, TypeVar

T = TypeVar("T")


class Stream(ABC, Generic[T]):
    """Anything that can be pulled from and peeked into."""

    @abstractmethod
    def peek(self, offset: int = 0) -> T:
        """Return the item ``offset`` positions ahead without consuming it."""

    @abstractmethod
    def get(self) -> T:
        """Consume and return the next item."""


class BufferStream(Stream[T]):
    """
    FIFO lookahead buffer over an arbitrary fetch function.

    Args:
        fetch: Zero-argument callable producing the next upstream item.
            It may raise; the error reaches the caller of peek()/get().
    """

    def __init__(self, fetch: Callable[[], T]):
        self._fetch = fetch
        self._buffer: deque[T] = deque()

    @classmethod
    def from_iterable(cls, items: Iterable[T], end: T) -> "BufferStream[T]":
        """Adapt an iterable, yielding ``end`` forever once it runs out."""
        iterator = iter(items)
        return cls(lambda: next(iterator, end))

    @property
    def buffered(self) -> int:
        """Number of fetched but not yet consumed items."""
        return len(self._buffer)

    def peek(self, offset: int = 0) -> T:
        if offset < 0:
            raise ValueError(f"peek offset must be non-negative, got {offset}")
        while len(self._buffer) <= offset:
            self._buffer.append(self._fetch())
        return self._buffer[offset]

    def get(self) -> T:
        if self._buffer:
            return self._buffer.popleft()
        return self._fetch()

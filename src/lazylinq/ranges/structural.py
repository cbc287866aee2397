"""
Structural stages: reverse, append and repeat.
"""

from typing import Any, List, TypeVar

from lazylinq.memory import monitor
from lazylinq.ranges.base import BaseRange
from lazylinq.ranges.cursor import Cursor

T = TypeVar('T')


class ReverseCursor(Cursor[T]):

    def __init__(self, buffer: List[T], index: int):
        self._buffer = buffer
        self._index = index

    def current(self) -> T:
        if self._index < 0:
            raise IndexError("cursor is past the end of the range")
        return self._buffer[self._index]

    def advance(self) -> None:
        if self._index >= 0:
            self._index -= 1

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ReverseCursor):
            return NotImplemented
        return self._index == other._index


class ReverseRange(BaseRange[T]):
    """
    Elements of a finite predecessor, back to front.

    Every ``start()`` buffers the whole predecessor again; the buffer
    belongs to the returned cursor only.
    """

    def __init__(self, prev: BaseRange[T]):
        self._prev = prev

    def start(self) -> ReverseCursor[T]:
        buffer = list(self._prev)
        monitor.record("reverse", len(buffer))
        return ReverseCursor(buffer, len(buffer) - 1)

    def sentinel(self) -> ReverseCursor[T]:
        return ReverseCursor([], -1)


class AppendCursor(Cursor[T]):

    def __init__(self, first: Cursor[T], first_end: Cursor[T],
                 second: Cursor[T], second_end: Cursor[T]):
        self._first = first
        self._first_end = first_end
        self._second = second
        self._second_end = second_end

    def current(self) -> T:
        if self._first != self._first_end:
            return self._first.current()
        return self._second.current()

    def advance(self) -> None:
        if self._first != self._first_end:
            self._first.advance()
        else:
            self._second.advance()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AppendCursor):
            return NotImplemented
        return self._first == other._first and self._second == other._second


class AppendRange(BaseRange[T]):
    """Concatenation of two ranges."""

    def __init__(self, prev: BaseRange[T], other: BaseRange[T]):
        if not isinstance(other, BaseRange):
            raise TypeError(f"append expects a range, got {type(other).__name__}")
        self._prev = prev
        self._other = other

    def start(self) -> AppendCursor[T]:
        return AppendCursor(self._prev.start(), self._prev.sentinel(),
                            self._other.start(), self._other.sentinel())

    def sentinel(self) -> AppendCursor[T]:
        first_end = self._prev.sentinel()
        second_end = self._other.sentinel()
        return AppendCursor(first_end, first_end, second_end, second_end)


class RepeatCursor(Cursor[T]):

    def __init__(self, prev: BaseRange[T], pos: Cursor[T], end: Cursor[T], count: int):
        self._prev = prev
        self._pos = pos
        self._end = end
        self._count = count

    def current(self) -> T:
        return self._pos.current()

    def advance(self) -> None:
        self._pos.advance()

        if self._pos == self._end and self._count > 0:
            self._pos = self._prev.start()
            self._count -= 1

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, RepeatCursor):
            return NotImplemented
        return self._pos == other._pos


class RepeatRange(BaseRange[T]):
    """The predecessor followed by count more passes over it."""

    def __init__(self, prev: BaseRange[T], count: int):
        self._prev = prev
        self._count = count

    def start(self) -> RepeatCursor[T]:
        return RepeatCursor(self._prev, self._prev.start(), self._prev.sentinel(), self._count)

    def sentinel(self) -> RepeatCursor[T]:
        end = self._prev.sentinel()
        return RepeatCursor(self._prev, end, end, 0)

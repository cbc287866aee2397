"""
Cursor protocol shared by every range.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterator, TypeVar

T = TypeVar('T')


class Cursor(ABC, Generic[T]):
    """
    Iteration state of one traversal of a range.

    A cursor is obtained from ``Range.start()`` or ``Range.sentinel()``.
    Iteration is complete once the cursor compares equal to the sentinel.
    """

    @abstractmethod
    def current(self) -> T:
        """Read the element at the current position."""
        pass

    @abstractmethod
    def advance(self) -> None:
        """Move to the next logical position."""
        pass

    @abstractmethod
    def __eq__(self, other: Any) -> bool:
        """Same logical position; the sentinel marks the end."""
        pass


class RangeIterator(Iterator[T]):
    """Adapt a (start, sentinel) cursor pair to the iterator protocol."""

    def __init__(self, cursor: Cursor[T], sentinel: Cursor[T]):
        self._cursor = cursor
        self._sentinel = sentinel
        self._started = False
        self._done = False

    def __iter__(self) -> 'RangeIterator[T]':
        return self

    def __next__(self) -> T:
        if self._done:
            raise StopIteration

        # Advance lazily so the cursor never moves past the last element
        # the consumer asked for.
        if self._started:
            self._cursor.advance()
        else:
            self._started = True

        if self._cursor == self._sentinel:
            self._done = True
            raise StopIteration
        return self._cursor.current()

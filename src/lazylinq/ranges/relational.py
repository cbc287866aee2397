"""
Relational stages: nested-loop join and stable multi-key sorting.
"""

from abc import abstractmethod
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, List, Optional, TypeVar

from lazylinq.memory import monitor
from lazylinq.ranges.base import BaseRange
from lazylinq.ranges.cursor import Cursor

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')


class JoinCursor(Cursor[V]):
    """
    Walks the left range once and scans the right range per left element.

    A scan resumes just past the previous match, so every right match of
    a left element is yielded before the left cursor moves. When the right
    range is exhausted it is started again and the left cursor advances.
    """

    def __init__(self, parent: 'JoinRange[V]', pos: Cursor[Any], end: Cursor[Any]):
        self._parent = parent
        self._pos = pos
        self._end = end
        self._other_pos: Optional[Cursor[Any]] = None
        self._other_end: Optional[Cursor[Any]] = None

        if self._pos != self._end:
            self._other_pos = parent._other.start()
            self._other_end = parent._other.sentinel()
            self._find_next(pre_increment_other=False)

    def _find_next(self, pre_increment_other: bool) -> None:
        parent = self._parent

        if pre_increment_other:
            self._other_pos.advance()

        while self._pos != self._end:
            matched = False
            key_a = parent._key_selector_a(self._pos.current())

            while self._other_pos != self._other_end:
                if key_a == parent._key_selector_b(self._other_pos.current()):
                    matched = True
                    break
                self._other_pos.advance()

            # Start over in the other range once it is finished.
            if self._other_pos == self._other_end:
                self._other_pos = parent._other.start()

            if matched:
                break

            self._pos.advance()

    def current(self) -> V:
        return self._parent._transform(self._pos.current(), self._other_pos.current())

    def advance(self) -> None:
        self._find_next(pre_increment_other=True)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, JoinCursor):
            return NotImplemented
        return self._pos == other._pos


class JoinRange(BaseRange[V]):
    """Nested-loop inner join on equal keys; no key index is built."""

    def __init__(self,
                 prev: BaseRange[T],
                 other: BaseRange[U],
                 key_selector_a: Callable[[T], K],
                 key_selector_b: Callable[[U], K],
                 transform: Callable[[T, U], V],
                 own: bool = False):
        if not isinstance(other, BaseRange):
            raise TypeError(f"join expects a range, got {type(other).__name__}")
        self._prev = prev
        self._other = other
        self._bind('_key_selector_a', key_selector_a, own)
        self._bind('_key_selector_b', key_selector_b, own)
        self._bind('_transform', transform, own)

    def start(self) -> JoinCursor[V]:
        return JoinCursor(self, self._prev.start(), self._prev.sentinel())

    def sentinel(self) -> JoinCursor[V]:
        end = self._prev.sentinel()
        return JoinCursor(self, end, end)


class SortDirection(Enum):
    """Sort directions."""
    ASCENDING = "ascending"
    DESCENDING = "descending"


class SortedCursor(Cursor[T]):

    def __init__(self, buffer: List[T], index: int = 0):
        self._buffer = buffer
        self._index = index

    def _at_end(self) -> bool:
        return self._index >= len(self._buffer)

    def current(self) -> T:
        if self._at_end():
            raise IndexError("cursor is past the end of the range")
        return self._buffer[self._index]

    def advance(self) -> None:
        if not self._at_end():
            self._index += 1

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SortedCursor):
            return NotImplemented
        if self._at_end() or other._at_end():
            return self._at_end() == other._at_end()
        return self._buffer is other._buffer and self._index == other._index


class SortingRange(BaseRange[T]):
    """
    Base of order_by and then_by.

    Each ``start()`` buffers the unsorted input and sorts it stably with
    the comparison built from the whole key-selector chain.
    """

    stage_name = "sort"

    def __init__(self, prev: BaseRange[T], key_selector: Callable[[T], Any],
                 direction: SortDirection, own: bool = False):
        if not isinstance(direction, SortDirection):
            raise TypeError(f"direction must be a SortDirection, got {direction!r}")
        self._prev = prev
        self._bind('_key_selector', key_selector, own)
        self._direction = direction

    @abstractmethod
    def compare_keys(self, a: T, b: T) -> bool:
        """True if a sorts strictly before b."""
        pass

    @abstractmethod
    def _unsorted(self) -> BaseRange[T]:
        pass

    def _is_less(self, a: T, b: T) -> bool:
        key_a = self._key_selector(a)
        key_b = self._key_selector(b)

        if self._direction == SortDirection.ASCENDING:
            return key_a < key_b
        # Swap operands rather than negating, for non-total orders.
        return key_b < key_a

    def _compare(self, a: T, b: T) -> int:
        if self.compare_keys(a, b):
            return -1
        if self.compare_keys(b, a):
            return 1
        return 0

    def start(self) -> SortedCursor[T]:
        buffer = list(self._unsorted())
        buffer.sort(key=cmp_to_key(self._compare))
        monitor.record(self.stage_name, len(buffer))
        return SortedCursor(buffer)

    def sentinel(self) -> SortedCursor[T]:
        return SortedCursor([])

    def then_by(self, key_selector: Callable[[T], Any], direction=None, own: bool = False) -> 'ThenByRange[T]':
        """Break ties of the previous sort keys with another key."""
        return ThenByRange(self, key_selector, direction or SortDirection.ASCENDING, own=own)

    def then_by_ascending(self, key_selector: Callable[[T], Any], own: bool = False) -> 'ThenByRange[T]':
        return self.then_by(key_selector, SortDirection.ASCENDING, own=own)

    def then_by_descending(self, key_selector: Callable[[T], Any], own: bool = False) -> 'ThenByRange[T]':
        return self.then_by(key_selector, SortDirection.DESCENDING, own=own)


class OrderByRange(SortingRange[T]):
    """Stable sort by a single key."""

    stage_name = "order_by"

    def compare_keys(self, a: T, b: T) -> bool:
        return self._is_less(a, b)

    def _unsorted(self) -> BaseRange[T]:
        return self._prev


class ThenByRange(SortingRange[T]):
    """Secondary sort key; only valid after order_by or then_by."""

    stage_name = "then_by"

    def __init__(self, prev: BaseRange[T], key_selector: Callable[[T], Any],
                 direction: SortDirection, own: bool = False):
        if not isinstance(prev, SortingRange):
            raise TypeError("A then_by operation can only be appended to another "
                            "then_by or order_by operation.")
        super().__init__(prev, key_selector, direction, own=own)

    def compare_keys(self, a: T, b: T) -> bool:
        if self._prev.compare_keys(a, b):
            return True
        if self._prev.compare_keys(b, a):
            return False
        return self._is_less(a, b)

    def _unsorted(self) -> BaseRange[T]:
        # The whole chain shares one unsorted input.
        return self._prev._unsorted()

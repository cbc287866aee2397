"""
Filtering and projection stages.
"""

from typing import Any, Callable, List, Optional, TypeVar

from lazylinq.ranges.base import BaseRange
from lazylinq.ranges.cursor import Cursor

T = TypeVar('T')
U = TypeVar('U')


class WhereCursor(Cursor[T]):

    def __init__(self, parent: 'WhereRange[T]', pos: Cursor[T], end: Cursor[T]):
        self._parent = parent
        self._pos = pos
        self._end = end
        self._seek()

    def _seek(self) -> None:
        predicate = self._parent._predicate
        while self._pos != self._end and not predicate(self._pos.current()):
            self._pos.advance()

    def current(self) -> T:
        return self._pos.current()

    def advance(self) -> None:
        self._pos.advance()
        self._seek()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, WhereCursor):
            return NotImplemented
        return self._pos == other._pos


class WhereRange(BaseRange[T]):
    """Keep elements matching a predicate, evaluated once per candidate."""

    def __init__(self, prev: BaseRange[T], predicate: Callable[[T], bool], own: bool = False):
        self._prev = prev
        self._bind('_predicate', predicate, own)

    def start(self) -> WhereCursor[T]:
        return WhereCursor(self, self._prev.start(), self._prev.sentinel())

    def sentinel(self) -> WhereCursor[T]:
        end = self._prev.sentinel()
        return WhereCursor(self, end, end)


class DistinctCursor(Cursor[T]):
    """Remembers emitted elements for the duration of one traversal."""

    def __init__(self, pos: Cursor[T], end: Cursor[T]):
        self._pos = pos
        self._end = end
        self._encountered: List[T] = []
        if self._pos != self._end:
            self._encountered.append(self._pos.current())

    def _contains(self, value: T) -> bool:
        for seen in self._encountered:
            if seen == value:
                return True
        return False

    def current(self) -> T:
        return self._pos.current()

    def advance(self) -> None:
        while True:
            self._pos.advance()
            if self._pos == self._end:
                return
            value = self._pos.current()
            if not self._contains(value):
                self._encountered.append(value)
                return

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, DistinctCursor):
            return NotImplemented
        return self._pos == other._pos


class DistinctRange(BaseRange[T]):
    """Drop elements equal to an earlier one, keeping first-occurrence order."""

    def __init__(self, prev: BaseRange[T]):
        self._prev = prev

    def start(self) -> DistinctCursor[T]:
        return DistinctCursor(self._prev.start(), self._prev.sentinel())

    def sentinel(self) -> DistinctCursor[T]:
        end = self._prev.sentinel()
        return DistinctCursor(end, end)


class SelectCursor(Cursor[U]):

    def __init__(self, transform: Callable[[Any], U], pos: Cursor[Any]):
        self._transform = transform
        self._pos = pos

    def current(self) -> U:
        # Not cached: every read invokes the transform.
        return self._transform(self._pos.current())

    def advance(self) -> None:
        self._pos.advance()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SelectCursor):
            return NotImplemented
        return self._pos == other._pos


class SelectRange(BaseRange[U]):
    """One-to-one projection."""

    def __init__(self, prev: BaseRange[Any], transform: Callable[[Any], U], own: bool = False):
        self._prev = prev
        self._bind('_transform', transform, own)

    def start(self) -> SelectCursor[U]:
        return SelectCursor(self._transform, self._prev.start())

    def sentinel(self) -> SelectCursor[U]:
        return SelectCursor(self._transform, self._prev.sentinel())


class SelectToTextRange(BaseRange[str]):
    """Projection of each element to its ``str`` form."""

    def __init__(self, prev: BaseRange[Any]):
        self._prev = prev

    def start(self) -> SelectCursor[str]:
        return SelectCursor(str, self._prev.start())

    def sentinel(self) -> SelectCursor[str]:
        return SelectCursor(str, self._prev.sentinel())


class SelectManyCursor(Cursor[U]):
    """Holds the open nested range and cursor plus the outer position."""

    def __init__(self, parent: 'SelectManyRange[U]', pos: Cursor[Any], end: Cursor[Any]):
        self._parent = parent
        self._pos = pos
        self._end = end
        self._inner_range: Optional[BaseRange[U]] = None
        self._inner_pos: Optional[Cursor[U]] = None
        self._inner_end: Optional[Cursor[U]] = None
        self._open_next()

    def _open(self) -> None:
        inner = self._parent._transform(self._pos.current())
        if not isinstance(inner, BaseRange):
            raise TypeError("The transform function of select_many is expected to return a range, "
                            f"got {type(inner).__name__}")
        self._inner_range = inner
        self._inner_pos = inner.start()
        self._inner_end = inner.sentinel()

    def _open_next(self) -> None:
        # Skip outer elements whose nested range is empty.
        while self._pos != self._end:
            self._open()
            if self._inner_pos != self._inner_end:
                return
            self._pos.advance()

    def current(self) -> U:
        return self._inner_pos.current()

    def advance(self) -> None:
        self._inner_pos.advance()
        if self._inner_pos == self._inner_end:
            self._pos.advance()
            self._open_next()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SelectManyCursor):
            return NotImplemented
        return self._pos == other._pos


class SelectManyRange(BaseRange[U]):
    """Flatten the ranges produced by a transform."""

    def __init__(self, prev: BaseRange[Any], transform: Callable[[Any], BaseRange[U]], own: bool = True):
        self._prev = prev
        self._bind('_transform', transform, own)

    def start(self) -> SelectManyCursor[U]:
        return SelectManyCursor(self, self._prev.start(), self._prev.sentinel())

    def sentinel(self) -> SelectManyCursor[U]:
        end = self._prev.sentinel()
        return SelectManyCursor(self, end, end)


class TakeCursor(Cursor[T]):

    def __init__(self, pos: Cursor[T], count: int):
        self._pos = pos
        self._count = count

    def current(self) -> T:
        return self._pos.current()

    def advance(self) -> None:
        self._count -= 1
        # Leave the predecessor on the last taken element.
        if self._count > 0:
            self._pos.advance()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TakeCursor):
            return NotImplemented
        return self._count == other._count or self._pos == other._pos


class TakeRange(BaseRange[T]):
    """First count elements."""

    def __init__(self, prev: BaseRange[T], count: int):
        self._prev = prev
        self._count = count

    def start(self) -> TakeCursor[T]:
        return TakeCursor(self._prev.start(), self._count)

    def sentinel(self) -> TakeCursor[T]:
        return TakeCursor(self._prev.sentinel(), 0)


class TakeWhileCursor(Cursor[T]):

    def __init__(self, parent: 'TakeWhileRange[T]', pos: Cursor[T], end: Cursor[T]):
        self._parent = parent
        self._pos = pos
        self._end = end
        self._check()

    def _check(self) -> None:
        if self._pos != self._end and not self._parent._predicate(self._pos.current()):
            self._pos = self._end

    def current(self) -> T:
        return self._pos.current()

    def advance(self) -> None:
        self._pos.advance()
        self._check()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TakeWhileCursor):
            return NotImplemented
        return self._pos == other._pos


class TakeWhileRange(BaseRange[T]):
    """Elements up to the first one failing the predicate."""

    def __init__(self, prev: BaseRange[T], predicate: Callable[[T], bool], own: bool = False):
        self._prev = prev
        self._bind('_predicate', predicate, own)

    def start(self) -> TakeWhileCursor[T]:
        return TakeWhileCursor(self, self._prev.start(), self._prev.sentinel())

    def sentinel(self) -> TakeWhileCursor[T]:
        end = self._prev.sentinel()
        return TakeWhileCursor(self, end, end)


class SkipCursor(Cursor[T]):
    """Plain pass-through once the skipped prefix is consumed."""

    def __init__(self, pos: Cursor[T]):
        self._pos = pos

    def current(self) -> T:
        return self._pos.current()

    def advance(self) -> None:
        self._pos.advance()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SkipCursor):
            return NotImplemented
        return self._pos == other._pos


class SkipRange(BaseRange[T]):
    """All but the first count elements."""

    def __init__(self, prev: BaseRange[T], count: int):
        self._prev = prev
        self._count = count

    def start(self) -> SkipCursor[T]:
        pos = self._prev.start()
        end = self._prev.sentinel()
        remaining = self._count
        while remaining > 0 and pos != end:
            pos.advance()
            remaining -= 1
        return SkipCursor(pos)

    def sentinel(self) -> SkipCursor[T]:
        return SkipCursor(self._prev.sentinel())


class SkipWhileRange(BaseRange[T]):
    """Elements from the first one failing the predicate onwards."""

    def __init__(self, prev: BaseRange[T], predicate: Callable[[T], bool], own: bool = False):
        self._prev = prev
        self._bind('_predicate', predicate, own)

    def start(self) -> SkipCursor[T]:
        pos = self._prev.start()
        end = self._prev.sentinel()
        while pos != end and self._predicate(pos.current()):
            pos.advance()
        return SkipCursor(pos)

    def sentinel(self) -> SkipCursor[T]:
        return SkipCursor(self._prev.sentinel())

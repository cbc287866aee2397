"""
Base class of all ranges: chainable stage constructors and terminal operations.
"""

import copy
from abc import abstractmethod
from decimal import Decimal, localcontext
from fractions import Fraction
from numbers import Integral
from operator import itemgetter
from typing import (
    Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, TypeVar
)

from lazylinq.config import config
from lazylinq.ranges.cursor import Cursor, RangeIterator

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

# Element types whose average is promoted to Decimal.
_PROMOTED_NUMBERS = (int, float, Decimal, Fraction)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Fraction):
        return Decimal(value.numerator) / Decimal(value.denominator)
    return Decimal(value)


def _check_count(name: str, count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, Integral):
        raise TypeError(f"{name} count must be an integer, got {type(count).__name__}")
    count = int(count)
    if count < 0:
        raise ValueError(f"{name} count must be non-negative, got {count}")
    return count


class BaseRange(Iterable[T]):
    """
    An immutable, lazily evaluated description of one pipeline stage.

    Building a chain of ranges never touches the source; elements are
    pulled one at a time once a cursor is started.
    """

    _owned_fields: Tuple[str, ...] = ()

    @abstractmethod
    def start(self) -> Cursor[T]:
        """Begin a new traversal."""
        pass

    @abstractmethod
    def sentinel(self) -> Cursor[T]:
        """Cursor one past the last element."""
        pass

    def __iter__(self) -> Iterator[T]:
        return RangeIterator(self.start(), self.sentinel())

    def __copy__(self) -> 'BaseRange[T]':
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)

        for name, value in self.__dict__.items():
            if isinstance(value, BaseRange):
                setattr(clone, name, copy.copy(value))

        # Borrowed callables stay shared, owned ones are duplicated.
        for name in self._owned_fields:
            setattr(clone, name, copy.copy(getattr(self, name)))

        return clone

    def _bind(self, name: str, func: Callable, own: bool) -> None:
        """Store a caller-supplied callable, borrowing or owning it."""
        if not callable(func):
            raise TypeError(f"{name.lstrip('_')} must be callable, got {type(func).__name__}")
        if own:
            func = copy.copy(func)
            self._owned_fields = self._owned_fields + (name,)
        setattr(self, name, func)

    # Filtering and projection stages

    def where(self, predicate: Callable[[T], bool], own: bool = False) -> 'BaseRange[T]':
        """Keep only elements matching predicate."""
        from lazylinq.ranges.filtering import WhereRange
        return WhereRange(self, predicate, own=own)

    def distinct(self) -> 'BaseRange[T]':
        """Remove duplicate elements, keeping first occurrences."""
        from lazylinq.ranges.filtering import DistinctRange
        return DistinctRange(self)

    def select(self, transform: Callable[[T], U], own: bool = False) -> 'BaseRange[U]':
        """Apply transform to each element."""
        from lazylinq.ranges.filtering import SelectRange
        return SelectRange(self, transform, own=own)

    def select_to_text(self) -> 'BaseRange[str]':
        """Render each element as text."""
        from lazylinq.ranges.filtering import SelectToTextRange
        return SelectToTextRange(self)

    def select_many(self, transform: Callable[[T], 'BaseRange[U]'], own: bool = True) -> 'BaseRange[U]':
        """Map each element to a range and flatten the results."""
        from lazylinq.ranges.filtering import SelectManyRange
        return SelectManyRange(self, transform, own=own)

    def take(self, count: int) -> 'BaseRange[T]':
        """Take first count elements."""
        from lazylinq.ranges.filtering import TakeRange
        return TakeRange(self, _check_count("take", count))

    def take_while(self, predicate: Callable[[T], bool], own: bool = False) -> 'BaseRange[T]':
        """Take elements while predicate is true."""
        from lazylinq.ranges.filtering import TakeWhileRange
        return TakeWhileRange(self, predicate, own=own)

    def skip(self, count: int) -> 'BaseRange[T]':
        """Skip first count elements."""
        from lazylinq.ranges.filtering import SkipRange
        return SkipRange(self, _check_count("skip", count))

    def skip_while(self, predicate: Callable[[T], bool], own: bool = False) -> 'BaseRange[T]':
        """Skip elements while predicate is true."""
        from lazylinq.ranges.filtering import SkipWhileRange
        return SkipWhileRange(self, predicate, own=own)

    # Structural stages

    def reverse(self) -> 'BaseRange[T]':
        """Iterate elements back to front."""
        from lazylinq.ranges.structural import ReverseRange
        return ReverseRange(self)

    def append(self, other: 'BaseRange[T]') -> 'BaseRange[T]':
        """Concatenate another range after this one."""
        from lazylinq.ranges.structural import AppendRange
        return AppendRange(self, other)

    def repeat(self, count: int) -> 'BaseRange[T]':
        """Replay this range count additional times."""
        from lazylinq.ranges.structural import RepeatRange
        return RepeatRange(self, _check_count("repeat", count))

    # Relational stages

    def join(self,
             other: 'BaseRange[U]',
             key_selector_a: Callable[[T], K],
             key_selector_b: Callable[[U], K],
             transform: Callable[[T, U], V],
             own: bool = False) -> 'BaseRange[V]':
        """Nested-loop inner join on equal keys."""
        from lazylinq.ranges.relational import JoinRange
        return JoinRange(self, other, key_selector_a, key_selector_b, transform, own=own)

    def order_by(self, key_selector: Callable[[T], Any], direction=None, own: bool = False) -> 'BaseRange[T]':
        """Stable sort by key; ascending unless direction says otherwise."""
        from lazylinq.ranges.relational import OrderByRange, SortDirection
        return OrderByRange(self, key_selector, direction or SortDirection.ASCENDING, own=own)

    def order_by_ascending(self, key_selector: Callable[[T], Any], own: bool = False) -> 'BaseRange[T]':
        from lazylinq.ranges.relational import SortDirection
        return self.order_by(key_selector, SortDirection.ASCENDING, own=own)

    def order_by_descending(self, key_selector: Callable[[T], Any], own: bool = False) -> 'BaseRange[T]':
        from lazylinq.ranges.relational import SortDirection
        return self.order_by(key_selector, SortDirection.DESCENDING, own=own)

    # Terminal operators

    def sum(self) -> Optional[T]:
        """Sum of all elements, seeded with the first one."""
        first = True
        result = None

        for item in self:
            if first:
                result = item
                first = False
            else:
                result = result + item

        return result

    def min(self) -> Optional[T]:
        """Smallest element."""
        first = True
        result = None

        for item in self:
            if first:
                result = item
                first = False
            elif item < result:
                result = item

        return result

    def max(self) -> Optional[T]:
        """Largest element."""
        first = True
        result = None

        for item in self:
            if first:
                result = item
                first = False
            elif result < item:
                result = item

        return result

    def sum_and_count(self) -> Optional[Tuple[T, int]]:
        """Sum and number of elements in one pass."""
        result = None
        count = 0

        for item in self:
            if count == 0:
                result = item
            else:
                result = result + item
            count += 1

        if count == 0:
            return None
        return result, count

    def average(self) -> Optional[Any]:
        """
        Average of all elements.

        Built-in numbers are promoted to Decimal with
        ``config.average_precision`` digits; other element types are
        divided by the count with their own ``/`` operator.
        """
        sum_and_count = self.sum_and_count()
        if sum_and_count is None:
            return None

        total, count = sum_and_count
        if isinstance(total, _PROMOTED_NUMBERS):
            with localcontext() as ctx:
                ctx.prec = config.average_precision
                return _to_decimal(total) / count

        return total / count

    def aggregate(self, func: Callable[[T, T], T]) -> Optional[T]:
        """Fold elements with func, seeded with the first element."""
        first = True
        result = None

        for item in self:
            if first:
                result = item
                first = False
            else:
                result = func(result, item)

        return result

    def first(self, predicate: Optional[Callable[[T], bool]] = None) -> Optional[T]:
        """Get first element, optionally the first matching predicate."""
        for item in self:
            if predicate is None or predicate(item):
                return item
        return None

    def first_or_default(self, default: Optional[T] = None,
                         predicate: Optional[Callable[[T], bool]] = None) -> Optional[T]:
        for item in self:
            if predicate is None or predicate(item):
                return item
        return default

    def last(self, predicate: Optional[Callable[[T], bool]] = None) -> Optional[T]:
        """Get last element, optionally the last matching predicate."""
        return self.last_or_default(None, predicate)

    def last_or_default(self, default: Optional[T] = None,
                        predicate: Optional[Callable[[T], bool]] = None) -> Optional[T]:
        result = default

        for item in self:
            if predicate is None or predicate(item):
                result = item

        return result

    def any(self, predicate: Optional[Callable[[T], bool]] = None) -> bool:
        """True if any element matches predicate (or exists, without one)."""
        for item in self:
            if predicate is None or predicate(item):
                return True
        return False

    def all(self, predicate: Callable[[T], bool]) -> bool:
        """True if every element matches predicate; vacuously true when empty."""
        for item in self:
            if not predicate(item):
                return False
        return True

    def none(self, predicate: Callable[[T], bool]) -> bool:
        """True if no element matches predicate; vacuously true when empty."""
        return not self.any(predicate)

    def count(self, predicate: Optional[Callable[[T], bool]] = None) -> int:
        """Count elements, optionally only those matching predicate."""
        result = 0

        for item in self:
            if predicate is None or predicate(item):
                result += 1

        return result

    def element_at(self, index: int) -> Optional[T]:
        """Element at index, or None when out of bounds."""
        return self.element_at_or_default(index, None)

    def element_at_or_default(self, index: int, default: Optional[T] = None) -> Optional[T]:
        if index < 0:
            return default

        for i, item in enumerate(self):
            if i >= index:
                return item

        return default

    def to_list(self) -> List[T]:
        """Collect all elements into a list."""
        return list(self)

    to_vector = to_list

    def to_map(self) -> Dict[Any, Any]:
        """Collect (key, value) pairs into a dict ordered by key."""
        return dict(sorted(self.to_unordered_map().items(), key=itemgetter(0)))

    def to_unordered_map(self) -> Dict[Any, Any]:
        """Collect (key, value) pairs into a dict in encounter order."""
        result: Dict[Any, Any] = {}

        for item in self:
            try:
                key, value = item
            except (TypeError, ValueError) as e:
                raise TypeError(f"Expected a (key, value) pair, got {item!r}") from e
            # The first occurrence of a key wins.
            result.setdefault(key, value)

        return result

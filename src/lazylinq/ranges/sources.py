"""
Source adapters: ranges that start a pipeline.
"""

import copy
from collections.abc import Mapping, MutableMapping, MutableSequence
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from lazylinq.config import config
from lazylinq.ranges.base import BaseRange
from lazylinq.ranges.cursor import Cursor

T = TypeVar('T')


def _check_container(container: Any) -> None:
    if container is None:
        raise ValueError("null container given to range")
    if not hasattr(container, '__iter__'):
        raise TypeError(f"Container must be iterable, got {type(container).__name__}")


class ContainerCursor(Cursor[T]):
    """Walks a container through a single call to its ``__iter__``."""

    def __init__(self, iterator: Optional[Iterator[T]]):
        self._iterator = iterator
        self._index = 0
        self._value: Optional[T] = None
        self._done = iterator is None
        self._fetch()

    def _fetch(self) -> None:
        if self._done:
            return
        try:
            self._value = next(self._iterator)
        except StopIteration:
            self._done = True
            self._value = None

    def current(self) -> T:
        if self._done:
            raise IndexError("cursor is past the end of the range")
        return self._value

    def advance(self) -> None:
        if self._done:
            return
        self._index += 1
        self._fetch()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ContainerCursor):
            return NotImplemented
        if self._done or other._done:
            return self._done == other._done
        return self._index == other._index


class MutableContainerCursor(ContainerCursor[T]):
    """Container cursor that can write through to the current slot."""

    def __init__(self, container: Any, iterator: Optional[Iterator[T]]):
        self._container = container
        super().__init__(iterator)

    def assign(self, value: Any) -> None:
        """Replace the element at the current position in the container."""
        if self._done:
            raise IndexError("cursor is past the end of the range")

        if isinstance(self._container, MutableMapping):
            key = self._value[0]
            self._container[key] = value
            self._value = (key, value)
        else:
            self._container[self._index] = value
            self._value = value


class ContainerRange(BaseRange[T]):
    """
    Non-owning view of an existing container.

    Mappings yield ``(key, value)`` pairs. The container is iterated once
    per traversal and must outlive the range.
    """

    def __init__(self, container: Iterable[T]):
        _check_container(container)
        self._container = container

    def _iterate(self) -> Iterator[T]:
        if isinstance(self._container, Mapping):
            return iter(self._container.items())
        return iter(self._container)

    def start(self) -> ContainerCursor[T]:
        return ContainerCursor(self._iterate())

    def sentinel(self) -> ContainerCursor[T]:
        return ContainerCursor(None)


class MutableContainerRange(ContainerRange[T]):
    """View of a mutable sequence or mapping whose cursors can assign."""

    def __init__(self, container: Any):
        _check_container(container)
        if not isinstance(container, (MutableSequence, MutableMapping)):
            raise TypeError(f"Container must be a mutable sequence or mapping, "
                            f"got {type(container).__name__}")
        super().__init__(container)

    def start(self) -> MutableContainerCursor[T]:
        return MutableContainerCursor(self._container, self._iterate())

    def sentinel(self) -> MutableContainerCursor[T]:
        return MutableContainerCursor(self._container, None)


class ContainerCopyRange(ContainerRange[T]):
    """Range over a private copy taken at construction time."""

    def __init__(self, container: Iterable[T]):
        _check_container(container)
        super().__init__(copy.deepcopy(container))


class LiteralRange(ContainerRange[T]):
    """Range over values given inline."""

    def __init__(self, values: Iterable[T]):
        super().__init__(tuple(values))


class FromToCursor(Cursor[T]):

    def __init__(self, value: Optional[T], end: T, step: T, ascending: bool, done: bool = False):
        self._value = value
        self._end = end
        self._step = step
        self._ascending = ascending
        self._done = done

    def _reached_end(self) -> bool:
        if self._ascending:
            return not (self._value < self._end)
        return not (self._end < self._value)

    def current(self) -> T:
        if self._done:
            raise IndexError("cursor is past the end of the range")
        return self._value

    def advance(self) -> None:
        if self._done:
            return
        if self._reached_end():
            self._done = True
            return

        value = self._value + self._step
        # Clamp so the last emitted value is exactly the end bound.
        if (self._end < value) if self._ascending else (value < self._end):
            value = self._end
        self._value = value

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FromToCursor):
            return NotImplemented
        if self._done or other._done:
            return self._done == other._done
        return not (self._value < other._value or other._value < self._value)


class FromToRange(BaseRange[T]):
    """Inclusive arithmetic progression from start to end."""

    def __init__(self, start: T, end: T, step: T):
        advanced = start + step
        if not (advanced < start or start < advanced):
            raise ValueError("from_to step must not be zero")

        self._ascending = not (end < start)
        # Point the step towards end.
        if self._ascending != (start < advanced):
            step = -step

        self._start = start
        self._end = end
        self._step = step

    def start(self) -> FromToCursor[T]:
        return FromToCursor(self._start, self._end, self._step, self._ascending)

    def sentinel(self) -> FromToCursor[T]:
        return FromToCursor(None, self._end, self._step, self._ascending, done=True)


@dataclass(eq=False)
class GeneratorResult(Generic[T]):
    """Value produced by a generator callback, or the finished marker."""
    value: Optional[T] = None
    finished: bool = False

    def __eq__(self, other: Any) -> bool:
        # Only the tag matters: two finished results mark the end.
        if not isinstance(other, GeneratorResult):
            return NotImplemented
        return self.finished == other.finished


class GeneratorCursor(Cursor[T]):

    def __init__(self, generator: Callable[[int], GeneratorResult[T]], is_end: bool):
        self._generator = generator
        self._iteration = 0
        if is_end:
            self._last_result = generate_finish()
        else:
            self._last_result = self._invoke()

    def _invoke(self) -> GeneratorResult[T]:
        result = self._generator(self._iteration)
        if not isinstance(result, GeneratorResult):
            raise TypeError("The generator function is expected to return a result of "
                            "generate_return() or generate_finish()")
        return result

    def current(self) -> T:
        if self._last_result.finished:
            raise IndexError("cursor is past the end of the range")
        return self._last_result.value

    def advance(self) -> None:
        if self._last_result.finished:
            return
        self._iteration += 1
        self._last_result = self._invoke()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, GeneratorCursor):
            return NotImplemented
        return self._last_result == other._last_result


class GeneratorRange(BaseRange[T]):
    """Unbounded source driven by a callback taking the iteration index."""

    def __init__(self, generator: Callable[[int], GeneratorResult[T]], own: bool = True):
        self._bind('_generator', generator, own)

    def start(self) -> GeneratorCursor[T]:
        return GeneratorCursor(self._generator, is_end=False)

    def sentinel(self) -> GeneratorCursor[T]:
        return GeneratorCursor(self._generator, is_end=True)


# Factory functions

def from_container(container: Iterable[T]) -> ContainerRange[T]:
    """Create a non-owning range over a container."""
    return ContainerRange(container)


def from_mutable(container: Any) -> MutableContainerRange[Any]:
    """Create a non-owning range whose cursors can assign into the container."""
    return MutableContainerRange(container)


def from_copy(container: Iterable[T]) -> ContainerCopyRange[T]:
    """Create a range over a copy of container."""
    return ContainerCopyRange(container)


def from_values(*values: T) -> LiteralRange[T]:
    """Create a range over the given values."""
    return LiteralRange(values)


def from_to(start: T, end: T, step: Optional[T] = None) -> FromToRange[T]:
    """Create an inclusive progression from start to end."""
    if step is None:
        step = config.default_step
    return FromToRange(start, end, step)


def generate(generator: Callable[[int], GeneratorResult[T]], own: bool = True) -> GeneratorRange[T]:
    """Create a range from a callback returning generate_return()/generate_finish()."""
    return GeneratorRange(generator, own=own)


def generate_return(value: T) -> GeneratorResult[T]:
    return GeneratorResult(value=value)


def generate_finish() -> GeneratorResult[Any]:
    return GeneratorResult(finished=True)

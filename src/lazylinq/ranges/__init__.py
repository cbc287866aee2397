"""Lazily evaluated ranges and their cursors."""

from lazylinq.ranges.cursor import Cursor, RangeIterator
from lazylinq.ranges.base import BaseRange
from lazylinq.ranges.sources import (
    ContainerRange,
    MutableContainerRange,
    ContainerCopyRange,
    LiteralRange,
    FromToRange,
    GeneratorRange,
    GeneratorResult,
    from_container,
    from_mutable,
    from_copy,
    from_values,
    from_to,
    generate,
    generate_return,
    generate_finish,
)
from lazylinq.ranges.filtering import (
    WhereRange,
    DistinctRange,
    SelectRange,
    SelectToTextRange,
    SelectManyRange,
    TakeRange,
    TakeWhileRange,
    SkipRange,
    SkipWhileRange,
)
from lazylinq.ranges.structural import ReverseRange, AppendRange, RepeatRange
from lazylinq.ranges.relational import (
    JoinRange,
    SortDirection,
    SortingRange,
    OrderByRange,
    ThenByRange,
)

__all__ = [
    "Cursor",
    "RangeIterator",
    "BaseRange",
    "ContainerRange",
    "MutableContainerRange",
    "ContainerCopyRange",
    "LiteralRange",
    "FromToRange",
    "GeneratorRange",
    "GeneratorResult",
    "from_container",
    "from_mutable",
    "from_copy",
    "from_values",
    "from_to",
    "generate",
    "generate_return",
    "generate_finish",
    "WhereRange",
    "DistinctRange",
    "SelectRange",
    "SelectToTextRange",
    "SelectManyRange",
    "TakeRange",
    "TakeWhileRange",
    "SkipRange",
    "SkipWhileRange",
    "ReverseRange",
    "AppendRange",
    "RepeatRange",
    "JoinRange",
    "SortDirection",
    "SortingRange",
    "OrderByRange",
    "ThenByRange",
]

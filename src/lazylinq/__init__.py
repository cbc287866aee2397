"""
lazylinq: lazy query composition over arbitrary Python containers.

Pipelines of stages (filter, project, sort, join, flatten, take/skip windows,
aggregation) are described up front and evaluated one element at a time,
only when the pipeline is iterated or reduced by a terminal operation.
"""

from lazylinq.config import LinqConfig
from lazylinq.ranges import (
    BaseRange,
    Cursor,
    GeneratorResult,
    SortDirection,
    from_container,
    from_mutable,
    from_copy,
    from_values,
    from_to,
    generate,
    generate_return,
    generate_finish,
)
from lazylinq.memory import MaterializationMonitor, MemoryPressureLevel

__version__ = "0.1.0"
__license__ = "Apache-2.0"

__all__ = [
    "LinqConfig",
    "BaseRange",
    "Cursor",
    "GeneratorResult",
    "SortDirection",
    "from_container",
    "from_mutable",
    "from_copy",
    "from_values",
    "from_to",
    "generate",
    "generate_return",
    "generate_finish",
    "MaterializationMonitor",
    "MemoryPressureLevel",
]

# Configure default settings
LinqConfig.set_defaults()

"""Materialization tracking for buffering stages."""

from lazylinq.memory.monitor import (
    MaterializationMonitor,
    MaterializationInfo,
    MemoryPressureLevel,
    monitor,
)

__all__ = [
    "MaterializationMonitor",
    "MaterializationInfo",
    "MemoryPressureLevel",
    "monitor",
]

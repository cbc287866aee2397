"""Tracking of buffers built by materializing stages."""

import time
import logging
import psutil
from enum import Enum
from typing import List, Optional, Dict
from dataclasses import dataclass

from lazylinq.config import config


class MemoryPressureLevel(Enum):
    """Memory pressure levels."""
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    def __gt__(self, other):
        if not isinstance(other, MemoryPressureLevel):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if not isinstance(other, MemoryPressureLevel):
            return NotImplemented
        return self.value >= other.value

    @classmethod
    def from_percent(cls, percent: float) -> 'MemoryPressureLevel':
        if percent >= 95:
            return cls.CRITICAL
        elif percent >= 85:
            return cls.HIGH
        elif percent >= 70:
            return cls.MEDIUM
        elif percent >= 50:
            return cls.LOW
        return cls.NONE


@dataclass
class MaterializationInfo:
    """A buffer built by one traversal of a materializing stage."""
    stage: str
    size: int
    memory_percent: float
    pressure_level: MemoryPressureLevel
    timestamp: float

    def __str__(self) -> str:
        return (f"{self.stage} buffered {self.size} elements "
                f"(memory {self.memory_percent:.1f}% used, "
                f"pressure: {self.pressure_level.name})")


class MaterializationMonitor:
    """Record buffer materializations and warn when they get large."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._history: List[MaterializationInfo] = []

    def record(self, stage: str, size: int) -> Optional[MaterializationInfo]:
        """
        Record a materialized buffer.

        Args:
            stage: Name of the stage that built the buffer
            size: Number of buffered elements

        Returns:
            The recorded info, or None when tracking is disabled
        """
        if not config.track_materialization:
            return None

        percent = psutil.virtual_memory().percent
        info = MaterializationInfo(
            stage=stage,
            size=size,
            memory_percent=percent,
            pressure_level=MemoryPressureLevel.from_percent(percent),
            timestamp=time.time()
        )

        self._history.append(info)
        if len(self._history) > config.max_history:
            self._history.pop(0)

        if config.is_large_buffer(size):
            self.logger.warning(f"Large materialization: {info}")
        elif config.is_over_memory_threshold(percent):
            self.logger.warning(f"Materialization under memory pressure: {info}")
        else:
            self.logger.debug(f"Materialization: {info}")

        return info

    @property
    def history(self) -> List[MaterializationInfo]:
        return list(self._history)

    def clear(self) -> None:
        self._history.clear()

    def get_stats(self) -> Dict[str, float]:
        """Summarize recorded materializations."""
        if not self._history:
            return {"count": 0, "total_elements": 0, "max_size": 0}

        sizes = [h.size for h in self._history]
        return {
            "count": len(sizes),
            "total_elements": sum(sizes),
            "max_size": max(sizes),
        }


# Global monitor instance
monitor = MaterializationMonitor()

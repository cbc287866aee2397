"""
Configuration management for lazylinq pipelines.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class LinqConfig:
    """Global configuration for lazylinq pipelines."""

    # Sources
    default_step: int = 1

    # Terminal operations
    average_precision: int = 28  # decimal digits for promoted averages

    # Materialization tracking (order_by, then_by, reverse)
    track_materialization: bool = True
    materialize_warning_threshold: int = 1_000_000
    memory_threshold: float = 0.8  # warn above 80% system memory usage
    max_history: int = 100

    _instance: Optional['LinqConfig'] = None

    @classmethod
    def get_instance(cls) -> 'LinqConfig':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_defaults(cls, **kwargs) -> None:
        """Set default configuration values."""
        instance = cls.get_instance()
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

    def is_over_memory_threshold(self, percent: float) -> bool:
        """Check a system memory percentage against the configured threshold."""
        return percent >= self.memory_threshold * 100

    def is_large_buffer(self, size: int) -> bool:
        return size >= self.materialize_warning_threshold


# Global configuration instance
config = LinqConfig.get_instance()

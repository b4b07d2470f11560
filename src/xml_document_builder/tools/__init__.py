"""Developer tools for XML node trees."""

from .memory import MemoryStats, NodeMemoryTracker

__all__ = [
    "MemoryStats",
    "NodeMemoryTracker",
]

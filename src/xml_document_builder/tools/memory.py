"""Memory diagnostics for XML node trees.

Nodes hold their parents weakly, so a detached subtree, or a tree whose root
is dropped, should be reclaimed by the garbage collector. The tracker here
watches nodes through weak references to confirm that, and reports process
memory alongside so long-running document builders can spot leaks.
"""

import gc
import itertools
import time
import weakref
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

import psutil

from xml_document_builder.nodes.node import XmlNode
from xml_document_builder.shared.config import get_config
from xml_document_builder.shared.errors import InvalidNodeError
from xml_document_builder.shared.logging import get_logger


@dataclass
class MemoryStats:
    """Memory usage statistics."""

    # Process memory information
    resident_memory_mb: float = 0.0
    virtual_memory_mb: float = 0.0
    memory_percent: float = 0.0

    # Tracked node information
    tracked_nodes: int = 0
    live_nodes: int = 0
    collected_nodes: int = 0
    gc_collections: Dict[int, int] = field(default_factory=dict)

    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        """Convert memory stats to dictionary representation."""
        return {
            "resident_memory_mb": self.resident_memory_mb,
            "virtual_memory_mb": self.virtual_memory_mb,
            "memory_percent": self.memory_percent,
            "tracked_nodes": self.tracked_nodes,
            "live_nodes": self.live_nodes,
            "collected_nodes": self.collected_nodes,
            "gc_collections": self.gc_collections,
            "timestamp": self.timestamp,
        }


class NodeMemoryTracker:
    """Tracks node liveness through weak references.

    Examples:
        >>> tracker = NodeMemoryTracker()
        >>> root = XmlNode()
        >>> _ = root.insert_child(XmlNode())
        >>> tracker.track_tree(root)
        2
        >>> del root, _
        >>> _ = tracker.force_gc()
        >>> tracker.live_count()
        0
    """

    def __init__(self) -> None:
        self._tracked: Dict[int, "weakref.ReferenceType[XmlNode]"] = {}
        self._keys = itertools.count(1)
        self.logger = get_logger(__name__, get_config().correlation_id, "memory_tracker")

    def track(self, node: XmlNode) -> int:
        """Start tracking a single node.

        Returns:
            Tracking key for the node, unique for the life of the tracker
        """
        if not isinstance(node, XmlNode):
            raise InvalidNodeError(
                f"node should be an instance of XmlNode, got {type(node).__name__}",
                argument_name="node",
                value=node,
            )
        key = next(self._keys)
        self._tracked[key] = weakref.ref(node)
        return key

    def track_tree(self, root: XmlNode) -> int:
        """Track ``root`` and all of its descendants.

        Returns:
            Number of nodes registered
        """
        count = 1
        self.track(root)
        for node in root.iter_descendants():
            self.track(node)
            count += 1

        self.logger.debug("Tracking node tree", extra={"nodes": count})
        return count

    def live_count(self) -> int:
        """Get number of tracked nodes still alive."""
        return sum(1 for ref in self._tracked.values() if ref() is not None)

    def collected_count(self) -> int:
        """Get number of tracked nodes already reclaimed."""
        return sum(1 for ref in self._tracked.values() if ref() is None)

    def is_alive(self, key: int) -> bool:
        """Check whether the node registered under ``key`` is still alive."""
        ref = self._tracked.get(key)
        return ref is not None and ref() is not None

    def find_leaks(self, expected_collected: Iterable[int]) -> List[int]:
        """Force a collection and report keys whose nodes survived.

        Args:
            expected_collected: Tracking keys of nodes that should be gone

        Returns:
            Keys of nodes that are still alive
        """
        self.force_gc()
        leaks = [key for key in expected_collected if self.is_alive(key)]
        if leaks:
            self.logger.warning(
                "Nodes expected to be reclaimed are still alive",
                extra={"leaked_nodes": len(leaks)},
            )
        return leaks

    def force_gc(self) -> Dict[str, Any]:
        """Force garbage collection and return statistics."""
        live_before = self.live_count()
        collected = gc.collect()
        live_after = self.live_count()

        result = {
            "collected_objects": collected,
            "live_nodes_before": live_before,
            "live_nodes_after": live_after,
            "nodes_freed": live_before - live_after,
        }

        self.logger.info("Forced garbage collection", extra=result)
        return result

    def get_memory_stats(self) -> MemoryStats:
        """Get current memory statistics."""
        stats = MemoryStats()

        process = psutil.Process()
        memory_info = process.memory_info()
        stats.resident_memory_mb = memory_info.rss / (1024 * 1024)
        stats.virtual_memory_mb = memory_info.vms / (1024 * 1024)
        stats.memory_percent = process.memory_percent()

        stats.tracked_nodes = len(self._tracked)
        stats.live_nodes = self.live_count()
        stats.collected_nodes = stats.tracked_nodes - stats.live_nodes
        stats.gc_collections = {i: count for i, count in enumerate(gc.get_count())}

        return stats

    def clear(self) -> None:
        """Forget every tracked node."""
        self._tracked.clear()

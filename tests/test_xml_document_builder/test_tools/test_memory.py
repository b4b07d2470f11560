"""Tests for node memory tracking."""

import gc
import logging
from unittest.mock import MagicMock, patch

import pytest

from xml_document_builder.nodes import XmlNode
from xml_document_builder.shared.errors import InvalidNodeError
from xml_document_builder.tools.memory import MemoryStats, NodeMemoryTracker


def build_tree() -> XmlNode:
    root = XmlNode()
    child = root.insert_child(XmlNode())
    child.insert_child(XmlNode())
    root.insert_child(XmlNode())
    return root


class TestMemoryStats:
    """Test MemoryStats data class."""

    def test_memory_stats_to_dict(self):
        """Test memory stats conversion to dictionary."""
        stats = MemoryStats(resident_memory_mb=100.0, tracked_nodes=4, live_nodes=3)

        stats_dict = stats.to_dict()

        assert stats_dict["resident_memory_mb"] == 100.0
        assert stats_dict["tracked_nodes"] == 4
        assert stats_dict["live_nodes"] == 3
        assert "timestamp" in stats_dict


class TestNodeMemoryTracker:
    """Test NodeMemoryTracker."""

    def test_keys_stay_unique_after_nodes_are_freed(self):
        """Test freed nodes are not confused with nodes tracked later."""
        tracker = NodeMemoryTracker()
        old_keys = [tracker.track(XmlNode()) for _ in range(200)]
        gc.collect()

        new_nodes = [XmlNode() for _ in range(200)]
        new_keys = [tracker.track(node) for node in new_nodes]

        assert len(set(old_keys) | set(new_keys)) == 400
        assert tracker.find_leaks(old_keys) == []
        assert tracker.collected_count() == 200
        assert tracker.live_count() == 200
        assert all(tracker.is_alive(key) for key in new_keys)

    def test_track_rejects_non_node(self):
        """Test only nodes can be tracked."""
        with pytest.raises(InvalidNodeError):
            NodeMemoryTracker().track("node")  # type: ignore

    def test_track_tree_counts_all_nodes(self):
        """Test the whole subtree is registered."""
        tracker = NodeMemoryTracker()
        root = build_tree()

        assert tracker.track_tree(root) == 4
        assert tracker.live_count() == 4
        assert tracker.collected_count() == 0

    def test_dropped_tree_is_collected(self):
        """Test a tree with no outside references is reclaimed."""
        tracker = NodeMemoryTracker()
        root = build_tree()
        tracker.track_tree(root)

        del root
        result = tracker.force_gc()

        assert tracker.live_count() == 0
        assert tracker.collected_count() == 4
        assert result["live_nodes_after"] == 0

    def test_child_does_not_keep_parent_alive(self):
        """Test holding only a child lets its ancestors be reclaimed."""
        tracker = NodeMemoryTracker()
        root = XmlNode()
        child = root.insert_child(XmlNode())
        root_key = tracker.track(root)
        child_key = tracker.track(child)

        del root
        leaks = tracker.find_leaks([root_key])

        assert leaks == []
        assert tracker.is_alive(child_key)
        assert child.parent is None

    def test_detached_subtree_is_collected(self):
        """Test removing a subtree releases it while the rest survives."""
        tracker = NodeMemoryTracker()
        root = build_tree()
        subtree = root.children()[0]
        subtree_keys = [tracker.track(subtree)]
        subtree_keys.extend(tracker.track(node) for node in subtree.iter_descendants())

        subtree.remove()
        del subtree

        assert tracker.find_leaks(subtree_keys) == []
        assert len(root.children()) == 1

    def test_find_leaks_reports_survivors(self, caplog):
        """Test nodes still referenced are reported and logged."""
        caplog.set_level(logging.WARNING, logger="xml_document_builder")
        tracker = NodeMemoryTracker()
        node = XmlNode()
        key = tracker.track(node)

        assert tracker.find_leaks([key]) == [key]
        assert any(
            record.getMessage().startswith("Nodes expected to be reclaimed")
            for record in caplog.records
        )

    def test_is_alive_for_unknown_key(self):
        """Test unknown keys are not alive."""
        assert NodeMemoryTracker().is_alive(12345) is False

    def test_clear(self):
        """Test clear forgets tracked nodes."""
        tracker = NodeMemoryTracker()
        root = build_tree()
        tracker.track_tree(root)

        tracker.clear()

        assert tracker.live_count() == 0
        assert tracker.collected_count() == 0

    @patch("xml_document_builder.tools.memory.psutil.Process")
    def test_get_memory_stats(self, mock_process_class):
        """Test memory statistics combine process and node information."""
        mock_process = MagicMock()
        mock_process.memory_info.return_value = MagicMock(
            rss=100 * 1024 * 1024,
            vms=200 * 1024 * 1024,
        )
        mock_process.memory_percent.return_value = 15.5
        mock_process_class.return_value = mock_process

        tracker = NodeMemoryTracker()
        root = build_tree()
        tracker.track_tree(root)

        stats = tracker.get_memory_stats()

        assert stats.resident_memory_mb == 100.0
        assert stats.virtual_memory_mb == 200.0
        assert stats.memory_percent == 15.5
        assert stats.tracked_nodes == 4
        assert stats.live_nodes == 4
        assert stats.collected_nodes == 0
        assert set(stats.gc_collections) == {0, 1, 2}

"""Tests for visual state and the traversal log.

This module tests:
- VisualState reset and annotation
- Canonical edge keys
- Snapshots
- TraversalLog formatting
"""

import pytest

from traversalviz.core.graph.state import EdgeStatus, NodeStatus, TraversalLog, VisualState


@pytest.fixture
def state() -> VisualState:
    """Fixture providing a visual state over a triangle."""
    state = VisualState()
    state.reset([0, 1, 2], [(0, 1), (2, 1), (0, 2)])
    return state


class TestVisualState:
    """Test suite for VisualState functionality."""

    def test_state_init(self):
        state = VisualState()
        assert state.nodes == {}
        assert state.edges == {}
        assert state.is_pristine()

    def test_reset_marks_everything_unvisited(self, state: VisualState):
        assert set(state.nodes) == {0, 1, 2}
        assert set(state.edges) == {(0, 1), (1, 2), (0, 2)}
        assert state.is_pristine()

    def test_reset_drops_stale_entries(self, state: VisualState):
        state.mark_node(9, NodeStatus.VISITED)
        state.reset([0], [])
        assert state.nodes == {0: NodeStatus.UNVISITED}
        assert state.edges == {}

    def test_mark_node(self, state: VisualState):
        state.mark_node(1, NodeStatus.VISITING)
        assert state.node_status(1) == NodeStatus.VISITING
        assert not state.is_pristine()

    def test_unknown_entries_read_unvisited(self, state: VisualState):
        assert state.node_status("missing") == NodeStatus.UNVISITED
        assert state.edge_status(5, 6) == EdgeStatus.UNVISITED

    def test_edge_key_is_canonical(self, state: VisualState):
        state.mark_edge(2, 1, EdgeStatus.TREE)
        assert state.edges[(1, 2)] == EdgeStatus.TREE
        assert state.edge_status(1, 2) == EdgeStatus.TREE
        assert state.edge_status(2, 1) == EdgeStatus.TREE
        assert (2, 1) not in state.edges

    def test_edge_key_never_self_paired(self, state: VisualState):
        state.mark_edge(2, 0, EdgeStatus.BACK_OR_CROSS)
        assert (0, 2) in state.edges
        assert (0, 0) not in state.edges
        assert (2, 2) not in state.edges

    def test_string_edge_key(self):
        state = VisualState()
        state.mark_edge("B", "A", EdgeStatus.TRAVERSING)
        assert state.edges == {("A", "B"): EdgeStatus.TRAVERSING}

    def test_updated_at_moves(self, state: VisualState):
        before = state.updated_at
        state.mark_node(0, NodeStatus.VISITED)
        assert state.updated_at >= before

    def test_snapshot_is_independent(self, state: VisualState):
        snapshot = state.snapshot()
        state.mark_node(0, NodeStatus.VISITED)
        assert snapshot.node_status(0) == NodeStatus.UNVISITED
        assert state.node_status(0) == NodeStatus.VISITED


class TestTraversalLog:
    """Test suite for TraversalLog."""

    def test_format(self):
        log = TraversalLog()
        for node in [0, 1, 3]:
            log.append(node)
        assert log.format() == "0 -> 1 -> 3"
        assert str(log) == "0 -> 1 -> 3"
        assert log.format(", ") == "0, 1, 3"

    def test_empty_format(self):
        assert TraversalLog().format() == ""

    def test_clear(self):
        log = TraversalLog(order=["A", "B"])
        log.clear("dfs")
        assert log.order == []
        assert log.algorithm == "dfs"

    def test_serialization(self):
        log = TraversalLog(algorithm="bfs", order=[0, "A"])
        assert log.model_dump() == {"algorithm": "bfs", "order": [0, "A"]}

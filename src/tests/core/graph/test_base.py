"""Tests for the graph store."""

import pytest

from traversalviz.core.errors import GraphLocked, InvalidEdgeRequest
from traversalviz.core.graph.base import GraphStore
from traversalviz.core.graph.parsing import EdgeSpec, NodeSpec, StructuredGraph


@pytest.fixture
def empty_graph() -> GraphStore:
    """Fixture providing an empty graph."""
    return GraphStore()


class TestGraphQueries:
    """Test node set and neighbor lookup."""

    def test_graph_init(self, empty_graph: GraphStore):
        assert empty_graph.nodes() == []
        assert empty_graph.edges() == []
        assert empty_graph.node_count == 0

    def test_nodes_include_referenced_ids(self):
        graph = GraphStore.from_adjacency({"A": ["B", "C"]})
        assert graph.nodes() == ["A", "B", "C"]
        assert graph.has_node("C")
        assert not graph.has_node("Z")

    def test_neighbors_are_symmetric(self):
        """An edge listed on one side only is visible from both endpoints."""
        graph = GraphStore.from_adjacency({0: [1], 2: [1]})
        assert graph.neighbors(1) == [0, 2]
        assert graph.has_edge(1, 0)
        assert graph.has_edge(0, 1)

    def test_neighbors_sorted_and_deduplicated(self):
        graph = GraphStore.from_adjacency({0: [9, 3, 3, 1], 3: [0]})
        assert graph.neighbors(0) == [1, 3, 9]

    def test_neighbors_skip_self_reference(self):
        graph = GraphStore.from_adjacency({0: [0, 1]})
        assert graph.neighbors(0) == [1]
        assert graph.edges() == [(0, 1)]

    def test_mixed_identifier_order(self):
        graph = GraphStore.from_adjacency({"b": [1], 10: [2]})
        assert graph.nodes() == [1, 2, 10, "b"]

    def test_edges_are_canonical(self, sample_graph: GraphStore):
        assert sample_graph.edges() == [(0, 1), (0, 2), (1, 3), (2, 3), (3, 4), (4, 5)]
        assert sample_graph.edge_count == 6

    def test_to_text(self):
        graph = GraphStore.from_adjacency({0: [1], 2: []})
        assert graph.to_text() == "0: 1\n1: 0\n2:"


class TestAddNode:
    """Test node id assignment."""

    def test_first_node_is_zero(self, empty_graph: GraphStore):
        assert empty_graph.add_node() == 0
        assert empty_graph.nodes() == [0]

    def test_next_id_after_max(self):
        graph = GraphStore.from_adjacency({0: [], 2: [], 5: []})
        assert graph.add_node() == 6

    def test_string_ids_are_ignored(self):
        graph = GraphStore.from_adjacency({"A": ["B"]})
        assert graph.add_node() == 0

    def test_position_is_stored(self, empty_graph: GraphStore):
        node = empty_graph.add_node((10.0, 20.0))
        assert empty_graph.positions[node] == (10.0, 20.0)


class TestAddEdge:
    """Test edge request validation."""

    def test_add_edge(self, empty_graph: GraphStore):
        a = empty_graph.add_node()
        b = empty_graph.add_node()
        assert empty_graph.add_edge(b, a) == (0, 1)
        assert empty_graph.neighbors(a) == [b]
        assert empty_graph.edge_count == 1

    def test_unknown_endpoint(self, sample_graph: GraphStore):
        with pytest.raises(InvalidEdgeRequest) as excinfo:
            sample_graph.add_edge(0, 42)
        assert "do not exist" in excinfo.value.reason
        assert sample_graph.edge_count == 6

    def test_duplicate_in_either_direction(self, sample_graph: GraphStore):
        sample_graph.add_edge(0, 5)
        with pytest.raises(InvalidEdgeRequest) as excinfo:
            sample_graph.add_edge(5, 0)
        assert "already exists" in str(excinfo.value)
        assert sample_graph.edge_count == 7

    def test_duplicate_of_one_sided_input(self):
        graph = GraphStore.from_adjacency({0: [1]})
        with pytest.raises(InvalidEdgeRequest):
            graph.add_edge(1, 0)

    def test_self_loop(self, sample_graph: GraphStore):
        with pytest.raises(InvalidEdgeRequest) as excinfo:
            sample_graph.add_edge(3, 3)
        assert "itself" in excinfo.value.reason
        assert sample_graph.neighbors(3) == [1, 2, 4]

    def test_invalid_edge_is_value_error(self, sample_graph: GraphStore):
        with pytest.raises(ValueError):
            sample_graph.add_edge(1, 1)


class TestBorrowing:
    """Test read-only borrowing during traversals."""

    def test_mutation_refused_while_borrowed(self, sample_graph: GraphStore):
        with sample_graph.borrow():
            assert sample_graph.is_locked
            with pytest.raises(GraphLocked):
                sample_graph.add_node()
            with pytest.raises(GraphLocked):
                sample_graph.add_edge(0, 5)
            with pytest.raises(GraphLocked):
                sample_graph.clear()
        assert not sample_graph.is_locked
        assert sample_graph.add_node() == 6

    def test_nested_borrow(self, sample_graph: GraphStore):
        with sample_graph.borrow():
            with sample_graph.borrow():
                pass
            assert sample_graph.is_locked
        assert not sample_graph.is_locked

    def test_reads_allowed_while_borrowed(self, sample_graph: GraphStore):
        with sample_graph.borrow():
            assert sample_graph.neighbors(3) == [1, 2, 4]

    def test_clear(self, sample_graph: GraphStore):
        sample_graph.clear()
        assert sample_graph.nodes() == []
        assert sample_graph.positions == {}


class TestLoading:
    """Test alternate constructors."""

    def test_from_text(self):
        graph = GraphStore.from_text("A: B, C\nB: D")
        assert graph.nodes() == ["A", "B", "C", "D"]
        assert graph.neighbors("B") == ["A", "D"]

    def test_from_structured(self):
        structured = StructuredGraph(
            nodes=[NodeSpec(id=0, x=1, y=2), NodeSpec(id=1, x=3, y=4), NodeSpec(id=7)],
            edges=[EdgeSpec(source=0, target=1)],
        )
        graph = GraphStore.from_structured(structured)
        assert graph.nodes() == [0, 1, 7]
        assert graph.edges() == [(0, 1)]
        assert graph.positions[1] == (3.0, 4.0)

    def test_from_structured_skips_invalid_edges(self, caplog):
        structured = StructuredGraph(
            nodes=[NodeSpec(id=0), NodeSpec(id=1)],
            edges=[
                EdgeSpec(source=0, target=1),
                EdgeSpec(source=1, target=0),
                EdgeSpec(source=1, target=1),
                EdgeSpec(source=0, target=9),
            ],
        )
        graph = GraphStore.from_structured(structured)
        assert graph.edges() == [(0, 1)]
        assert graph.nodes() == [0, 1]
        assert caplog.text.count("Skipping edge") == 3

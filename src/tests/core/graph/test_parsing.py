"""Tests for adjacency text and structured graph input."""

from traversalviz.core.graph.parsing import (
    SAMPLE_GRAPH,
    StructuredGraph,
    format_adjacency_text,
    parse_adjacency_text,
)


class TestParseAdjacencyText:
    """Test the text adjacency format."""

    def test_basic(self):
        assert parse_adjacency_text("0: 1, 2\n1: 0, 3") == {0: [1, 2], 1: [0, 3]}

    def test_string_ids(self):
        assert parse_adjacency_text("A: B, C\nB: A") == {"A": ["B", "C"], "B": ["A"]}

    def test_whitespace_trimmed_and_empty_tokens_dropped(self):
        assert parse_adjacency_text("  A :  B , , C ,") == {"A": ["B", "C"]}

    def test_malformed_lines_skipped(self):
        text = "A: B\n\nno colon here\nC: D: E\n: X\nB: A\n"
        assert parse_adjacency_text(text) == {"A": ["B"], "B": ["A"]}

    def test_node_without_neighbors(self):
        assert parse_adjacency_text("A:") == {"A": []}

    def test_repeated_node_keeps_last_line(self):
        assert parse_adjacency_text("A: B\nA: C") == {"A": ["C"]}

    def test_empty_text(self):
        assert parse_adjacency_text("") == {}
        assert parse_adjacency_text("\n\n   \n") == {}

    def test_integer_tokens_become_ints(self):
        graph = parse_adjacency_text("10: 2, x")
        assert graph == {10: [2, "x"]}
        assert isinstance(next(iter(graph)), int)

    def test_format_round_trip(self):
        adjacency = {0: [1, 2], "A": [], 1: [0]}
        assert parse_adjacency_text(format_adjacency_text(adjacency)) == adjacency


class TestStructuredGraph:
    """Test structured node/edge models."""

    def test_from_dict(self):
        structured = StructuredGraph.model_validate({
            "nodes": [{"id": 0, "x": 100, "y": 100}, {"id": 1, "x": 250, "y": 100}],
            "edges": [{"source": 0, "target": 1}],
        })
        assert structured.nodes[1].x == 250.0
        assert structured.edges[0].target == 1

    def test_sample_graph(self):
        assert [node.id for node in SAMPLE_GRAPH.nodes] == [0, 1, 2, 3, 4, 5]
        assert len(SAMPLE_GRAPH.edges) == 6


class TestTokenCoercion:
    """Test which tokens become integer ids."""

    def test_negative_integer(self):
        assert parse_adjacency_text("-1: 2") == {-1: [2]}

    def test_int_lookalikes_stay_strings(self):
        assert parse_adjacency_text("A: --1, ², B") == {"A": ["--1", "²", "B"]}
        assert parse_adjacency_text("-: 1") == {"-": [1]}

"""Graph input formats.

Two forms are accepted:

- Adjacency text, one line per node: ``node: neighbor1, neighbor2``. Blank
  lines, lines without exactly one colon and lines with an empty node id are
  dropped without error. Integer-looking tokens become ``int`` ids.
- Structured lists of nodes (id, x, y) and edges (source, target).
"""

from typing import Dict, List, Mapping, Sequence

from pydantic import BaseModel, Field

from traversalviz.core.graph.ids import NodeId, coerce_node_id
from traversalviz.core.logging import LogComponent, get_logger, log_verbose

logger = get_logger(LogComponent.PARSING)


class NodeSpec(BaseModel):
    """A node with its display position."""
    id: NodeId
    x: float = 0.0
    y: float = 0.0


class EdgeSpec(BaseModel):
    """An undirected edge given by its endpoints."""
    source: NodeId
    target: NodeId


class StructuredGraph(BaseModel):
    """Explicit node and edge lists, as used by the interactive editor."""
    nodes: List[NodeSpec] = Field(default_factory=list)
    edges: List[EdgeSpec] = Field(default_factory=list)


SAMPLE_GRAPH = StructuredGraph(
    nodes=[
        NodeSpec(id=0, x=100, y=100),
        NodeSpec(id=1, x=250, y=100),
        NodeSpec(id=2, x=100, y=250),
        NodeSpec(id=3, x=250, y=250),
        NodeSpec(id=4, x=400, y=175),
        NodeSpec(id=5, x=550, y=175),
    ],
    edges=[
        EdgeSpec(source=0, target=1),
        EdgeSpec(source=0, target=2),
        EdgeSpec(source=1, target=3),
        EdgeSpec(source=2, target=3),
        EdgeSpec(source=3, target=4),
        EdgeSpec(source=4, target=5),
    ],
)


def parse_adjacency_text(text: str) -> Dict[NodeId, List[NodeId]]:
    """Parse adjacency-list text into a node -> neighbors mapping.

    A node listed twice keeps its last line.

    Example:
        >>> parse_adjacency_text("A: B, C\\n\\nB: A\\nnot a line")
        {'A': ['B', 'C'], 'B': ['A']}
    """
    graph: Dict[NodeId, List[NodeId]] = {}
    for lineno, line in enumerate(text.strip().split("\n"), start=1):
        parts = line.split(":")
        if len(parts) != 2:
            if line.strip():
                log_verbose(logger, f"Skipping malformed line {lineno}: {line!r}")
            continue
        node = parts[0].strip()
        if not node:
            log_verbose(logger, f"Skipping line {lineno} with empty node id")
            continue
        neighbors = [n.strip() for n in parts[1].split(",")]
        graph[coerce_node_id(node)] = [coerce_node_id(n) for n in neighbors if n]
    return graph


def format_adjacency_text(adjacency: Mapping[NodeId, Sequence[NodeId]]) -> str:
    """Inverse of :func:`parse_adjacency_text`."""
    return "\n".join(
        f"{node}: {', '.join(str(n) for n in neighbors)}".rstrip()
        for node, neighbors in adjacency.items()
    )

"""Graph Store

This module holds the undirected graph that traversals run over. The store
provides a lightweight way to:
1. Load a graph from an adjacency mapping, adjacency text or node/edge lists
2. Look up neighbors symmetrically (input may list an edge on one side only)
3. Grow the graph through add_node / add_edge with request validation
4. Lend the graph read-only to a running traversal

Example:
    ```python
    graph = GraphStore.from_text("0: 1, 2\\n1: 3")
    graph.neighbors(1)        # [0, 3]
    graph.add_node()          # 4
    graph.add_edge(3, 4)      # (3, 4)

    with graph.borrow():
        graph.add_node()      # raises GraphLocked
    ```
"""

from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple
import logging

from pydantic import BaseModel, Field, PrivateAttr

from traversalviz.core.errors import GraphLocked, InvalidEdgeRequest
from traversalviz.core.graph.ids import (
    EdgeKey,
    NodeId,
    canonical_edge,
    node_sort_key,
    sorted_ids,
)
from traversalviz.core.graph.parsing import (
    StructuredGraph,
    format_adjacency_text,
    parse_adjacency_text,
)
from traversalviz.core.logging import LogComponent, get_logger

Position = Tuple[float, float]


class GraphStore(BaseModel):
    """An undirected graph held as an adjacency mapping.

    Attributes:
        adjacency: Node id -> neighbor ids. An id referenced only as a neighbor
            is still a node of the graph.
        positions: Optional display coordinates per node, owned by renderers.
    """
    adjacency: Dict[NodeId, List[NodeId]] = Field(default_factory=dict)
    positions: Dict[NodeId, Position] = Field(default_factory=dict)
    _logger: logging.Logger = PrivateAttr()
    _borrows: int = PrivateAttr(default=0)

    def __init__(self, **data):
        super().__init__(**data)
        self._logger = get_logger(LogComponent.GRAPH)

    @classmethod
    def from_adjacency(cls, adjacency: Mapping[NodeId, Iterable[NodeId]]) -> "GraphStore":
        """Build a store from a node -> neighbors mapping."""
        return cls(adjacency={node: list(neighbors) for node, neighbors in adjacency.items()})

    @classmethod
    def from_text(cls, text: str) -> "GraphStore":
        """Build a store from ``node: n1, n2`` lines. Malformed lines are skipped."""
        return cls(adjacency=parse_adjacency_text(text))

    @classmethod
    def from_structured(cls, structured: StructuredGraph) -> "GraphStore":
        """Build a store from explicit node and edge lists.

        Edges that fail validation are skipped with a warning.
        """
        graph = cls()
        for node in structured.nodes:
            graph.adjacency.setdefault(node.id, [])
            graph.positions[node.id] = (node.x, node.y)
        for edge in structured.edges:
            try:
                graph.add_edge(edge.source, edge.target)
            except InvalidEdgeRequest as e:
                graph._logger.warning(f"Skipping edge {edge.source}-{edge.target}: {e.reason}")
        return graph

    # ------------------------------------------------------------------
    # Borrowing
    # ------------------------------------------------------------------

    @property
    def is_locked(self) -> bool:
        return self._borrows > 0

    @contextmanager
    def borrow(self) -> Iterator["GraphStore"]:
        """Lend the graph read-only for the duration of the block."""
        self._borrows += 1
        try:
            yield self
        finally:
            self._borrows -= 1

    def _check_mutable(self) -> None:
        if self.is_locked:
            raise GraphLocked("Graph cannot be modified while a traversal is running.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def nodes(self) -> List[NodeId]:
        """All node ids in ascending order, including ids only seen as neighbors."""
        found: Set[NodeId] = set(self.adjacency)
        for neighbors in self.adjacency.values():
            found.update(neighbors)
        return sorted_ids(found)

    def has_node(self, node_id: NodeId) -> bool:
        if node_id in self.adjacency:
            return True
        return any(node_id in neighbors for neighbors in self.adjacency.values())

    def neighbors(self, node_id: NodeId) -> List[NodeId]:
        """Neighbors of ``node_id`` in ascending id order.

        An edge listed on either side counts, so ``{0: [1]}`` gives
        ``neighbors(1) == [0]``.
        """
        found: Set[NodeId] = set(self.adjacency.get(node_id, ()))
        for other, neighbors in self.adjacency.items():
            if node_id in neighbors:
                found.add(other)
        found.discard(node_id)
        return sorted_ids(found)

    def edges(self) -> List[EdgeKey]:
        """Canonical pairs for every edge, sorted."""
        found: Set[EdgeKey] = set()
        for node, neighbors in self.adjacency.items():
            for neighbor in neighbors:
                if neighbor != node:
                    found.add(canonical_edge(node, neighbor))
        return sorted(found, key=lambda e: (node_sort_key(e[0]), node_sort_key(e[1])))

    def has_edge(self, a: NodeId, b: NodeId) -> bool:
        return b in self.adjacency.get(a, ()) or a in self.adjacency.get(b, ())

    @property
    def node_count(self) -> int:
        return len(self.nodes())

    @property
    def edge_count(self) -> int:
        return len(self.edges())

    def next_node_id(self) -> int:
        """One more than the largest integer id, or 0 when there is none."""
        int_ids = [n for n in self.nodes() if isinstance(n, int) and not isinstance(n, bool)]
        return max(int_ids) + 1 if int_ids else 0

    def to_text(self) -> str:
        return format_adjacency_text(
            {node: self.neighbors(node) for node in self.nodes()}
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_node(self, position: Optional[Position] = None) -> NodeId:
        """Add an isolated node and return its id.

        Raises:
            GraphLocked: If a traversal currently borrows the graph
        """
        self._check_mutable()
        node_id = self.next_node_id()
        self.adjacency[node_id] = []
        if position is not None:
            self.positions[node_id] = position
        self._logger.info(f"Added node: {node_id}")
        return node_id

    def add_edge(self, source: NodeId, target: NodeId) -> EdgeKey:
        """Add the undirected edge {source, target}.

        Args:
            source: One endpoint
            target: The other endpoint

        Returns:
            The canonical pair of the new edge

        Raises:
            InvalidEdgeRequest: If an endpoint is missing, the edge exists
                in either direction, or source == target
            GraphLocked: If a traversal currently borrows the graph
        """
        self._check_mutable()
        if not self.has_node(source) or not self.has_node(target):
            raise InvalidEdgeRequest(
                source, target, "One or both nodes for the edge do not exist."
            )
        if self.has_edge(source, target):
            raise InvalidEdgeRequest(
                source, target, f"Edge between {source} and {target} already exists."
            )
        if source == target:
            raise InvalidEdgeRequest(
                source, target, "Cannot add edge from node to itself."
            )

        self.adjacency.setdefault(source, []).append(target)
        self.adjacency.setdefault(target, []).append(source)
        self._logger.info(f"Added edge: {source} -- {target}")
        return canonical_edge(source, target)

    def set_position(self, node_id: NodeId, position: Position) -> None:
        self.positions[node_id] = position

    def clear(self) -> None:
        """Remove every node and edge."""
        self._check_mutable()
        self.adjacency.clear()
        self.positions.clear()
        self._logger.info("Cleared graph")

"""Visual state for the traversal system.

This module provides:
1. NodeStatus / EdgeStatus: Enumerations of per-node and per-edge annotations
2. VisualState: Mutable annotations read by renderers, written by the engine
3. TraversalLog: The ordered visitation sequence of a run
"""

from typing import Dict, Iterable, List, Optional
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field

from traversalviz.core.graph.ids import EdgeKey, NodeId, canonical_edge

class NodeStatus(str, Enum):
    """Node visitation status."""
    UNVISITED = "unvisited"
    VISITING = "visiting"
    VISITED = "visited"

class EdgeStatus(str, Enum):
    """Edge traversal status."""
    UNVISITED = "unvisited"
    TRAVERSING = "traversing"
    TREE = "tree"                    # Followed to reach a new node
    BACK_OR_CROSS = "back_or_cross"  # Far endpoint was already visited

class VisualState(BaseModel):
    """
    Per-node and per-edge annotations, independent of graph structure.

    Entries that are missing read as unvisited.

    Attributes:
        nodes: Status by node ID
        edges: Status by canonical edge pair
        updated_at: Time of last modification
    """
    nodes: Dict[NodeId, NodeStatus] = Field(default_factory=dict)
    edges: Dict[EdgeKey, EdgeStatus] = Field(default_factory=dict)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def reset(
        self,
        nodes: Iterable[NodeId] = (),
        edges: Iterable[EdgeKey] = ()
    ) -> None:
        """Mark every given node and edge unvisited, dropping all other entries."""
        self.nodes = {node: NodeStatus.UNVISITED for node in nodes}
        self.edges = {canonical_edge(*edge): EdgeStatus.UNVISITED for edge in edges}
        self._update_timestamp()

    def mark_node(self, node_id: NodeId, status: NodeStatus) -> None:
        self.nodes[node_id] = status
        self._update_timestamp()

    def mark_edge(self, a: NodeId, b: NodeId, status: EdgeStatus) -> None:
        """Mark the undirected edge {a, b}; order of endpoints is irrelevant."""
        self.edges[canonical_edge(a, b)] = status
        self._update_timestamp()

    def node_status(self, node_id: NodeId) -> NodeStatus:
        return self.nodes.get(node_id, NodeStatus.UNVISITED)

    def edge_status(self, a: NodeId, b: NodeId) -> EdgeStatus:
        return self.edges.get(canonical_edge(a, b), EdgeStatus.UNVISITED)

    def is_pristine(self) -> bool:
        """True when nothing is annotated beyond unvisited."""
        return (
            all(s == NodeStatus.UNVISITED for s in self.nodes.values())
            and all(s == EdgeStatus.UNVISITED for s in self.edges.values())
        )

    def snapshot(self) -> "VisualState":
        """Independent copy for renderers that keep frames."""
        return self.model_copy(deep=True)

    def _update_timestamp(self) -> None:
        """Update the last modified timestamp."""
        object.__setattr__(self, "updated_at", datetime.utcnow())

class TraversalLog(BaseModel):
    """
    Node IDs in the order they were first marked visiting.

    Attributes:
        algorithm: Name of the traversal that produced the log
        order: Visitation sequence
    """
    algorithm: Optional[str] = None
    order: List[NodeId] = Field(default_factory=list)

    def clear(self, algorithm: Optional[str] = None) -> None:
        self.algorithm = algorithm
        self.order.clear()

    def append(self, node_id: NodeId) -> None:
        self.order.append(node_id)

    def format(self, separator: str = " -> ") -> str:
        """Render the order as ``0 -> 1 -> 2``."""
        return separator.join(str(node) for node in self.order)

    def __str__(self) -> str:
        return self.format()

"""Exceptions raised by the graph store, the traversal engine and sessions.

Request problems (bad start node, bad edge) derive from ``ValueError`` and
state conflicts (busy graph, run in progress, cancellation) derive from
``RuntimeError`` so callers can catch them with the builtin they expect.
"""

from typing import Any


class TraversalVizError(Exception):
    """Base class for all traversalviz errors."""


class StartNodeNotFound(TraversalVizError, ValueError):
    """The requested start node is not part of the graph."""

    def __init__(self, node_id: Any):
        self.node_id = node_id
        super().__init__(f'Start node "{node_id}" not found in the graph.')


class InvalidEdgeRequest(TraversalVizError, ValueError):
    """An edge could not be added (unknown endpoint, duplicate or self-loop)."""

    def __init__(self, source: Any, target: Any, reason: str):
        self.source = source
        self.target = target
        self.reason = reason
        super().__init__(reason)


class GraphLocked(TraversalVizError, RuntimeError):
    """The graph is borrowed by a running traversal and cannot be mutated."""


class TraversalInProgress(TraversalVizError, RuntimeError):
    """Another traversal is already running in this session."""


class TraversalCancelled(TraversalVizError, RuntimeError):
    """A running traversal was cancelled at a suspension point."""

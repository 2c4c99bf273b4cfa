"""traversalviz - animated BFS/DFS graph traversal visualizer."""

from traversalviz.core import (
    LocalRuntime,
    TraversalSession,
    VisualizerConfig,
    configure_logging,
    LogLevel,
    LogComponent
)
from traversalviz.core.errors import (
    GraphLocked,
    InvalidEdgeRequest,
    StartNodeNotFound,
    TraversalCancelled,
    TraversalInProgress,
    TraversalVizError,
)
from traversalviz.core.graph import GraphStore, TraversalEngine, TraversalLog, VisualState

__all__ = [
    'TraversalSession',
    'LocalRuntime',
    'VisualizerConfig',
    'GraphStore',
    'TraversalEngine',
    'TraversalLog',
    'VisualState',
    'TraversalVizError',
    'StartNodeNotFound',
    'InvalidEdgeRequest',
    'GraphLocked',
    'TraversalInProgress',
    'TraversalCancelled',
    'configure_logging',
    'LogLevel',
    'LogComponent'
]

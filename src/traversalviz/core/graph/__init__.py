"""Graph package initialization.

Exposes the graph store, visual state and traversal engine.
"""

from traversalviz.core.graph.base import GraphStore
from traversalviz.core.graph.state import EdgeStatus, NodeStatus, TraversalLog, VisualState
from traversalviz.core.graph.engine import (
    Algorithm,
    Step,
    StepKind,
    TraversalEngine,
    plan_bfs,
    plan_dfs,
)
from traversalviz.core.graph.parsing import (
    EdgeSpec,
    NodeSpec,
    SAMPLE_GRAPH,
    StructuredGraph,
    parse_adjacency_text,
)
from traversalviz.core.graph.viz import RecordingRenderer, Renderer, TextRenderer

__all__ = [
    # Core classes
    "GraphStore",
    "VisualState",
    "TraversalLog",
    "NodeStatus",
    "EdgeStatus",
    "TraversalEngine",
    "Algorithm",
    "Step",
    "StepKind",

    # Plans
    "plan_bfs",
    "plan_dfs",

    # Input
    "NodeSpec",
    "EdgeSpec",
    "StructuredGraph",
    "SAMPLE_GRAPH",
    "parse_adjacency_text",

    # Rendering
    "Renderer",
    "TextRenderer",
    "RecordingRenderer",
]

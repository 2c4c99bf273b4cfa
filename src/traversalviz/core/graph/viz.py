"""Graph visualization tools.

Renderers consume a graph and its visual state and draw them. The engine only
calls ``render(graph, visual_state)``; it never deals with coordinates, so
layout helpers live here alongside the renderers that need them.
"""

import math
import random
import sys
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol, Sequence, TextIO, Tuple, runtime_checkable

from traversalviz.core.graph.ids import NodeId
from traversalviz.core.graph.state import EdgeStatus, NodeStatus, VisualState
from traversalviz.core.logging import Colors, LogComponent, get_logger

if TYPE_CHECKING:
    from traversalviz.core.graph.base import GraphStore

logger = get_logger(LogComponent.RENDER)

# Hex palette for canvas/SVG front ends
NODE_COLORS: Dict[NodeStatus, str] = {
    NodeStatus.UNVISITED: "#3498db",
    NodeStatus.VISITING: "#e74c3c",
    NodeStatus.VISITED: "#2ecc71",
}

EDGE_COLORS: Dict[EdgeStatus, str] = {
    EdgeStatus.UNVISITED: "#555",
    EdgeStatus.TRAVERSING: "#f39c12",
    EdgeStatus.TREE: "#2ecc71",
    EdgeStatus.BACK_OR_CROSS: "#bdc3c7",
}

# Terminal equivalents: (ANSI color, plain marker)
NODE_STYLES: Dict[NodeStatus, Tuple[str, str]] = {
    NodeStatus.UNVISITED: (Colors.INFO, "·"),
    NodeStatus.VISITING: (Colors.ERROR + Colors.BOLD, "*"),
    NodeStatus.VISITED: (Colors.SUCCESS, "✓"),
}

EDGE_STYLES: Dict[EdgeStatus, Tuple[str, str]] = {
    EdgeStatus.UNVISITED: (Colors.DIM, "-"),
    EdgeStatus.TRAVERSING: (Colors.WARNING + Colors.BOLD, ">"),
    EdgeStatus.TREE: (Colors.SUCCESS, "="),
    EdgeStatus.BACK_OR_CROSS: (Colors.MUTED, "~"),
}


@runtime_checkable
class Renderer(Protocol):
    """Anything that can draw a graph with its visual state.

    ``render`` must be synchronous and idempotent: two calls with unchanged
    state leave the visible output unchanged.
    """

    def render(self, graph: "GraphStore", visual_state: VisualState) -> None: ...


class NullRenderer:
    """Renderer that draws nothing."""

    def render(self, graph: "GraphStore", visual_state: VisualState) -> None:
        return None


class RecordingRenderer:
    """Keeps a snapshot of every frame it is asked to draw."""

    def __init__(self) -> None:
        self.frames: List[VisualState] = []

    def render(self, graph: "GraphStore", visual_state: VisualState) -> None:
        self.frames.append(visual_state.snapshot())

    @property
    def last(self) -> Optional[VisualState]:
        return self.frames[-1] if self.frames else None

    def clear(self) -> None:
        self.frames.clear()


class TextRenderer:
    """Draws one line per frame on a terminal stream.

    Nodes are shown as their ids and edges as ``a-b``; with color disabled a
    marker shows the status instead (``*`` visiting, ``=`` tree edge, ...).
    A frame equal to the previous one is not written again.
    """

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True) -> None:
        self.stream = stream
        self.color = color
        self.last_frame: Optional[str] = None

    def format_frame(self, graph: "GraphStore", visual_state: VisualState) -> str:
        node_parts = []
        for node in graph.nodes():
            color, marker = NODE_STYLES[visual_state.node_status(node)]
            node_parts.append(self._paint(str(node), color, marker))

        edge_parts = []
        for a, b in graph.edges():
            color, marker = EDGE_STYLES[visual_state.edge_status(a, b)]
            if self.color:
                edge_parts.append(f"{color}{a}-{b}{Colors.RESET}")
            else:
                edge_parts.append(f"{a}{marker}{b}")

        line = "nodes: " + " ".join(node_parts)
        if edge_parts:
            line += " │ edges: " + " ".join(edge_parts)
        return line

    def render(self, graph: "GraphStore", visual_state: VisualState) -> None:
        frame = self.format_frame(graph, visual_state)
        if frame == self.last_frame:
            logger.debug("Frame unchanged, not redrawn")
            return
        self.last_frame = frame
        stream = self.stream or sys.stdout
        stream.write(frame + "\n")
        stream.flush()

    def _paint(self, text: str, color: str, marker: str) -> str:
        if self.color:
            return f"{color}{text}{Colors.RESET}"
        return f"{text}{marker}"


def circular_layout(
    nodes: Sequence[NodeId],
    width: float,
    height: float
) -> Dict[NodeId, Tuple[float, float]]:
    """Place nodes evenly on a circle filling 80% of the smaller dimension."""
    if not nodes:
        return {}
    center_x = width / 2
    center_y = height / 2
    radius = min(center_x, center_y) * 0.8
    positions = {}
    for index, node in enumerate(nodes):
        angle = (index / len(nodes)) * math.pi * 2
        positions[node] = (
            center_x + radius * math.cos(angle),
            center_y + radius * math.sin(angle),
        )
    return positions


def random_position(
    width: float,
    height: float,
    node_radius: float,
    rng: Optional[random.Random] = None
) -> Tuple[float, float]:
    """A random point at least two node radii away from every border."""
    rng = rng or random
    padding = node_radius * 2
    return (
        rng.random() * (width - padding * 2) + padding,
        rng.random() * (height - padding * 2) + padding,
    )

"""Traversal sessions.

A ``TraversalSession`` owns everything one visualizer needs: the graph, its
visual state, the traversal log, a renderer and an engine. It exposes the
commands a host UI binds to buttons and turns every failure into a status
message instead of an exception.
"""

from datetime import datetime
from typing import Any, Mapping, Optional, Union
from uuid import uuid4
import logging

from pydantic import BaseModel, Field

from traversalviz.core.config import VisualizerConfig
from traversalviz.core.errors import (
    GraphLocked,
    InvalidEdgeRequest,
    StartNodeNotFound,
    TraversalCancelled,
    TraversalInProgress,
)
from traversalviz.core.graph.base import GraphStore
from traversalviz.core.graph.engine import Algorithm, Sleep, Step, TraversalEngine
from traversalviz.core.graph.ids import NodeId
from traversalviz.core.graph.parsing import SAMPLE_GRAPH, StructuredGraph
from traversalviz.core.graph.state import TraversalLog, VisualState
from traversalviz.core.graph.viz import NullRenderer, Renderer, circular_layout, random_position
from traversalviz.core.logging import LogComponent, get_logger, log_state

logger = get_logger(LogComponent.SESSION)

GraphSource = Union[str, StructuredGraph, Mapping[NodeId, Any]]

IDLE_MESSAGE = "Select an algorithm and click Run."
PATH_PREFIX = "Traversal Path: "


class SessionInfo(BaseModel):
    """Tracks session metadata."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    start_time: datetime = Field(default_factory=datetime.now)
    runs: int = 0
    last_algorithm: Optional[str] = None


class TraversalSession:
    """Graph, visual state and traversal engine behind one visualizer.

    Attributes:
        graph: Current graph; replaced by load/clear commands between runs
        visual_state: Node and edge annotations
        log: Visitation order of the latest run
        status_message: Latest human readable status
        info: Session metadata
    """

    def __init__(
        self,
        config: Optional[VisualizerConfig] = None,
        renderer: Optional[Renderer] = None,
        graph: Optional[GraphStore] = None,
        sleep: Optional[Sleep] = None
    ) -> None:
        self.config = config or VisualizerConfig()
        self.config.logging_config.apply()
        self.renderer = renderer or NullRenderer()
        self.graph = graph if graph is not None else GraphStore.from_structured(SAMPLE_GRAPH)
        self.visual_state = VisualState()
        self.log = TraversalLog()
        self.status_message = IDLE_MESSAGE
        self.info = SessionInfo()
        self.engine = TraversalEngine(
            renderer=self.renderer,
            step_delay_ms=self.config.step_delay_ms,
            sleep=sleep,
            on_step=self._on_step
        )
        self._layout_missing()
        self.visual_state.reset(self.graph.nodes(), self.graph.edges())

    @property
    def is_running(self) -> bool:
        return self.engine.is_running

    @property
    def traversal_path(self) -> str:
        return PATH_PREFIX + self.log.format()

    # ------------------------------------------------------------------
    # Traversals
    # ------------------------------------------------------------------

    async def run_bfs(self, start: Optional[NodeId] = None) -> Optional[TraversalLog]:
        return await self.run(Algorithm.BFS, start)

    async def run_dfs(self, start: Optional[NodeId] = None) -> Optional[TraversalLog]:
        return await self.run(Algorithm.DFS, start)

    async def run(
        self,
        algorithm: Union[Algorithm, str],
        start: Optional[NodeId] = None
    ) -> Optional[TraversalLog]:
        """Run a traversal and report the outcome in ``status_message``.

        Args:
            algorithm: "bfs" or "dfs"
            start: Start node; defaults to ``config.default_start``

        Returns:
            The log on completion, the partial log if cancelled, or None if
            the run was refused (unknown algorithm or start node, run already in flight)
        """
        try:
            algorithm = Algorithm(algorithm)
        except ValueError:
            self._report(f"Unknown algorithm: {algorithm}", logging.WARNING)
            return None
        name = algorithm.value.upper()
        if start is None:
            start = self.config.default_start

        if self.graph.node_count == 0:
            self._report("Please draw a graph first.", logging.WARNING)
            return None

        try:
            await self.engine.run(algorithm, self.graph, self.visual_state, self.log, start)
        except StartNodeNotFound as e:
            self._report(f"Error: {e}", logging.WARNING)
            return None
        except TraversalInProgress:
            self._report(
                f"A traversal is already running; {name} request ignored.", logging.WARNING
            )
            return None
        except TraversalCancelled:
            self._report(f"{name} cancelled.")
            return self.log

        self.info.runs += 1
        self.info.last_algorithm = algorithm.value
        self._report(f"{name} Complete!")
        return self.log

    def cancel(self) -> None:
        """Stop the running traversal at its next pause, keeping partial state."""
        self.engine.cancel()

    # ------------------------------------------------------------------
    # Visualization
    # ------------------------------------------------------------------

    def reset_visualization(self) -> bool:
        """Set every node and edge back to unvisited and clear the log."""
        if self._refuse_while_running("reset the visualization"):
            return False
        self.visual_state.reset(self.graph.nodes(), self.graph.edges())
        self.log.clear()
        self.render()
        self._report(IDLE_MESSAGE)
        return True

    def render(self) -> None:
        self.renderer.render(self.graph, self.visual_state)

    # ------------------------------------------------------------------
    # Graph editing
    # ------------------------------------------------------------------

    def load_graph(self, source: GraphSource) -> bool:
        """Replace the graph with one given as text, structured lists or a mapping."""
        if self._refuse_while_running("load a graph"):
            return False
        try:
            if isinstance(source, str):
                graph = GraphStore.from_text(source)
            elif isinstance(source, StructuredGraph):
                graph = GraphStore.from_structured(source)
            else:
                graph = GraphStore.from_adjacency(source)
        except (ValueError, TypeError) as e:
            logger.debug(f"Rejected graph input: {e}")
            self._report(f"Invalid graph: {type(e).__name__}", logging.WARNING)
            return False
        log_state(logger, {"adjacency": {str(n): graph.neighbors(n) for n in graph.nodes()}})
        self._replace_graph(graph)
        self._report(
            f"Loaded graph with {graph.node_count} nodes and {graph.edge_count} edges."
        )
        return True

    def clear_graph(self) -> bool:
        if self._refuse_while_running("clear the graph"):
            return False
        self._replace_graph(GraphStore())
        self._report("Graph cleared. Add nodes and edges.")
        return True

    def reset_graph(self) -> bool:
        """Restore the built-in sample graph."""
        if self._refuse_while_running("reset the graph"):
            return False
        self._replace_graph(GraphStore.from_structured(SAMPLE_GRAPH))
        self._report("Graph reset to initial state.")
        return True

    def add_node(self) -> Optional[NodeId]:
        """Add an isolated node at a random position and return its id."""
        position = random_position(
            self.config.canvas_width, self.config.canvas_height, self.config.node_radius
        )
        try:
            node_id = self.graph.add_node(position)
        except GraphLocked as e:
            self._report(str(e), logging.WARNING)
            return None
        self.visual_state.reset(self.graph.nodes(), self.graph.edges())
        self.render()
        self._report(f"Added node {node_id}.")
        return node_id

    def add_edge(self, source: NodeId, target: NodeId) -> bool:
        """Add an undirected edge; problems are reported, never raised."""
        try:
            self.graph.add_edge(source, target)
        except (InvalidEdgeRequest, GraphLocked) as e:
            self._report(str(e), logging.WARNING)
            return False
        self.visual_state.reset(self.graph.nodes(), self.graph.edges())
        self.render()
        self._report(f"Added edge between {source} and {target}.")
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _replace_graph(self, graph: GraphStore) -> None:
        self.graph = graph
        self._layout_missing()
        self.visual_state.reset(graph.nodes(), graph.edges())
        self.log.clear()
        self.render()

    def _layout_missing(self) -> None:
        """Give nodes without a position a circular layout."""
        nodes = self.graph.nodes()
        if all(node in self.graph.positions for node in nodes):
            return
        layout = circular_layout(nodes, self.config.canvas_width, self.config.canvas_height)
        for node, position in layout.items():
            self.graph.positions.setdefault(node, position)

    def _refuse_while_running(self, action: str) -> bool:
        if self.is_running:
            self._report(f"Cannot {action} while a traversal is running.", logging.WARNING)
            return True
        return False

    def _on_step(self, step: Step) -> None:
        if step.message:
            self.status_message = step.message

    def _report(self, message: str, level: int = logging.INFO) -> None:
        self.status_message = message
        logger.log(level, message)

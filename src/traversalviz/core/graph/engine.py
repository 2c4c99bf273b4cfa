"""Traversal Engine

This module animates breadth-first and depth-first traversals. A traversal is
split in two parts:

1. A *plan*: a generator of ``Step`` records (mutate a node or edge, record a
   visit, pause). Plans only read the graph and keep their own visited
   bookkeeping, so they can be stepped through eagerly without any timing.
2. The *driver*: ``TraversalEngine.execute`` applies each step to the visual
   state and log, asks the renderer to draw, and suspends for the step's pause
   scaled by the step delay. Every pause is a cancellation point.

Example:
    ```python
    graph = GraphStore.from_text("0: 1, 2\\n1: 3")
    engine = TraversalEngine(renderer=TextRenderer(), step_delay_ms=200)
    log = await engine.run_bfs(graph, VisualState(), TraversalLog(), start=0)
    print(log.format())  # 0 -> 1 -> 2 -> 3
    ```
"""

from collections import deque
from enum import Enum
from typing import Awaitable, Callable, Dict, Iterator, Optional, Union
import asyncio

from pydantic import BaseModel

from traversalviz.core.errors import StartNodeNotFound, TraversalCancelled, TraversalInProgress
from traversalviz.core.graph.base import GraphStore
from traversalviz.core.graph.ids import EdgeKey, NodeId, canonical_edge
from traversalviz.core.graph.state import EdgeStatus, NodeStatus, TraversalLog, VisualState
from traversalviz.core.graph.viz import NullRenderer, Renderer
from traversalviz.core.logging import LogComponent, get_logger, log_step, log_verbose

logger = get_logger(LogComponent.ENGINE)

Sleep = Callable[[float], Awaitable[None]]

# Pause lengths as fractions of the step delay
FULL_PAUSE = 1.0
HALF_PAUSE = 0.5
NO_PAUSE = 0.0


class Algorithm(str, Enum):
    """Supported traversals."""
    BFS = "bfs"
    DFS = "dfs"


class StepKind(str, Enum):
    """What a step does to the visual state."""
    RESET = "reset"    # All nodes and edges back to unvisited, log cleared
    NODE = "node"      # Change one node's status
    EDGE = "edge"      # Change one edge's status
    RECORD = "record"  # Append a node to the traversal log (no redraw)


class Step(BaseModel):
    """A single animation step.

    Attributes:
        kind: Type of mutation
        node: Target node for NODE and RECORD steps
        edge: Canonical pair for EDGE steps
        status: New status for NODE and EDGE steps
        pause: Suspension after the step as a multiple of the step delay;
            0 means the step is not a suspension point
        message: Human readable description of the step
    """
    kind: StepKind
    node: Optional[NodeId] = None
    edge: Optional[EdgeKey] = None
    status: Union[NodeStatus, EdgeStatus, None] = None
    pause: float = NO_PAUSE
    message: Optional[str] = None

    @property
    def redraws(self) -> bool:
        return self.kind != StepKind.RECORD


def _node_step(node: NodeId, status: NodeStatus, pause: float, message: str) -> Step:
    return Step(kind=StepKind.NODE, node=node, status=status, pause=pause, message=message)


def _edge_step(a: NodeId, b: NodeId, status: EdgeStatus, pause: float) -> Step:
    edge = canonical_edge(a, b)
    messages = {
        EdgeStatus.TRAVERSING: f"Traversing edge {a}-{b}",
        EdgeStatus.TREE: f"Edge {a}-{b} added to traversal tree",
        EdgeStatus.BACK_OR_CROSS: f"Node {b} already visited, skipping edge {a}-{b}",
    }
    return Step(kind=StepKind.EDGE, edge=edge, status=status, pause=pause, message=messages.get(status))


def _record_step(node: NodeId) -> Step:
    return Step(kind=StepKind.RECORD, node=node)


def _visit_steps(node: NodeId) -> Iterator[Step]:
    yield _node_step(node, NodeStatus.VISITING, FULL_PAUSE, f"Visiting node {node}")
    yield _node_step(node, NodeStatus.VISITED, HALF_PAUSE, f"Finished visiting node {node}")
    yield _record_step(node)


def _require_start(graph: GraphStore, start: NodeId) -> None:
    if not graph.has_node(start):
        raise StartNodeNotFound(start)


def plan_bfs(graph: GraphStore, start: NodeId) -> Iterator[Step]:
    """Steps of a breadth-first traversal from ``start``.

    Neighbors are explored in ascending id order. A neighbor joins the visited
    set as soon as it is discovered so it is never queued twice.

    Raises:
        StartNodeNotFound: Immediately, if ``start`` is not in the graph
    """
    _require_start(graph, start)
    return _bfs_steps(graph, start)


def _bfs_steps(graph: GraphStore, start: NodeId) -> Iterator[Step]:
    yield Step(kind=StepKind.RESET, message=f"Running BFS starting from node {start}...")
    visited = {start}
    yield from _visit_steps(start)

    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in graph.neighbors(current):
            if neighbor not in visited:
                visited.add(neighbor)
                yield _edge_step(current, neighbor, EdgeStatus.TRAVERSING, HALF_PAUSE)
                yield from _visit_steps(neighbor)
                queue.append(neighbor)
                yield _edge_step(current, neighbor, EdgeStatus.TREE, NO_PAUSE)
            else:
                yield _edge_step(current, neighbor, EdgeStatus.BACK_OR_CROSS, HALF_PAUSE)


def plan_dfs(graph: GraphStore, start: NodeId) -> Iterator[Step]:
    """Steps of a depth-first traversal from ``start`` using an explicit stack.

    Neighbors are pushed in descending id order so they are popped, and
    therefore visited, in ascending order. A node can sit on the stack more
    than once; later pops of an already visited node are skipped silently.

    Raises:
        StartNodeNotFound: Immediately, if ``start`` is not in the graph
    """
    _require_start(graph, start)
    return _dfs_steps(graph, start)


def _dfs_steps(graph: GraphStore, start: NodeId) -> Iterator[Step]:
    yield Step(kind=StepKind.RESET, message=f"Running DFS starting from node {start}...")
    visited = set()
    stack = [start]
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        yield from _visit_steps(current)

        for neighbor in reversed(graph.neighbors(current)):
            if neighbor not in visited:
                yield _edge_step(current, neighbor, EdgeStatus.TRAVERSING, HALF_PAUSE)
                stack.append(neighbor)
                yield _edge_step(current, neighbor, EdgeStatus.TREE, NO_PAUSE)
            else:
                yield _edge_step(current, neighbor, EdgeStatus.BACK_OR_CROSS, HALF_PAUSE)


PLANNERS: Dict[Algorithm, Callable[[GraphStore, NodeId], Iterator[Step]]] = {
    Algorithm.BFS: plan_bfs,
    Algorithm.DFS: plan_dfs,
}


class TraversalEngine:
    """Runs traversal plans against a visual state with timed suspension.

    One engine runs one traversal at a time. While a run is in flight the
    graph is borrowed read-only.

    Attributes:
        renderer: Receives ``render(graph, visual_state)`` after each visual step
        step_delay_ms: Default primary step delay; sub-steps pause half of it
        on_step: Optional callback invoked with every applied step
    """

    def __init__(
        self,
        renderer: Optional[Renderer] = None,
        step_delay_ms: float = 500.0,
        sleep: Optional[Sleep] = None,
        on_step: Optional[Callable[[Step], None]] = None
    ) -> None:
        self.renderer = renderer or NullRenderer()
        self.step_delay_ms = step_delay_ms
        self.on_step = on_step
        self._sleep: Sleep = sleep or asyncio.sleep
        self._running = False
        self._cancel_requested = False

    @property
    def is_running(self) -> bool:
        return self._running

    def cancel(self) -> None:
        """Ask the running traversal to stop at its next suspension point."""
        if self._running:
            logger.info("Cancellation requested")
            self._cancel_requested = True

    async def run_bfs(
        self,
        graph: GraphStore,
        visual_state: VisualState,
        log: TraversalLog,
        start: NodeId,
        step_delay_ms: Optional[float] = None
    ) -> TraversalLog:
        """Animate a breadth-first traversal and return the filled log.

        Raises:
            StartNodeNotFound: If ``start`` is not in the graph; nothing is mutated
            TraversalInProgress: If this engine is already running
            TraversalCancelled: If ``cancel()`` was called during the run
        """
        return await self.run(Algorithm.BFS, graph, visual_state, log, start, step_delay_ms)

    async def run_dfs(
        self,
        graph: GraphStore,
        visual_state: VisualState,
        log: TraversalLog,
        start: NodeId,
        step_delay_ms: Optional[float] = None
    ) -> TraversalLog:
        """Animate a depth-first traversal and return the filled log.

        Raises the same errors as :meth:`run_bfs`.
        """
        return await self.run(Algorithm.DFS, graph, visual_state, log, start, step_delay_ms)

    async def run(
        self,
        algorithm: Algorithm,
        graph: GraphStore,
        visual_state: VisualState,
        log: TraversalLog,
        start: NodeId,
        step_delay_ms: Optional[float] = None
    ) -> TraversalLog:
        algorithm = Algorithm(algorithm)
        if self._running:
            raise TraversalInProgress("A traversal is already running.")
        steps = PLANNERS[algorithm](graph, start)
        logger.info(f"Starting {algorithm.value.upper()} from node {start}")
        await self.execute(steps, graph, visual_state, log, step_delay_ms, algorithm=algorithm)
        logger.info(f"{algorithm.value.upper()} finished: {log.format()}")
        return log

    async def execute(
        self,
        steps: Iterator[Step],
        graph: GraphStore,
        visual_state: VisualState,
        log: TraversalLog,
        step_delay_ms: Optional[float] = None,
        algorithm: Optional[Algorithm] = None
    ) -> TraversalLog:
        """Apply, render and pause for each step in turn.

        Args:
            steps: A plan, usually from :func:`plan_bfs` or :func:`plan_dfs`
            graph: Graph being traversed; borrowed read-only for the run
            visual_state: Annotations to mutate
            log: Visitation log to fill
            step_delay_ms: Overrides the engine's step delay for this run
            algorithm: Recorded on the log when it is reset

        Returns:
            The log
        """
        if self._running:
            raise TraversalInProgress("A traversal is already running.")
        delay_ms = self.step_delay_ms if step_delay_ms is None else step_delay_ms
        self._running = True
        self._cancel_requested = False
        try:
            with graph.borrow():
                for step in steps:
                    self.apply(step, graph, visual_state, log, algorithm)
                    if step.redraws:
                        self.renderer.render(graph, visual_state)
                    if self.on_step is not None:
                        self.on_step(step)
                    if step.pause > 0:
                        await self._suspend(step.pause * delay_ms / 1000.0)
        finally:
            self._running = False
            self._cancel_requested = False
        return log

    def apply(
        self,
        step: Step,
        graph: GraphStore,
        visual_state: VisualState,
        log: TraversalLog,
        algorithm: Optional[Algorithm] = None
    ) -> None:
        """Apply one step's mutation without rendering or pausing."""
        if step.kind == StepKind.RESET:
            visual_state.reset(graph.nodes(), graph.edges())
            log.clear(algorithm.value if algorithm else None)
        elif step.kind == StepKind.NODE:
            visual_state.mark_node(step.node, step.status)
        elif step.kind == StepKind.EDGE:
            visual_state.mark_edge(*step.edge, step.status)
        elif step.kind == StepKind.RECORD:
            log.append(step.node)
            log_step(logger, f"Visited node {step.node} ({len(log.order)} so far)")
        if step.message:
            log_verbose(logger, step.message)

    async def _suspend(self, seconds: float) -> None:
        if self._cancel_requested:
            raise TraversalCancelled("Traversal cancelled.")
        await self._sleep(seconds)
        if self._cancel_requested:
            raise TraversalCancelled("Traversal cancelled.")

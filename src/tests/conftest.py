"""Shared test fixtures for graph, engine and session tests."""

import logging
from typing import Dict, List

import pytest

from traversalviz.core.graph.base import GraphStore
from traversalviz.core.graph.engine import TraversalEngine
from traversalviz.core.graph.ids import NodeId
from traversalviz.core.graph.state import TraversalLog, VisualState
from traversalviz.core.graph.viz import RecordingRenderer
from traversalviz.core.logging import LogComponent


SAMPLE_ADJACENCY: Dict[NodeId, List[NodeId]] = {
    0: [1, 2],
    1: [0, 3],
    2: [0, 3],
    3: [1, 2, 4],
    4: [3, 5],
    5: [4],
}


class FakeSleep:
    """Records requested pauses instead of waiting."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    """Fixture providing a sleep that returns immediately."""
    return FakeSleep()


@pytest.fixture
def sample_graph() -> GraphStore:
    """Fixture providing the six node example graph."""
    return GraphStore.from_adjacency(SAMPLE_ADJACENCY)


@pytest.fixture
def recorder() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def engine(recorder: RecordingRenderer, fake_sleep: FakeSleep) -> TraversalEngine:
    """Fixture providing an engine with a recording renderer and fake sleep."""
    return TraversalEngine(renderer=recorder, step_delay_ms=1000, sleep=fake_sleep)


@pytest.fixture
def visual_state() -> VisualState:
    return VisualState()


@pytest.fixture
def log() -> TraversalLog:
    return TraversalLog()


@pytest.fixture(autouse=True)
def restore_logger_levels():
    """Undo component level changes made by sessions and the CLI."""
    levels = {c: logging.getLogger(c.value).level for c in LogComponent}
    yield
    for component, level in levels.items():
        logging.getLogger(component.value).setLevel(level)

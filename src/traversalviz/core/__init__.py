"""Core modules for traversalviz."""

from traversalviz.core.config import VisualizerConfig
from traversalviz.core.logging import configure_logging, LogLevel, LogComponent
from traversalviz.core.session import TraversalSession
from traversalviz.core.runtime import LocalRuntime

__all__ = [
    'VisualizerConfig',
    'TraversalSession',
    'LocalRuntime',
    'configure_logging',
    'LogLevel',
    'LogComponent'
]

"""Configuration for visualizer sessions."""

from pydantic import BaseModel, Field

from traversalviz.core.graph.ids import NodeId
from traversalviz.core.logging import VizLoggingConfig


class VisualizerConfig(BaseModel):
    """Configuration for a traversal session.

    Attributes:
        step_delay_ms: Pause after a primary animation step; sub-steps pause half
        canvas_width: Drawing area width used for layout
        canvas_height: Drawing area height used for layout
        node_radius: Node radius used to keep random placement inside the canvas
        default_start: Start node used when a run names none
        color: Whether terminal output uses ANSI colors
        logging_config: Controls logging verbosity
    """
    step_delay_ms: float = Field(default=500.0, ge=0)
    canvas_width: float = Field(default=800.0, gt=0)
    canvas_height: float = Field(default=600.0, gt=0)
    node_radius: float = Field(default=20.0, gt=0)
    default_start: NodeId = 0
    color: bool = True
    logging_config: VizLoggingConfig = Field(default_factory=VizLoggingConfig)
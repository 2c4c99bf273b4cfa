"""Command line entry point.

Usage:
    python -m traversalviz                              # interactive console
    python -m traversalviz --graph graph.txt -a bfs -s 0
    python -m traversalviz -a dfs --delay 0 --no-color
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from traversalviz.core.config import VisualizerConfig
from traversalviz.core.graph.ids import coerce_node_id
from traversalviz.core.graph.viz import TextRenderer
from traversalviz.core.logging import LogComponent, LogLevel, VizLoggingConfig, configure_logging
from traversalviz.core.runtime import LocalRuntime
from traversalviz.core.session import TraversalSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="traversalviz",
        description="Animate breadth-first and depth-first graph traversals in the terminal.",
    )
    parser.add_argument(
        "--graph", "-g", type=Path,
        help="adjacency list file, one 'node: n1, n2' line per node (default: sample graph)",
    )
    parser.add_argument(
        "--algorithm", "-a", choices=["bfs", "dfs"],
        help="run one traversal and exit instead of starting the console",
    )
    parser.add_argument("--start", "-s", help="start node (default: 0)")
    parser.add_argument(
        "--delay", "-d", type=float, default=500.0,
        help="primary step delay in milliseconds (default: 500)",
    )
    parser.add_argument(
        "--log-level", default="WARNING", choices=[level.name for level in LogLevel],
        help="logging level (default: WARNING)",
    )
    parser.add_argument("--show-steps", action="store_true", help="log every animation step")
    parser.add_argument("--log-file", help="also write logs to this file")
    parser.add_argument("--no-color", action="store_true", help="disable ANSI colors")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = LogLevel[args.log_level]
    configure_logging(
        default_level=level,
        component_levels={component: level for component in LogComponent},
        pretty=not args.no_color,
        log_file=args.log_file,
    )

    try:
        config = VisualizerConfig(
            step_delay_ms=args.delay,
            color=not args.no_color,
            logging_config=VizLoggingConfig(level=level, show_steps=args.show_steps),
        )
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    session = TraversalSession(
        config=config,
        renderer=TextRenderer(color=config.color),
    )
    if args.graph is not None:
        try:
            text = args.graph.read_text()
        except OSError as e:
            print(f"Cannot read graph file: {e}", file=sys.stderr)
            return 2
        session.load_graph(text)

    if args.algorithm is None:
        asyncio.run(LocalRuntime(session).start())
        return 0

    start = coerce_node_id(args.start) if args.start is not None else None
    try:
        result = asyncio.run(session.run(args.algorithm, start))
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    print(session.status_message)
    if result is None:
        return 1
    print(session.traversal_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())

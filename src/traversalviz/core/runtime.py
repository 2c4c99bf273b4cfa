"""Console runtime for interactive traversal sessions."""

from typing import Callable, List

from traversalviz.core.graph.ids import coerce_node_id
from traversalviz.core.logging import LogComponent, get_logger
from traversalviz.core.session import TraversalSession

logger = get_logger(LogComponent.RUNTIME)

HELP_TEXT = """Commands:
  bfs [START]        run breadth-first search (default start from config)
  dfs [START]        run depth-first search
  add-node           add an isolated node
  add-edge A B       add an undirected edge
  load               read adjacency lines (node: n1, n2) until an empty line
  show               print the current graph
  reset              reset node and edge colors
  reset-graph        restore the sample graph
  clear              remove every node and edge
  help               show this text
  quit               leave"""


class LocalRuntime:
    """Runtime for local console interactions with a traversal session."""

    def __init__(
        self,
        session: TraversalSession,
        input_func: Callable[[str], str] = input
    ) -> None:
        self.session = session
        self._input = input_func

    async def start(self) -> None:
        """Start a local console loop."""
        logger.info("Starting traversal console. Type 'help' for commands, 'quit' to stop.")
        self.session.render()

        while True:
            try:
                line = self._input("\ntraversal> ")
            except (EOFError, KeyboardInterrupt):
                logger.info("Console session interrupted by user.")
                break
            if not await self.handle(line):
                break

        logger.info("Console session ended.")

    async def handle(self, line: str) -> bool:
        """Execute one command line. Returns False when the loop should stop."""
        parts = line.split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]

        if command in ("quit", "exit"):
            return False
        if command == "help":
            print(HELP_TEXT)
        elif command in ("bfs", "dfs"):
            start = coerce_node_id(args[0]) if args else None
            await self.session.run(command, start)
            print(self.session.status_message)
            print(self.session.traversal_path)
        elif command == "add-node":
            self.session.add_node()
            print(self.session.status_message)
        elif command == "add-edge":
            if len(args) != 2:
                print("Usage: add-edge A B")
            else:
                self.session.add_edge(coerce_node_id(args[0]), coerce_node_id(args[1]))
                print(self.session.status_message)
        elif command == "load":
            self.session.load_graph("\n".join(self._read_block()))
            print(self.session.status_message)
        elif command == "show":
            print(self.session.graph.to_text() or "(empty graph)")
        elif command == "reset":
            self.session.reset_visualization()
            print(self.session.status_message)
        elif command == "reset-graph":
            self.session.reset_graph()
            print(self.session.status_message)
        elif command == "clear":
            self.session.clear_graph()
            print(self.session.status_message)
        else:
            print(f"Unknown command: {command}. Type 'help' for commands.")
        return True

    def _read_block(self) -> List[str]:
        lines = []
        while True:
            try:
                line = self._input("... ")
            except EOFError:
                break
            if not line.strip():
                break
            lines.append(line)
        return lines

"""Test suite for the traversal visualizer.

This package contains tests for the graph and traversal engine, organized
into the following structure:

1. Graph Store Tests (test_base.py)
   - Node set and symmetric neighbor lookup
   - add_node / add_edge validation
   - Read-only borrowing

2. Visual State (test_state.py)
   - Status annotations and canonical edge keys
   - Traversal log formatting

3. Input Parsing (test_parsing.py)
   - Adjacency text rules
   - Structured node/edge input

4. Engine (test_engine.py)
   - BFS and DFS orderings and step sequences
   - Timing, cancellation and concurrency guards

5. Rendering (test_viz.py)
   - Text renderer output and idempotence
   - Layout helpers
"""

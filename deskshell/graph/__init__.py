"""
Directory Graph

Read-only access to the document store's file and directory nodes.

Modules:
    base: Abstract graph interface
    memory: In-memory snapshot with a child index
    snapshot: JSON / Parquet snapshot loading and writing
    demo: Built-in sample graph

Design Principles:
    - The terminal never writes to the graph
    - Children keep the order the store holds them in
    - The root need not exist as a node; top-level nodes point at its id
"""

from deskshell.graph.base import DirectoryGraph
from deskshell.graph.demo import demo_graph
from deskshell.graph.memory import InMemoryGraph
from deskshell.graph.snapshot import load_snapshot, save_snapshot

__all__ = [
    "DirectoryGraph",
    "InMemoryGraph",
    "demo_graph",
    "load_snapshot",
    "save_snapshot",
]

"""
In-Memory Directory Graph

Snapshot of the document store held in dictionaries, with a child index
built once so lookups do not scan every node.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable

from deskshell.graph.base import DirectoryGraph
from deskshell.types import DirectoryGraphNode

logger = logging.getLogger(__name__)


class InMemoryGraph(DirectoryGraph):
    """
    Directory graph backed by an in-memory node list.

    Insertion order is preserved for both ``all_nodes`` and ``children``.
    A later node with an id already present replaces the earlier one in
    place.
    """

    def __init__(self, nodes: Iterable[DirectoryGraphNode] = ()) -> None:
        self._nodes: dict[str, DirectoryGraphNode] = {}
        for node in nodes:
            if node.id in self._nodes:
                logger.debug(f"Duplicate node id '{node.id}', keeping the later record")
            self._nodes[node.id] = node
        self._children: dict[str | None, list[DirectoryGraphNode]] = defaultdict(list)
        for node in self._nodes.values():
            self._children[node.parent_id].append(node)

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> InMemoryGraph:
        """Build a graph from document store records."""
        return cls(DirectoryGraphNode.from_record(record) for record in records)

    def get(self, node_id: str) -> DirectoryGraphNode | None:
        return self._nodes.get(node_id)

    def children(self, parent_id: str, *, include_trashed: bool = False) -> list[DirectoryGraphNode]:
        items = self._children.get(parent_id, [])
        if include_trashed:
            return list(items)
        return [item for item in items if not item.trashed]

    def all_nodes(self) -> list[DirectoryGraphNode]:
        return list(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

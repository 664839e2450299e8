"""
Abstract Directory Graph Interface

Defines the read surface the terminal consumes from the document store.
The engine never writes through it.
"""

from abc import ABC, abstractmethod

from deskshell.types import DirectoryGraphNode, GraphStats, NodeKind


class DirectoryGraph(ABC):
    """
    Read-only view of a user's directory graph.

    Implementations must return children in the order the store holds
    them; the shell relies on that order for ``ls`` and completion.
    Nodes whose parent is the root identifier are top-level entries; the
    root itself need not exist as a node.
    """

    @abstractmethod
    def get(self, node_id: str) -> DirectoryGraphNode | None:
        """Return the node with this identifier, or None."""
        ...

    @abstractmethod
    def children(self, parent_id: str, *, include_trashed: bool = False) -> list[DirectoryGraphNode]:
        """Immediate children of a node in stored order."""
        ...

    @abstractmethod
    def all_nodes(self) -> list[DirectoryGraphNode]:
        """Every node in stored order."""
        ...

    def find_child(self, parent_id: str, name: str) -> DirectoryGraphNode | None:
        """First non-trashed child of ``parent_id`` called ``name``."""
        for child in self.children(parent_id):
            if child.name == name:
                return child
        return None

    def stats(self) -> GraphStats:
        """Count nodes by kind."""
        stats = GraphStats()
        owners: set[str] = set()
        for node in self.all_nodes():
            stats.total += 1
            if node.trashed:
                stats.trashed += 1
            if node.kind is NodeKind.DIRECTORY:
                stats.directories += 1
            elif node.kind is NodeKind.DIRECTORY_ALIAS:
                stats.aliases += 1
            else:
                stats.files += 1
            if node.owner:
                owners.add(node.owner)
        stats.owners = sorted(owners)
        return stats

    def __len__(self) -> int:
        return len(self.all_nodes())

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, str) and self.get(node_id) is not None

"""
Directory Graph Types

Nodes of the per-user directory graph owned by the document store.
The terminal engine only reads them.

Storage Models:
    - DirectoryGraphNode: One file or directory in the graph
    - NodeKind: directory / directory-alias / file
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# Mimetypes the document store uses for directory-like nodes
DIRECTORY_MIMETYPE = "inode/directory"
DIRECTORY_ALIAS_MIMETYPE = "inode/directory-alias"


class NodeKind(str, Enum):
    """Node classification."""

    DIRECTORY = "directory"
    DIRECTORY_ALIAS = "directory-alias"
    FILE = "file"

    @property
    def is_directory(self) -> bool:
        """True for directories and directory aliases."""
        return self is not NodeKind.FILE

    @classmethod
    def from_mimetype(cls, mimetype: str | None) -> "NodeKind":
        """Map a document store mimetype onto a node kind."""
        if mimetype == DIRECTORY_MIMETYPE:
            return cls.DIRECTORY
        if mimetype == DIRECTORY_ALIAS_MIMETYPE:
            return cls.DIRECTORY_ALIAS
        return cls.FILE


class DirectoryGraphNode(BaseModel):
    """
    A file or directory in the directory graph.

    Attributes:
        id: Unique node identifier
        name: Display name (one path segment)
        parent_id: Identifier of the containing directory, None at the top
        kind: Directory, directory alias or file
        content: File body, if any
        description: Fallback text shown by cat when there is no content
        trashed: Moved to the trash (hidden from the shell)
        owner: Owning user
    """

    id: str
    name: str
    parent_id: str | None = None
    kind: NodeKind = NodeKind.FILE
    content: str | None = None
    description: str | None = None
    trashed: bool = False
    owner: str | None = None

    @property
    def is_directory(self) -> bool:
        return self.kind.is_directory

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "DirectoryGraphNode":
        """
        Build a node from a document store record.

        Accepts both the engine's field names and the store's own
        (``parent``, ``mimetype``, ``isTrash``). Unknown keys are ignored.
        """
        data = dict(record)
        if "parent_id" not in data and "parent" in data:
            data["parent_id"] = data["parent"]
        if "kind" not in data:
            data["kind"] = NodeKind.from_mimetype(data.get("mimetype"))
        if "trashed" not in data and "isTrash" in data:
            data["trashed"] = bool(data["isTrash"])
        # Nulls fall back to field defaults (Parquet rows carry explicit None)
        clean = {
            key: value
            for key, value in data.items()
            if key in cls.model_fields and (value is not None or key == "parent_id")
        }
        return cls(**clean)


class GraphStats(BaseModel):
    """Node counts for a directory graph snapshot."""

    total: int = 0
    directories: int = 0
    aliases: int = 0
    files: int = 0
    trashed: int = 0
    owners: list[str] = Field(default_factory=list)

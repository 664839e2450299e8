"""
Directory Graph Snapshots

Loads and writes dumps of the document store's directory nodes.

Formats (chosen by file suffix):
    .json     List of node objects. Engine field names (parent_id, kind,
              trashed) and store field names (parent, mimetype, isTrash)
              are both accepted.
    .parquet  One row per node with the columns of _node_schema().
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from deskshell.graph.base import DirectoryGraph
from deskshell.graph.memory import InMemoryGraph

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".parquet")


def _node_schema() -> pa.Schema:
    return pa.schema([
        ("id", pa.string()),
        ("name", pa.string()),
        ("parent_id", pa.string()),
        ("kind", pa.string()),
        ("content", pa.string()),
        ("description", pa.string()),
        ("trashed", pa.bool_()),
        ("owner", pa.string()),
    ])


def _read_records(path: Path) -> list[dict[str, Any]]:
    suffix = path.suffix.lower()
    if suffix == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
        # {"nodes": [...]} and a bare list are both accepted
        if isinstance(data, dict):
            data = data.get("nodes", [])
        if not isinstance(data, list):
            raise ValueError(f"Snapshot {path} must contain a list of nodes")
        return data
    if suffix == ".parquet":
        return pq.read_table(path).to_pylist()
    raise ValueError(
        f"Unsupported snapshot format: {path.suffix}. Use one of {', '.join(SUPPORTED_SUFFIXES)}"
    )


def load_snapshot(path: str | Path) -> InMemoryGraph:
    """
    Load a directory graph snapshot.

    Args:
        path: JSON or Parquet file

    Returns:
        InMemoryGraph holding the snapshot's nodes in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported or the JSON is not a node list
        pydantic.ValidationError: If a record is not a valid node
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot not found: {path}")

    records = _read_records(path)
    graph = InMemoryGraph.from_records(records)
    logger.debug(f"Loaded {len(graph)} nodes from {path}")
    return graph


def save_snapshot(graph: DirectoryGraph, path: str | Path) -> None:
    """
    Write every node of a graph to a JSON or Parquet snapshot.

    Args:
        graph: Graph to dump
        path: Destination; the suffix picks the format
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported snapshot format: {path.suffix}. Use one of {', '.join(SUPPORTED_SUFFIXES)}"
        )
    path.parent.mkdir(parents=True, exist_ok=True)

    nodes = graph.all_nodes()
    if suffix == ".json":
        payload = [node.model_dump(mode="json") for node in nodes]
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    else:
        data = {
            "id": [n.id for n in nodes],
            "name": [n.name for n in nodes],
            "parent_id": [n.parent_id for n in nodes],
            "kind": [n.kind.value for n in nodes],
            "content": [n.content for n in nodes],
            "description": [n.description for n in nodes],
            "trashed": [n.trashed for n in nodes],
            "owner": [n.owner for n in nodes],
        }
        table = pa.Table.from_pydict(data, schema=_node_schema())
        pq.write_table(table, path)

    logger.debug(f"Wrote {len(nodes)} nodes to {path}")

"""
Path Resolution

Resolves path expressions against the directory graph and renders node
identifiers back into display paths.

Path forms:
    ""  or "."        the start directory
    "~"               the home node
    "/a/b"            from the graph root
    "~/a/b"           from the home node
    "a/../b"          relative to the start directory

Resolution walks top-down one segment at a time. ".." moves to the parent
when there is one (the root is a fixed point); every other segment must
name a non-trashed directory or directory alias child.

Rendering walks parent pointers upward and is bounded by ``max_depth`` so
malformed (cyclic) data still terminates with a partial path.
"""

from __future__ import annotations

import logging

from deskshell.config.settings import MIN_PATH_DEPTH
from deskshell.graph.base import DirectoryGraph
from deskshell.types import DirectoryGraphNode, NodeKind

logger = logging.getLogger(__name__)

DEFAULT_ROOT_ID = "root"
DEFAULT_MAX_DEPTH = 256


def resolve(
    graph: DirectoryGraph,
    start_id: str,
    home_id: str,
    path_expr: str,
    *,
    root_id: str = DEFAULT_ROOT_ID,
) -> str | None:
    """
    Resolve a directory path expression to a node id.

    Args:
        graph: Directory graph to walk
        start_id: Directory relative paths start from (the cwd)
        home_id: Node addressed by "~"
        path_expr: Path to resolve
        root_id: Node addressed by a leading "/"

    Returns:
        Node id of the directory, or None if any segment fails
    """
    if path_expr in ("", "."):
        return start_id
    if path_expr == "~":
        return home_id

    if path_expr.startswith("/"):
        current = root_id
        remainder = path_expr[1:]
    elif path_expr.startswith("~/"):
        current = home_id
        remainder = path_expr[2:]
    else:
        current = start_id
        remainder = path_expr

    for segment in remainder.split("/"):
        if not segment or segment == ".":
            continue
        if segment == "..":
            node = graph.get(current)
            if node is not None and node.parent_id:
                current = node.parent_id
            continue
        child = graph.find_child(current, segment)
        if child is None or not child.is_directory:
            return None
        current = child.id

    return current


def _directory_node(graph: DirectoryGraph, node_id: str | None, root_id: str) -> DirectoryGraphNode | None:
    if node_id is None:
        return None
    node = graph.get(node_id)
    if node is None and node_id == root_id:
        return DirectoryGraphNode(id=root_id, name="/", kind=NodeKind.DIRECTORY)
    return node


def resolve_file(
    graph: DirectoryGraph,
    cwd_id: str,
    home_id: str,
    path_expr: str,
    *,
    root_id: str = DEFAULT_ROOT_ID,
) -> DirectoryGraphNode | None:
    """
    Resolve a path whose last segment may be a file.

    The directory part resolves like ``resolve``; the leaf is then looked
    up among that directory's non-trashed children. Paths that can only
    denote a directory ("..", "~", a trailing "/") resolve as directories.

    Returns:
        The file or directory node, or None if either part fails
    """
    leaf = path_expr.rpartition("/")[2]
    if path_expr in ("", "~") or leaf in ("", ".", ".."):
        target = resolve(graph, cwd_id, home_id, path_expr, root_id=root_id)
        return _directory_node(graph, target, root_id)

    if "/" not in path_expr:
        dir_id: str | None = cwd_id
    else:
        dir_part = path_expr.rpartition("/")[0]
        if dir_part == "":
            dir_id = root_id
        else:
            dir_id = resolve(graph, cwd_id, home_id, dir_part, root_id=root_id)

    if dir_id is None:
        return None
    return graph.find_child(dir_id, leaf)


def path_to_string(
    graph: DirectoryGraph,
    node_id: str,
    home_id: str,
    *,
    root_id: str = DEFAULT_ROOT_ID,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """
    Render a node as a "~"-relative or absolute path.

    Walks parent pointers up to the home node or the root, collecting
    names, then reverses them. At most ``max_depth`` ancestors are
    visited; past that a warning is logged and the partial path is used.

    Returns:
        "~" for the home node itself, "~/..." below home, "/..." otherwise
    """
    if node_id == home_id:
        return "~"

    max_depth = max(max_depth, MIN_PATH_DEPTH)
    names: list[str] = []
    current = node_id
    steps = 0

    while current != root_id and current != home_id:
        if steps >= max_depth:
            logger.warning(
                f"Path walk from '{node_id}' stopped after {max_depth} ancestors; "
                "the graph may contain a parent cycle"
            )
            break
        node = graph.get(current)
        if node is None:
            break
        names.append(node.name)
        if not node.parent_id:
            break
        current = node.parent_id
        steps += 1

    names.reverse()
    if current == home_id:
        return "~/" + "/".join(names)
    return "/" + "/".join(names)


def expand_home(display_path: str, display_name: str) -> str:
    """Replace a leading "~" with the synthetic ``/Users/<Name>`` home."""
    if display_path == "~" or display_path.startswith("~/"):
        return f"/Users/{display_name}" + display_path[1:]
    return display_path


def collapse_home(path: str | None, home: str | None) -> str:
    """
    Shorten a host path under ``home`` to "~" form.

    ``/home/alice/projects`` with home ``/home/alice`` -> ``~/projects``.
    """
    if not path:
        return "~"
    if not home:
        return path
    home = home.rstrip("/") or "/"
    if path.rstrip("/") == home:
        return "~"
    prefix = home if home.endswith("/") else home + "/"
    if path.startswith(prefix):
        return "~/" + path[len(prefix):]
    return path

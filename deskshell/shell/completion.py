"""
Tab completion for sandboxed sessions.

Completes the last space-separated word of the input line against the
entries of the current directory.
"""

from __future__ import annotations

from deskshell.graph.base import DirectoryGraph
from deskshell.types import Session


def complete_line(graph: DirectoryGraph, session: Session, line: str) -> str:
    """
    Complete the last word of ``line``.

    The first non-trashed child of the cwd whose name starts with the word
    (case-insensitive) wins, in listing order. Directories get a trailing
    "/". Lines ending in a space, or with no match, come back unchanged.
    """
    if session.cwd_id is None:
        return line

    parts = line.split(" ")
    partial = parts[-1].lower()
    if not partial:
        return line

    for item in graph.children(session.cwd_id):
        if item.name.lower().startswith(partial):
            parts[-1] = f"{item.name}/" if item.is_directory else item.name
            return " ".join(parts)
    return line

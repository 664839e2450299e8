"""
Type Definitions

Pydantic models for all data structures.

Graph Models (read from the document store):
    - DirectoryGraphNode, NodeKind - Files and directories
    - GraphStats - Node counts of a snapshot

Session Models (owned by one terminal instance):
    - Session, SessionMode - Terminal state and backend
    - TranscriptLine, LineKind - Output lines
    - RcConfig - Parsed shell rc file

Result Models:
    - CommandResult - Outcome of one command
    - ExecResult, HostIdentity - Host bridge responses
"""

from deskshell.types.nodes import DirectoryGraphNode, GraphStats, NodeKind
from deskshell.types.results import CommandResult, ExecResult, HostIdentity
from deskshell.types.session import (
    GUEST_USERNAME,
    LineKind,
    PromptStyle,
    RcConfig,
    Session,
    SessionMode,
    TranscriptLine,
)

__all__ = [
    # Graph
    "DirectoryGraphNode",
    "GraphStats",
    "NodeKind",
    # Session
    "GUEST_USERNAME",
    "LineKind",
    "PromptStyle",
    "RcConfig",
    "Session",
    "SessionMode",
    "TranscriptLine",
    # Results
    "CommandResult",
    "ExecResult",
    "HostIdentity",
]

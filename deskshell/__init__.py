"""
deskshell - Terminal Session Engine

The command-line interpreter behind the desktop terminal window. A session
runs in one of two modes, fixed when it starts:

    sandboxed: a simulated shell over the read-only directory graph of the
               document store (no processes, no filesystem writes)
    bridged:   every line is forwarded to a real host shell through a
               stateless request/response bridge; the working directory
               is kept as client-side shadow state

Example:
    >>> from deskshell import SessionCoordinator, demo_graph
    >>> term = await SessionCoordinator.start(graph=demo_graph())
    >>> await term.submit("cd Documents")
    >>> await term.submit("pwd")
    >>> print(term.session.lines()[-2])
    /Users/Guest/Documents

Main Classes:
    SessionCoordinator: Owns a Session and routes submitted lines
    ShellConfig: Configuration management
    InMemoryGraph: Directory graph snapshot
    LocalHostBridge: Host bridge backed by local subprocesses
"""

__version__ = "0.4.0"


# Public API - lazy imports so `import deskshell` stays cheap
def __getattr__(name: str):
    """Lazy import public API components."""

    if name == "SessionCoordinator":
        from deskshell.shell.coordinator import SessionCoordinator
        return SessionCoordinator

    if name == "ShellConfig":
        from deskshell.config.settings import ShellConfig
        return ShellConfig

    if name in ("DirectoryGraph", "InMemoryGraph", "demo_graph", "load_snapshot", "save_snapshot"):
        from deskshell import graph
        return getattr(graph, name)

    if name in ("HostBridge", "LocalHostBridge", "BridgeError"):
        from deskshell import host
        return getattr(host, name)

    if name == "tokenize":
        from deskshell.shell.tokenizer import tokenize
        return tokenize

    # Types
    if name in (
        "DirectoryGraphNode",
        "NodeKind",
        "Session",
        "SessionMode",
        "TranscriptLine",
        "LineKind",
        "CommandResult",
        "ExecResult",
        "HostIdentity",
    ):
        from deskshell import types
        return getattr(types, name)

    raise AttributeError(f"module 'deskshell' has no attribute {name!r}")


__all__ = [
    # Main classes
    "SessionCoordinator",
    "ShellConfig",
    "DirectoryGraph",
    "InMemoryGraph",
    "HostBridge",
    "LocalHostBridge",
    "BridgeError",

    # Functions
    "demo_graph",
    "load_snapshot",
    "save_snapshot",
    "tokenize",

    # Types
    "DirectoryGraphNode",
    "NodeKind",
    "Session",
    "SessionMode",
    "TranscriptLine",
    "LineKind",
    "CommandResult",
    "ExecResult",
    "HostIdentity",

    # Version
    "__version__",
]

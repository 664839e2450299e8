"""
Demo Directory Graph

A small system tree plus one user home, used by the CLI when no snapshot
is given.

    /
    ├── System/
    │   ├── Applications/
    │   │   ├── Terminal
    │   │   └── Explorer
    │   └── Users/
    │       └── <Name>/          (home: user-<username>)
    │           ├── Desktop/
    │           ├── Documents/
    │           │   └── notes.txt
    │           ├── Downloads/
    │           ├── Projects/     (directory alias)
    │           ├── README.md
    │           └── .zshrc
    └── Network/
"""

from deskshell.graph.memory import InMemoryGraph
from deskshell.types import DirectoryGraphNode, NodeKind

DEMO_RC = """# Shell configuration (.zshrc)
# Changes apply on next terminal launch

# Prompt style: powerline | minimal | classic
PROMPT_STYLE=powerline

# Show system info banner on startup
MOTD=true

# Aliases
alias ll="ls"
alias ..="cd .."
alias cls="clear"
alias q="exit"

# Custom startup commands (one per line below this comment)
"""


def demo_graph(username: str = "guest", root_id: str = "root") -> InMemoryGraph:
    """Build the demo graph for ``username``."""
    home_id = f"user-{username}"
    display = "Guest" if username == "guest" else username[:1].upper() + username[1:]

    def directory(node_id: str, name: str, parent: str, owner: str = "system") -> DirectoryGraphNode:
        return DirectoryGraphNode(id=node_id, name=name, parent_id=parent, kind=NodeKind.DIRECTORY, owner=owner)

    nodes = [
        directory("root-hd", "System", root_id),
        directory("root-apps", "Applications", "root-hd"),
        DirectoryGraphNode(
            id="app-terminal",
            name="Terminal",
            parent_id="root-apps",
            description="Launch Terminal application.",
            owner="system",
        ),
        DirectoryGraphNode(
            id="app-explorer",
            name="Explorer",
            parent_id="root-apps",
            description="Launch Explorer application.",
            owner="system",
        ),
        directory("root-users", "Users", "root-hd"),
        directory("root-network", "Network", root_id),
        directory(home_id, display, "root-users", owner=username),
        directory(f"{username}-desktop", "Desktop", home_id, owner=username),
        directory(f"{username}-docs", "Documents", home_id, owner=username),
        DirectoryGraphNode(
            id=f"{username}-notes",
            name="notes.txt",
            parent_id=f"{username}-docs",
            content="Remember to back up the Projects folder.",
            owner=username,
        ),
        directory(f"{username}-downloads", "Downloads", home_id, owner=username),
        DirectoryGraphNode(
            id=f"{username}-projects",
            name="Projects",
            parent_id=home_id,
            kind=NodeKind.DIRECTORY_ALIAS,
            owner=username,
        ),
        DirectoryGraphNode(
            id=f"{username}-readme",
            name="README.md",
            parent_id=home_id,
            content=f"# Welcome, {display}\n\nType `help` in the terminal to get started.",
            owner=username,
        ),
        DirectoryGraphNode(
            id=f"{username}-zshrc",
            name=".zshrc",
            parent_id=home_id,
            content=DEMO_RC,
            owner=username,
        ),
    ]
    return InMemoryGraph(nodes)

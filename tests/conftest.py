"""Shared fixtures: a small directory graph rooted at "root" with home "H"."""

import pytest

from deskshell.config import ShellConfig
from deskshell.graph import InMemoryGraph
from deskshell.types import DirectoryGraphNode, NodeKind, Session, SessionMode

HOME = "H"


def make_graph(*extra: DirectoryGraphNode) -> InMemoryGraph:
    """
    /
    └── Users/
        └── Guest/            (H, home)
            ├── docs/         (D)
            │   ├── notes.md  (description only)
            │   └── blank.txt (no content)
            ├── readme.txt    (content "hello")
            ├── empty/
            ├── old/          (trashed)
            └── link/         (directory alias)
    """
    nodes = [
        DirectoryGraphNode(id="users", name="Users", parent_id="root", kind=NodeKind.DIRECTORY),
        DirectoryGraphNode(id=HOME, name="Guest", parent_id="users", kind=NodeKind.DIRECTORY),
        DirectoryGraphNode(id="D", name="docs", parent_id=HOME, kind=NodeKind.DIRECTORY),
        DirectoryGraphNode(id="F", name="readme.txt", parent_id=HOME, content="hello"),
        DirectoryGraphNode(id="E", name="empty", parent_id=HOME, kind=NodeKind.DIRECTORY),
        DirectoryGraphNode(id="T", name="old", parent_id=HOME, kind=NodeKind.DIRECTORY, trashed=True),
        DirectoryGraphNode(id="A", name="link", parent_id=HOME, kind=NodeKind.DIRECTORY_ALIAS),
        DirectoryGraphNode(id="N", name="notes.md", parent_id="D", description="A note"),
        DirectoryGraphNode(id="B", name="blank.txt", parent_id="D"),
    ]
    return InMemoryGraph([*nodes, *extra])


@pytest.fixture
def graph() -> InMemoryGraph:
    return make_graph()


@pytest.fixture
def config() -> ShellConfig:
    return ShellConfig(
        username="guest",
        hostname="deskshell",
        home_id=HOME,
        root_id="root",
        shell_name="zsh",
        ls_directories_first=False,
        bridge_timeout=30.0,
    )


@pytest.fixture
def session() -> Session:
    return Session(mode=SessionMode.SANDBOXED, home_id=HOME, cwd_id=HOME)


@pytest.fixture
def graph_factory():
    """Build the small graph with extra nodes appended."""
    return make_graph

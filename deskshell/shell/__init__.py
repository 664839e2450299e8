"""
Shell Engine

Turns submitted command lines into transcript output.

Modules:
    tokenizer: Quote-aware word splitting
    path_resolver: Path expressions <-> directory graph node ids
    commands: Virtual command dispatcher (sandboxed sessions)
    native: Native session bridge (bridged sessions)
    coordinator: SessionCoordinator, the single-flight command loop
    rc: Shell rc file parsing and alias expansion
    completion: Tab completion
"""

from deskshell.shell.commands import COMMANDS, execute
from deskshell.shell.coordinator import SessionCoordinator
from deskshell.shell.native import NativeSessionBridge
from deskshell.shell.path_resolver import path_to_string, resolve, resolve_file
from deskshell.shell.tokenizer import split_command, tokenize

__all__ = [
    "COMMANDS",
    "NativeSessionBridge",
    "SessionCoordinator",
    "execute",
    "path_to_string",
    "resolve",
    "resolve_file",
    "split_command",
    "tokenize",
]
